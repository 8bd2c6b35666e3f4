from __future__ import annotations

from typing import Mapping, Protocol, Sequence


class EmploymentRepository(Protocol):
    def resolve_employee_names(self, employment_ids: Sequence[str]) -> Mapping[str, str]:
        """Best-effort display names keyed by employment_id.

        Missing employments are simply absent from the result; callers fall
        back to a placeholder.
        """

        raise NotImplementedError
