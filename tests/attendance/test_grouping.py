from timesheet_engine.attendance.grouping import first_check_in, group_events_by_employee, last_check_out
from timesheet_engine.core.constants import NO_NAME_PLACEHOLDER


def test_empty_input_yields_empty_mapping():
    assert group_events_by_employee([]) == {}


def test_groups_per_employee_in_first_seen_order_and_sorted(event):
    events = [
        event("E2", "check_out", "2024-01-01T17:00"),
        event("E1", "check_in", "2024-01-01T08:00"),
        event("E2", "check_in", "2024-01-01T09:00"),
        event("E1", "check_out", "2024-01-01T16:00"),
    ]

    grouped = group_events_by_employee(events)

    assert list(grouped) == ["E2", "E1"]
    assert [e.event_type.value for e in grouped["E2"]] == ["check_in", "check_out"]
    assert len(grouped["E1"]) == 2


def test_names_mapping_wins_then_event_name_then_placeholder(event):
    events = [
        event("E1", "check_in", "2024-01-01T08:00", employee_name="Old Name"),
        event("E2", "check_in", "2024-01-01T08:00", employee_name="Bea Ruiz"),
        event("E3", "check_in", "2024-01-01T08:00", employee_name="  "),
    ]

    grouped = group_events_by_employee(events, {"E1": "Ana Perez"})

    assert grouped["E1"][0].employee_name == "Ana Perez"
    assert grouped["E2"][0].employee_name == "Bea Ruiz"
    assert grouped["E3"][0].employee_name == NO_NAME_PLACEHOLDER


def test_first_check_in_and_last_check_out(event):
    events = [
        event("E1", "check_in", "2024-01-01T09:00"),
        event("E1", "check_out", "2024-01-01T12:00"),
        event("E1", "check_in", "2024-01-01T08:00"),
        event("E1", "check_out", "2024-01-01T18:00"),
    ]

    assert first_check_in(events).event_at.hour == 8
    assert last_check_out(events).event_at.hour == 18
    assert first_check_in([e for e in events if e.event_type.value == "check_out"]) is None
