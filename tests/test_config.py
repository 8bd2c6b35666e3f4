from __future__ import annotations

import importlib

import pytest

from timesheet_engine.config import get_settings_module


@pytest.mark.parametrize(
    "env, module",
    [
        (None, "timesheet_engine.config.development"),
        ("production", "timesheet_engine.config.production"),
        ("PROD", "timesheet_engine.config.production"),
        ("testing", "timesheet_engine.config.testing"),
        ("staging", "timesheet_engine.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    if env is None:
        monkeypatch.delenv("APP_ENV", raising=False)
    else:
        monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


def test_testing_settings_carry_rule_defaults():
    settings = importlib.import_module("timesheet_engine.config.testing")

    assert settings.ORGANIZATION_ID == 1
    assert settings.NIGHT_START_HOUR == 21
    assert settings.LATE_THRESHOLD_MINUTES == 15
    assert settings.DB_CONFIG["database"] == "timesheets_test"
