"""
Tests for the run.py launcher.
"""

import sys

import run
from estate_assistant.config import get_settings


class TestRunScript:

    def test_defaults_come_from_settings(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(sys, "argv", ["run.py"])
        monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs))

        run.main()

        settings = get_settings()
        assert calls["app"] == "estate_assistant.main:app"
        assert calls["host"] == settings.HOST
        assert calls["port"] == settings.PORT
        assert calls["reload"] == settings.DEBUG
        assert calls["log_level"] == settings.LOG_LEVEL.lower()

    def test_command_line_overrides(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(sys, "argv", ["run.py", "--port", "9001", "--no-reload"])
        monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.update(app=app, **kwargs))

        run.main()

        assert calls["port"] == 9001
        assert calls["reload"] is False
