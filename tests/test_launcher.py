"""Tests for the GUI launcher entry point."""

import sys
import types

import pytest

from mindpad import launcher, preflight


@pytest.fixture
def fake_app(monkeypatch):
    """Stand in for the GTK application module and record launches."""
    calls = []
    module = types.ModuleType("mindpad.app")
    module.main = lambda: calls.append("run") or 0
    monkeypatch.setitem(sys.modules, "mindpad.app", module)
    return calls


class TestLauncher:

    def test_runs_app_after_preflight(self, fake_app, monkeypatch):
        monkeypatch.setenv("MINDPAD_SKIP_PREFLIGHT", "1")
        assert launcher.main() == 0
        assert fake_app == ["run"]

    def test_failed_preflight_stops_before_app(self, fake_app, monkeypatch):
        monkeypatch.delenv("MINDPAD_SKIP_PREFLIGHT", raising=False)
        monkeypatch.setattr(preflight, "_check_core_deps", lambda: "Missing GTK")

        with pytest.raises(SystemExit):
            launcher.main()
        assert fake_app == []
