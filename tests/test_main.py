"""Tests for the command-line entry point."""
import main as entry


def test_parse_args_defaults():
    args = entry.parse_args([])

    assert args.stop_elevated is False
    assert args.settings is None
    assert args.log_level is None


def test_stop_elevated_sweeps_and_exits(monkeypatch):
    calls = []
    monkeypatch.setattr(entry, "sweep_processes", lambda: calls.append("sweep") or [])
    monkeypatch.setattr(entry, "setup_logging", lambda level=None: 20)

    assert entry.main(["--stop-elevated"]) == 0
    assert calls == ["sweep"]


def test_stop_elevated_reports_survivors(monkeypatch):
    from dayz_dev_manager.core.process_utils import ProcessDescriptor

    monkeypatch.setattr(entry, "sweep_processes", lambda: [ProcessDescriptor("DayZ_x64.exe", 4)])
    monkeypatch.setattr(entry, "setup_logging", lambda level=None: 20)

    assert entry.main(["--stop-elevated", "--log-level", "DEBUG"]) == 1
