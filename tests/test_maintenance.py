"""Tests for the log purge."""
from dayz_dev_manager.core.maintenance import purge_logs


def test_purge_deletes_log_files_recursively(tmp_path):
    profiles = tmp_path / "profiles"
    client = profiles / "client"
    client.mkdir(parents=True)
    for name in ("server.log", "DayZServer_x64.RPT", "crash.mdmp", "admin.adm"):
        (profiles / name).write_text("x")
    (client / "script.log").write_text("x")
    (profiles / "BattlEye.cfg").write_text("keep")

    report = purge_logs(profiles)

    assert report.total == 5
    assert report.deleted["*.log"] == 2
    assert report.deleted["*.RPT"] == 1
    assert report.failed == 0
    assert (profiles / "BattlEye.cfg").is_file()
    assert not (client / "script.log").exists()
    assert "5 files deleted" in report.summary()


def test_purge_missing_folder_is_a_no_op(tmp_path):
    report = purge_logs(tmp_path / "missing")

    assert report.total == 0
    assert report.deleted == {}


def test_purge_custom_patterns(tmp_path):
    (tmp_path / "a.txt").write_text("x")
    (tmp_path / "b.log").write_text("x")

    report = purge_logs(tmp_path, patterns=("*.txt",))

    assert report.deleted == {"*.txt": 1}
    assert (tmp_path / "b.log").exists()
