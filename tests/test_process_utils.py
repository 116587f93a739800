"""Tests for the stop sweep, elevation fallback and detached launches."""
import sys

import psutil
import pytest

from dayz_dev_manager.core import process_utils
from dayz_dev_manager.core.errors import LaunchError
from dayz_dev_manager.core.process_utils import (
    ProcessDescriptor,
    launch_detached,
    stop_all,
    sweep_processes,
)


class FakeProcess:
    """Stands in for psutil.Process; ``table`` is the live process list."""

    def __init__(self, table, name, pid, stubborn=False, denied=False):
        self.table = table
        self.info = {"name": name}
        self.pid = pid
        self.stubborn = stubborn
        self.denied = denied
        self.terminated = False
        self.killed = False
        table.append(self)

    def terminate(self):
        if self.denied:
            raise psutil.AccessDenied(pid=self.pid)
        self.terminated = True
        if not self.stubborn and self in self.table:
            self.table.remove(self)

    def kill(self):
        if self.denied:
            raise psutil.AccessDenied(pid=self.pid)
        self.killed = True

    def wait(self, timeout=None):
        if self.stubborn:
            raise psutil.TimeoutExpired(timeout, pid=self.pid)
        return 0


@pytest.fixture
def processes(monkeypatch):
    table = []
    monkeypatch.setattr(process_utils.psutil, "process_iter", lambda attrs=None: list(table))
    return table


def test_sweep_stops_known_processes_only(processes):
    server = FakeProcess(processes, "DayZServer_x64.exe", 10)
    client = FakeProcess(processes, "dayz_x64.exe", 11)
    other = FakeProcess(processes, "notepad.exe", 12)

    survivors = sweep_processes(timeout=0)

    assert survivors == []
    assert server.terminated and client.terminated
    assert not other.terminated
    assert processes == [other]


def test_names_without_extension_are_matched(processes):
    diag = FakeProcess(processes, "DayZDiag_x64", 20)

    assert sweep_processes(timeout=0) == []
    assert diag.terminated


def test_stubborn_process_is_killed_and_reported(processes):
    stubborn = FakeProcess(processes, "DayZ_x64.exe", 42, stubborn=True)

    survivors = sweep_processes(timeout=0)

    assert stubborn.killed
    assert survivors == [ProcessDescriptor("DayZ_x64.exe", 42)]
    assert str(survivors[0]) == "DayZ_x64.exe (PID 42)"


def test_access_denied_is_reported(processes):
    FakeProcess(processes, "DayZ_BE.exe", 7, denied=True)

    assert sweep_processes(timeout=0) == [ProcessDescriptor("DayZ_BE.exe", 7)]


def test_process_gone_before_terminate_counts_as_stopped(processes):
    class Vanishing(FakeProcess):
        def terminate(self):
            raise psutil.NoSuchProcess(self.pid)

    Vanishing(processes, "DayZServer_x64.exe", 5)

    assert sweep_processes(timeout=0) == []


@pytest.fixture
def elevation(monkeypatch):
    calls = []
    monkeypatch.setattr(process_utils, "relaunch_elevated", lambda *a, **k: calls.append(a) or True)
    return calls


def test_stop_all_requests_elevation_for_survivors(processes, elevation, monkeypatch):
    monkeypatch.setattr(process_utils, "is_admin", lambda: False)
    FakeProcess(processes, "DayZ_x64.exe", 42, stubborn=True)

    survivors = stop_all(timeout=0)

    assert len(survivors) == 1
    assert len(elevation) == 1


def test_stop_all_skips_elevation_when_admin(processes, elevation, monkeypatch):
    monkeypatch.setattr(process_utils, "is_admin", lambda: True)
    FakeProcess(processes, "DayZ_x64.exe", 42, stubborn=True)

    stop_all(timeout=0)

    assert elevation == []


def test_stop_all_skips_elevation_when_disabled_or_clean(processes, elevation, monkeypatch):
    monkeypatch.setattr(process_utils, "is_admin", lambda: False)

    assert stop_all(timeout=0) == []
    FakeProcess(processes, "DayZ_x64.exe", 42, stubborn=True)
    stop_all(try_elevate=False, timeout=0)

    assert elevation == []


def test_relaunch_elevated_is_windows_only(monkeypatch):
    monkeypatch.setattr(process_utils.sys, "platform", "linux")
    assert process_utils.relaunch_elevated() is False


def test_is_dayz_server_running(processes):
    assert not process_utils.is_dayz_server_running()
    FakeProcess(processes, "DayZDiag_x64.exe", 3)
    assert process_utils.is_dayz_server_running()


def test_launch_detached_missing_executable(tmp_path):
    missing = tmp_path / "DayZServer_x64.exe"

    with pytest.raises(LaunchError) as excinfo:
        launch_detached(missing, tmp_path, [])
    assert excinfo.value.path == str(missing)


def test_launch_detached_missing_working_dir(tmp_path):
    with pytest.raises(LaunchError):
        launch_detached(sys.executable, tmp_path / "nowhere", [])


def test_launch_detached_returns_pid(tmp_path):
    pid = launch_detached(sys.executable, tmp_path, ["-c", "pass"])
    assert isinstance(pid, int) and pid > 0
