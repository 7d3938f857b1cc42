"""Tests for the OS process helpers (no real browser is started)."""

import subprocess
from unittest.mock import MagicMock, patch

import psutil
import pytest

from mcp_browser_control.browser.commands import ProfileTarget
from mcp_browser_control.browser.process import (
    spawn_process,
    is_handle_alive,
    handle_pid,
    terminate_gracefully,
    probe_running,
    remove_profile_targets,
)


@patch("mcp_browser_control.browser.process.platform.system", return_value="Linux")
@patch("mcp_browser_control.browser.process.psutil.Popen")
def test_spawn_process_detaches_stdio(mock_popen, _mock_system):
    spawn_process(["firefox", "http://example.com"])
    args, kwargs = mock_popen.call_args
    assert args[0] == ["firefox", "http://example.com"]
    assert kwargs["stdin"] is subprocess.DEVNULL
    assert kwargs["stdout"] is subprocess.DEVNULL
    assert kwargs["stderr"] is subprocess.DEVNULL
    assert "shell" not in kwargs


@patch("mcp_browser_control.browser.process.psutil.Popen", side_effect=FileNotFoundError(2, "No such file"))
def test_spawn_process_propagates_os_errors(_mock_popen):
    with pytest.raises(OSError):
        spawn_process(["no-such-browser"])


class TestHandleHelpers:

    def test_is_handle_alive(self):
        handle = MagicMock()
        handle.poll.return_value = None
        assert is_handle_alive(handle) is True
        handle.poll.return_value = 0
        assert is_handle_alive(handle) is False
        assert is_handle_alive(None) is False

    def test_is_handle_alive_treats_errors_as_dead(self):
        handle = MagicMock()
        handle.poll.side_effect = psutil.NoSuchProcess(123)
        assert is_handle_alive(handle) is False

    def test_handle_pid(self):
        handle = MagicMock()
        handle.pid = 321
        assert handle_pid(handle) == 321
        assert handle_pid(None) is None

    def test_terminate_gracefully_signals_children_then_parent(self):
        child = MagicMock(pid=11)
        handle = MagicMock(pid=10)
        handle.poll.return_value = None
        handle.children.return_value = [child]

        assert terminate_gracefully(handle) == [11, 10]
        child.terminate.assert_called_once()
        handle.terminate.assert_called_once()
        handle.wait.assert_not_called()

    def test_terminate_gracefully_skips_exited_process(self):
        handle = MagicMock(pid=10)
        handle.poll.return_value = 0
        assert terminate_gracefully(handle) == []
        handle.terminate.assert_not_called()

    def test_terminate_gracefully_tolerates_vanished_children(self):
        child = MagicMock(pid=11)
        child.terminate.side_effect = psutil.NoSuchProcess(11)
        handle = MagicMock(pid=10)
        handle.poll.return_value = None
        handle.children.return_value = [child]
        assert terminate_gracefully(handle) == [10]


@patch("mcp_browser_control.browser.process.subprocess.run")
def test_probe_running_returns_exit_code_and_output(mock_run):
    mock_run.return_value = subprocess.CompletedProcess(["pgrep"], 0, stdout="1234\n")
    assert probe_running(["pgrep", "-f", "chrome"], timeout=3) == (0, "1234\n")
    assert mock_run.call_args.kwargs["timeout"] == 3
    assert mock_run.call_args.kwargs["check"] is False


class TestRemoveProfileTargets:

    def test_removes_matching_files_and_recursive_dirs(self, tmp_path):
        profile = tmp_path / "Default"
        (profile / "Cache" / "data").mkdir(parents=True)
        (profile / "Cache" / "data" / "f_000001").write_text("x")
        (profile / "Cache" / "index").write_text("x")
        (profile / "History").write_text("x")
        (profile / "History-journal").write_text("x")
        (profile / "Cookies").write_text("x")
        (profile / "Bookmarks").write_text("keep")

        removed, errors = remove_profile_targets([
            ProfileTarget(profile, "History*"),
            ProfileTarget(profile, "Cache/*", recursive=True),
            ProfileTarget(profile, "Cookies*"),
        ])

        assert errors == []
        assert len(removed) == 5
        assert (profile / "Bookmarks").exists()
        assert (profile / "Cache").is_dir()
        assert list((profile / "Cache").iterdir()) == []

    def test_non_recursive_target_leaves_directories(self, tmp_path):
        (tmp_path / "History.d").mkdir()
        removed, errors = remove_profile_targets([ProfileTarget(tmp_path, "History*")])
        assert removed == []
        assert (tmp_path / "History.d").is_dir()

    def test_missing_root_is_nothing_to_do(self, tmp_path):
        removed, errors = remove_profile_targets([ProfileTarget(tmp_path / "nope", "*")])
        assert (removed, errors) == ([], [])

    def test_errors_are_collected(self, tmp_path):
        (tmp_path / "Cookies").write_text("x")
        with patch("pathlib.Path.unlink", side_effect=PermissionError(13, "Permission denied")):
            removed, errors = remove_profile_targets([ProfileTarget(tmp_path, "Cookies*")])
        assert removed == []
        assert len(errors) == 1
        assert "Permission denied" in errors[0]
