"""
Browser lifecycle operations: open, close, clear, current page and state.

All expected failures come back as OperationResult values; nothing here raises
for a bad browser name, a missing URL or a failed launch.

Process control is best effort. Kill commands are fired without waiting for
them, and a closed browser is reported as closed whether or not the OS process
has actually gone yet.
"""

import time
import subprocess
import threading
from pathlib import Path
from typing import Callable, List, Optional

from .browser.identifiers import BrowserId, OsFamily, detect_os_family, os_info
from .browser.commands import Operation, build_command, probe_matches, profile_targets
from .browser.process import (
    spawn_process,
    handle_pid,
    terminate_gracefully,
    probe_running,
    remove_profile_targets,
)
from .browser.registry import BrowserInstanceRecord, OpenPolicy, ProcessRegistry
from .constants import CLEAR_DELAY_SECS, PROBE_TIMEOUT_SECS, UNKNOWN, NO_URL
from .results import ErrorKind, OperationResult, BrowserInstanceState, StateSnapshot, now_iso

import logging
logger = logging.getLogger(__name__)


INVALID_BROWSER_MSG = "browser param invalid."
DEFAULT_BROWSER_MSG = "browser param invalid. Taking firefox as default browser."


class BrowserController:
    """
    Orchestrates browser operations on top of the command table and the registry.

    The OS-facing callables are injectable so the controller can be driven
    without starting real processes.

    Args:
        registry: Registry that owns the launched process handles
        config: Configuration dict from get_env_config()
        os_family: Host OS family; detected from platform.system() if omitted
        spawn: Starts an argv without waiting, returns a process handle
        probe: Runs a liveness probe argv, returns (exit code, stdout)
        remove: Deletes profile targets, returns (removed, errors)
        sleep: Used for the pause between closing a browser and clearing its data
        home: Home directory the default profile paths are derived from
    """

    def __init__(
        self,
        registry: Optional[ProcessRegistry] = None,
        config: Optional[dict] = None,
        os_family: Optional[OsFamily] = None,
        spawn: Callable = spawn_process,
        probe: Callable = probe_running,
        remove: Callable = remove_profile_targets,
        sleep: Callable[[float], None] = time.sleep,
        home: Optional[Path] = None,
    ):
        self.registry = registry if registry is not None else ProcessRegistry()
        self.config = dict(config or {})
        self.os_family = os_family or detect_os_family()
        self.open_policy = OpenPolicy.parse(self.config.get("open_policy") or OpenPolicy.ALLOW_MULTIPLE.value)
        self.clear_delay = float(self.config.get("clear_delay", CLEAR_DELAY_SECS))
        self.probe_timeout = self.config.get("probe_timeout", PROBE_TIMEOUT_SECS)
        self._spawn = spawn
        self._probe = probe
        self._remove = remove
        self._sleep = sleep
        self._home = home
        # Serializes check-then-act sequences (policy check, launch, store) on the registry.
        self._mutation_lock = threading.Lock()

    # ------------------------------------------------------------------
    # open / close
    # ------------------------------------------------------------------

    def open(self, app: Optional[str], url: Optional[str]) -> OperationResult:
        notes = []
        browser = BrowserId.parse(app)
        if browser is None:
            logger.info(DEFAULT_BROWSER_MSG)
            notes.append(DEFAULT_BROWSER_MSG)
            browser = BrowserId.FIREFOX

        def _msg(text: str) -> str:
            return " ".join(notes + [text])

        if not url:
            logger.warning('Please enter a URL, e.g. "http://www.browserstack.com"')
            return OperationResult.fail(ErrorKind.INVALID_URL, _msg("invalid url"))

        cmd = build_command(self.os_family, browser, Operation.OPEN, url=url, config=self.config)
        if cmd is None:
            return OperationResult.fail(ErrorKind.UNSUPPORTED_PLATFORM, _msg("No platform detected or unsupported"))

        with self._mutation_lock:
            if self.open_policy == OpenPolicy.REJECT and self.registry.has_live_instance(browser):
                latest = self.registry.latest(browser)
                pid = handle_pid(latest.handle) if latest else None
                return OperationResult.fail(
                    ErrorKind.ALREADY_RUNNING,
                    _msg(f"{browser.value} is already running (pid {pid if pid is not None else UNKNOWN}); close it first"),
                )

            try:
                handle = self._spawn(cmd)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to launch {browser.value}: {e}")
                return OperationResult.fail(ErrorKind.LAUNCH_FAILED, _msg(f"Failed to execute command: {e}"))

            record = BrowserInstanceRecord(browser=browser, handle=handle, url=url, started_at=now_iso())
            displaced = self.registry.add(record, self.open_policy)

        for old in displaced:
            terminate_gracefully(old.handle)
        logger.info(f"Launched {browser.value}, pid={handle_pid(handle)}, url={url}")
        return OperationResult.ok(_msg("Success execution"))

    def close(self, app: Optional[str]) -> OperationResult:
        browser = BrowserId.parse(app)
        if browser is None:
            logger.info(INVALID_BROWSER_MSG)
            return OperationResult.fail(ErrorKind.INVALID_BROWSER, INVALID_BROWSER_MSG)

        status = "browser killed"
        logger.info(f"Killing {browser.value}")

        with self._mutation_lock:
            kill_cmd = build_command(self.os_family, browser, Operation.KILL)
            if kill_cmd is not None:
                try:
                    self._spawn(kill_cmd)
                except OSError as e:
                    logger.warning(f"Kill command failed for {browser.value}: {e}")
                    status += f" Error: {e}"

            for record in self.registry.pop(browser):
                terminated = terminate_gracefully(record.handle)
                if terminated:
                    logger.debug(f"Sent terminate to {terminated} for {browser.value}")

        return OperationResult.ok(status)

    # ------------------------------------------------------------------
    # clear / current page
    # ------------------------------------------------------------------

    def clear_cache_and_history(self, app: Optional[str]) -> OperationResult:
        if not app:
            return OperationResult.fail(ErrorKind.INVALID_BROWSER, INVALID_BROWSER_MSG)

        browser = BrowserId.parse(app)
        targets = profile_targets(self.os_family, browser, self.config, self._home)
        if browser is None or targets is None:
            return OperationResult.fail(
                ErrorKind.INVALID_BROWSER, f"Unsupported browser for cache clearing: {app}"
            )

        try:
            # Close first so the profile files are not held open.
            self.close(browser.value)
            self._sleep(self.clear_delay)

            removed, errors = self._remove(targets)
        except OSError as e:
            return OperationResult.fail(ErrorKind.CLEAR_FAILED, f"Error clearing cache: {e}")

        logger.info(f"Cleared {browser.value} profile data: {len(removed)} item(s) removed")
        if errors:
            return OperationResult.fail(
                ErrorKind.CLEAR_FAILED,
                f"Error clearing cache: {len(errors)} item(s) could not be removed ({errors[0]})",
            )
        return OperationResult.ok("Cache and history cleared")

    def current_page(self, app: Optional[str]) -> OperationResult:
        """Reading the page a browser shows would need DevTools/WebDriver, which is out of scope."""
        browser = BrowserId.parse(app)
        if browser is None:
            return OperationResult.fail(
                ErrorKind.UNSUPPORTED_OPERATION, f"Unsupported browser for page detection: {app}"
            )
        return OperationResult.fail(
            ErrorKind.UNSUPPORTED_OPERATION,
            f"Current page detection is not supported for {browser.value}",
        )

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------

    def is_browser_running(self, browser: BrowserId) -> bool:
        """OS-level liveness probe. Any failure counts as not running."""
        cmd = build_command(self.os_family, browser, Operation.PROBE)
        if cmd is None:
            return False
        try:
            returncode, stdout = self._probe(cmd, timeout=self.probe_timeout)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Liveness probe for {browser.value} failed: {e}")
            return False
        return probe_matches(self.os_family, browser, returncode, stdout)

    def instance_state(self, name: str) -> BrowserInstanceState:
        browser = BrowserId.parse(name)
        if browser is None:
            return BrowserInstanceState(
                active=False, process_id=UNKNOWN, start_time=UNKNOWN, last_url=NO_URL, status="unsupported"
            )

        record = self.registry.latest(browser)
        active = record is not None and record.is_alive()
        if not active:
            active = self.is_browser_running(browser)

        pid = handle_pid(record.handle) if record is not None else None
        return BrowserInstanceState(
            active=active,
            process_id=pid if pid is not None else UNKNOWN,
            start_time=(record.started_at if record and record.started_at else UNKNOWN),
            last_url=(record.url if record and record.url else NO_URL),
            status="running" if active else "stopped",
        )

    def snapshot_state(self, app: Optional[str] = None) -> StateSnapshot:
        snapshot = StateSnapshot(os_info=os_info())
        if app:
            snapshot.add(app, self.instance_state(app))
            return snapshot

        names: List[str] = [b.value for b in BrowserId]
        for browser in self.registry.known_browsers():
            if browser.value not in names:
                names.append(browser.value)
        for name in names:
            snapshot.add(name, self.instance_state(name))
        return snapshot


__all__ = [
    "BrowserController",
    "INVALID_BROWSER_MSG",
    "DEFAULT_BROWSER_MSG",
]
