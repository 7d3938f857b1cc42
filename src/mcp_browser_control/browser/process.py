"""OS process launch, termination, liveness probing and profile file removal."""

import shutil
import platform
import subprocess
from typing import Iterable, List, Optional, Tuple

import psutil

from .commands import ProfileTarget

import logging
logger = logging.getLogger(__name__)


def spawn_process(cmd: List[str]) -> psutil.Popen:
    """
    Start a process without waiting for it.

    stdio goes to DEVNULL so a chatty browser cannot block on a full pipe.

    Args:
        cmd: Argument vector

    Returns:
        psutil.Popen: Handle of the started process

    Raises:
        OSError: If the executable cannot be started (not found, not permitted, ...)
    """
    logger.info(f"exec command: {cmd}")
    if platform.system() == "Windows":
        return psutil.Popen(
            cmd,
            creationflags=subprocess.CREATE_NO_WINDOW,
            stdin=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
        )
    return psutil.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        start_new_session=True,
    )


def is_handle_alive(handle) -> bool:
    """True while the process behind a stored handle has not exited."""
    if handle is None:
        return False
    try:
        # poll() also reaps the child, so an exited browser never lingers as a zombie.
        return handle.poll() is None
    except (psutil.Error, OSError):
        return False


def handle_pid(handle) -> Optional[int]:
    try:
        return int(handle.pid)
    except (AttributeError, TypeError, ValueError):
        return None


def terminate_gracefully(handle) -> List[int]:
    """
    Ask a launched process and its children to exit (SIGTERM / TerminateProcess).

    Does not wait for them to exit.

    Returns:
        List[int]: PIDs a termination request was delivered to
    """
    signalled = []
    if not is_handle_alive(handle):
        return signalled

    try:
        children = handle.children(recursive=True)
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        children = []

    for p in children + [handle]:
        try:
            p.terminate()
            signalled.append(p.pid)
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.debug(f"Could not terminate pid {getattr(p, 'pid', '?')}: {e}")
    return signalled


def probe_running(cmd: List[str], timeout: Optional[float] = None) -> Tuple[int, str]:
    """
    Run a liveness probe synchronously.

    Returns:
        Tuple[int, str]: (exit code, stdout)

    Raises:
        OSError: If the probe binary cannot be run
        subprocess.TimeoutExpired: If the probe outlives `timeout`
    """
    completed = subprocess.run(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        timeout=timeout,
        check=False,
    )
    return completed.returncode, completed.stdout or ""


def remove_profile_targets(targets: Iterable[ProfileTarget]) -> Tuple[List[str], List[str]]:
    """
    Delete every file matched by the given targets.

    Directories are only removed for recursive targets. A missing root is not
    an error: there is simply nothing to clear.

    Returns:
        Tuple[List[str], List[str]]: (removed paths, error messages)
    """
    removed = []
    errors = []
    for target in targets:
        if not target.root.exists():
            continue
        for path in sorted(target.root.glob(target.pattern)):
            try:
                if path.is_dir() and not path.is_symlink():
                    if not target.recursive:
                        continue
                    shutil.rmtree(path)
                else:
                    path.unlink()
                removed.append(str(path))
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.warning(f"Could not remove {path}: {e}")
                errors.append(f"{path}: {e}")
    return removed, errors


__all__ = [
    "spawn_process",
    "is_handle_alive",
    "handle_pid",
    "terminate_gracefully",
    "probe_running",
    "remove_profile_targets",
]
