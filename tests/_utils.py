# tests/_utils.py
"""Fakes for the OS-facing callables of BrowserController. No real process is ever started."""

import itertools

from mcp_browser_control.browser.identifiers import OsFamily
from mcp_browser_control.browser.registry import ProcessRegistry
from mcp_browser_control.controller import BrowserController

_pids = itertools.count(4000)


class FakeHandle:
    """Quacks like psutil.Popen for the parts the controller uses."""

    def __init__(self, cmd):
        self.cmd = cmd
        self.pid = next(_pids)
        self.returncode = None
        self.terminated = False

    def poll(self):
        return self.returncode

    def children(self, recursive=False):
        return []

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def exit(self, code=0):
        self.returncode = code


class FakeSpawner:
    """
    Records every argv; raises `error` for commands whose argv[0] is in `failing`.
    Like subprocess, an argument containing NUL raises ValueError.
    """

    def __init__(self, failing=(), error=None):
        self.calls = []
        self.handles = []
        self.failing = set(failing)
        self.error = error or FileNotFoundError(2, "No such file or directory")

    def __call__(self, cmd):
        self.calls.append(list(cmd))
        if any("\x00" in arg for arg in cmd):
            raise ValueError("embedded null byte")
        if cmd[0] in self.failing:
            raise self.error
        handle = FakeHandle(cmd)
        self.handles.append(handle)
        return handle

    def launched(self):
        """argv of every call that was not a kill command."""
        return [c for c in self.calls if c[0] not in ("pkill", "taskkill")]

    def kills(self):
        return [c for c in self.calls if c[0] in ("pkill", "taskkill")]


class FakeProbe:
    """Liveness probe stub: `running` is the set of browser names pgrep should 'find'."""

    def __init__(self, running=(), error=None):
        self.running = set(running)
        self.error = error
        self.calls = []

    def __call__(self, cmd, timeout=None):
        self.calls.append((list(cmd), timeout))
        if self.error is not None:
            raise self.error
        return (0 if cmd[-1] in self.running else 1), ""


class FakeRemover:
    def __init__(self, errors=()):
        self.calls = []
        self.errors = list(errors)

    def __call__(self, targets):
        targets = list(targets)
        self.calls.append(targets)
        return [t.describe() for t in targets], list(self.errors)


def make_controller(*, os_family=OsFamily.LINUX, config=None, spawner=None, probe=None, remover=None, home=None):
    """Build a controller wired to fakes. Returns (controller, spawner, probe, remover, sleeps)."""
    spawner = spawner or FakeSpawner()
    probe = probe or FakeProbe()
    remover = remover or FakeRemover()
    sleeps = []
    cfg = {"chrome_path": "/usr/bin/google-chrome", "firefox_path": "/usr/bin/firefox"}
    cfg.update(config or {})
    controller = BrowserController(
        registry=ProcessRegistry(),
        config=cfg,
        os_family=os_family,
        spawn=spawner,
        probe=probe,
        remove=remover,
        sleep=sleeps.append,
        home=home,
    )
    return controller, spawner, probe, remover, sleeps
