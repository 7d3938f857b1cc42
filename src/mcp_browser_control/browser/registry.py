"""
In-memory registry of launched browser processes.

Thread Safety:
    Every public method takes the registry's lock. Request handlers run on a
    worker pool, so concurrent opens and closes for the same browser would
    otherwise race on the same entry.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .identifiers import BrowserId
from .process import is_handle_alive

import logging
logger = logging.getLogger(__name__)


class OpenPolicy(str, Enum):
    """What an open does when the browser already has a stored handle."""

    REJECT = "reject"
    REPLACE_AND_KILL = "replace-and-kill"
    ALLOW_MULTIPLE = "allow-multiple"

    @classmethod
    def parse(cls, value: str) -> "OpenPolicy":
        normalized = (value or "").strip().lower().replace("_", "-")
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown open policy: {value!r}")


@dataclass
class BrowserInstanceRecord:
    """
    One launched browser process.

    Attributes:
        browser: Browser the process was launched for
        handle: psutil.Popen of the launched process (owned by the registry)
        url: URL the browser was opened with
        started_at: ISO local timestamp of the launch
    """

    browser: BrowserId
    handle: Any
    url: Optional[str] = None
    started_at: Optional[str] = None

    def is_alive(self) -> bool:
        return is_handle_alive(self.handle)


class ProcessRegistry:
    """
    Maps each browser to the records of the processes launched for it.

    The newest record is the one state snapshots report. Under the default
    ALLOW_MULTIPLE policy older records are kept so that close can still
    terminate them.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[BrowserId, List[BrowserInstanceRecord]] = {}

    def latest(self, browser: BrowserId) -> Optional[BrowserInstanceRecord]:
        with self._lock:
            records = self._records.get(browser)
            return records[-1] if records else None

    def records(self, browser: BrowserId) -> List[BrowserInstanceRecord]:
        with self._lock:
            return list(self._records.get(browser, []))

    def has_live_instance(self, browser: BrowserId) -> bool:
        with self._lock:
            return any(r.is_alive() for r in self._records.get(browser, []))

    def add(self, record: BrowserInstanceRecord, policy: OpenPolicy) -> List[BrowserInstanceRecord]:
        """
        Store a new record according to the open policy.

        Returns:
            List[BrowserInstanceRecord]: Records displaced by the new one. The
            caller is responsible for terminating them (REPLACE_AND_KILL).
        """
        with self._lock:
            existing = self._records.get(record.browser, [])
            if policy == OpenPolicy.ALLOW_MULTIPLE:
                # Drop entries whose process already exited; they have nothing left to close.
                kept = [r for r in existing if r.is_alive()]
                self._records[record.browser] = kept + [record]
                return []
            self._records[record.browser] = [record]
            return list(existing)

    def pop(self, browser: BrowserId) -> List[BrowserInstanceRecord]:
        """Remove and return every record stored for a browser."""
        with self._lock:
            return self._records.pop(browser, [])

    def known_browsers(self) -> List[BrowserId]:
        """Browsers that currently have at least one stored record."""
        with self._lock:
            return [b for b, records in self._records.items() if records]


__all__ = [
    "OpenPolicy",
    "BrowserInstanceRecord",
    "ProcessRegistry",
]
