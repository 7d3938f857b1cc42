"""Operation results and browser state snapshots, with their JSON and text renderings."""

import json
import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

from .constants import SERVER_STATUS


class ErrorKind(str, Enum):
    INVALID_BROWSER = "invalid_browser"
    INVALID_URL = "invalid_url"
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    LAUNCH_FAILED = "launch_failed"
    ALREADY_RUNNING = "already_running"
    CLEAR_FAILED = "clear_failed"
    UNSUPPORTED_OPERATION = "unsupported_operation"


@dataclass(frozen=True)
class OperationResult:
    succeeded: bool
    message: str
    error: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, message: str) -> "OperationResult":
        return cls(True, message)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "OperationResult":
        return cls(False, message, error)

    def to_dict(self) -> dict:
        return {
            "ok": self.succeeded,
            "message": self.message,
            "error": self.error.value if self.error else None,
        }


@dataclass(frozen=True)
class BrowserInstanceState:
    active: bool
    process_id: Union[int, str]
    start_time: str
    last_url: str
    status: str

    def to_dict(self) -> dict:
        return {
            "active": self.active,
            "processId": self.process_id,
            "startTime": self.start_time,
            "lastUrl": self.last_url,
            "status": self.status,
        }


def now_iso() -> str:
    """Local wall-clock time without offset, e.g. 2024-05-01T12:30:00.123456."""
    return datetime.datetime.now().isoformat()


@dataclass
class StateSnapshot:
    os_info: str
    timestamp: str = field(default_factory=now_iso)
    server_status: str = SERVER_STATUS
    browser_instances: Dict[str, BrowserInstanceState] = field(default_factory=dict)

    @property
    def total_active_instances(self) -> int:
        return sum(1 for s in self.browser_instances.values() if s.active)

    def add(self, name: str, state: BrowserInstanceState) -> None:
        self.browser_instances[name] = state

    def to_dict(self) -> dict:
        return {
            "serverStatus": self.server_status,
            "timestamp": self.timestamp,
            "osInfo": self.os_info,
            "totalActiveInstances": self.total_active_instances,
            "browserInstances": {
                name: state.to_dict() for name, state in self.browser_instances.items()
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def to_text(self) -> str:
        lines = [
            "=== Browser Automation Server State ===",
            f"Server Status: {self.server_status}",
            f"Timestamp: {self.timestamp}",
            f"OS Info: {self.os_info}",
            f"Total Active Instances: {self.total_active_instances}",
            "",
            "Browser Instances:",
        ]
        for name, state in self.browser_instances.items():
            lines += [
                f"- {name}:",
                f"  Active: {str(state.active).lower()}",
                f"  Process ID: {state.process_id}",
                f"  Start Time: {state.start_time}",
                f"  Last URL: {state.last_url}",
                f"  Status: {state.status}",
                "",
            ]
        return "\n".join(lines) + "\n"


__all__ = [
    "ErrorKind",
    "OperationResult",
    "BrowserInstanceState",
    "StateSnapshot",
    "now_iso",
]
