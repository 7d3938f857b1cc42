"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

# ============================================================================
# Server Defaults
# ============================================================================

DEFAULT_HOST = "127.0.0.1"
"""Interface the HTTP server binds to."""

DEFAULT_PORT = 3000
"""Port the HTTP server listens on."""

DEFAULT_WORKERS = 10
"""Size of the worker pool that runs controller operations."""

DEFAULT_TRANSPORT = "streamable-http"
"""FastMCP transport. Only the HTTP transports serve the custom routes."""

SUPPORTED_TRANSPORTS = ("streamable-http", "sse", "stdio")


# ============================================================================
# Browser Control Defaults
# ============================================================================

OPEN_POLICIES = ("reject", "replace-and-kill", "allow-multiple")

DEFAULT_OPEN_POLICY = "allow-multiple"
"""What a repeated open for the same browser does. See registry.OpenPolicy."""

CLEAR_DELAY_SECS = 2.0
"""How long to wait after closing a browser before deleting its profile files."""

PROBE_TIMEOUT_SECS = 10.0
"""Upper bound for a single pgrep/tasklist liveness probe."""

DEFAULT_CHROME_PROFILE_NAME = "Default"


# ============================================================================
# Response Texts
# ============================================================================

GREETING = "Browser Automation Server - Hello World!"
SERVER_STATUS = "running"
UNKNOWN = "unknown"
NO_URL = "none"


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_WORKERS",
    "DEFAULT_TRANSPORT",
    "SUPPORTED_TRANSPORTS",
    "OPEN_POLICIES",
    "DEFAULT_OPEN_POLICY",
    "CLEAR_DELAY_SECS",
    "PROBE_TIMEOUT_SECS",
    "DEFAULT_CHROME_PROFILE_NAME",
    "GREETING",
    "SERVER_STATUS",
    "UNKNOWN",
    "NO_URL",
]
