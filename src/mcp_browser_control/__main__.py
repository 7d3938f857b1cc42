#region Overview
"""
## Browser Control Server

Launches, terminates and inspects local Chrome and Firefox processes.

The server speaks two surfaces from one process:

* **HTTP routes** (FastMCP custom routes, all `GET`, all answering `200`):
  `/`, `/open?app=&url=`, `/close?app=`, `/clear?app=`, `/current-page?app=`,
  `/getState?app=&format=json|text`.
* **MCP tools** at `/mcp` with the same operations, for agents.

The browsers are started as ordinary OS processes. There is no DevTools or
WebDriver connection, so the server cannot tell which page a browser shows.
`current-page` says so explicitly.

## Process Control Is Best Effort

Kill commands (`pkill -f <browser>`, `taskkill /f /im <browser>.exe`) are fired
and not waited for. A close is reported as done as soon as the kill was issued.
`getState` therefore re-checks every browser: first the stored process handle,
then an OS-level probe (`pgrep` / `tasklist`).

## Repeated Opens

`BROWSER_OPEN_POLICY` decides what a second `open` for a browser that is
already tracked does:

* `allow-multiple` (default): both processes are tracked, `close` ends all of them.
* `replace-and-kill`: the old process is asked to terminate, the new one replaces it.
* `reject`: the open fails while the tracked process is still alive.

## Security

Nothing is passed through a shell. The URL is a single argument of the browser
command, so shell metacharacters in it are inert. There is no authentication:
keep `BROWSER_SERVER_HOST` on a loopback address unless the network is trusted.
"""
#endregion

#region Imports
import logging
from typing import Optional
from mcp.server.fastmcp import FastMCP
#endregion

#region Import from your package __init__.py
import mcp_browser_control as MBC
from mcp_browser_control.config import get_env_config, load_env_file
from mcp_browser_control.context import ServerContext, get_context, install_context
from mcp_browser_control.decorators import tool_envelope, run_in_worker_pool
from mcp_browser_control.utils.diagnostics import collect_diagnostics
from mcp_browser_control.web.routes import register_routes
#endregion

#region Logger
logger = logging.getLogger(__name__)
#endregion

#region FastMCP Initialization
mcp = FastMCP("mcp_browser_control")
register_routes(mcp)
#endregion

#region Tools -- Browser lifecycle
@mcp.tool()
@tool_envelope
async def browser_control__open_browser(app: str = "firefox", url: str = "") -> str:
    """
    Launch a browser on a URL.

    Args:
        app: 'chrome' or 'firefox'. Anything else falls back to firefox.
        url: The URL to open. Required.

    Returns:
        JSON with ok, message and error (null on success).
    """
    result = await run_in_worker_pool(get_context().controller.open, app, url)
    return result.to_dict()


@mcp.tool()
@tool_envelope
async def browser_control__close_browser(app: str) -> str:
    """
    Kill every process of a browser ('chrome' or 'firefox').

    This also ends browser windows the server did not open itself.
    """
    result = await run_in_worker_pool(get_context().controller.close, app)
    return result.to_dict()


@mcp.tool()
@tool_envelope
async def browser_control__clear_browser_data(app: str) -> str:
    """
    Close a browser, wait for it to release its files, then delete its
    history, cookies, cache and session store.

    This is destructive and cannot be undone. Only use it when explicitly asked to.
    """
    result = await run_in_worker_pool(get_context().controller.clear_cache_and_history, app)
    return result.to_dict()


@mcp.tool()
@tool_envelope
async def browser_control__get_current_page(app: str) -> str:
    """Not supported: browsers are not connected over DevTools/WebDriver. Always returns ok=false."""
    result = await run_in_worker_pool(get_context().controller.current_page, app)
    return result.to_dict()
#endregion

#region Tools -- State
@mcp.tool()
@tool_envelope
async def browser_control__get_state(app: Optional[str] = None, format: str = "json") -> str:
    """
    Report which browsers are running.

    Args:
        app: Limit the report to one browser. Omit for chrome, firefox and every tracked browser.
        format: 'json' (default) or anything else for a plain-text table.
    """
    snapshot = await run_in_worker_pool(get_context().controller.snapshot_state, app or None)
    if format == "json":
        return snapshot.to_json()
    return snapshot.to_text()


@mcp.tool()
@tool_envelope
async def browser_control__get_debug_diagnostics_info() -> str:
    """Host OS, resolved browser binaries, open policy and tracked PIDs, for troubleshooting."""
    return collect_diagnostics(get_context())
#endregion

#region Entry point
def main() -> None:
    load_env_file()
    config = get_env_config()

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=getattr(logging, config["log_level"], logging.INFO),
    )
    logger.info(f"mcp_browser_control from: {getattr(MBC, '__file__', '<namespace>')}")

    ctx = install_context(ServerContext(config=config))
    mcp.settings.host = config["host"]
    mcp.settings.port = config["port"]

    if config["transport"] == "stdio":
        logger.warning("stdio transport: the HTTP routes are not served, only the MCP tools.")
    else:
        logger.info(f"Browser Automation Server listening on {config['host']}:{config['port']}")

    try:
        mcp.run(transport=config["transport"])
    finally:
        ctx.shutdown()
#endregion


if __name__ == "__main__":
    main()
