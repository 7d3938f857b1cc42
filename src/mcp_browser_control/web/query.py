"""Query string parsing for the HTTP front end."""

from typing import Dict, Optional
from urllib.parse import unquote_plus


def parse_query(query: Optional[str]) -> Dict[str, str]:
    """
    Parse an `&`-delimited query string into a dict.

    - Each pair is split on its first `=`; pairs without `=` are dropped.
    - Values are percent-decoded (`+` becomes a space); keys are taken as-is.
    - A key that appears more than once keeps its last value.

    Args:
        query: Raw query string, without the leading '?'

    Returns:
        Dict[str, str]: Parameter name to decoded value
    """
    params: Dict[str, str] = {}
    if not query:
        return params
    for pair in query.split("&"):
        key, sep, value = pair.partition("=")
        if not sep:
            continue
        params[key] = unquote_plus(value, encoding="utf-8", errors="replace")
    return params


__all__ = ["parse_query"]
