"""RFC 8288 Link header for paginated responses."""

from typing import Any, Dict, Optional
from urllib.parse import urlencode


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Optional[str] = None,
    prev_cursor: Optional[str] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters, without the cursor
        next_cursor: Cursor for next page
        prev_cursor: Cursor for previous page

    Returns:
        Link header value or None if no links
    """
    links = []

    if next_cursor:
        next_params = {**params, "cursor": next_cursor}
        links.append(f'<{base_url}?{urlencode(next_params)}>; rel="next"')

    if prev_cursor:
        prev_params = {**params, "cursor": prev_cursor}
        links.append(f'<{base_url}?{urlencode(prev_params)}>; rel="prev"')

    return ", ".join(links) if links else None
