"""
HTTP client for the palette service. Uses requests; every call carries a timeout
so a hung service fails the run instead of blocking it.
No retries: each request is single-shot and failures surface to the caller.
"""
import json
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

_API_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "frame-recolor/0.1",
}

DEFAULT_TIMEOUT_SECONDS = 60


class APIError(Exception):
    """API call failed with status or invalid response."""
    def __init__(self, message: str, status_code: int | None = None, path: str = "", body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path
        self.body = body


def _parse_json_response(resp: requests.Response) -> Any:
    """Parse JSON body; raise APIError with context if invalid."""
    if not resp.content:
        return {}
    try:
        return resp.json()
    except (json.JSONDecodeError, ValueError) as e:
        raise APIError(
            f"Invalid JSON response: {e}",
            status_code=resp.status_code,
            path=resp.url or "",
            body=resp.text[:500] if resp.text else None,
        ) from e


def api_request(
    api_base: str,
    method: str,
    path: str,
    data: dict | None = None,
    raw_body: bytes | None = None,
    content_type: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """
    Execute one API request and return the parsed JSON body.
    Raises APIError on non-2xx, connection failure, timeout, or invalid JSON.
    """
    url = f"{api_base.rstrip('/')}{path}"
    headers = dict(_API_HEADERS)
    if raw_body is not None:
        body = raw_body
        if content_type:
            headers["Content-Type"] = content_type
    elif isinstance(data, dict):
        body = json.dumps(data).encode()
        headers["Content-Type"] = "application/json"
    else:
        body = None

    try:
        resp = requests.request(method, url, data=body, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        err_body = e.response.text[:500] if e.response is not None and e.response.text else None
        msg = f"API {method} {path} failed: {e}"
        if err_body and status and 500 <= status < 600:
            msg += f" — response: {err_body[:300]}"
        raise APIError(msg, status_code=status, path=path, body=err_body) from e
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
        raise APIError(f"API {method} {path} failed: {e}", path=path) from e
    logger.debug("API %s %s → %s", method, path, resp.status_code)
    return _parse_json_response(resp)


def api_post(api_base: str, path: str, data: dict | None = None, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Any:
    return api_request(api_base, "POST", path, data=data, timeout=timeout)


def api_post_binary(
    api_base: str,
    path: str,
    body: bytes,
    content_type: str = "application/octet-stream",
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """POST raw bytes (e.g. a JPEG render) and return the parsed JSON body."""
    return api_request(api_base, "POST", path, raw_body=body, content_type=content_type, timeout=timeout)
