from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from curl_cffi import requests as curl_requests

from .errors import BodyDecodeError, TransportError

logger = logging.getLogger(__name__)


def create_session(impersonate: Optional[str] = None) -> Any:
    """Build the HTTP session shared by every fetch of one run.

    Plain requests.Session by default; a curl_cffi session that mimics a
    browser TLS fingerprint when impersonate names a target such as
    "chrome120".
    """
    if impersonate:
        logger.debug("using curl_cffi session impersonating %s", impersonate)
        return curl_requests.Session(impersonate=impersonate)
    return requests.Session()


def fetch_text(session: Any, url: str, timeout: float) -> str:
    """GET url and return the body decoded as UTF-8.

    Any client exception, a non-2xx status, or an undecodable body is
    raised as TransportError. Nothing is retried here.
    """
    try:
        response = session.get(url, timeout=timeout)
    except Exception as exc:  # noqa: BLE001
        raise TransportError(url, f"{type(exc).__name__}: {exc}") from exc

    status_code = getattr(response, "status_code", None)
    if status_code is None or not 200 <= int(status_code) < 300:
        raise TransportError(url, f"HTTP_{status_code}")

    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BodyDecodeError(url, exc) from exc
