"""
HTTP client for the Pi platform payments API.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from .config import SdkConfig

__all__ = [
    "PlatformApiClient",
    "PlatformApiError",
]


class PlatformApiError(Exception):
    """
    Raised for any non-2xx platform response.

    ``body`` holds the decoded JSON error document when the platform sent
    one, e.g. ``{"error": "payment_not_found", "error_message": "..."}``.
    """

    def __init__(self, status_code: int, body: Optional[Dict[str, Any]], text: str) -> None:
        super().__init__(f"Platform API responded with {status_code}: {text}")
        self.status_code = status_code
        self.body = body
        self.text = text

    @property
    def error_code(self) -> Optional[str]:
        if isinstance(self.body, dict) and isinstance(self.body.get("error"), str):
            return self.body["error"]
        return None


def _decode(response: requests.Response) -> Optional[Any]:
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError):
        return None


class PlatformApiClient:
    """
    Authenticated JSON client bound to ``<platform base url>/v2``.
    """

    def __init__(
        self,
        api_key: str,
        config: SdkConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = config.platform_api_url
        self.timeout = config.request_timeout_seconds
        self.session = session or requests.Session()
        # Per-request headers; the session may be shared between clients.
        self.headers = {
            "Authorization": f"Key {api_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        logging.info("%s %s", method, url)
        response = self.session.request(
            method, url, json=body, headers=self.headers, timeout=self.timeout
        )
        payload = _decode(response)
        if response.status_code >= 400:
            raise PlatformApiError(
                response.status_code,
                payload if isinstance(payload, dict) else None,
                response.text,
            )
        if payload is None:
            raise RuntimeError(f"Failed to parse JSON from platform at {url}: {response.text}")
        return payload

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("POST", path, body)
