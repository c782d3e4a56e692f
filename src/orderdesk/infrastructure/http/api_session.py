"""Shared ``requests`` session setup for the backend REST API."""

from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)


class ApiSession:
    """Base URL, bearer token and timeout around a ``requests.Session``."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, params: dict | None = None) -> requests.Response:
        url = self.url(path)
        logger.debug("GET %s params=%s", url, params)
        return self.session.get(url, params=params, timeout=self.timeout)

    def post(self, path: str, body: dict) -> requests.Response:
        url = self.url(path)
        logger.debug("POST %s", url)
        return self.session.post(url, json=body, timeout=self.timeout)


def error_message(response: requests.Response) -> str:
    """Best-effort extraction of the backend's ``error`` field."""
    try:
        payload = response.json()
    except ValueError:
        return response.reason or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return response.reason or f"HTTP {response.status_code}"
