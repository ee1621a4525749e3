"""Low-level HTTP client for the CIAM API.

Handles bearer authentication, status mapping, and HTTP operations.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Dict, List, Optional

import requests

from ..exceptions import InvalidToken, PermissionDenied, TransportError
from ..result import ABSENT, Result, decode

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://ciam.centralmind.net"
REQUEST_TIMEOUT = 10

MISSING_PERMISSIONS_PREFIX = "Missing permissions"
_MISSING_LIST = re.compile(r"\[(.*)\]", re.DOTALL)


class CiamClient:
    """HTTP client for the CIAM API bound to one token and base URL.

    The token, base URL and timeout cannot be changed after construction;
    ``reconfigure`` hands back a new client instead, so a client may be shared
    freely between callers.

    Usage:
        client = CiamClient("my-token")
        client.validate_token()
        result = client.get("/user/list", params={"skip": 0, "limit": 100})
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL, timeout: float = REQUEST_TIMEOUT):
        """Initialize CIAM client.

        Args:
            token: Bearer token sent with every request
            base_url: CIAM base URL
            timeout: Per-request timeout in seconds, handed to requests
        """
        if not token:
            raise InvalidToken("A CIAM token is required")
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def token(self) -> str:
        return self._token

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def __repr__(self) -> str:
        return f"CiamClient(base_url={self._base_url!r})"

    def reconfigure(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "CiamClient":
        """Return a new client with the given settings replaced."""
        return CiamClient(
            token if token is not None else self._token,
            base_url if base_url is not None else self._base_url,
            timeout if timeout is not None else self._timeout,
        )

    def validate_token(self) -> bool:
        """Ask the service whether the configured token is accepted.

        Returns:
            True when the token is valid

        Raises:
            InvalidToken: If the service rejects the token
        """
        self.get("/auth/valid")
        return True

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Result:
        """Execute GET request.

        Args:
            path: API endpoint path (e.g., "/user/list")
            params: Query parameters
            **kwargs: Additional arguments for requests.get

        Returns:
            Found(body) or ABSENT

        Raises:
            InvalidToken, PermissionDenied, TransportError: On HTTP error
        """
        url = f"{self._base_url}{path}"
        headers = self._headers(kwargs)
        logger.debug("GET %s params=%s", url, params)
        resp = requests.get(url, params=params, headers=headers, timeout=self._timeout, **kwargs)
        return self._handle_response(resp, path)

    def post(self, path: str, json: Optional[Any] = None, **kwargs) -> Result:
        """Execute POST request with a JSON payload.

        Returns:
            Found(body) or ABSENT

        Raises:
            InvalidToken, PermissionDenied, TransportError: On HTTP error
        """
        url = f"{self._base_url}{path}"
        headers = self._headers(kwargs)
        logger.debug("POST %s", url)
        resp = requests.post(url, json=json, headers=headers, timeout=self._timeout, **kwargs)
        return self._handle_response(resp, path)

    def delete(self, path: str, **kwargs) -> Result:
        """Execute DELETE request."""
        url = f"{self._base_url}{path}"
        headers = self._headers(kwargs)
        logger.debug("DELETE %s", url)
        resp = requests.delete(url, headers=headers, timeout=self._timeout, **kwargs)
        return self._handle_response(resp, path)

    def _headers(self, kwargs: Dict[str, Any]) -> Dict[str, str]:
        headers = dict(kwargs.pop("headers", None) or {})
        headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _handle_response(self, resp: requests.Response, path: str) -> Result:
        """Centralized status mapping for HTTP responses.

        Args:
            resp: Response object to check
            path: Request path, used in error messages

        Returns:
            ABSENT for 404 or an empty body, Found(body) otherwise

        Raises:
            PermissionDenied: 401 whose body starts with "Missing permissions"
            InvalidToken: Any other 401
            TransportError: Any other status >= 400
        """
        status = resp.status_code
        if status == 401:
            message = _error_text(resp)
            if message.startswith(MISSING_PERMISSIONS_PREFIX):
                missing = parse_missing_permissions(message)
                logger.warning("CIAM denied %s: missing %s", path, missing)
                raise PermissionDenied(missing)
            logger.warning("CIAM rejected token for %s", path)
            raise InvalidToken()
        if status == 404:
            logger.debug("CIAM returned 404 for %s", path)
            return ABSENT
        if status >= 400:
            raise TransportError(status, _error_text(resp), path)
        return decode(status, _body(resp))


def parse_missing_permissions(message: str) -> List[str]:
    """Extract the flag list from ``Missing permissions: [a.b, c.d]``."""
    match = _MISSING_LIST.search(message)
    if not match:
        return []
    return [item.strip().strip("'\"") for item in match.group(1).split(",") if item.strip()]


def _error_text(resp: requests.Response) -> str:
    # Errors arrive either as plain text or as a JSON encoded string
    body = _body(resp)
    if isinstance(body, str):
        return body
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return resp.text or ""


def _body(resp: requests.Response) -> Any:
    if resp.status_code == 204 or not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text
