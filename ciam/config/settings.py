"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ciam.core.client.client import DEFAULT_BASE_URL, REQUEST_TIMEOUT


def _load_secret_from_file(secret_name: str, env_var: Optional[str] = None) -> Optional[str]:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                print(f"[settings] Loaded {secret_name} from /run/secrets", file=sys.stderr)
                return secret_value
        except OSError as e:
            print(f"[settings] Failed to read /run/secrets/{secret_name}: {e}", file=sys.stderr)

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


@dataclass(frozen=True)
class CiamConfig:
    """CIAM client configuration container."""
    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = REQUEST_TIMEOUT

    def __repr__(self) -> str:
        return f"CiamConfig(base_url={self.base_url!r}, timeout={self.timeout!r}, token='***')"


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return float(REQUEST_TIMEOUT)
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"CIAM_REQUEST_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise RuntimeError("CIAM_REQUEST_TIMEOUT must be positive")
    return timeout


def load_settings() -> CiamConfig:
    """Load CIAM settings from /run/secrets and the environment.

    Raises:
        RuntimeError: If no token is available or a value is malformed
    """
    token = _load_secret_from_file("ciam_token", "CIAM_TOKEN")
    if not token:
        raise RuntimeError("CIAM_TOKEN not found in /run/secrets or environment")

    base_url = (os.environ.get("CIAM_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/")
    timeout = _parse_timeout(os.environ.get("CIAM_REQUEST_TIMEOUT"))

    return CiamConfig(token=token, base_url=base_url, timeout=timeout)
