"""
config.py — Load and validate runtime options for the AuthZ demo portal.

All options come from environment variables so the container can be wired up
by docker-compose without an options file:

  PORTAL_TEMPLATE_DIR   template root (default: <app dir>/templates)
  PORTAL_PORT           listening port for serve.py (default: 8080)
  PORTAL_EXTERNAL_URL   public base URL used for the logout redirect
  PORTAL_REALM          identity-provider realm
  PORTAL_CLIENT_ID      identity-provider client id
  PORTAL_LOG_LEVEL      root log level (default: INFO)
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

log = logging.getLogger(__name__)

_APP_DIR = Path(__file__).parent

DEFAULT_TEMPLATE_DIR = str(_APP_DIR / "templates")
DEFAULT_PORT = 8080
DEFAULT_EXTERNAL_URL = "http://localhost:8000"
DEFAULT_REALM = "AuthorizationRealm"
DEFAULT_CLIENT_ID = "envoy"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read the PORTAL_* environment variables and return a structured config dict.

    *environ* defaults to ``os.environ``; tests pass a plain dict.

    Raises:
        RuntimeError: if PORTAL_PORT is not a positive integer.
    """
    env = os.environ if environ is None else environ

    template_dir = (env.get("PORTAL_TEMPLATE_DIR") or "").strip() or DEFAULT_TEMPLATE_DIR

    raw_port = (env.get("PORTAL_PORT") or "").strip()
    if raw_port:
        try:
            port = int(raw_port)
            if port <= 0:
                raise ValueError("port must be > 0")
        except ValueError as exc:
            raise RuntimeError(f"Invalid PORTAL_PORT {raw_port!r}: {exc}") from exc
    else:
        port = DEFAULT_PORT

    log_level = (env.get("PORTAL_LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in _VALID_LOG_LEVELS:
        log.warning("Invalid PORTAL_LOG_LEVEL %r – defaulting to INFO", log_level)
        log_level = "INFO"

    external_url = (env.get("PORTAL_EXTERNAL_URL") or DEFAULT_EXTERNAL_URL).strip().rstrip("/")

    cfg = {
        "server": {
            "port":         port,
            "log_level":    log_level,
        },
        "templates": {
            "directory":    template_dir,
        },
        "identity": {
            "external_url": external_url,
            "realm":        (env.get("PORTAL_REALM") or DEFAULT_REALM).strip(),
            "client_id":    (env.get("PORTAL_CLIENT_ID") or DEFAULT_CLIENT_ID).strip(),
        },
    }

    return cfg
