"""
serve.py – Launch the portal with uvicorn.

  python serve.py

Port and log level come from PORTAL_PORT / PORTAL_LOG_LEVEL (see config.py).
TLS is terminated by the proxy in front of the portal.
"""

import logging
import sys

import uvicorn

from config import load_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


def main() -> None:
    cfg = load_config()
    server_cfg = cfg["server"]

    logging.getLogger().setLevel(server_cfg["log_level"])
    log.info("Portal starting on http://0.0.0.0:%s", server_cfg["port"])

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=server_cfg["port"],
        log_level=server_cfg["log_level"].lower(),
        access_log=True,
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
