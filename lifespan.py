"""
FastAPI lifespan – loads config and the template registry before serving.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import load_config
from portal_templates import TemplateLoadError, init_templates

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # -- Load & validate config --------------------------------------------
    cfg = load_config()
    logging.getLogger().setLevel(cfg["server"]["log_level"])
    log.info("Template dir : %s", cfg["templates"]["directory"])
    log.info("External URL : %s", cfg["identity"]["external_url"])
    log.info("Realm/client : %s / %s", cfg["identity"]["realm"], cfg["identity"]["client_id"])

    app.state.identity_config = cfg["identity"]
    app.state.started_at      = time.monotonic()

    # -- Templates (fatal if missing) --------------------------------------
    try:
        app.state.templates = init_templates(cfg["templates"]["directory"])
    except TemplateLoadError as exc:
        log.critical("Template load failed – cannot start: %s", exc)
        raise

    yield

    log.info("Portal shutting down")
