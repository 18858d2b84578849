"""
AuthZ demo portal - application entry point.

Runs behind the authorization proxy, which authenticates the caller and
injects x-current-user / x-user-role / x-user-metadata.  This app only
renders those headers.

All logic lives in:
  config.py               - PORTAL_* environment options
  lifespan.py             - startup (config + template registry)
  page_data.py            - request → PageData view-model
  portal_templates.py     - template registry (home.html, dossiers.html)
  httputil.py             - JSON / identity helpers
  endpoints/health.py     - GET /health
  endpoints/pages.py      - /public, /home, /api/protected, /api/health,
                            /dossiers, /logout
"""

import logging

from fastapi import FastAPI

from endpoints import health, pages
from lifespan import lifespan

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# No trailing-slash redirects: "/public/" is an unknown path like any other.
app = FastAPI(title="AuthZ Demo Portal", lifespan=lifespan, redirect_slashes=False)

app.include_router(health.router)
app.include_router(pages.router)

app.add_exception_handler(404, pages.not_found)
