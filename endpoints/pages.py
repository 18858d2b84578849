"""
endpoints/pages.py – Pages rendered from the identity headers.

Every page goes through the same two steps: ``build_page_data`` turns the
proxy-injected headers into a view-model, and the registry built by the
lifespan renders it.  Callers sending ``Accept: application/json`` (or
``?format=json``) get a small JSON document instead of HTML.
"""

import logging
import time
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse

import config
from httputil import ANONYMOUS, get_user, json_error, wants_json
from page_data import (
    HEADER_METADATA,
    HEADER_USER,
    build_dossiers_page_data,
    build_page_data,
    server_time,
)
from portal_templates import TemplateRegistry

log = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "authz-portal"

# The proxy in front decides on method + path; the pages accept whatever it lets through.
PAGE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def _registry(request: Request) -> Optional[TemplateRegistry]:
    return getattr(request.app.state, "templates", None)


def _identity(request: Request) -> dict:
    cfg = getattr(request.app.state, "identity_config", None)
    if cfg is None:
        cfg = {
            "external_url": config.DEFAULT_EXTERNAL_URL,
            "realm":        config.DEFAULT_REALM,
            "client_id":    config.DEFAULT_CLIENT_ID,
        }
    return cfg


def _render_page(request: Request, is_public: bool):
    registry = _registry(request)
    if registry is None:
        log.error("Template registry not initialised – %s %s", request.method, request.url.path)
        return json_error("Templates not loaded", 503)
    return HTMLResponse(registry.render_page(build_page_data(request, is_public)))


@router.get("/", include_in_schema=False)
async def root_redirect():
    return RedirectResponse("/public", status_code=302)


@router.api_route("/public", methods=PAGE_METHODS)
async def public_page(request: Request):
    if wants_json(request):
        return JSONResponse({
            "status":  "ok",
            "message": "Public content - visible to everyone",
            "path":    request.url.path,
            "time":    server_time(),
        })
    return _render_page(request, is_public=True)


@router.api_route("/home", methods=PAGE_METHODS)
async def home_page(request: Request):
    if wants_json(request):
        return JSONResponse({"status": "ok", "message": "Authorization POC - Test Application"})
    return _render_page(request, is_public=False)


@router.api_route("/api/protected", methods=PAGE_METHODS)
async def protected_page(request: Request):
    if wants_json(request):
        return JSONResponse({
            "status":   "ok",
            "message":  "Protected content - access granted",
            "user":     request.headers.get(HEADER_USER, ""),
            "metadata": request.headers.get(HEADER_METADATA, ""),
            "path":     request.url.path,
            "method":   request.method,
            "time":     server_time(),
        })
    return _render_page(request, is_public=False)


@router.api_route("/api/health", methods=PAGE_METHODS)
async def api_health(request: Request):
    if wants_json(request):
        started_at = getattr(request.app.state, "started_at", None)
        uptime = int(time.monotonic() - started_at) if started_at is not None else 0
        return JSONResponse({
            "status":  "healthy",
            "service": SERVICE_NAME,
            "uptime":  f"{uptime}s",
        })
    return _render_page(request, is_public=False)


@router.get("/dossiers")
async def dossiers_page(request: Request):
    if get_user(request) == ANONYMOUS:
        return RedirectResponse("/home", status_code=302)
    registry = _registry(request)
    if registry is None:
        return json_error("Templates not loaded", 503)
    return HTMLResponse(registry.render_dossiers(build_dossiers_page_data(request)))


@router.get("/logout", include_in_schema=False)
async def logout(request: Request):
    ident = _identity(request)
    base = ident["external_url"]
    query = urlencode({
        "client_id":                ident["client_id"],
        "post_logout_redirect_uri": f"{base}/signout",
    })
    target = f"{base}/login/realms/{ident['realm']}/protocol/openid-connect/logout?{query}"
    return RedirectResponse(target, status_code=302)


async def not_found(request: Request, exc):
    """404 for any unrouted path, JSON or plain text like the pages above."""
    if wants_json(request):
        return JSONResponse(
            {"status": "error", "message": "Not found", "path": request.url.path},
            status_code=404,
        )
    return PlainTextResponse(f"Not found: {request.url.path}", status_code=404)
