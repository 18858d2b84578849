"""
httputil.py – Small request/response helpers shared by the page endpoints.
"""

from starlette.requests import Request
from starlette.responses import JSONResponse

from page_data import HEADER_USER

ANONYMOUS = "anonymous"


def wants_json(request: Request) -> bool:
    """True when the caller asked for JSON via Accept or ``?format=json``."""
    return (
        "application/json" in request.headers.get("accept", "")
        or request.query_params.get("format") == "json"
    )


def get_user(request: Request) -> str:
    return request.headers.get(HEADER_USER) or ANONYMOUS


def json_error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)
