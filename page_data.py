"""
page_data.py – Request → view-model builder for the portal pages.

The portal sits behind the authorization proxy, which injects the identity of
the caller as plain headers.  Nothing here verifies them; the values are
copied verbatim into an immutable view-model that the templates render.

Headers (case-insensitive, all optional, default ""):
  x-current-user    → username
  x-user-role       → roles (raw) / role_list (parsed)
  x-user-metadata   → metadata, and decision on private pages
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

HEADER_USER     = "x-current-user"
HEADER_ROLES    = "x-user-role"
HEADER_METADATA = "x-user-metadata"

ICON_PUBLIC  = "\U0001F310"  # globe
ICON_PRIVATE = "\u2705"      # check mark

PUBLIC_DECISION = "N/A"


@dataclass(frozen=True)
class PageData:
    is_public:   bool
    status_icon: str
    path:        str
    username:    str
    roles:       str
    role_list:   Tuple[str, ...] = ()
    decision:    str = ""
    metadata:    str = ""
    method:      str = "GET"
    time:        str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "is_public":   self.is_public,
            "status_icon": self.status_icon,
            "path":        self.path,
            "username":    self.username,
            "roles":       self.roles,
            "role_list":   list(self.role_list),
            "decision":    self.decision,
            "metadata":    self.metadata,
            "method":      self.method,
            "time":        self.time,
        }


@dataclass(frozen=True)
class DossiersPageData:
    username: str


def parse_roles(raw: str) -> List[str]:
    """Split a comma-separated role header into trimmed role names.

    An empty header means no roles at all, so ``""`` gives ``[]`` and never
    ``[""]``.  Segments that are blank after stripping are dropped; order is
    preserved.
    """
    if not raw:
        return []
    return [r.strip() for r in raw.split(",") if r.strip()]


def _header(request, name: str) -> str:
    return request.headers.get(name) or ""


def server_time() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def build_page_data(request, is_public: bool) -> PageData:
    """Build the view-model for the shared page template.

    *request* needs ``url.path`` and a case-insensitive ``headers.get``
    (a Starlette ``Request`` has both).  Never raises: missing headers
    become empty strings.
    """
    username = _header(request, HEADER_USER)
    roles    = _header(request, HEADER_ROLES)
    metadata = _header(request, HEADER_METADATA)

    return PageData(
        is_public=is_public,
        status_icon=ICON_PUBLIC if is_public else ICON_PRIVATE,
        path=request.url.path,
        username=username,
        roles=roles,
        role_list=tuple(parse_roles(roles)),
        decision=PUBLIC_DECISION if is_public else metadata,
        metadata=metadata,
        method=getattr(request, "method", None) or "GET",
        time=server_time(),
    )


def build_dossiers_page_data(request) -> DossiersPageData:
    return DossiersPageData(username=_header(request, HEADER_USER))
