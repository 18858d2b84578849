"""
portal_templates.py – Template registry for the portal pages.

``init_templates`` is called once from the lifespan and returns an immutable
``TemplateRegistry``; handlers read it from ``request.app.state.templates``
instead of importing a module-level instance, so there is nothing to lock and
tests can build a registry from any directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from fastapi.templating import Jinja2Templates
from jinja2 import Template, TemplateError

from page_data import DossiersPageData, PageData

log = logging.getLogger(__name__)

PAGE_TEMPLATE     = "home.html"
DOSSIERS_TEMPLATE = "dossiers.html"


class TemplateLoadError(RuntimeError):
    """A required template is missing or does not parse."""


@dataclass(frozen=True)
class TemplateRegistry:
    page:      Template
    dossiers:  Template
    directory: str

    def render_page(self, data: PageData) -> str:
        return self.page.render(data.as_dict())

    def render_dossiers(self, data: DossiersPageData) -> str:
        return self.dossiers.render(username=data.username)


def _load(templates: Jinja2Templates, name: str, directory: str) -> Template:
    try:
        return templates.get_template(name)
    except TemplateError as exc:
        raise TemplateLoadError(
            f"Could not load template {name!r} from {directory!r}: {exc}"
        ) from exc


def init_templates(template_dir: Union[str, Path]) -> TemplateRegistry:
    """Parse ``home.html`` and ``dossiers.html`` under *template_dir*.

    Raises:
        TemplateLoadError: if the directory or either template is missing, or
            a template has a syntax error.  No partial registry is returned.
    """
    directory = str(template_dir)
    if not Path(directory).is_dir():
        raise TemplateLoadError(f"Template directory not found: {directory!r}")

    templates = Jinja2Templates(directory=directory)
    registry = TemplateRegistry(
        page=_load(templates, PAGE_TEMPLATE, directory),
        dossiers=_load(templates, DOSSIERS_TEMPLATE, directory),
        directory=directory,
    )
    log.info("Templates loaded from %s (%s, %s)", directory, PAGE_TEMPLATE, DOSSIERS_TEMPLATE)
    return registry
