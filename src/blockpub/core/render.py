"""Template rendering for posts and section index pages, plus permalink output.

Templates are plain files with '{{ dotted.name }}' placeholders resolved
against the render context. A content's own HTML is rendered as a template
first, then substituted into its base template as '{{ content }}', so pages
can link to registered posts with '{{ posts.<content_name> }}'.
"""

import base64
import hashlib
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel

from blockpub.core.files import ensure_directory, relative_path
from blockpub.core.models import Page, Post, SiteContext


logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Za-z_][\w.-]*)\s*\}\}")
CONTENT_KEY = "content"
TEMPLATE_GLOB = "**/*.tmpl"
INDEX_FILENAME = "index.html"


class RenderError(ValueError):
    """Unknown template or unresolved placeholder."""


@dataclass(frozen=True)
class ExplicitDestination:
    directory: Path
    filename: str

    def path(self) -> Path:
        return self.directory / f"{self.filename}.html"


@dataclass(frozen=True)
class SectionIndexDestination:
    directory: Path

    def path(self) -> Path:
        return self.directory / INDEX_FILENAME


Destination = Union[ExplicitDestination, SectionIndexDestination]


@dataclass(frozen=True)
class RenderPassDescriptor:
    render_name: str
    base_template: str
    context: Union[Post, Page]
    destination: Destination


@dataclass(frozen=True)
class RenderExport:
    render_name: str
    path: Path
    output: str


def lookup(context: dict[str, Any], name: str) -> Any:
    """Resolve a dotted name through dict keys and model attributes."""
    value: Any = context
    for part in name.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        elif isinstance(value, BaseModel) and part in type(value).model_fields:
            value = getattr(value, part)
        else:
            raise RenderError(f"Unresolved template variable '{name}'")
    return value


def render_template(template: str, context: dict[str, Any]) -> str:
    """Substitute placeholders in one pass; inserted values are never re-scanned.

    '{{ content }}' is left in place when the context has no content yet.
    """
    def _sub(m: re.Match) -> str:
        if m.group(1) == CONTENT_KEY:
            return str(context[CONTENT_KEY]) if CONTENT_KEY in context else m.group(0)
        return str(lookup(context, m.group(1)))

    return PLACEHOLDER_RE.sub(_sub, template)


def load_templates(templates_dir: Path) -> dict[str, str]:
    """Return {relative_name: template_text} for every *.tmpl under templates_dir."""
    return {
        p.relative_to(templates_dir).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(Path(templates_dir).glob(TEMPLATE_GLOB))
    }


def permalink_name(output: str) -> str:
    """URL-safe base64 BLAKE2s digest of the rendered output, as an .html filename."""
    digest = hashlib.blake2s(output.encode("utf-8")).digest()
    return f"{base64.urlsafe_b64encode(digest).decode('ascii')}.html"


def write_permalink(export: RenderExport, directory: Path) -> Path:
    """Write a render to directory under its content-addressed name; returns the path."""
    path = ensure_directory(directory) / permalink_name(export.output)
    path.write_text(export.output, encoding="utf-8")
    logger.debug("Wrote render '%s' to %s", export.render_name, path)
    return path


class Renderer:
    """Holds loaded templates and the base context shared by every render pass."""

    def __init__(self, templates_dir: Path, site: SiteContext, output_dir: Path):
        self.templates = load_templates(templates_dir)
        self.output_dir = Path(output_dir)
        self.base_context: dict[str, Any] = {"site": site, "posts": {}}
        logger.debug("Loaded templates: %s", ", ".join(self.templates) or "(none)")

    def register_post_url(self, name: str, site_path: str) -> None:
        self.base_context["posts"][name] = site_path

    def _context_for(self, desc: RenderPassDescriptor) -> dict[str, Any]:
        key = "post" if isinstance(desc.context, Post) else "page"
        directory = desc.destination.path().parent
        context = {**self.base_context, key: desc.context, "root": relative_path(self.output_dir, directory)}
        context[CONTENT_KEY] = render_template(desc.context.html, context)
        return context

    def render(self, desc: RenderPassDescriptor) -> str:
        """Render a pass to a string without writing it."""
        if desc.base_template not in self.templates:
            raise RenderError(f"Unknown template '{desc.base_template}' for render '{desc.render_name}'")
        try:
            return render_template(self.templates[desc.base_template], self._context_for(desc))
        except RenderError as e:
            raise RenderError(f"Failed to render '{desc.render_name}': {e}") from e

    def render_content(self, desc: RenderPassDescriptor) -> RenderExport:
        """Render a pass and write it to its destination."""
        logger.debug("Rendering: %s", desc.render_name)
        output = self.render(desc)
        path = desc.destination.path()
        ensure_directory(path.parent)
        path.write_text(output, encoding="utf-8")
        return RenderExport(render_name=desc.render_name, path=path, output=output)
