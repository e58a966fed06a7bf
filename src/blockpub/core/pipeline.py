"""Pipeline step functions: layout validation, content loading, and site rendering"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from blockpub.core.blocks.transform import Converters, default_converters
from blockpub.core.content import parse_content_file
from blockpub.core.files import (
    content_name,
    discover_content,
    ensure_directory,
    expect_directory,
    expect_file,
)
from blockpub.core.models import Page, Post, SiteContext
from blockpub.core.render import (
    ExplicitDestination,
    RenderExport,
    RenderPassDescriptor,
    Renderer,
    SectionIndexDestination,
    write_permalink,
)
from blockpub.core.site import load_site_context


logger = logging.getLogger(__name__)

DEFAULT_SITE_CONFIG = "config.json"
POST_TEMPLATE = "post.tmpl"
SECTION_TEMPLATE = "content.tmpl"


@dataclass(frozen=True)
class BuildLayout:
    """Resolved source and output locations for one build."""
    source_dir: Path
    content_dir: Path
    css_dir: Path
    templates_dir: Path
    site_config: Path
    output_dir: Path
    permalink_dir: Path


@dataclass(frozen=True)
class BuildResult:
    export: RenderExport
    permalink: Optional[Path] = None


def resolve_layout(source: str, destination: str, site_config: Optional[str] = None) -> BuildLayout:
    """Check the expected source tree exists and create the output directories."""
    source_dir = expect_directory(Path(source))
    output_dir = ensure_directory(Path(destination))
    return BuildLayout(
        source_dir=source_dir,
        content_dir=expect_directory(source_dir / "content"),
        css_dir=expect_directory(source_dir / "css"),
        templates_dir=source_dir / "templates",
        site_config=expect_file(Path(site_config) if site_config else source_dir / DEFAULT_SITE_CONFIG),
        output_dir=output_dir,
        permalink_dir=ensure_directory(output_dir / "permalink"),
    )


def load_content(
    content_dir: Path,
    converters: Converters,
    ) -> tuple[dict[str, Post], dict[str, Page]]:
    """Parse every content file into posts and pages keyed by content name."""
    posts: dict[str, Post] = {}
    pages: dict[str, Page] = {}
    for p in discover_content(content_dir):
        name = content_name(p, content_dir)
        try:
            content = parse_content_file(p, converters)
        except Exception as e:
            raise RuntimeError(f"Failed to parse block file {p}: {e}") from e
        if isinstance(content, Post):
            posts[name] = content
        else:
            pages[name] = content
    logger.info("Loaded %d post(s) and %d page(s) from %s", len(posts), len(pages), content_dir)
    return posts, pages


def _post_slug(name: str, post: Post) -> str:
    """Output file stem: metadata.content_name, else the content file's stem."""
    return post.metadata.content_name or Path(name).stem


def render_posts(
    renderer: Renderer,
    layout: BuildLayout,
    posts: dict[str, Post],
    ) -> list[BuildResult]:
    """Render each post, write its permalink, and register its site URL."""
    results = []
    slugs: dict[str, str] = {}
    for name, post in sorted(posts.items()):
        slug = _post_slug(name, post)
        if slug in slugs:
            raise RuntimeError(f"Posts '{slugs[slug]}' and '{name}' share the content name '{slug}'")
        slugs[slug] = name
        desc = RenderPassDescriptor(
            render_name=name,
            base_template=POST_TEMPLATE,
            context=post,
            destination=ExplicitDestination(layout.output_dir / post.metadata.directory, slug),
        )
        export = renderer.render_content(desc)
        permalink = write_permalink(export, layout.permalink_dir)
        renderer.register_post_url(slug, content_name(export.path, layout.output_dir))
        results.append(BuildResult(export=export, permalink=permalink))
    return results


def render_sections(
    renderer: Renderer,
    layout: BuildLayout,
    site: SiteContext,
    pages: dict[str, Page],
    ) -> list[BuildResult]:
    """Render the index page of every site section."""
    results = []
    for section in site.sections:
        page = pages.get(section.index_content)
        if page is None:
            raise RuntimeError(f"Missing index page '{section.index_content}' for section '{section.name}'")
        desc = RenderPassDescriptor(
            render_name=section.index_content,
            base_template=SECTION_TEMPLATE,
            context=page,
            destination=SectionIndexDestination(ensure_directory(layout.output_dir / section.site_path)),
        )
        results.append(BuildResult(export=renderer.render_content(desc)))
    return results


def run_build(
    source: str,
    destination: str,
    site_config: Optional[str] = None,
    markdown_preset: str = "commonmark",
    ) -> list[BuildResult]:
    """Build the site from source into destination. Returns one BuildResult per render."""
    layout = resolve_layout(source, destination, site_config)
    site = load_site_context(layout.site_config)
    posts, pages = load_content(layout.content_dir, default_converters(markdown_preset))

    renderer = Renderer(layout.templates_dir, site, layout.output_dir)
    results = render_posts(renderer, layout, posts)
    results += render_sections(renderer, layout, site, pages)

    shutil.copytree(layout.css_dir, layout.output_dir / "css", dirs_exist_ok=True)
    logger.info("Rendered %d page(s) into %s", len(results), layout.output_dir)
    return results
