"""CommonMark to HTML conversion with markdown-it"""

from typing import Callable

from markdown_it import MarkdownIt


DEFAULT_PRESET = "commonmark"


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def make_renderer(preset: str = DEFAULT_PRESET) -> Callable[[str], str]:
    """Return a str -> str markdown renderer bound to one parser instance."""
    return _make_parser(preset).render


def markdown_to_html(text: str, preset: str = DEFAULT_PRESET) -> str:
    return make_renderer(preset)(text)
