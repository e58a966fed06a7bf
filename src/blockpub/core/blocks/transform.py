"""Dispatch a block body to its stored content form based on its encoding chain"""

from dataclasses import dataclass, field
from typing import Any, Callable

from blockpub.core.blocks.errors import ContentConversionError
from blockpub.core.blocks.models import BlockContent, BlockEncoding, BlockEncodings
from blockpub.core.markup import sam
from blockpub.core.markup.markdown import DEFAULT_PRESET, make_renderer


SAM_INDENT = 0
SAM_SELF_CLOSING = False


@dataclass(frozen=True)
class Converters:
    """Pluggable conversions used for 'markdown->html' and 'sam->html' blocks."""
    markdown: Callable[[str], str] = field(default_factory=make_renderer)
    sam_parse: Callable[[str], Any] = sam.parse
    sam_render: Callable[[Any, int, bool], str] = sam.render


def default_converters(preset: str = DEFAULT_PRESET) -> Converters:
    """Build the standard converter set with the given markdown-it preset."""
    return Converters(markdown=make_renderer(preset))


def _sam_to_html(raw: str, converters: Converters) -> str:
    # sam_parse/sam_render may be swapped out, so any failure is a conversion error
    try:
        tree = converters.sam_parse(raw)
        return converters.sam_render(tree, SAM_INDENT, SAM_SELF_CLOSING)
    except Exception as e:
        raise ContentConversionError(f"Invalid structural markup: {e}") from e


def _to_html(source: BlockEncodings | None, raw: str, converters: Converters) -> str:
    if source == BlockEncodings.markdown:
        return converters.markdown(raw)
    if source == BlockEncodings.sam:
        return _sam_to_html(raw, converters)
    return raw


def transform(encoding: BlockEncoding, raw: str, converters: Converters) -> BlockContent:
    """Convert a raw body into BlockContent.

    Only html targets are converted at this point; json is kept as text and
    parsed during assembly, markdown and sam bodies are stored verbatim.
    """
    if encoding.target == BlockEncodings.html:
        return BlockContent(kind=BlockEncodings.html, text=_to_html(encoding.source, raw, converters))
    return BlockContent(kind=encoding.target, text=raw)
