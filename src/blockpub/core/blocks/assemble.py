"""Fold an ordered block list into one nested, path-addressed document"""

import json
from typing import Any, Callable

from blockpub.core.blocks.errors import ContentConversionError, PathConflictError
from blockpub.core.blocks.models import Block, BlockContent, BlockEncodings


def _reject_constant(name: str) -> Any:
    raise ContentConversionError(f"Couldn't parse json: '{name}' is not a valid JSON value")


def _json_value(content: BlockContent) -> Any:
    try:
        return json.loads(content.text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ContentConversionError(f"Couldn't parse json: {e}") from e


def _text_value(content: BlockContent) -> str:
    return content.text


CONTENT_VALUES: dict[BlockEncodings, Callable[[BlockContent], Any]] = {
    BlockEncodings.json:     _json_value,
    BlockEncodings.markdown: _text_value,
    BlockEncodings.html:     _text_value,
    BlockEncodings.sam:      _text_value,
}


def content_value(content: BlockContent) -> Any:
    """Return the document value for a block's content (parsed JSON or plain string)."""
    return CONTENT_VALUES[content.kind](content)


def _ensure_path(root: dict, directories: list[str], block: Block) -> dict:
    """Walk root along directories, creating missing maps; returns the innermost map."""
    node = root
    for key in directories:
        child = node.setdefault(key, {})
        if not isinstance(child, dict):
            raise PathConflictError(
                f"Block path '{block.header.path}' passes through '{key}', "
                f"which already holds a {type(child).__name__} value"
            )
        node = child
    return node


def merge_leaf(parent: dict, key: str, value: Any) -> None:
    """Merge value into parent[key]: map onto map merges shallowly, anything else replaces."""
    existing = parent.get(key)
    if isinstance(existing, dict) and isinstance(value, dict):
        existing.update(value)
    else:
        parent[key] = value


def assemble(blocks: list[Block]) -> dict[str, Any]:
    """Build the document tree from blocks in scan order.

    A type-only path ('metadata:json') places its value directly under the
    type key at the root. Later blocks win on non-map collisions.
    """
    document: dict[str, Any] = {}
    for block in blocks:
        *directories, leaf = block.header.path.keys
        parent = _ensure_path(document, directories, block)
        merge_leaf(parent, leaf, content_value(block.content))
    return document
