"""Content files: a 'type::post' or 'type::page' line followed by a block document"""

import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from blockpub.core.blocks.errors import ContentTypeError, ContentValidationError
from blockpub.core.blocks.parse import parse_document
from blockpub.core.blocks.transform import Converters
from blockpub.core.models import Page, Post


logger = logging.getLogger(__name__)

Content = Union[Post, Page]

CONTENT_TYPE_PREFIX = "type::"
CONTENT_TYPES: dict[str, tuple[str, type]] = {
    "type::post": ("post", Post),
    "type::page": ("page", Page),
}


def split_type_declaration(text: str) -> tuple[str, str]:
    """Return (type_declaration, block_document) from a content file's text."""
    declaration, sep, body = text.partition("\n")
    if not sep:
        raise ContentTypeError("Content file has no newline after its type declaration")
    return declaration.rstrip("\r"), body


def parse_content(text: str, converters: Optional[Converters] = None) -> Content:
    """Parse a content file's text into a validated Post or Page."""
    declaration, body = split_type_declaration(text)
    if declaration not in CONTENT_TYPES:
        raise ContentTypeError(
            f"Invalid type declaration '{declaration}', expected one of {sorted(CONTENT_TYPES)}"
        )
    key, model = CONTENT_TYPES[declaration]
    document = parse_document(body, converters)
    try:
        return model.model_validate(document.get(key, {}))
    except ValidationError as e:
        raise ContentValidationError(f"Invalid {key} document: {e}") from e


def parse_content_file(path: Path, converters: Optional[Converters] = None) -> Content:
    """Read and parse a single content file."""
    logger.debug("Parsing content file %s", path)
    return parse_content(path.read_text(encoding="utf-8"), converters)
