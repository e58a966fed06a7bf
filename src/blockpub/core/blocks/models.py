"""Typed headers, paths, encodings, and content for block documents"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BlockType(str, Enum):
    """Reserved first token of every block path"""
    metadata = "metadata"
    post = "post"
    page = "page"


class BlockEncodings(str, Enum):
    """Formats a block body may be declared in or converted to"""
    json = "json"
    markdown = "markdown"
    html = "html"
    sam = "sam"


@dataclass(frozen=True)
class BlockPath:
    block_type: BlockType
    segments: tuple[str, ...] = ()

    @property
    def keys(self) -> list[str]:
        """Full document path: type token followed by the segments."""
        return [self.block_type.value, *self.segments]

    def __str__(self) -> str:
        return ".".join(self.keys)


@dataclass(frozen=True)
class BlockEncoding:
    target: BlockEncodings
    source: Optional[BlockEncodings] = None

    def __str__(self) -> str:
        if self.source is None:
            return self.target.value
        return f"{self.source.value}->{self.target.value}"


@dataclass(frozen=True)
class BlockHeader:
    path: BlockPath
    encoding: BlockEncoding


@dataclass(frozen=True)
class BlockContent:
    """Converted block body tagged with the kind it was stored as.

    kind is one of the four BlockEncodings; text is the raw body for json,
    markdown, and sam content, and the (possibly converted) markup for html.
    """
    kind: BlockEncodings
    text: str


@dataclass(frozen=True)
class Block:
    header: BlockHeader
    content: BlockContent
