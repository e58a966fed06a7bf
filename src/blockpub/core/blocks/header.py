"""Header line parsing: 'type.segment.segment:source->target'"""

from blockpub.core.blocks.errors import EncodingSyntaxError, HeaderSyntaxError, PathSyntaxError
from blockpub.core.blocks.models import (
    BlockEncoding,
    BlockEncodings,
    BlockHeader,
    BlockPath,
    BlockType,
)


ENCODING_ARROW = "->"


def parse_block_type(token: str) -> BlockType:
    """Return the BlockType whose canonical name is exactly token."""
    try:
        return BlockType(token)
    except ValueError:
        raise PathSyntaxError(f"Unknown block type '{token}'") from None


def parse_path(text: str) -> BlockPath:
    """Parse 'post.meta.author' into a BlockPath; a bare type token is valid."""
    head, *segments = text.split(".")
    block_type = parse_block_type(head)
    if any(not s for s in segments):
        raise PathSyntaxError(f"Found empty component in block path '{text}'")
    return BlockPath(block_type=block_type, segments=tuple(segments))


def _encoding_token(token: str) -> BlockEncodings:
    try:
        return BlockEncodings(token)
    except ValueError:
        raise EncodingSyntaxError(f"'{token}' is not a valid encoding") from None


def parse_encoding(text: str) -> BlockEncoding:
    """Parse 'markdown' or 'sam->html' into a BlockEncoding."""
    tokens = text.split(ENCODING_ARROW)
    if len(tokens) == 1:
        return BlockEncoding(target=_encoding_token(tokens[0]))
    if len(tokens) == 2:
        source, target = tokens
        return BlockEncoding(target=_encoding_token(target), source=_encoding_token(source))
    raise EncodingSyntaxError(
        f"Invalid encoding transformation '{text}': expected 'target' or 'source{ENCODING_ARROW}target'"
    )


def parse_header(line: str) -> BlockHeader:
    """Parse one header line; path and encoding failures are re-raised as HeaderSyntaxError."""
    parts = line.split(":")
    if len(parts) != 2:
        raise HeaderSyntaxError(f"Expected header format 'type:encoding', received '{line}'")
    path_spec, encoding_spec = parts
    try:
        return BlockHeader(path=parse_path(path_spec), encoding=parse_encoding(encoding_spec))
    except (PathSyntaxError, EncodingSyntaxError) as e:
        raise HeaderSyntaxError(f"Block header '{line}' was malformed: {e}") from e
