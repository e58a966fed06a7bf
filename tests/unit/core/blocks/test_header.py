"""Unit tests for core/blocks/header.py"""

import pytest

from blockpub.core.blocks.errors import EncodingSyntaxError, HeaderSyntaxError, PathSyntaxError
from blockpub.core.blocks.header import parse_encoding, parse_header, parse_path
from blockpub.core.blocks.models import BlockEncoding, BlockEncodings, BlockPath, BlockType


# --- parse_path ---

def test_parse_path_with_segments():
    """Type token is split off and remaining tokens become ordered segments."""
    path = parse_path("post.metadata.author")
    assert path == BlockPath(block_type=BlockType.post, segments=("metadata", "author"))
    assert path.keys == ["post", "metadata", "author"]


def test_parse_path_type_only():
    """A bare type token is a valid path with no segments."""
    path = parse_path("metadata")
    assert path.block_type == BlockType.metadata
    assert path.segments == ()


@pytest.mark.parametrize("text", ["Post.title", "blog.title", "", "pages"])
def test_parse_path_unknown_type(text):
    """Type tokens must match case-sensitively; the error names the token."""
    with pytest.raises(PathSyntaxError, match=f"Unknown block type '{text.split('.')[0]}'"):
        parse_path(text)


@pytest.mark.parametrize("text", ["post..body", "post.title.", "page."])
def test_parse_path_empty_segment(text):
    """An empty segment fails with an error naming the full original path."""
    with pytest.raises(PathSyntaxError) as exc:
        parse_path(text)
    assert f"'{text}'" in str(exc.value)


# --- parse_encoding ---

@pytest.mark.parametrize("text,expected", [
    ("json",          BlockEncoding(target=BlockEncodings.json)),
    ("markdown",      BlockEncoding(target=BlockEncodings.markdown)),
    ("html",          BlockEncoding(target=BlockEncodings.html)),
    ("sam->html",     BlockEncoding(target=BlockEncodings.html, source=BlockEncodings.sam)),
    ("markdown->html", BlockEncoding(target=BlockEncodings.html, source=BlockEncodings.markdown)),
])
def test_parse_encoding_valid(text, expected):
    """Single tokens have no source; 'a->b' declares source a and target b."""
    assert parse_encoding(text) == expected


def test_parse_encoding_too_many_arrows():
    """More than one arrow is a syntax error."""
    with pytest.raises(EncodingSyntaxError, match="Invalid encoding transformation"):
        parse_encoding("sam->markdown->html")


@pytest.mark.parametrize("text,token", [
    ("text", "text"),
    ("HTML", "HTML"),
    ("markdown->", ""),
    ("yaml->html", "yaml"),
])
def test_parse_encoding_invalid_token(text, token):
    """Every token must be one of json|markdown|html|sam; the error names the bad one."""
    with pytest.raises(EncodingSyntaxError, match=f"'{token}' is not a valid encoding"):
        parse_encoding(text)


def test_encoding_str_round_trips_declaration():
    """str(BlockEncoding) reproduces the declared form."""
    assert str(parse_encoding("sam->html")) == "sam->html"
    assert str(parse_encoding("json")) == "json"


# --- parse_header ---

def test_parse_header_valid():
    """A well-formed header composes path and encoding."""
    header = parse_header("post.content:markdown->html")
    assert header.path == BlockPath(block_type=BlockType.post, segments=("content",))
    assert header.encoding.source == BlockEncodings.markdown
    assert header.encoding.target == BlockEncodings.html


@pytest.mark.parametrize("line", ["post.title", "post.title:markdown:html", "just text"])
def test_parse_header_wrong_part_count(line):
    """Anything other than exactly one ':' is a header format error quoting the line."""
    with pytest.raises(HeaderSyntaxError, match="Expected header format 'type:encoding'") as exc:
        parse_header(line)
    assert line in str(exc.value)


def test_parse_header_wraps_path_error():
    """Path failures surface as HeaderSyntaxError keeping the original reason and cause."""
    with pytest.raises(HeaderSyntaxError, match="Unknown block type 'blog'") as exc:
        parse_header("blog.title:markdown")
    assert isinstance(exc.value.__cause__, PathSyntaxError)


def test_parse_header_wraps_encoding_error():
    """Encoding failures surface as HeaderSyntaxError keeping the original reason and cause."""
    with pytest.raises(HeaderSyntaxError, match="'rst' is not a valid encoding") as exc:
        parse_header("post.title:rst")
    assert isinstance(exc.value.__cause__, EncodingSyntaxError)
