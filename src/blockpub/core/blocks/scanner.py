"""Line-driven state machine splitting a block document into (header, body) pairs.

A document is a sequence of blocks, each a header line followed by a body
fenced with '+++' lines:

    post.title:markdown
    +++
    Hello
    +++

Blank lines are ignored between blocks and between a header and its opener.
The closing fence of the last block may be omitted. step() is a pure
transition over one line so the machine can be driven and tested line by line.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from blockpub.core.blocks.errors import ContentSectionError
from blockpub.core.blocks.header import parse_header
from blockpub.core.blocks.models import BlockHeader


logger = logging.getLogger(__name__)

CONTENT_MARKER = "+++"


@dataclass(frozen=True)
class ParseHeader:
    """Expecting a header line (initial state, and after each closed block)."""


@dataclass(frozen=True)
class WaitForContent:
    """Header parsed; expecting the '+++' opener."""
    header: BlockHeader


@dataclass(frozen=True)
class BufferContent:
    """Inside a body; collecting lines until the closing '+++'."""
    header: BlockHeader
    lines: tuple[str, ...] = ()

    def body(self) -> str:
        return "\n".join(self.lines)


ScanState = Union[ParseHeader, WaitForContent, BufferContent]
ScannedBlock = tuple[BlockHeader, str]


def _is_blank(line: str) -> bool:
    """Empty or whitespace-only; indentation left over from editors is skipped, not parsed as a header."""
    return not line.strip()


def split_lines(text: str) -> list[str]:
    """Split on '\\n', dropping a trailing '\\r' per line and the empty tail after a final newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def step(state: ScanState, line: str) -> tuple[ScanState, Optional[ScannedBlock]]:
    """Advance the scanner by one line. Returns (next_state, finished_block_or_None)."""
    if isinstance(state, ParseHeader):
        if _is_blank(line):
            return state, None
        return WaitForContent(header=parse_header(line)), None

    if isinstance(state, WaitForContent):
        if _is_blank(line):
            return state, None
        if line == CONTENT_MARKER:
            return BufferContent(header=state.header), None
        raise ContentSectionError(
            f"Expected content start marker ('{CONTENT_MARKER}') or blank line, found '{line}'"
        )

    if line == CONTENT_MARKER:
        return ParseHeader(), (state.header, state.body())
    return BufferContent(header=state.header, lines=state.lines + (line,)), None


def finish(state: ScanState) -> Optional[ScannedBlock]:
    """Resolve the end-of-input state: an open body is closed implicitly.

    A header still waiting for its opener has no body at all and is rejected
    rather than silently dropped.
    """
    if isinstance(state, BufferContent):
        return state.header, state.body()
    if isinstance(state, WaitForContent):
        raise ContentSectionError(
            f"Block '{state.header.path}' reached end of input without a "
            f"'{CONTENT_MARKER}' content section"
        )
    return None


def scan(text: str) -> list[ScannedBlock]:
    """Scan a whole document into ordered (header, raw_body) pairs; any error aborts the scan."""
    state: ScanState = ParseHeader()
    scanned: list[ScannedBlock] = []
    for line in split_lines(text):
        state, block = step(state, line)
        if block is not None:
            scanned.append(block)
    block = finish(state)
    if block is not None:
        scanned.append(block)
    logger.debug("Scanned %d block(s)", len(scanned))
    return scanned
