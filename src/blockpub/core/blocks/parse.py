"""Block document entry points: text -> blocks -> document"""

import logging
from typing import Any, Optional

from blockpub.core.blocks.assemble import assemble
from blockpub.core.blocks.models import Block
from blockpub.core.blocks.scanner import scan
from blockpub.core.blocks.transform import Converters, default_converters, transform


logger = logging.getLogger(__name__)


def parse_blocks(text: str, converters: Optional[Converters] = None) -> list[Block]:
    """Scan text and convert each body according to its header's encoding chain."""
    converters = converters or default_converters()
    blocks = []
    for header, raw in scan(text):
        blocks.append(Block(header=header, content=transform(header.encoding, raw, converters)))
        logger.debug("Block %s:%s (%d chars)", header.path, header.encoding, len(raw))
    return blocks


def parse_document(text: str, converters: Optional[Converters] = None) -> dict[str, Any]:
    """Parse a full block document into its assembled nested document."""
    return assemble(parse_blocks(text, converters))
