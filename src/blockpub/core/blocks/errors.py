"""Error kinds raised while scanning, converting, and assembling block documents"""


class BlockError(ValueError):
    """Base class for every recoverable block document failure."""


class HeaderSyntaxError(BlockError):
    """A header line is not of the form 'path:encoding', or one of its halves is invalid."""


class PathSyntaxError(BlockError):
    """Unknown block type token or empty path segment."""


class EncodingSyntaxError(BlockError):
    """Unknown encoding token or wrong number of '->' arrows."""


class ContentSectionError(BlockError):
    """Content opener missing, or a header reached end of input without a body."""


class ContentConversionError(BlockError):
    """Embedded JSON or structural markup could not be converted."""


class PathConflictError(BlockError):
    """A directory component of a block path collides with a non-map value."""


class ContentTypeError(BlockError):
    """A content file's first line is not a known 'type::...' declaration."""


class ContentValidationError(BlockError):
    """An assembled post or page document lacks required fields."""
