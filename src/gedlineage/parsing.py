"""GEDCOM decoding and the two-strategy parse."""

from gedlineage.config import DEFAULT_ENCODING_TAG
from gedlineage.errors import DecodeError, FallbackParseError, ParseError
from gedlineage.models import ParseResult
from gedlineage.normalize import ObjectGraphNormalizer, RecordTreeNormalizer
from gedlineage.object_graph import read_object_graph
from gedlineage.record_tree import read_record_tree

UTF8_BOM = b"\xef\xbb\xbf"
UTF16_LE_BOM = b"\xff\xfe"
UTF16_BE_BOM = b"\xfe\xff"


def decode_gedcom(buffer: bytes) -> str:
    """
    Decode a GEDCOM byte buffer, honoring a leading byte-order mark.

    Both UTF-16 marks are decoded as little-endian.
    """
    try:
        if buffer.startswith(UTF8_BOM):
            return buffer[3:].decode("utf-8")
        if buffer.startswith(UTF16_LE_BOM) or buffer.startswith(UTF16_BE_BOM):
            return buffer[2:].decode("utf-16-le")
        return buffer.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Failed to decode GEDCOM file: {exc}") from exc


def parse_primary(text: str, encoding_tag: str = DEFAULT_ENCODING_TAG) -> ParseResult:
    """Read decoded text into a python-gedcom element tree and normalize it."""
    return RecordTreeNormalizer(encoding_tag).normalize(read_record_tree(text))


def parse_fallback(buffer: bytes) -> ParseResult:
    """Read the raw buffer with ged4py and normalize the object graph."""
    try:
        return ObjectGraphNormalizer().normalize(read_object_graph(buffer))
    except Exception as exc:
        raise FallbackParseError(str(exc) or type(exc).__name__) from exc


def parse_gedcom_with_fallback(buffer: bytes, encoding_tag: str = DEFAULT_ENCODING_TAG) -> ParseResult:
    """
    Parse a GEDCOM byte buffer into a ParseResult.

    The record-tree parser runs on the decoded text first. If it fails for any
    reason the ged4py reader is tried on the original bytes. A ParseError
    naming both failures is raised when neither succeeds.

    Args:
        buffer: Raw GEDCOM file contents
        encoding_tag: Encoding tag to report when the file has no HEAD/CHAR

    Returns:
        The normalized persons and families with their metadata
    """
    text = decode_gedcom(buffer)

    try:
        return parse_primary(text, encoding_tag)
    except Exception as primary_error:
        try:
            return parse_fallback(buffer)
        except FallbackParseError as fallback_error:
            raise ParseError(primary_error, fallback_error) from fallback_error


parse_gedcom = parse_gedcom_with_fallback
