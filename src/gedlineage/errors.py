"""Exceptions raised while reading GEDCOM data and walking lineages."""


class GedcomError(Exception):
    """Base class for every failure reported by gedlineage."""


class DecodeError(GedcomError):
    """The byte buffer could not be decoded as text."""


class StructuralParseError(GedcomError):
    """The record tree did not have the expected shape."""


class FallbackParseError(GedcomError):
    """The ged4py object-graph reader could not read the buffer."""


class ParseError(GedcomError):
    """Both parsing strategies failed."""

    def __init__(self, primary: BaseException, fallback: BaseException):
        self.primary = primary
        self.fallback = fallback
        super().__init__(
            "Failed to parse GEDCOM file with both parsers. "
            f"Primary error: {primary}. Fallback error: {fallback}"
        )


class NotFoundError(GedcomError, LookupError):
    """A requested record does not exist in the parsed data."""


class MissingArgumentError(GedcomError, ValueError):
    """A required argument or input field was not provided."""


class InvalidArgumentError(GedcomError, ValueError):
    """An argument was provided but is out of range."""


class SourceError(GedcomError):
    """GEDCOM input could not be acquired."""
