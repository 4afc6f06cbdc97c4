"""Parse GEDCOM files and compute ancestor/descendant lineages."""

__version__ = "0.1.0"

from gedlineage.ancestry import compute_ancestors, compute_descendants
from gedlineage.errors import (
    DecodeError,
    FallbackParseError,
    GedcomError,
    InvalidArgumentError,
    MissingArgumentError,
    NotFoundError,
    ParseError,
    SourceError,
    StructuralParseError,
)
from gedlineage.models import (
    AncestryResult,
    Family,
    FamilyFilter,
    LineageEdge,
    ParseMeta,
    ParseResult,
    Person,
    PersonFilter,
    SearchResult,
)
from gedlineage.parsing import decode_gedcom, parse_gedcom, parse_gedcom_with_fallback
from gedlineage.xref import canonicalize_id

__all__ = [
    "AncestryResult",
    "DecodeError",
    "FallbackParseError",
    "Family",
    "FamilyFilter",
    "GedcomError",
    "InvalidArgumentError",
    "LineageEdge",
    "MissingArgumentError",
    "NotFoundError",
    "ParseError",
    "ParseMeta",
    "ParseResult",
    "Person",
    "PersonFilter",
    "SearchResult",
    "SourceError",
    "StructuralParseError",
    "canonicalize_id",
    "compute_ancestors",
    "compute_descendants",
    "decode_gedcom",
    "parse_gedcom",
    "parse_gedcom_with_fallback",
]
