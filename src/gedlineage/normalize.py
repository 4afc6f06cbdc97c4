"""Normalizing parsed GEDCOM structures into ParseResult."""

from typing import Protocol

from gedcom.element.element import Element

from gedlineage.config import DEFAULT_ENCODING_TAG
from gedlineage.errors import StructuralParseError
from gedlineage.models import Family, ParseResult, Person
from gedlineage.names import parse_name
from gedlineage.object_graph import FamilyRecord, GedcomGraph, IndividualRecord
from gedlineage.record_tree import find_child
from gedlineage.xref import canonicalize_id, is_pointer


class Normalizer(Protocol):
    def normalize(self, source) -> ParseResult: ...


def _event_date(element: Element) -> str:
    date_element = find_child(element, "DATE")
    if date_element is None:
        return ""
    return date_element.get_value() or ""


class RecordTreeNormalizer(Normalizer):
    """Project a python-gedcom element tree (see gedlineage.record_tree) into a ParseResult."""

    def __init__(self, default_encoding: str = DEFAULT_ENCODING_TAG):
        self.default_encoding = default_encoding

    def normalize(self, tree: Element) -> ParseResult:
        if tree is None:
            raise StructuralParseError("Invalid GEDCOM structure")
        records = tree.get_child_elements()
        if not isinstance(records, list):
            raise StructuralParseError("Invalid GEDCOM structure")

        encoding_tag = self.default_encoding
        head = find_child(tree, "HEAD")
        if head is not None:
            char = find_child(head, "CHAR")
            if char is not None and char.get_value():
                encoding_tag = char.get_value()

        persons: list[Person] = []
        families: list[Family] = []

        for record in records:
            if not record.get_pointer():
                continue
            if record.get_tag() == "INDI":
                persons.append(self.normalize_individual(record))
            elif record.get_tag() == "FAM":
                families.append(self.normalize_family(record))

        return ParseResult.build(persons, families, encoding_tag)

    def normalize_individual(self, record: Element) -> Person:
        name = parse_name("")
        birth_date = ""
        death_date = ""
        famc: list[str] = []
        fams: list[str] = []

        for child in record.get_child_elements():
            tag = child.get_tag()
            value = child.get_value()
            if tag == "NAME":
                name = parse_name(value)
            elif tag == "BIRT":
                birth_date = _event_date(child)
            elif tag == "DEAT":
                death_date = _event_date(child)
            elif tag == "FAMC" and is_pointer(value):
                famc.append(value)
            elif tag == "FAMS" and is_pointer(value):
                fams.append(value)

        return Person(
            id=record.get_pointer(),
            name=name.full_name,
            first_name=name.first_name,
            last_name=name.last_name,
            birth_date=birth_date,
            death_date=death_date,
            famc=famc,
            fams=fams,
        )

    def normalize_family(self, record: Element) -> Family:
        husband: str | None = None
        wife: str | None = None
        children: list[str] = []

        # Spouse and child values are kept even when they are not @-wrapped pointers
        for child in record.get_child_elements():
            tag = child.get_tag()
            value = child.get_value() or None
            if tag == "HUSB":
                husband = value
            elif tag == "WIFE":
                wife = value
            elif tag == "CHIL" and value:
                children.append(value)

        return Family(id=record.get_pointer(), husband=husband, wife=wife, children=children)


class ObjectGraphNormalizer(Normalizer):
    """Project a ged4py object graph (see gedlineage.object_graph) into a ParseResult."""

    def normalize(self, graph: GedcomGraph) -> ParseResult:
        encoding_tag = DEFAULT_ENCODING_TAG
        if graph.head is not None and graph.head.character_set:
            encoding_tag = graph.head.character_set

        persons = [
            self.normalize_individual(xref_id, individual)
            for xref_id, individual in graph.individuals.items()
        ]
        families = [
            self.normalize_family(xref_id, family) for xref_id, family in graph.families.items()
        ]

        return ParseResult.build(persons, families, encoding_tag)

    def normalize_individual(self, xref_id: str, individual: IndividualRecord) -> Person:
        name = parse_name("")
        if individual.names:
            first = individual.names[0]
            # Rebuild the slash-delimited form so both strategies split names the same way
            raw_name = f"{first.given or ''} /{first.surname or ''}/".strip()
            name = parse_name(raw_name)

        birth_date = ""
        if individual.birth is not None:
            birth_date = individual.birth.date or ""

        death_date = ""
        if individual.death is not None:
            death_date = individual.death.date or ""

        return Person(
            id=canonicalize_id(xref_id),
            name=name.full_name,
            first_name=name.first_name,
            last_name=name.last_name,
            birth_date=birth_date,
            death_date=death_date,
            famc=[canonicalize_id(ref.family) for ref in individual.family_as_child],
            fams=[canonicalize_id(ref.family) for ref in individual.family_as_spouse],
        )

    def normalize_family(self, xref_id: str, family: FamilyRecord) -> Family:
        husband = canonicalize_id(family.husband.pointer) if family.husband is not None else None
        wife = canonicalize_id(family.wife.pointer) if family.wife is not None else None

        return Family(
            id=canonicalize_id(xref_id),
            husband=husband,
            wife=wife,
            children=[canonicalize_id(ref.pointer) for ref in family.children],
        )
