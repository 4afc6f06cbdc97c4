"""Reading GEDCOM bytes into a resolved object graph with ged4py."""

from dataclasses import dataclass, field
import io

from ged4py import GedcomReader

from gedlineage.xref import bare_id


@dataclass
class HeadInfo:
    character_set: str | None = None


@dataclass
class NameRecord:
    given: str | None = None
    surname: str | None = None


@dataclass
class EventRecord:
    date: str | None = None


@dataclass
class FamilyRef:
    family: str


@dataclass
class PersonRef:
    pointer: str


@dataclass
class IndividualRecord:
    names: list[NameRecord] = field(default_factory=list)
    birth: EventRecord | None = None
    death: EventRecord | None = None
    family_as_child: list[FamilyRef] = field(default_factory=list)
    family_as_spouse: list[FamilyRef] = field(default_factory=list)


@dataclass
class FamilyRecord:
    husband: PersonRef | None = None
    wife: PersonRef | None = None
    children: list[PersonRef] = field(default_factory=list)


@dataclass
class GedcomGraph:
    """Individuals and families keyed by their bare identifiers ('I1', 'F1')."""

    head: HeadInfo | None = None
    individuals: dict[str, IndividualRecord] = field(default_factory=dict)
    families: dict[str, FamilyRecord] = field(default_factory=dict)


def _value_to_str(rec) -> str | None:
    if rec is None or rec.value is None:
        return None
    return str(rec.value)


def raw_line_value(reader: GedcomReader, rec) -> str | None:
    """
    Return the value of `rec` as written in the file.

    ged4py converts some values (DATE into DateValue, for one) whose string
    form differs from the source text, e.g. 'ABT 1850' becomes 'ABOUT 1850'.
    """
    if rec is None:
        return None
    line = next(reader.GedcomLines(rec.offset), None)
    if line is None or line.value is None:
        return None
    value = line.value
    if isinstance(value, bytes):
        # DATE values are plain ASCII in every GEDCOM character set
        value = value.decode("ascii", "replace")
    return value.strip() or None


def extract_name(rec) -> NameRecord:
    """Extract given name and surname from a NAME record."""
    if rec.value is None:
        return NameRecord()

    # ged4py returns NAME as tuple: (given, surname, suffix)
    given, surname = rec.value[0], rec.value[1]
    return NameRecord(given=given or None, surname=surname or None)


def extract_event(reader: GedcomReader, rec) -> EventRecord:
    """Extract the date of an event record (BIRT, DEAT) as written."""
    return EventRecord(date=raw_line_value(reader, rec.sub_tag("DATE")))


def extract_individual(reader: GedcomReader, rec) -> IndividualRecord:
    individual = IndividualRecord()

    # Pointer sub-records keep the raw xref in their value, so iterate without following them
    for sub in rec.sub_records:
        if sub.tag == "NAME":
            individual.names.append(extract_name(sub))
        elif sub.tag == "BIRT" and individual.birth is None:
            individual.birth = extract_event(reader, sub)
        elif sub.tag == "DEAT" and individual.death is None:
            individual.death = extract_event(reader, sub)
        elif sub.tag == "FAMC" and sub.value:
            individual.family_as_child.append(FamilyRef(family=bare_id(str(sub.value))))
        elif sub.tag == "FAMS" and sub.value:
            individual.family_as_spouse.append(FamilyRef(family=bare_id(str(sub.value))))

    return individual


def extract_family(rec) -> FamilyRecord:
    family = FamilyRecord()

    for sub in rec.sub_records:
        if not sub.value:
            continue
        if sub.tag == "HUSB":
            family.husband = PersonRef(pointer=bare_id(str(sub.value)))
        elif sub.tag == "WIFE":
            family.wife = PersonRef(pointer=bare_id(str(sub.value)))
        elif sub.tag == "CHIL":
            family.children.append(PersonRef(pointer=bare_id(str(sub.value))))

    return family


def read_object_graph(buffer: bytes) -> GedcomGraph:
    """
    Parse raw GEDCOM bytes with ged4py and return the resolved object graph.

    ged4py detects the encoding itself (byte-order mark or HEAD/CHAR), so the
    buffer is passed through undecoded.
    """
    graph = GedcomGraph()

    with GedcomReader(io.BytesIO(buffer)) as reader:
        header = reader.header
        if header is not None:
            graph.head = HeadInfo(character_set=_value_to_str(header.sub_tag("CHAR")))

        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue
            graph.individuals[bare_id(rec.xref_id)] = extract_individual(reader, rec)

        for rec in reader.records0("FAM"):
            if rec.xref_id is None:
                continue
            graph.families[bare_id(rec.xref_id)] = extract_family(rec)

    return graph
