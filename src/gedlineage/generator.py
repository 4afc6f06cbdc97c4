"""Writing a ParseResult back out as GEDCOM text."""

from datetime import date

from gedlineage import __version__
from gedlineage.models import Family, ParseResult, Person


MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")


def format_gedcom_date(d: date) -> str:
    """Format a date the GEDCOM way, e.g. '5 JAN 2024'."""
    return f"{d.day} {MONTHS[d.month - 1]} {d.year}"


def _name_value(person: Person) -> str:
    # Put the surname back between slashes so the file parses to the same parts
    if person.last_name:
        return f"{person.first_name or ''} /{person.last_name}/".strip()
    return person.name


def individual_lines(person: Person) -> list[str]:
    lines = [f"0 {person.id} INDI"]

    name = _name_value(person)
    if name:
        lines.append(f"1 NAME {name}")

    if person.birth_date:
        lines.append("1 BIRT")
        lines.append(f"2 DATE {person.birth_date}")

    if person.death_date:
        lines.append("1 DEAT")
        lines.append(f"2 DATE {person.death_date}")

    lines.extend(f"1 FAMC {famc_id}" for famc_id in person.famc)
    lines.extend(f"1 FAMS {fams_id}" for fams_id in person.fams)

    return lines


def family_lines(family: Family) -> list[str]:
    lines = [f"0 {family.id} FAM"]

    if family.husband:
        lines.append(f"1 HUSB {family.husband}")
    if family.wife:
        lines.append(f"1 WIFE {family.wife}")

    lines.extend(f"1 CHIL {child_id}" for child_id in family.children)

    return lines


def generate_gedcom(result: ParseResult, today: date | None = None) -> str:
    """
    Serialize `result` as GEDCOM 5.5.1 text.

    Args:
        result: Persons and families to write
        today: Date for the HEAD/DATE line (defaults to today)

    Returns:
        GEDCOM text with '\\n' line endings, from '0 HEAD' to '0 TRLR'
    """
    today = today or date.today()

    lines = [
        "0 HEAD",
        "1 SOUR gedlineage",
        f"1 VERS {__version__}",
        "1 GEDC",
        "2 VERS 5.5.1",
        "2 FORM LINEAGE-LINKED",
        f"1 CHAR {result.meta.encoding_tag}",
        f"1 DATE {format_gedcom_date(today)}",
    ]

    for person in result.persons:
        lines.extend(individual_lines(person))

    for family in result.families:
        lines.extend(family_lines(family))

    lines.append("0 TRLR")

    return "\n".join(lines)
