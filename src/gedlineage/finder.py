"""Substring search over persons and families."""

from gedlineage.models import Family, FamilyFilter, ParseResult, Person, PersonFilter, SearchResult


def matches_person(person: Person, flt: PersonFilter) -> bool:
    if flt.id and flt.id not in person.id:
        return False
    if flt.name and flt.name.lower() not in person.name.lower():
        return False
    if flt.birth_date and flt.birth_date not in person.birth_date:
        return False
    if flt.death_date and flt.death_date not in person.death_date:
        return False
    if flt.fams and not any(flt.fams in fid for fid in person.fams):
        return False
    if flt.famc and not any(flt.famc in fid for fid in person.famc):
        return False
    return True


def matches_family(family: Family, flt: FamilyFilter) -> bool:
    if flt.id and flt.id not in family.id:
        return False
    if flt.husband and (not family.husband or flt.husband not in family.husband):
        return False
    if flt.wife and (not family.wife or flt.wife not in family.wife):
        return False
    if flt.children and not any(flt.children in cid for cid in family.children):
        return False
    return True


def find_individuals(result: ParseResult, flt: PersonFilter) -> list[Person]:
    """Return persons matching every non-empty field of `flt`."""
    return [p for p in result.persons if matches_person(p, flt)]


def find_families(result: ParseResult, flt: FamilyFilter) -> list[Family]:
    """Return families matching every non-empty field of `flt`."""
    return [f for f in result.families if matches_family(f, flt)]


def find_all(
    result: ParseResult,
    person_filter: PersonFilter | None = None,
    family_filter: FamilyFilter | None = None,
) -> SearchResult:
    """Filter persons and families together; a missing filter keeps everything."""
    persons = find_individuals(result, person_filter) if person_filter else list(result.persons)
    families = find_families(result, family_filter) if family_filter else list(result.families)

    return SearchResult(
        persons=persons,
        families=families,
        total_individuals=result.meta.individuals,
        total_families=result.meta.families,
        encoding_tag=result.meta.encoding_tag,
    )
