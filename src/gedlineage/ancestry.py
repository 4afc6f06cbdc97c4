"""Generation-bounded ancestor and descendant walks over a ParseResult."""

from collections.abc import Callable, Iterator

from gedlineage.config import MAX_GENERATIONS_LIMIT
from gedlineage.errors import InvalidArgumentError, MissingArgumentError, NotFoundError
from gedlineage.models import AncestryResult, Family, LineageEdge, ParseResult, Person
from gedlineage.xref import canonicalize_id

# Yields (discovered_id, edge) pairs for one person
Expander = Callable[[Person, dict[str, Family]], Iterator[tuple[str, LineageEdge]]]


def _parents(person: Person, families: dict[str, Family]) -> Iterator[tuple[str, LineageEdge]]:
    for family_id in person.famc:
        family = families.get(family_id)
        if family is None:
            continue
        if family.husband:
            yield family.husband, LineageEdge(parent=family.husband, child=person.id, relation="father")
        if family.wife:
            yield family.wife, LineageEdge(parent=family.wife, child=person.id, relation="mother")


def _children(person: Person, families: dict[str, Family]) -> Iterator[tuple[str, LineageEdge]]:
    for family_id in person.fams:
        family = families.get(family_id)
        if family is None:
            continue
        # Anyone who is not the recorded husband is attributed as the mother
        relation = "father" if person.id == family.husband else "mother"
        for child_id in family.children:
            if child_id:
                yield child_id, LineageEdge(parent=person.id, child=child_id, relation=relation)


def _walk(result: ParseResult, root_id: str, max_generations: int, expand: Expander) -> AncestryResult:
    if not root_id:
        raise MissingArgumentError("Root Person ID is required")
    if not 1 <= max_generations <= MAX_GENERATIONS_LIMIT:
        raise InvalidArgumentError(
            f"Max generations must be between 1 and {MAX_GENERATIONS_LIMIT}, got {max_generations}"
        )

    canonical_root = canonicalize_id(root_id)

    persons = {p.id: p for p in result.persons}
    families = {f.id: f for f in result.families}

    if canonical_root not in persons:
        raise NotFoundError(f"Root person with ID '{root_id}' not found in GEDCOM data")

    generations: list[list[str]] = []
    edges: list[LineageEdge] = []
    # Insertion-ordered; membership is global so each id is discovered once
    visited: dict[str, None] = {canonical_root: None}

    current = [canonical_root]
    while current and len(generations) < max_generations:
        generations.append(list(current))
        next_generation: list[str] = []

        for person_id in current:
            person = persons.get(person_id)
            if person is None:
                continue

            for discovered_id, edge in expand(person, families):
                if discovered_id in visited:
                    continue
                visited[discovered_id] = None
                next_generation.append(discovered_id)
                edges.append(edge)

        current = next_generation

    nodes = [persons[pid] for pid in visited if pid in persons]

    return AncestryResult(root=canonical_root, generations=generations, nodes=nodes, edges=edges)


def compute_ancestors(result: ParseResult, root_id: str, max_generations: int) -> AncestryResult:
    """
    Walk parent links (FAMC families) up from `root_id`.

    Generation 0 is the root alone; each following generation holds the
    parents first discovered at that depth. A father edge is recorded for the
    family's husband and a mother edge for its wife.

    Args:
        result: Parsed GEDCOM data
        root_id: Person identifier, with or without the surrounding '@'
        max_generations: Number of generations to return, root included (1-15)

    Returns:
        The generation-partitioned ancestor graph
    """
    return _walk(result, root_id, max_generations, _parents)


def compute_descendants(result: ParseResult, root_id: str, max_generations: int) -> AncestryResult:
    """
    Walk child links (FAMS families) down from `root_id`.

    Edges are labelled father when the walking person is the family's husband
    and mother otherwise.
    """
    return _walk(result, root_id, max_generations, _children)
