"""NetworkX graph building for parsed families and lineage walks."""

import networkx as nx

from gedlineage.models import AncestryResult, ParseResult, Person


def _person_attrs(person: Person) -> dict:
    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    return {
        "person_name": person.name,
        "given_name": person.first_name or "",
        "surname": person.last_name or "",
        "birth_date": person.birth_date,
        "death_date": person.death_date,
    }


def build_family_graph(result: ParseResult) -> nx.DiGraph:
    """
    Build a directed graph of every person in `result`.

    PARENT_OF edges run from parent to child and carry the father/mother
    relation; SPOUSE_OF edges run from husband to wife.
    """
    G = nx.DiGraph()

    for person in result.persons:
        G.add_node(person.id, **_person_attrs(person))

    for family in result.families:
        if family.husband and family.wife:
            G.add_edge(family.husband, family.wife, relationship_type="SPOUSE_OF", family=family.id)

        for child_id in family.children:
            if family.husband:
                G.add_edge(
                    family.husband,
                    child_id,
                    relationship_type="PARENT_OF",
                    relation="father",
                    family=family.id,
                )
            if family.wife:
                G.add_edge(
                    family.wife,
                    child_id,
                    relationship_type="PARENT_OF",
                    relation="mother",
                    family=family.id,
                )

    return G


def build_lineage_graph(ancestry: AncestryResult) -> nx.DiGraph:
    """
    Build a directed graph from an ancestor or descendant walk.

    Every identifier in `ancestry.generations` becomes a node with a
    `generation` attribute (0 for the root). Identifiers without a person
    record still get a node, with empty attributes.
    """
    G = nx.DiGraph(root=ancestry.root)
    persons = {p.id: p for p in ancestry.nodes}

    for generation, ids in enumerate(ancestry.generations):
        for person_id in ids:
            person = persons.get(person_id)
            attrs = _person_attrs(person) if person is not None else {"person_name": person_id}
            G.add_node(person_id, generation=generation, **attrs)

    for edge in ancestry.edges:
        G.add_edge(edge.parent, edge.child, relationship_type="PARENT_OF", relation=edge.relation)

    return G


def build_union_layout_graph(G: nx.DiGraph) -> nx.DiGraph:
    """
    Build a layout graph using the union-node model for family tree charts.

    A "family node" is placed between each father/mother pair and the children
    they share, so spouses sit on the same rank and siblings hang from one point.

    Args:
        G: Graph with person nodes and PARENT_OF edges carrying a `relation`

    Returns:
        A new graph with person and family nodes
    """
    H = nx.DiGraph()

    for n, data in G.nodes(data=True):
        H.add_node(n, node_type="person", **data)

    # Group parents by child
    parents_by_child: dict[str, dict[str, str]] = {}
    for parent, child, edata in G.edges(data=True):
        if edata.get("relationship_type") != "PARENT_OF":
            continue
        parents_by_child.setdefault(child, {})[edata.get("relation", "father")] = parent

    for child, parents in parents_by_child.items():
        spouses = tuple(parents[r] for r in ("father", "mother") if r in parents)
        fam_id = "FAM_" + "_".join(spouses)

        if fam_id not in H:
            H.add_node(fam_id, node_type="family", spouses=spouses)
            for p in spouses:
                H.add_edge(p, fam_id, edge_type="spouse_to_family")

        # Child hangs from family node
        H.add_edge(fam_id, child, edge_type="family_to_child")

    return H
