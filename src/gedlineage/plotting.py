"""Graphviz charts of lineage graphs."""

from pathlib import Path

import networkx as nx
import pydot

from gedlineage.graph import build_union_layout_graph

RELATION_COLORS = {"father": "lightblue", "mother": "lightpink"}


def _node_name(node_id: str) -> str:
    # '@' is not valid in an unquoted DOT identifier
    return node_id.replace("@", "")


def _years(birth_date: str, death_date: str) -> str:
    # Raw GEDCOM dates end with the year, e.g. "15 MAR 1850" or "ABT 1900"
    birth_year = birth_date.split()[-1] if birth_date else ""
    death_year = death_date.split()[-1] if death_date else ""
    if not birth_year and not death_year:
        return ""
    return f"{birth_year}-{death_year}"


def lineage_to_dot(G: nx.DiGraph) -> pydot.Dot:
    """
    Convert a lineage graph (see gedlineage.graph.build_lineage_graph) to a pydot chart.

    Persons are boxes colored by the relation through which they were reached;
    family union nodes are small points. Persons of the same generation share
    a rank, so an ancestor chart reads as a pedigree.
    """
    H = build_union_layout_graph(G)

    # Relation of the edge that discovered each person
    relation_of = {child: data.get("relation") for _, child, data in G.edges(data=True)}

    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")
    P.set("splines", "ortho")
    P.set("nodesep", "0.4")
    P.set("ranksep", "0.6")

    generations: dict[int, list[str]] = {}

    for node, data in H.nodes(data=True):
        if data.get("node_type") == "family":
            P.add_node(pydot.Node(_node_name(node), shape="point", width="0.1", height="0.1", label=""))
            continue

        given_name = data.get("given_name", "")
        surname = data.get("surname", "")
        if not given_name and not surname:
            given_name = data.get("person_name", node)

        years = _years(data.get("birth_date", ""), data.get("death_date", ""))
        label = "\n".join(part for part in (given_name, surname, years) if part)

        P.add_node(
            pydot.Node(
                _node_name(node),
                label=label,
                shape="box",
                style="rounded,filled",
                fillcolor=RELATION_COLORS.get(relation_of.get(node), "lightgray"),
                fontsize="10",
            )
        )
        generations.setdefault(data.get("generation", 0), []).append(node)

    for u, v, data in H.edges(data=True):
        if data.get("edge_type") == "spouse_to_family":
            P.add_edge(pydot.Edge(_node_name(u), _node_name(v), dir="none", color="darkgray"))
        else:
            P.add_edge(pydot.Edge(_node_name(u), _node_name(v), color="darkgray"))

    for generation, members in sorted(generations.items()):
        sg = pydot.Subgraph(f"generation_{generation}", rank="same")
        for member in members:
            sg.add_node(pydot.Node(_node_name(member)))
        P.add_subgraph(sg)

    return P


def plot_lineage(G: nx.DiGraph, output_path: Path) -> Path:
    """
    Write a lineage chart to `output_path`.

    A '.dot' or '.gv' suffix writes the DOT source; 'png', 'svg' and 'pdf'
    are rendered through Graphviz, and any other suffix falls back to png.
    """
    P = lineage_to_dot(G)

    ext = output_path.suffix.lower().lstrip(".")
    if ext in ("dot", "gv"):
        P.write(str(output_path), format="raw")
    else:
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        P.write(str(output_path), format=ext)

    return output_path
