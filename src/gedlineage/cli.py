"""
Command-line interface for gedlineage.

1) parse: read GEDCOM files or URLs into the JSON ParseResult form.
2) generate: write a ParseResult back out as GEDCOM text.
3) find: filter persons and families.
4) ancestors / descendants: generation-bounded lineage walks.
5) chart: draw a lineage walk with Graphviz.

Commands taking INPUT accept either a GEDCOM file or the JSON written by `parse`.
"""

import json
from pathlib import Path
from typing import Any, NoReturn

import typer

from gedlineage.ancestry import compute_ancestors, compute_descendants
from gedlineage.config import MAX_GENERATIONS_LIMIT, Settings, load_settings
from gedlineage.errors import GedcomError, MissingArgumentError
from gedlineage.finder import find_all, find_families, find_individuals
from gedlineage.generator import generate_gedcom
from gedlineage.graph import build_lineage_graph
from gedlineage.log import configure_logging, get_logger
from gedlineage.models import FamilyFilter, ParseResult, PersonFilter
from gedlineage.parsing import parse_gedcom_with_fallback
from gedlineage.plotting import plot_lineage
from gedlineage.sources import download_gedcom, read_gedcom_file

app = typer.Typer(
    name="gedlineage",
    help="Parse GEDCOM files and walk ancestor/descendant lineages",
    add_completion=False,
)
logger = get_logger(__name__)


@app.callback()
def main_callback():
    """Configure logging from the environment before any command runs."""
    configure_logging(load_settings().log_level)


# ============================================================================
# Helpers
# ============================================================================


def _emit(data: Any, output: Path | None = None) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        logger.info("output_written", path=str(output))
    else:
        typer.echo(text)


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


def load_parse_result(path: Path, settings: Settings) -> ParseResult:
    """Load INPUT as a JSON ParseResult (.json) or parse it as GEDCOM."""
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise MissingArgumentError(f"Could not read parsed GEDCOM JSON from {path}: {exc}") from exc
        return ParseResult.from_dict(data)

    return parse_gedcom_with_fallback(read_gedcom_file(path), settings.encoding_tag)


def _lineage(operation: str, input_path: Path, root: str, generations: int | None):
    settings = load_settings()
    if not root:
        raise MissingArgumentError(f"Root Person ID is required for {operation} operation")

    result = load_parse_result(input_path, settings)
    max_generations = generations or settings.max_generations

    walk = compute_ancestors if operation == "ancestors" else compute_descendants
    ancestry = walk(result, root, max_generations)
    logger.info(
        "lineage_computed",
        operation=operation,
        root=ancestry.root,
        generations=len(ancestry.generations),
        nodes=len(ancestry.nodes),
    )
    return ancestry


# ============================================================================
# Commands
# ============================================================================


@app.command()
def parse(
    files: list[Path] = typer.Argument(None, help="GEDCOM files to parse"),
    urls: list[str] = typer.Option(None, "--url", "-u", help="GEDCOM URL to download and parse"),
    continue_on_fail: bool = typer.Option(
        False, "--continue-on-fail", help="Emit an error item instead of stopping"
    ),
    output: Path = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout"),
):
    """Parse GEDCOM files or URLs into JSON."""
    settings = load_settings()
    sources: list[tuple[str, str | Path]] = [("file", f) for f in files or []]
    sources += [("url", u) for u in urls or []]

    if not sources:
        _fail(MissingArgumentError("At least one GEDCOM file or --url is required"))

    items: list[dict] = []
    for kind, location in sources:
        try:
            if kind == "file":
                buffer = read_gedcom_file(Path(location))
            else:
                buffer = download_gedcom(str(location), timeout=settings.http_timeout)

            result = parse_gedcom_with_fallback(buffer, settings.encoding_tag)
            logger.info(
                "gedcom_parsed",
                source=str(location),
                individuals=result.meta.individuals,
                families=result.meta.families,
            )
            items.append(result.to_dict())
        except GedcomError as exc:
            if not continue_on_fail:
                _fail(exc)
            logger.warning("gedcom_item_failed", source=str(location), error=str(exc))
            items.append({"error": str(exc)})

    _emit(items[0] if len(items) == 1 else items, output)


@app.command()
def generate(
    input_path: Path = typer.Argument(..., help="Parsed GEDCOM JSON or GEDCOM file"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the .ged file here"),
):
    """Write GEDCOM text from a parsed result."""
    try:
        result = load_parse_result(input_path, load_settings())
    except GedcomError as exc:
        _fail(exc)

    content = generate_gedcom(result)
    if output:
        output.write_text(content, encoding="utf-8")
        _emit({"filename": output.name, "size": len(content.encode("utf-8"))})
    else:
        _emit({"gedcom": content, "size": len(content)})


@app.command()
def find(
    input_path: Path = typer.Argument(..., help="Parsed GEDCOM JSON or GEDCOM file"),
    search_type: str = typer.Option("individual", "--type", "-t", help="individual, family or all"),
    person_id: str = typer.Option("", "--id", help="Person ID contains"),
    name: str = typer.Option("", "--name", help="Name contains (case-insensitive)"),
    birth_date: str = typer.Option("", "--birth-date", help="Birth date contains"),
    death_date: str = typer.Option("", "--death-date", help="Death date contains"),
    fams: str = typer.Option("", "--fams", help="A spouse family ID contains"),
    famc: str = typer.Option("", "--famc", help="A child family ID contains"),
    family_id: str = typer.Option("", "--family-id", help="Family ID contains"),
    husband: str = typer.Option("", "--husband", help="Husband ID contains"),
    wife: str = typer.Option("", "--wife", help="Wife ID contains"),
    child: str = typer.Option("", "--child", help="A child ID contains"),
    include_full_data: bool = typer.Option(
        False, "--include-full-data", help="Include the whole parsed result next to the matches"
    ),
):
    """Search persons and families by substring filters."""
    try:
        result = load_parse_result(input_path, load_settings())
    except GedcomError as exc:
        _fail(exc)

    person_filter = PersonFilter(
        id=person_id, name=name, birth_date=birth_date, death_date=death_date, fams=fams, famc=famc
    )
    family_filter = FamilyFilter(id=family_id, husband=husband, wife=wife, children=child)

    if search_type == "individual":
        individuals = find_individuals(result, person_filter)
        found: dict[str, Any] = {
            "meta": {
                "totalFound": len(individuals),
                "totalIndividuals": result.meta.individuals,
                "searchType": "individual",
                "filters": person_filter.to_dict(),
            },
            "individuals": [p.to_dict() for p in individuals],
        }
    elif search_type == "family":
        families = find_families(result, family_filter)
        found = {
            "meta": {
                "totalFound": len(families),
                "totalFamilies": result.meta.families,
                "searchType": "family",
                "filters": family_filter.to_dict(),
            },
            "families": [f.to_dict() for f in families],
        }
    elif search_type == "all":
        pf = None if person_filter.is_empty() else person_filter
        ff = None if family_filter.is_empty() else family_filter
        found = find_all(result, pf, ff).to_dict()
        found["meta"]["searchType"] = "all"
        found["filters"] = {"individual": person_filter.to_dict(), "family": family_filter.to_dict()}
    else:
        _fail(MissingArgumentError(f"Unknown search type: {search_type}"))

    if include_full_data:
        found = {**result.to_dict(), "searchResults": found}

    _emit(found)


@app.command()
def ancestors(
    input_path: Path = typer.Argument(..., help="Parsed GEDCOM JSON or GEDCOM file"),
    root: str = typer.Option("", "--root", "-r", help="Root person ID, e.g. I5 or @I5@"),
    generations: int = typer.Option(
        None, "--generations", "-g", min=1, max=MAX_GENERATIONS_LIMIT, help="Generations to return"
    ),
):
    """Compute the ancestors of a person."""
    try:
        ancestry = _lineage("ancestors", input_path, root, generations)
    except GedcomError as exc:
        _fail(exc)
    _emit(ancestry.to_dict())


@app.command()
def descendants(
    input_path: Path = typer.Argument(..., help="Parsed GEDCOM JSON or GEDCOM file"),
    root: str = typer.Option("", "--root", "-r", help="Root person ID, e.g. I1 or @I1@"),
    generations: int = typer.Option(
        None, "--generations", "-g", min=1, max=MAX_GENERATIONS_LIMIT, help="Generations to return"
    ),
):
    """Compute the descendants of a person."""
    try:
        ancestry = _lineage("descendants", input_path, root, generations)
    except GedcomError as exc:
        _fail(exc)
    _emit(ancestry.to_dict())


@app.command()
def chart(
    input_path: Path = typer.Argument(..., help="Parsed GEDCOM JSON or GEDCOM file"),
    root: str = typer.Option("", "--root", "-r", help="Root person ID"),
    output: Path = typer.Option(..., "--output", "-o", help="Chart file (.dot, .png, .svg or .pdf)"),
    direction: str = typer.Option("ancestors", "--direction", "-d", help="ancestors or descendants"),
    generations: int = typer.Option(
        None, "--generations", "-g", min=1, max=MAX_GENERATIONS_LIMIT, help="Generations to draw"
    ),
):
    """Draw an ancestor or descendant chart with Graphviz."""
    if direction not in ("ancestors", "descendants"):
        _fail(MissingArgumentError(f"Unknown direction: {direction}"))

    try:
        ancestry = _lineage(direction, input_path, root, generations)
    except GedcomError as exc:
        _fail(exc)

    G = build_lineage_graph(ancestry)
    plot_lineage(G, output)
    _emit({"chart": str(output), "nodes": G.number_of_nodes(), "edges": G.number_of_edges()})


def main():
    app()


if __name__ == "__main__":
    main()
