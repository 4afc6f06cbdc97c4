from pathlib import Path

import pytest

from gedlineage.models import Family, ParseResult, Person

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def minimal_ged() -> Path:
    return FIXTURES / "minimal.ged"


@pytest.fixture
def sample_ged() -> Path:
    return FIXTURES / "sample-utf8.ged"


@pytest.fixture
def nuclear_family() -> ParseResult:
    """I1 and I2 are the parents of I3 through F1."""
    persons = [
        Person(id="@I1@", name="John Doe", first_name="John", last_name="Doe", fams=["@F1@"]),
        Person(id="@I2@", name="Jane Smith", first_name="Jane", last_name="Smith", fams=["@F1@"]),
        Person(id="@I3@", name="Jimmy Doe", first_name="Jimmy", last_name="Doe", famc=["@F1@"]),
    ]
    families = [Family(id="@F1@", husband="@I1@", wife="@I2@", children=["@I3@"])]
    return ParseResult.build(persons, families, "UTF-8")


@pytest.fixture
def three_generations() -> ParseResult:
    """
    Grandparents I1 + I2 (F1) -> I3; I3 + I4 (F2) -> I5.
    I4 has no recorded parents.
    """
    persons = [
        Person(id="@I1@", name="Pierre Martin", fams=["@F1@"]),
        Person(id="@I2@", name="Elise Dubois", fams=["@F1@"]),
        Person(id="@I3@", name="Jean Martin", famc=["@F1@"], fams=["@F2@"]),
        Person(id="@I4@", name="Helene Lefevre", fams=["@F2@"]),
        Person(id="@I5@", name="Francois Martin", famc=["@F2@"]),
    ]
    families = [
        Family(id="@F1@", husband="@I1@", wife="@I2@", children=["@I3@"]),
        Family(id="@F2@", husband="@I3@", wife="@I4@", children=["@I5@"]),
    ]
    return ParseResult.build(persons, families, "UTF-8")
