"""Data classes for parsed GEDCOM data and lineage graphs."""

from dataclasses import dataclass, field
from typing import Any, Literal

from gedlineage.errors import MissingArgumentError

Relation = Literal["father", "mother"]

INVALID_INPUT_MESSAGE = (
    "Input data must be a valid parsed GEDCOM result with persons, families, and meta properties"
)


@dataclass(frozen=True)
class Person:
    id: str
    name: str = ""
    first_name: str | None = None
    last_name: str | None = None
    birth_date: str = ""
    death_date: str = ""
    famc: list[str] = field(default_factory=list)  # families where this person is a child
    fams: list[str] = field(default_factory=list)  # families where this person is a spouse

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.first_name is not None:
            data["firstName"] = self.first_name
        if self.last_name is not None:
            data["lastName"] = self.last_name
        data["birthDate"] = self.birth_date
        data["deathDate"] = self.death_date
        data["famc"] = list(self.famc)
        data["fams"] = list(self.fams)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Person":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            birth_date=data.get("birthDate") or "",
            death_date=data.get("deathDate") or "",
            famc=list(data.get("famc") or []),
            fams=list(data.get("fams") or []),
        )


@dataclass(frozen=True)
class Family:
    id: str
    husband: str | None = None
    wife: str | None = None
    children: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id}
        if self.husband is not None:
            data["husband"] = self.husband
        if self.wife is not None:
            data["wife"] = self.wife
        data["children"] = list(self.children)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Family":
        return cls(
            id=data["id"],
            husband=data.get("husband"),
            wife=data.get("wife"),
            children=list(data.get("children") or []),
        )


@dataclass(frozen=True)
class ParseMeta:
    individuals: int
    families: int
    encoding_tag: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "individuals": self.individuals,
            "families": self.families,
            "encodingTag": self.encoding_tag,
        }


@dataclass(frozen=True)
class ParseResult:
    meta: ParseMeta
    persons: list[Person]
    families: list[Family]

    @classmethod
    def build(cls, persons: list[Person], families: list[Family], encoding_tag: str) -> "ParseResult":
        """Build a result whose meta counts always match the record lists."""
        return cls(
            meta=ParseMeta(
                individuals=len(persons),
                families=len(families),
                encoding_tag=encoding_tag,
            ),
            persons=persons,
            families=families,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": self.meta.to_dict(),
            "persons": [p.to_dict() for p in self.persons],
            "families": [f.to_dict() for f in self.families],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ParseResult":
        """
        Rebuild a result from its JSON form.

        Raises MissingArgumentError when the payload lacks persons, families or
        meta, or when a person or family is not an object with an id.
        """
        if not isinstance(data, dict):
            raise MissingArgumentError(INVALID_INPUT_MESSAGE)

        raw_persons, raw_families, meta = data.get("persons"), data.get("families"), data.get("meta")
        if not isinstance(raw_persons, list) or not isinstance(raw_families, list) or not isinstance(meta, dict):
            raise MissingArgumentError(INVALID_INPUT_MESSAGE)
        if not all(isinstance(r, dict) and r.get("id") for r in raw_persons + raw_families):
            raise MissingArgumentError(INVALID_INPUT_MESSAGE)

        persons = [Person.from_dict(p) for p in raw_persons]
        families = [Family.from_dict(f) for f in raw_families]
        encoding_tag = meta.get("encodingTag") or "UTF-8"
        return cls.build(persons, families, encoding_tag)


@dataclass(frozen=True)
class LineageEdge:
    parent: str
    child: str
    relation: Relation

    def to_dict(self) -> dict[str, str]:
        return {"parent": self.parent, "child": self.child, "relation": self.relation}


@dataclass(frozen=True)
class AncestryResult:
    root: str
    generations: list[list[str]]
    nodes: list[Person]
    edges: list[LineageEdge]

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "generations": [list(g) for g in self.generations],
            "nodes": [p.to_dict() for p in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


@dataclass(frozen=True)
class PersonFilter:
    id: str = ""
    name: str = ""
    birth_date: str = ""
    death_date: str = ""
    fams: str = ""
    famc: str = ""

    def is_empty(self) -> bool:
        return not any((self.id, self.name, self.birth_date, self.death_date, self.fams, self.famc))

    def to_dict(self) -> dict[str, str]:
        fields = {
            "id": self.id,
            "name": self.name,
            "birthDate": self.birth_date,
            "deathDate": self.death_date,
            "fams": self.fams,
            "famc": self.famc,
        }
        return {k: v for k, v in fields.items() if v}


@dataclass(frozen=True)
class FamilyFilter:
    id: str = ""
    husband: str = ""
    wife: str = ""
    children: str = ""

    def is_empty(self) -> bool:
        return not any((self.id, self.husband, self.wife, self.children))

    def to_dict(self) -> dict[str, str]:
        fields = {"id": self.id, "husband": self.husband, "wife": self.wife, "children": self.children}
        return {k: v for k, v in fields.items() if v}


@dataclass(frozen=True)
class SearchResult:
    persons: list[Person]
    families: list[Family]
    total_individuals: int
    total_families: int
    encoding_tag: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": {
                "individuals": len(self.persons),
                "families": len(self.families),
                "totalIndividuals": self.total_individuals,
                "totalFamilies": self.total_families,
                "encodingTag": self.encoding_tag,
            },
            "persons": [p.to_dict() for p in self.persons],
            "families": [f.to_dict() for f in self.families],
        }
