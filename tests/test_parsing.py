"""Tests for decoding, the record-tree parser and the two-strategy parse."""

import pytest

from gedlineage import parsing
from gedlineage.errors import DecodeError, ParseError, StructuralParseError
from gedlineage.normalize import RecordTreeNormalizer
from gedlineage.object_graph import (
    FamilyRecord,
    FamilyRef,
    GedcomGraph,
    HeadInfo,
    IndividualRecord,
    NameRecord,
    PersonRef,
)
from gedlineage.parsing import decode_gedcom, parse_gedcom_with_fallback
from gedlineage.record_tree import find_child, read_record_tree


# =============================================================================
# Encoding detection
# =============================================================================


class TestDecodeGedcom:
    def test_plain_utf8(self) -> None:
        assert decode_gedcom("0 HEAD\n1 NAME Élise".encode("utf-8")) == "0 HEAD\n1 NAME Élise"

    def test_utf8_bom_is_stripped(self) -> None:
        text = "0 HEAD\n1 CHAR UTF-8\n0 TRLR"
        with_bom = b"\xef\xbb\xbf" + text.encode("utf-8")
        assert decode_gedcom(with_bom) == decode_gedcom(text.encode("utf-8"))

    def test_utf16_le_bom(self) -> None:
        buffer = b"\xff\xfe" + "0 HEAD".encode("utf-16-le")
        assert decode_gedcom(buffer) == "0 HEAD"

    def test_utf16_be_bom_is_read_as_little_endian(self) -> None:
        buffer = b"\xfe\xff" + "0 HEAD".encode("utf-16-le")
        assert decode_gedcom(buffer) == "0 HEAD"

    def test_invalid_utf8_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError, match="Failed to decode GEDCOM file"):
            decode_gedcom(b"0 HEAD\n1 NAME \xff\xff")

    def test_decode_error_is_not_retried(self, monkeypatch) -> None:
        def must_not_run(buffer):
            raise AssertionError("fallback should not run after a decode error")

        monkeypatch.setattr(parsing, "read_object_graph", must_not_run)
        with pytest.raises(DecodeError):
            parse_gedcom_with_fallback(b"\xc3\x28")


# =============================================================================
# Record tree
# =============================================================================


class TestReadRecordTree:
    def test_builds_nested_tree(self) -> None:
        tree = read_record_tree("0 @I1@ INDI\n1 NAME John /Doe/\n1 BIRT\n2 DATE 1 JAN 1900\n0 TRLR")

        assert [r.get_tag() for r in tree.get_child_elements()] == ["INDI", "TRLR"]
        indi = tree.get_child_elements()[0]
        assert indi.get_pointer() == "@I1@"
        assert find_child(indi, "NAME").get_value() == "John /Doe/"
        assert find_child(find_child(indi, "BIRT"), "DATE").get_value() == "1 JAN 1900"

    def test_reference_values_are_kept_as_written(self) -> None:
        fam = read_record_tree("0 @F1@ FAM\n1 HUSB @I1@\n1 CHIL I3").get_child_elements()[0]

        assert find_child(fam, "HUSB").get_value() == "@I1@"
        assert find_child(fam, "CHIL").get_value() == "I3"
        assert find_child(fam, "WIFE") is None

    def test_blank_lines_and_crlf(self) -> None:
        tree = read_record_tree("0 HEAD\r\n\r\n  1 CHAR ANSEL\r\n0 TRLR\r\n")
        assert find_child(find_child(tree, "HEAD"), "CHAR").get_value() == "ANSEL"

    def test_malformed_line(self) -> None:
        with pytest.raises(StructuralParseError, match="Malformed GEDCOM record tree"):
            read_record_tree("0 HEAD\nnot a gedcom line\n")

    def test_level_jump(self) -> None:
        with pytest.raises(StructuralParseError, match="Malformed GEDCOM record tree"):
            read_record_tree("0 HEAD\n2 VERS 5.5.1\n")


# =============================================================================
# Primary normalizer
# =============================================================================


class TestRecordTreeNormalizer:
    def test_minimal_file(self, minimal_ged) -> None:
        text = decode_gedcom(minimal_ged.read_bytes())
        result = RecordTreeNormalizer().normalize(read_record_tree(text))

        assert result.meta.individuals == 3
        assert result.meta.families == 1
        assert result.meta.encoding_tag == "UTF-8"

        john = result.persons[0]
        assert john.id == "@I1@"
        assert john.name == "John Doe"
        assert john.first_name == "John"
        assert john.last_name == "Doe"
        assert john.birth_date == "01 JAN 1900"
        assert john.death_date == ""
        assert john.fams == ["@F1@"]
        assert john.famc == []

        family = result.families[0]
        assert family.id == "@F1@"
        assert family.husband == "@I1@"
        assert family.wife == "@I2@"
        assert family.children == ["@I3@"]

    def test_encoding_tag_from_head(self) -> None:
        tree = read_record_tree("0 HEAD\n1 CHAR ANSEL\n0 @I1@ INDI\n0 TRLR")
        assert RecordTreeNormalizer().normalize(tree).meta.encoding_tag == "ANSEL"

    def test_default_encoding_tag(self) -> None:
        tree = read_record_tree("0 @I1@ INDI\n0 TRLR")
        assert RecordTreeNormalizer("ASCII").normalize(tree).meta.encoding_tag == "ASCII"

    def test_records_without_xref_are_skipped(self) -> None:
        tree = read_record_tree("0 INDI\n1 NAME Nobody\n0 @I2@ INDI\n0 FAM\n0 @N1@ NOTE hello")
        result = RecordTreeNormalizer().normalize(tree)

        assert [p.id for p in result.persons] == ["@I2@"]
        assert result.families == []

    def test_event_without_date(self) -> None:
        tree = read_record_tree("0 @I1@ INDI\n1 BIRT\n2 PLAC Paris\n1 DEAT Y")
        person = RecordTreeNormalizer().normalize(tree).persons[0]
        assert person.birth_date == ""
        assert person.death_date == ""

    def test_family_links_without_pointer_are_skipped(self) -> None:
        tree = read_record_tree("0 @I1@ INDI\n1 FAMC\n1 FAMS @F1@")
        person = RecordTreeNormalizer().normalize(tree).persons[0]
        assert person.famc == []
        assert person.fams == ["@F1@"]

    def test_spouse_falls_back_to_raw_value(self) -> None:
        tree = read_record_tree("0 @F1@ FAM\n1 HUSB I1\n1 CHIL\n1 CHIL @I3@")
        family = RecordTreeNormalizer().normalize(tree).families[0]
        assert family.husband == "I1"
        assert family.wife is None
        assert family.children == ["@I3@"]

    def test_missing_tree(self) -> None:
        with pytest.raises(StructuralParseError, match="Invalid GEDCOM structure"):
            RecordTreeNormalizer().normalize(None)


# =============================================================================
# Orchestration
# =============================================================================


def _fallback_graph() -> GedcomGraph:
    return GedcomGraph(
        head=HeadInfo(character_set="ANSEL"),
        individuals={
            "I1": IndividualRecord(
                names=[NameRecord(given="John", surname="Doe")],
                family_as_spouse=[FamilyRef(family="F1")],
            ),
            "I3": IndividualRecord(
                names=[NameRecord(given="Jimmy", surname="Doe")],
                family_as_child=[FamilyRef(family="F1")],
            ),
        },
        families={"F1": FamilyRecord(husband=PersonRef(pointer="I1"), children=[PersonRef(pointer="I3")])},
    )


class TestParseGedcomWithFallback:
    def test_primary_path(self, sample_ged) -> None:
        result = parse_gedcom_with_fallback(sample_ged.read_bytes())

        assert result.meta.individuals == len(result.persons) == 5
        assert result.meta.families == len(result.families) == 2

        jean = next(p for p in result.persons if p.name == "Jean-François Martin")
        assert jean.birth_date == "15 MAR 1850"
        assert jean.death_date == "10 NOV 1920"

    def test_malformed_tree_uses_fallback(self, monkeypatch) -> None:
        received = []

        def read_graph(buffer):
            received.append(buffer)
            return _fallback_graph()

        monkeypatch.setattr(parsing, "read_record_tree", lambda text: None)
        monkeypatch.setattr(parsing, "read_object_graph", read_graph)

        buffer = b"0 HEAD\n0 TRLR\n"
        result = parse_gedcom_with_fallback(buffer)

        # The fallback gets the raw bytes, not the decoded text
        assert received == [buffer]
        assert result.meta.individuals == len(result.persons) == 2
        assert result.meta.families == len(result.families) == 1
        assert result.meta.encoding_tag == "ANSEL"
        assert [p.id for p in result.persons] == ["@I1@", "@I3@"]
        assert result.persons[1].famc == ["@F1@"]
        assert result.families[0].husband == "@I1@"
        assert result.families[0].children == ["@I3@"]

    def test_tokenizer_failure_uses_ged4py(self, monkeypatch, minimal_ged) -> None:
        def broken(text):
            raise StructuralParseError("boom")

        monkeypatch.setattr(parsing, "read_record_tree", broken)
        result = parse_gedcom_with_fallback(minimal_ged.read_bytes())

        assert result.meta.individuals == 3
        assert result.meta.families == 1
        assert {p.id for p in result.persons} == {"@I1@", "@I2@", "@I3@"}

    def test_both_strategies_fail(self, monkeypatch) -> None:
        def broken_graph(buffer):
            raise ValueError("no records")

        monkeypatch.setattr(parsing, "read_object_graph", broken_graph)

        with pytest.raises(ParseError) as excinfo:
            parse_gedcom_with_fallback(b"0 HEAD\nthis is not gedcom\n")

        message = str(excinfo.value)
        assert "Failed to parse GEDCOM file with both parsers" in message
        assert "Primary error: Malformed GEDCOM record tree" in message
        assert "Fallback error: no records" in message
        assert isinstance(excinfo.value.primary, StructuralParseError)
