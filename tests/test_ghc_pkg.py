"""Tests for ghc-pkg field output parsing."""

from cabal_inventory.parsers.ghc_pkg import field_value, parse_fields


def test_key_value_lines():
    text = "name: text\nversion: 2.0.1\n"
    assert parse_fields(text) == {"name": "text", "version": "2.0.1"}


def test_splits_only_at_first_colon():
    fields = parse_fields("homepage: http://example.org:8080/docs")
    assert fields["homepage"] == "http://example.org:8080/docs"


def test_continuation_lines_join_value():
    text = "depends:\n    base-4.17.0.0\n    text-2.0.1-abc bytestring-0.11\nname: demo\n"
    fields = parse_fields(text)
    assert fields["depends"] == "base-4.17.0.0 text-2.0.1-abc bytestring-0.11"
    assert fields["name"] == "demo"


def test_empty_values_are_absent():
    fields = parse_fields("synopsis:\nhomepage: \nname: demo")
    assert "synopsis" not in fields
    assert "homepage" not in fields
    assert fields["name"] == "demo"


def test_malformed_lines_are_skipped():
    fields = parse_fields("garbage line\nname: demo\n---\n")
    assert fields == {"name": "demo"}


def test_first_occurrence_wins():
    assert field_value("id: first-1.0\n---\nid: second-1.0\n", "id") == "first-1.0"
    assert field_value("", "id") is None
