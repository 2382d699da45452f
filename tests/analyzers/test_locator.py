"""Tests for locating the target struct declaration."""

from __future__ import annotations

import logging

import pytest

from optsgen.analyzers import locate_struct
from optsgen.errors import DeclarationNotFoundError, TypeMismatchError


def test_locate_struct_returns_fields_in_order(parse_go) -> None:
    parsed = parse_go(
        """
        package bindings

        type Other struct {
            Ignored *int
        }

        type ListOptions struct {
            All     *bool
            Filters map[string][]string
            Last    *int
        }
        """
    )

    declaration = locate_struct(parsed, "ListOptions")

    assert declaration.name == "ListOptions"
    names = [parsed.text(node.child_by_field_name("name")) for node in declaration.fields]
    assert names == ["All", "Filters", "Last"]


def test_locate_struct_handles_grouped_type_declarations(parse_go) -> None:
    parsed = parse_go(
        """
        package bindings

        type (
            First struct {
                A *string
            }
            Second struct {
                B *string
                C []string
            }
        )
        """
    )
    declaration = locate_struct(parsed, "Second")
    assert len(declaration.fields) == 2


def test_locate_struct_accepts_alias_to_struct(parse_go) -> None:
    parsed = parse_go(
        """
        package bindings

        type Opts = struct {
            Name *string
        }
        """
    )
    assert len(locate_struct(parsed, "Opts").fields) == 1


def test_locate_struct_missing_type_raises(parse_go) -> None:
    parsed = parse_go(
        """
        package bindings

        type Opts struct {
            Name *string
        }
        """
    )
    with pytest.raises(DeclarationNotFoundError) as excinfo:
        locate_struct(parsed, "Missing")
    assert "Missing" in str(excinfo.value)


def test_locate_struct_requires_exact_name(parse_go) -> None:
    parsed = parse_go(
        """
        package bindings

        type OptsExtra struct {
            Name *string
        }
        """
    )
    with pytest.raises(DeclarationNotFoundError):
        locate_struct(parsed, "Opts")


@pytest.mark.parametrize(
    ("declaration", "kind"),
    [
        ("type Opts interface {\n    Name() string\n}", "interface"),
        ("type Opts string", "named type"),
        ("type Opts map[string]string", "map"),
    ],
)
def test_locate_struct_rejects_non_struct(parse_go, declaration: str, kind: str) -> None:
    parsed = parse_go(f"package bindings\n\n{declaration}\n")
    with pytest.raises(TypeMismatchError) as excinfo:
        locate_struct(parsed, "Opts")
    assert kind in str(excinfo.value)
    assert "not a struct" in str(excinfo.value)


def test_locate_struct_rejects_generic_struct(parse_go) -> None:
    parsed = parse_go(
        """
        package bindings

        type Opts[T any] struct {
            Value *T
        }
        """
    )
    with pytest.raises(TypeMismatchError):
        locate_struct(parsed, "Opts")


def test_locate_struct_uses_first_match_and_warns(parse_go, caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("optsgen"), "propagate", True)
    parsed = parse_go(
        """
        package bindings

        func build() {
            type Opts struct {
                Local *int
            }
        }

        type Opts struct {
            Name *string
            Size *int
        }
        """
    )

    with caplog.at_level(logging.WARNING, logger="optsgen.locator"):
        declaration = locate_struct(parsed, "Opts")

    assert len(declaration.fields) == 1
    assert parsed.text(declaration.fields[0].child_by_field_name("name")) == "Local"
    assert any("2 declarations of Opts" in record.getMessage() for record in caplog.records)
