"""Tests for the TagPath value type."""

from __future__ import annotations

import pytest

from tagvault.tags.path import TagPath, dedupe


# ------------------------------------------------------------------
# Construction / parsing
# ------------------------------------------------------------------


def test_parse_hierarchical() -> None:
    tag = TagPath.parse("proyecto/cliente/acme")
    assert tag.segments == ("proyecto", "cliente", "acme")


def test_parse_trims_and_drops_empty_segments() -> None:
    tag = TagPath.parse(" a // b / c/ ")
    assert tag.segments == ("a", "b", "c")


def test_parse_round_trip() -> None:
    tag = TagPath.from_parts(["dev", "project", "client"])
    assert TagPath.parse(str(tag)) == tag


def test_from_parts_splits_embedded_separator() -> None:
    assert TagPath.from_parts(["a/b", "c"]).segments == ("a", "b", "c")


def test_empty_tag_rejected() -> None:
    with pytest.raises(ValueError):
        TagPath.parse(" / ")


def test_maybe_returns_none_for_blank() -> None:
    assert TagPath.maybe("   ") is None
    assert TagPath.maybe("x") == TagPath.parse("x")


def test_equality_is_order_sensitive() -> None:
    assert TagPath.parse("a/b") != TagPath.parse("b/a")


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def test_join_with_custom_separator() -> None:
    assert TagPath.parse("a/b/c").join(" → ") == "a → b → c"


@pytest.mark.parametrize("text", ["..", "../../escaped", "a/./b", "a/.."])
def test_dot_segments_rejected(text: str) -> None:
    with pytest.raises(ValueError, match="not a valid tag segment"):
        TagPath.parse(text)
    assert TagPath.maybe(text) is None


def test_dots_inside_segment_are_allowed() -> None:
    assert TagPath.parse("v1.2/...x").segments == ("v1.2", "...x")


def test_bare_string_segments_rejected() -> None:
    with pytest.raises(TypeError):
        TagPath("ab/c")


def test_starts_with() -> None:
    parent = TagPath.parse("proyecto/cliente")
    child = TagPath.parse("proyecto/cliente/acme")
    unrelated = TagPath.parse("otro")

    assert child.starts_with(parent)
    assert child.starts_with(child)
    assert not unrelated.starts_with(parent)
    assert not parent.starts_with(child)


def test_starts_with_is_segment_wise() -> None:
    assert not TagPath.parse("projects/x").starts_with(TagPath.parse("proj"))


def test_dedupe_keeps_first_seen_order() -> None:
    tags = [TagPath.parse(s) for s in ["b", "a", "b", "a/c", "a"]]
    assert [str(t) for t in dedupe(tags)] == ["b", "a", "a/c"]
