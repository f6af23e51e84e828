"""Tree builder tests: line grammar, token classification and root detection."""

from __future__ import annotations

import pytest

from balancing_scale.config import MAX_MASS
from balancing_scale.errors import (
    AmbiguousRootError,
    DisconnectedScalesError,
    DuplicateScaleError,
    EmptyTreeError,
    InvalidTokenError,
    MassOverflowError,
    NotARootError,
    ScaleSyntaxError,
    ScaleTreeError,
    UnknownRootError,
)
from balancing_scale.models import Mass, Scale, ScaleRef, ScaleTree
from balancing_scale.parser import build_tree, parse_line, parse_pan


# ── Pan tokens ───────────────────────────────────────────────────────────────

class TestParsePan:
    def test_digit_prefix_is_mass(self) -> None:
        assert parse_pan("42") == Mass(42)

    def test_zero_mass(self) -> None:
        assert parse_pan("0") == Mass(0)

    def test_letter_prefix_is_reference(self) -> None:
        assert parse_pan("B12") == ScaleRef("B12")

    def test_largest_mass_accepted(self) -> None:
        assert parse_pan(str(MAX_MASS)) == Mass(2 ** 64 - 1)

    def test_mass_overflow(self) -> None:
        with pytest.raises(MassOverflowError, match="out of range"):
            parse_pan(str(MAX_MASS + 1))

    @pytest.mark.parametrize("token", ["-5", "_a", "+3", "(x"])
    def test_invalid_leading_character(self, token: str) -> None:
        with pytest.raises(InvalidTokenError, match="invalid mass or scale name"):
            parse_pan(token)

    def test_mass_read_from_leading_digits(self) -> None:
        assert parse_pan("12kg") == Mass(12)
        assert parse_pan("7.5") == Mass(7)

    def test_leading_digits_overflow(self) -> None:
        with pytest.raises(MassOverflowError):
            parse_pan(f"{MAX_MASS + 1}kg")


# ── Lines ────────────────────────────────────────────────────────────────────

class TestParseLine:
    def test_whitespace_separated(self) -> None:
        assert parse_line("a b 3") == Scale("a", ScaleRef("b"), Mass(3))

    def test_comma_separated(self) -> None:
        assert parse_line("a,4,c\n") == Scale("a", Mass(4), ScaleRef("c"))

    def test_mixed_separators(self) -> None:
        assert parse_line("a, 1 ,2") == Scale("a", Mass(1), Mass(2))

    @pytest.mark.parametrize("line", ["", "\n", "# comment", "#a 1 2"])
    def test_skipped_lines(self, line: str) -> None:
        assert parse_line(line) is None

    def test_missing_name(self) -> None:
        with pytest.raises(ScaleSyntaxError, match="scale name") as exc_info:
            parse_line(" , ", line_number=4)
        assert exc_info.value.line_number == 4

    def test_missing_pan(self) -> None:
        with pytest.raises(ScaleSyntaxError, match="left and/or right"):
            parse_line("a 1")

    def test_error_mentions_line(self) -> None:
        with pytest.raises(InvalidTokenError, match=r"line 7: .*'a \$ 1'"):
            parse_line("a $ 1", line_number=7)


# ── Tree building ────────────────────────────────────────────────────────────

class TestBuildTree:
    def test_example_tree(self) -> None:
        tree = build_tree(["a b c", "b 5 5", "c 2 8"])
        assert tree.root == "a"
        assert set(tree) == {"a", "b", "c"}
        assert tree["a"] == Scale("a", ScaleRef("b"), ScaleRef("c"))

    def test_declaration_order_does_not_matter(self) -> None:
        tree = build_tree(["c 2 8", "b 5 5", "a b c"])
        assert tree.root == "a"

    def test_single_scale(self) -> None:
        tree = build_tree(["only 1 2"])
        assert tree.root == "only"
        assert len(tree) == 1

    def test_comments_and_blank_lines(self) -> None:
        tree = build_tree(["# header", "", "a 1 b", "", "b 2 2"])
        assert tree.root == "a"
        assert len(tree) == 2

    def test_tree_is_read_only(self) -> None:
        tree = build_tree(["a 1 1"])
        with pytest.raises(TypeError):
            tree["b"] = Scale("b", Mass(1), Mass(1))  # type: ignore[index]

    def test_duplicate_name(self) -> None:
        with pytest.raises(DuplicateScaleError, match="duplicate scale name found: A") as exc_info:
            build_tree(["A 1 2", "A 3 4"])
        assert exc_info.value.line_number == 2

    def test_empty_input(self) -> None:
        with pytest.raises(EmptyTreeError):
            build_tree(["# nothing here", ""])

    def test_two_roots(self) -> None:
        with pytest.raises(AmbiguousRootError, match="multiple or zero ill-formed scales: a b"):
            build_tree(["a 1 1", "b 2 2"])

    def test_cycle_without_root(self) -> None:
        with pytest.raises(AmbiguousRootError) as exc_info:
            build_tree(["a b 1", "b a 1"])
        assert exc_info.value.names == []

    def test_self_reference(self) -> None:
        with pytest.raises(AmbiguousRootError):
            build_tree(["a a 1"])

    def test_dangling_reference(self) -> None:
        with pytest.raises(AmbiguousRootError) as exc_info:
            build_tree(["a x 1"])
        assert exc_info.value.names == ["a", "x"]

    def test_shared_sub_scale(self) -> None:
        with pytest.raises(ScaleTreeError):
            build_tree(["a b c", "b 1 1", "c b 1"])

    def test_candidate_referenced_twice(self) -> None:
        with pytest.raises(NotARootError, match="not a root scale: b") as exc_info:
            build_tree(["a b b", "b a 1"])
        assert exc_info.value.count == -1

    def test_only_dangling_reference_left(self) -> None:
        with pytest.raises(NotARootError, match="x"):
            build_tree(["a b 1", "b a x"])

    def test_cycle_detached_from_root(self) -> None:
        with pytest.raises(DisconnectedScalesError, match="root scale r: x y") as exc_info:
            build_tree(["r 1 2", "x y 1", "y x 1"])
        assert exc_info.value.names == ["x", "y"]

    def test_detached_cycle_below_a_sub_scale(self) -> None:
        with pytest.raises(DisconnectedScalesError):
            build_tree(["r s 1", "s 1 1", "p q 3", "q p 4"])


class TestScaleTree:
    def test_undeclared_root(self) -> None:
        with pytest.raises(UnknownRootError, match="root scale z is not declared"):
            ScaleTree({"a": Scale("a", Mass(1), Mass(1))}, "z")

    def test_undeclared_root_is_a_tree_error(self) -> None:
        with pytest.raises(ScaleTreeError):
            ScaleTree({}, "a")
