"""Tests for Run and StyledText."""

import pytest

from tagstring import attributed
from tagstring.styled import Run, StyledText


class _Ambiguous:
    def __bool__(self) -> bool:
        raise ValueError("truth value is ambiguous")


class _ArrayLike:
    """Elementwise == like numpy arrays: the result cannot be used as a bool."""

    def __eq__(self, other: object) -> _Ambiguous:  # type: ignore[override]
        return _Ambiguous()

    __hash__ = object.__hash__


def _styled() -> StyledText:
    return StyledText((Run("ab", {}), Run("c", {"bold": True}), Run("de", {"bold": True})))


class TestStyledText:
    """Sequence behavior and text access."""

    def test_text_and_str(self) -> None:
        styled = _styled()
        assert styled.text == "abcde"
        assert str(styled) == "abcde"

    def test_len_counts_runs(self) -> None:
        assert len(_styled()) == 3
        assert not StyledText()

    def test_iteration_order(self) -> None:
        assert [run.text for run in _styled()] == ["ab", "c", "de"]

    def test_concatenation(self) -> None:
        left = attributed("<b>x</b>", {"b": {"bold": True}})
        right = attributed("y", {})
        combined = left + right
        assert combined.runs == (Run("x", {"bold": True}), Run("y", {}))

    def test_concatenation_with_other_types(self) -> None:
        with pytest.raises(TypeError):
            _ = _styled() + "text"  # type: ignore[operator]

    def test_equality(self) -> None:
        assert _styled() == _styled()
        assert StyledText((Run("a", {}),)) != StyledText((Run("a", {"k": 1}),))

    def test_immutability(self) -> None:
        styled = _styled()
        with pytest.raises(AttributeError):
            styled.runs = ()  # type: ignore[misc]


class TestCoalesce:
    """Merging adjacent equal runs."""

    def test_merges_equal_neighbors(self) -> None:
        merged = _styled().coalesce()
        assert merged.runs == (Run("ab", {}), Run("cde", {"bold": True}))

    def test_text_unchanged(self) -> None:
        styled = attributed("A &amp; B &lt;3", {})
        assert styled.coalesce().text == styled.text
        assert len(styled.coalesce()) == 1

    def test_does_not_merge_across_differences(self) -> None:
        styled = StyledText((Run("a", {}), Run("b", {"k": 1}), Run("c", {})))
        assert styled.coalesce() == styled

    def test_empty(self) -> None:
        assert StyledText().coalesce() == StyledText()

    def test_shared_values_are_not_compared(self) -> None:
        """Values whose == result has no truth value still merge when shared."""
        fill = _ArrayLike()
        styled = attributed("<c>a</c><c>b</c>", {"c": {"fill": fill}})
        (run,) = styled.coalesce().runs
        assert run.text == "ab"
        assert run.attributes["fill"] is fill

    def test_equal_but_distinct_values_merge(self) -> None:
        styled = StyledText((Run("a", {"k": [1]}), Run("b", {"k": [1]})))
        assert styled.coalesce().runs == (Run("ab", {"k": [1]}),)


class TestAttributesAt:
    """Character index lookup."""

    @pytest.mark.parametrize(
        "index,expected",
        [(0, {}), (1, {}), (2, {"bold": True}), (4, {"bold": True})],
    )
    def test_lookup(self, index: int, expected: dict) -> None:
        assert _styled().attributes_at(index) == expected

    @pytest.mark.parametrize("index", [-1, 5, 100])
    def test_out_of_range(self, index: int) -> None:
        with pytest.raises(IndexError):
            _styled().attributes_at(index)


class TestRun:
    """Run defaults."""

    def test_default_attributes(self) -> None:
        assert Run("x").attributes == {}

    def test_immutability(self) -> None:
        run = Run("x")
        with pytest.raises(AttributeError):
            run.text = "y"  # type: ignore[misc]
