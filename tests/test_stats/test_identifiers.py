"""Tests for certificate identifier extraction and allocation."""

import pytest

from buddy_exchange.stats.identifiers import (
    extract_identifiers,
    format_identifier,
    identifiers_in_title,
    next_identifier,
    suggested_title,
)


class TestIdentifiersInTitle:
    """Test pattern priority for a single title."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Jane Doe | 2025-042", [42]),
            ("2024-001 and 2024-017", [1, 17]),
            ("Paper | 2025-07", [7]),
            ("Paper | 2025-7", [7]),
            ("Certificate 123", [123]),
            ("Issue 12", [12]),
            ("Round 4", [4]),
            ("No numbers here", []),
        ],
    )
    def test_extraction(self, title: str, expected: list[int]) -> None:
        assert identifiers_in_title(title) == expected

    def test_dashed_form_wins_over_bare_numbers(self) -> None:
        """Once a year-dash form matches, bare numbers are not collected."""
        assert identifiers_in_title("Reviewed 555 pages | 2025-003") == [3]

    def test_stronger_bare_pattern_wins(self) -> None:
        """Three-digit matches suppress two-digit ones in the same title."""
        assert identifiers_in_title("Run 123 of 45") == [123]

    def test_zero_is_discarded(self) -> None:
        """Identifier numbers must be positive."""
        assert identifiers_in_title("Draft | 2025-000") == []


class TestExtractIdentifiers:
    """Test collection across titles."""

    def test_deduplicated_and_sorted(self) -> None:
        titles = ["A | 2025-004", "B | 2025-001", "C | 2024-004", "D | 2025-002"]
        assert extract_identifiers(titles) == (1, 2, 4)

    def test_empty(self) -> None:
        assert extract_identifiers([]) == ()


class TestNextIdentifier:
    """Test gap-filling allocation."""

    def test_fills_first_gap(self) -> None:
        used = extract_identifiers(["2025-001", "2025-002", "2025-004"])
        assert next_identifier(used) == 3

    def test_empty_set_gives_one(self) -> None:
        assert next_identifier(()) == 1

    def test_no_gap_gives_max_plus_one(self) -> None:
        used = extract_identifiers(["2025-001", "2025-002", "2025-003"])
        assert next_identifier(used) == 4

    def test_gap_at_one(self) -> None:
        assert next_identifier([2, 3]) == 1


class TestFormatting:
    """Test identifier presentation helpers."""

    def test_format_identifier_pads(self) -> None:
        assert format_identifier(3, 2025) == "2025-003"

    def test_format_identifier_custom_padding(self) -> None:
        assert format_identifier(42, 2024, padding=4) == "2024-0042"

    def test_suggested_title_with_author(self) -> None:
        assert suggested_title("2025-003", "Jane Doe") == "Jane Doe | 2025-003"

    def test_suggested_title_placeholder(self) -> None:
        assert suggested_title("2025-003") == "[Author Name] | 2025-003"
