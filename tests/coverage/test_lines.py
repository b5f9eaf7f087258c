"""Tests for per-line coverage arrays and branch reconstruction."""

import pytest

from covmodel.coverage.lines import (
    build_line_coverage,
    line_status,
    reconstruct_branches,
)
from covmodel.coverage.models import Branch, LineVisitStatus
from covmodel.coverage.records import LineRecord

# =============================================================================
# build_line_coverage tests
# =============================================================================


class TestBuildLineCoverage:
    """Tests for dense coverage array construction."""

    def test_empty_records_give_empty_arrays(self) -> None:
        result = build_line_coverage([])
        assert result.coverage == []
        assert result.line_visit_status == []
        assert result.total_lines == -1

    def test_covered_and_partial_lines(self) -> None:
        """nr=10 fully covered, nr=11 partially covered."""
        lines = [
            LineRecord(number=10, missed_instructions=0, covered_instructions=5),
            LineRecord(number=11, missed_instructions=3, covered_instructions=2),
        ]

        result = build_line_coverage(lines)

        assert len(result.coverage) == 12
        assert result.coverage[10] == 1
        assert result.coverage[11] == 1
        assert result.line_visit_status[10] == LineVisitStatus.COVERED
        assert result.line_visit_status[11] == LineVisitStatus.PARTIALLY_COVERED
        assert result.total_lines == 11

    def test_unreported_slots_are_not_instrumented(self) -> None:
        result = build_line_coverage([LineRecord(number=4, missed_instructions=1)])

        assert result.coverage == [-1, -1, -1, -1, 0]
        assert result.line_visit_status[:4] == [LineVisitStatus.NOT_COVERABLE] * 4
        assert result.line_visit_status[4] == LineVisitStatus.NOT_COVERED

    def test_unsorted_records_are_sorted(self) -> None:
        lines = [
            LineRecord(number=7, covered_instructions=1),
            LineRecord(number=2, missed_instructions=1),
            LineRecord(number=5, covered_instructions=1, missed_instructions=1),
        ]

        result = build_line_coverage(lines)

        assert len(result.coverage) == 8
        assert result.coverage[2] == 0
        assert result.coverage[5] == 1
        assert result.coverage[7] == 1

    def test_index_zero_is_sentinel(self) -> None:
        result = build_line_coverage([LineRecord(number=1, covered_instructions=1)])
        assert result.coverage[0] == -1
        assert result.line_visit_status[0] == LineVisitStatus.NOT_COVERABLE

    def test_values_are_tri_state(self) -> None:
        lines = [
            LineRecord(number=n, missed_instructions=n % 3, covered_instructions=n % 2)
            for n in range(1, 40, 3)
        ]

        result = build_line_coverage(lines)

        assert set(result.coverage) <= {-1, 0, 1}
        assert len(result.coverage) == max(line.number for line in lines) + 1


class TestLineStatus:
    """Tests for three-way line status derivation."""

    @pytest.mark.parametrize(
        ("missed", "covered", "expected"),
        [
            (0, 5, LineVisitStatus.COVERED),
            (3, 2, LineVisitStatus.PARTIALLY_COVERED),
            (3, 0, LineVisitStatus.NOT_COVERED),
            (0, 0, LineVisitStatus.NOT_COVERED),
        ],
    )
    def test_status(self, missed: int, covered: int, expected: LineVisitStatus) -> None:
        line = LineRecord(number=1, missed_instructions=missed, covered_instructions=covered)
        assert line_status(line) == expected


# =============================================================================
# reconstruct_branches tests
# =============================================================================


class TestReconstructBranches:
    """Tests for synthetic branch outcomes."""

    def test_branch_free_lines_are_omitted(self) -> None:
        lines = [
            LineRecord(number=10, covered_instructions=5),
            LineRecord(number=11, missed_instructions=3, covered_instructions=2),
        ]
        assert reconstruct_branches(lines) == {}

    def test_counts_match_aggregate(self) -> None:
        lines = [LineRecord(number=11, missed_branches=1, covered_branches=3)]

        result = reconstruct_branches(lines)

        assert list(result) == [11]
        branches = result[11]
        assert len(branches) == 4
        assert sum(1 for b in branches if b.is_covered) == 3

    def test_identifiers_are_line_and_ordinal(self) -> None:
        lines = [LineRecord(number=9, missed_branches=1, covered_branches=1)]

        result = reconstruct_branches(lines)

        assert result[9] == frozenset(
            {
                Branch(identifier="9_0", branch_visits=1),
                Branch(identifier="9_1", branch_visits=0),
            }
        )

    def test_all_missed(self) -> None:
        result = reconstruct_branches([LineRecord(number=3, missed_branches=2)])
        assert {b.identifier for b in result[3]} == {"3_0", "3_1"}
        assert not any(b.is_covered for b in result[3])

    def test_multiple_lines(self) -> None:
        lines = [
            LineRecord(number=20, covered_branches=2),
            LineRecord(number=4, missed_branches=2, covered_branches=2),
            LineRecord(number=5),
        ]

        result = reconstruct_branches(lines)

        assert sorted(result) == [4, 20]
        assert len(result[4]) == 4
        assert len(result[20]) == 2
