"""Per-line coverage arrays and synthetic branches for one source file."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from covmodel.config.constants import LINE_COVERED, LINE_NOT_COVERED, LINE_NOT_INSTRUMENTED
from covmodel.coverage.models import Branch, LineVisitStatus
from covmodel.coverage.records import LineRecord


@dataclass(frozen=True, slots=True)
class LineCoverage:
    """Dense, line-indexed arrays. Index 0 is unused."""

    coverage: list[int]
    line_visit_status: list[LineVisitStatus]

    @property
    def total_lines(self) -> int:
        return len(self.coverage) - 1


def line_status(line: LineRecord) -> LineVisitStatus:
    if line.covered_instructions <= 0:
        return LineVisitStatus.NOT_COVERED
    if line.missed_instructions > 0:
        return LineVisitStatus.PARTIALLY_COVERED
    return LineVisitStatus.COVERED


def build_line_coverage(lines: Iterable[LineRecord]) -> LineCoverage:
    """Expand sparse line records into coverage and status arrays.

    Array length is the highest reported line number + 1; lines that were never
    reported stay not instrumented (-1 / NOT_COVERABLE). No records yields
    empty arrays.
    """
    ordered = sorted(lines, key=lambda line: line.number)
    if not ordered:
        return LineCoverage(coverage=[], line_visit_status=[])

    size = ordered[-1].number + 1
    coverage = [LINE_NOT_INSTRUMENTED] * size
    status = [LineVisitStatus.NOT_COVERABLE] * size

    for line in ordered:
        coverage[line.number] = LINE_COVERED if line.covered_instructions > 0 else LINE_NOT_COVERED
        status[line.number] = line_status(line)

    return LineCoverage(coverage=coverage, line_visit_status=status)


def reconstruct_branches(lines: Iterable[LineRecord]) -> dict[int, frozenset[Branch]]:
    """Synthesize branch outcomes from per-line missed/covered branch counts.

    A line with cb covered out of mb + cb branches gets mb + cb branches
    "{line}_0" .. "{line}_{n-1}", the first cb of them covered. Lines without
    branches get no entry.
    """
    result: dict[int, frozenset[Branch]] = {}

    for line in sorted(lines, key=lambda line: line.number):
        total = line.missed_branches + line.covered_branches
        if total == 0:
            continue

        result[line.number] = frozenset(
            Branch(
                identifier=f"{line.number}_{ordinal}",
                branch_visits=1 if ordinal < line.covered_branches else 0,
            )
            for ordinal in range(total)
        )

    return result
