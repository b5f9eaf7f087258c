"""Hierarchical coverage model.

Assembly -> Class -> CodeFile -> lines / branches / method metrics / code elements.
All entities are populated within one parse call and left untouched afterwards.
Line numbers are 1-based; index 0 of the per-line arrays is a sentinel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_DOWN, Decimal
from enum import Enum, IntEnum

from covmodel.config.constants import LINE_COVERED


class LineVisitStatus(IntEnum):
    """Tri-state visit status of an instrumented line, plus 'not coverable'."""

    NOT_COVERABLE = 0
    NOT_COVERED = 1
    PARTIALLY_COVERED = 2
    COVERED = 3


class MetricType(Enum):
    COVERAGE_PERCENTUAL = "coverage_percentual"


class CodeElementType(Enum):
    METHOD = "method"


@dataclass(frozen=True, slots=True)
class Branch:
    """One synthetic branch outcome.

    JaCoCo only reports missed/covered counts per line, so the identifier is a
    stable surrogate ("{line}_{ordinal}"), not a physical branch.
    """

    identifier: str
    branch_visits: int

    @property
    def is_covered(self) -> bool:
        return self.branch_visits > 0


@dataclass(frozen=True, slots=True)
class Metric:
    """Named metric value. value is None when there is no data (not 0%)."""

    name: str
    explanation_url: str
    metric_type: MetricType
    value: Decimal | None


@dataclass(slots=True)
class MethodMetric:
    full_name: str
    short_name: str
    metrics: list[Metric] = field(default_factory=list)
    line: int | None = None

    def metric(self, name: str) -> Metric | None:
        return next((m for m in self.metrics if m.name == name), None)


@dataclass(frozen=True, slots=True)
class CodeElement:
    """Named line range [first_line, last_line] with its own coverage quota."""

    name: str
    kind: CodeElementType
    first_line: int
    last_line: int
    coverage_quota: Decimal | None


@dataclass(slots=True)
class CodeFile:
    """Coverage data of one source file within a class.

    coverage[i] is -1 (not instrumented), 0 (not covered) or 1 (covered).
    line_visit_status is parallel to coverage.
    """

    path: str
    coverage: list[int] = field(default_factory=list)
    line_visit_status: list[LineVisitStatus] = field(default_factory=list)
    branches: dict[int, frozenset[Branch]] = field(default_factory=dict)
    method_metrics: list[MethodMetric] = field(default_factory=list)
    code_elements: list[CodeElement] = field(default_factory=list)

    def add_method_metric(self, method_metric: MethodMetric) -> None:
        self.method_metrics.append(method_metric)

    def add_code_element(self, code_element: CodeElement) -> None:
        self.code_elements.append(code_element)

    @property
    def coverable_lines(self) -> int:
        return sum(1 for s in self.line_visit_status if s != LineVisitStatus.NOT_COVERABLE)

    @property
    def covered_lines(self) -> int:
        return sum(1 for c in self.coverage if c == LINE_COVERED)

    @property
    def total_branches(self) -> int:
        return sum(len(b) for b in self.branches.values())

    @property
    def covered_branches(self) -> int:
        return sum(1 for branches in self.branches.values() for b in branches if b.is_covered)

    def coverage_quota(self, first_line: int, last_line: int) -> Decimal | None:
        """Percentage of coverable lines in [first_line, last_line] that were visited.

        Partially covered lines count as visited. The result is truncated to one
        decimal place. Returns None for an invalid range or a range without
        coverable lines.
        """
        size = len(self.line_visit_status)
        if first_line < 0 or last_line < 0 or first_line > last_line or last_line >= size:
            return None

        coverable = 0
        covered = 0
        for status in self.line_visit_status[first_line : last_line + 1]:
            if status == LineVisitStatus.NOT_COVERABLE:
                continue
            coverable += 1
            if status > LineVisitStatus.NOT_COVERED:
                covered += 1

        if coverable == 0:
            return None
        quota = Decimal(1000 * covered) / Decimal(coverable)
        return quota.quantize(Decimal(1), rounding=ROUND_DOWN) / 10


@dataclass(eq=False, slots=True)
class Class:
    """A (possibly multi-file) class. assembly is a non-owning back-reference."""

    name: str
    assembly: Assembly = field(repr=False)
    files: list[CodeFile] = field(default_factory=list)

    def add_file(self, code_file: CodeFile) -> None:
        self.files.append(code_file)

    @property
    def coverable_lines(self) -> int:
        return sum(f.coverable_lines for f in self.files)

    @property
    def covered_lines(self) -> int:
        return sum(f.covered_lines for f in self.files)

    @property
    def total_branches(self) -> int:
        return sum(f.total_branches for f in self.files)

    @property
    def covered_branches(self) -> int:
        return sum(f.covered_branches for f in self.files)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Class):
            return NotImplemented
        return self.name == other.name and self.assembly.name == other.assembly.name

    def __hash__(self) -> int:
        return hash((self.assembly.name, self.name))


@dataclass(slots=True)
class Assembly:
    """A JaCoCo package. Classes are kept ordered by name."""

    name: str
    classes: list[Class] = field(default_factory=list)

    def add_class(self, cls: Class) -> None:
        self.classes.append(cls)
        self.classes.sort(key=lambda c: c.name)

    @property
    def coverable_lines(self) -> int:
        return sum(c.coverable_lines for c in self.classes)

    @property
    def covered_lines(self) -> int:
        return sum(c.covered_lines for c in self.classes)

    @property
    def total_branches(self) -> int:
        return sum(c.total_branches for c in self.classes)

    @property
    def covered_branches(self) -> int:
        return sum(c.covered_branches for c in self.classes)


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Aggregate coverage statistics.

    Computed from a ParserResult; an immutable snapshot.
    """

    assemblies: int
    classes: int
    files: int
    coverable_lines: int
    covered_lines: int
    total_branches: int
    covered_branches: int
    line_rate: float
    branch_rate: float


@dataclass(slots=True)
class ParserResult:
    """Outcome of one parse: assemblies sorted by name."""

    assemblies: list[Assembly]
    success: bool
    parser_name: str

    @property
    def summary(self) -> CoverageSummary:
        """Compute aggregate summary across all assemblies."""
        classes = [c for a in self.assemblies for c in a.classes]
        coverable = sum(a.coverable_lines for a in self.assemblies)
        covered = sum(a.covered_lines for a in self.assemblies)
        total_branches = sum(a.total_branches for a in self.assemblies)
        covered_branches = sum(a.covered_branches for a in self.assemblies)

        return CoverageSummary(
            assemblies=len(self.assemblies),
            classes=len(classes),
            files=sum(len(c.files) for c in classes),
            coverable_lines=coverable,
            covered_lines=covered,
            total_branches=total_branches,
            covered_branches=covered_branches,
            line_rate=covered / coverable if coverable > 0 else 0.0,
            branch_rate=covered_branches / total_branches if total_branches > 0 else 0.0,
        )
