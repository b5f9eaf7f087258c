"""JaCoCo coverage parsing into a hierarchical coverage model.

Usage:
    from covmodel.coverage import JacocoParser, PatternFilter, parse_report_file

    result = parse_report_file(Path("build/reports/jacoco/test/jacocoTestReport.xml"))
    for assembly in result.assemblies:
        for cls in assembly.classes:
            ...

    # Or with explicit filters on an already-loaded document
    parser = JacocoParser(
        PatternFilter(["+com/example/*"]),
        PatternFilter(["-*Test"]),
        PatternFilter.allow_all(),
    )
    result = parser.parse(tree)
"""

from covmodel.coverage.filters import Filter, PatternFilter
from covmodel.coverage.models import (
    Assembly,
    Branch,
    Class,
    CodeElement,
    CodeElementType,
    CodeFile,
    CoverageSummary,
    LineVisitStatus,
    MethodMetric,
    Metric,
    MetricType,
    ParserResult,
)
from covmodel.coverage.parser import JacocoParser, parse_report_file

__all__ = [
    # Models
    "Assembly",
    "Branch",
    "Class",
    "CodeElement",
    "CodeElementType",
    "CodeFile",
    "CoverageSummary",
    "LineVisitStatus",
    "MethodMetric",
    "Metric",
    "MetricType",
    "ParserResult",
    # Filters
    "Filter",
    "PatternFilter",
    # Parser
    "JacocoParser",
    "parse_report_file",
]
