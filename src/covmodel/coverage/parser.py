"""JaCoCo XML report parser.

Builds the Assembly -> Class -> CodeFile model from one report:

1. Assemblies: distinct <package> names accepted by the assembly filter,
   processed one after another in name order.
2. Classes: distinct top-level <class> names (nested "Outer$Inner" records are
   folded into their outer class) accepted by the class filter, processed
   concurrently, one task per class.
3. Files: source files referenced by the class and its nested classes,
   accepted by the file filter. A class that loses all its files to the filter is
   dropped; a class from an old report without sourcefilename attributes is
   kept unless custom file filters are configured.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from covmodel.config.constants import NESTED_CLASS_SEPARATOR, PARSER_NAME
from covmodel.core.errors import CovModelError, InternalError, ReportError
from covmodel.core.logging import SinkLogger, VerbosityLevel, get_logger, structlog_sink
from covmodel.coverage.filters import Filter, PatternFilter
from covmodel.coverage.lines import build_line_coverage, reconstruct_branches
from covmodel.coverage.methods import assign_code_elements, extract_method_metrics
from covmodel.coverage.models import Assembly, Class, CodeFile, ParserResult
from covmodel.coverage.records import (
    ClassRecord,
    PackageRecord,
    decode_lines,
    decode_methods,
    decode_package,
)

if TYPE_CHECKING:
    from covmodel.config.models import CovModelConfig

log = get_logger(__name__)


class JacocoParser:
    """Parser for JaCoCo XML reports.

    Filters and the message logger are passed in; the parser keeps no state
    between parse() calls.
    """

    def __init__(
        self,
        assembly_filter: Filter,
        class_filter: Filter,
        file_filter: Filter,
        *,
        logger: SinkLogger | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.assembly_filter = assembly_filter
        self.class_filter = class_filter
        self.file_filter = file_filter
        self.logger = logger or SinkLogger(structlog_sink("covmodel.parser"), VerbosityLevel.INFO)
        self.max_workers = max_workers

    @classmethod
    def from_config(cls, config: CovModelConfig) -> JacocoParser:
        return cls(
            PatternFilter(config.filters.assemblies),
            PatternFilter(config.filters.classes),
            PatternFilter(config.filters.files),
            logger=SinkLogger(
                structlog_sink("covmodel.parser"),
                VerbosityLevel[config.parser.verbosity],
            ),
            max_workers=config.parser.max_workers,
        )

    def __str__(self) -> str:
        return PARSER_NAME

    def parse(self, report: ET.ElementTree | ET.Element | None) -> ParserResult:
        """Parse a loaded JaCoCo document into a ParserResult.

        Raises:
            ReportError: If report (or its root) is None, or a retained class or
                         file holds malformed numbers.
        """
        if report is None:
            raise ReportError.invalid_argument("report")

        root = report.getroot() if isinstance(report, ET.ElementTree) else report
        if root is None:
            raise ReportError.invalid_argument("report")
        package_elements = list(root.iter("package"))

        assembly_names = sorted(
            {
                name
                for name in (p.get("name", "") for p in package_elements)
                if self.assembly_filter.is_included(name)
            }
        )

        packages = [
            decode_package(p) for p in package_elements if p.get("name", "") in assembly_names
        ]

        assemblies = [self._process_assembly(packages, name) for name in assembly_names]
        assemblies.sort(key=lambda a: a.name)

        result = ParserResult(assemblies=assemblies, success=True, parser_name=str(self))
        summary = result.summary
        log.info(
            "jacoco_report_parsed",
            assemblies=summary.assemblies,
            classes=summary.classes,
            files=summary.files,
        )
        return result

    def _process_assembly(self, packages: list[PackageRecord], assembly_name: str) -> Assembly:
        self.logger.debug("Current assembly: {0}", assembly_name)

        modules = [p for p in packages if p.name == assembly_name]
        class_names = sorted(
            {
                c.name
                for p in modules
                for c in p.classes
                if NESTED_CLASS_SEPARATOR not in c.name
            }
        )
        class_names = [name for name in class_names if self.class_filter.is_included(name)]

        assembly = Assembly(name=assembly_name)
        if not class_names:
            return assembly

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="covmodel-class",
        ) as executor:
            futures = [
                executor.submit(self._process_class, modules, assembly, name)
                for name in class_names
            ]
            processed = [_result_of(future, name) for future, name in zip(futures, class_names)]

        for cls in processed:
            if cls is not None:
                assembly.add_class(cls)
        return assembly

    def _process_class(
        self,
        modules: list[PackageRecord],
        assembly: Assembly,
        class_name: str,
    ) -> Class | None:
        classes = [c for p in modules for c in p.classes if c.belongs_to(class_name)]

        # sourcefilename is missing in reports of older JaCoCo versions
        files = list(
            dict.fromkeys(c.source_file_name for c in classes if c.source_file_name is not None)
        )
        filtered_files = [f for f in files if self.file_filter.is_included(f)]

        if not filtered_files and (files or self.file_filter.has_custom_filters):
            return None

        cls = Class(name=class_name, assembly=assembly)
        for file_name in filtered_files:
            cls.add_file(_process_file(modules, classes, file_name))
        return cls


def _process_file(
    modules: list[PackageRecord],
    classes: list[ClassRecord],
    file_name: str,
) -> CodeFile:
    lines = [
        line
        for p in modules
        for source_file in p.source_files
        if source_file.name == file_name
        for line in decode_lines(source_file)
    ]
    line_coverage = build_line_coverage(lines)

    code_file = CodeFile(
        path=file_name,
        coverage=line_coverage.coverage,
        line_visit_status=line_coverage.line_visit_status,
        branches=reconstruct_branches(lines),
    )

    methods = [m for c in classes if c.source_file_name == file_name for m in decode_methods(c)]
    for method_metric in extract_method_metrics(methods):
        code_file.add_method_metric(method_metric)
    for code_element in assign_code_elements(code_file, methods, line_coverage.total_lines):
        code_file.add_code_element(code_element)

    return code_file


def _result_of(future: Future[Class | None], class_name: str) -> Class | None:
    """Unwrap a class task; any failure aborts the whole parse."""
    try:
        return future.result()
    except CovModelError:
        raise
    except Exception as e:
        log.error("class_processing_failed", class_name=class_name, error=str(e))
        raise InternalError.unexpected(str(e), class_name=class_name) from e


def parse_report_file(
    path: Path,
    *,
    assembly_filter: Filter | None = None,
    class_filter: Filter | None = None,
    file_filter: Filter | None = None,
    logger: SinkLogger | None = None,
    max_workers: int | None = None,
) -> ParserResult:
    """Load a JaCoCo XML file and parse it.

    Filters default to including everything.

    Raises:
        ReportError: If the file is missing, is not valid XML or holds
                     malformed numbers.
    """
    if not path.is_file():
        raise ReportError.not_found(str(path))

    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise ReportError.invalid_xml(str(path), str(e)) from e

    parser = JacocoParser(
        assembly_filter or PatternFilter.allow_all(),
        class_filter or PatternFilter.allow_all(),
        file_filter or PatternFilter.allow_all(),
        logger=logger,
        max_workers=max_workers,
    )
    return parser.parse(tree)
