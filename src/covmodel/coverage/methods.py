"""Method-level metrics and code element ranges.

JaCoCo reports methods as name + JVM descriptor, e.g. name="find" and
desc="(Ljava/lang/String;I)Ljava/util/List;". Display signatures drop the
return type: "find(...)" for metrics, "find(Ljava/lang/String;I)" for code
elements.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from covmodel.config.constants import (
    BRANCH_COUNTER,
    BRANCH_COVERAGE_METRIC,
    CODE_COVERAGE_URL,
    COVERAGE_METRIC,
    LAMBDA_METHOD_PREFIX,
    LINE_COUNTER,
    METRIC_DECIMALS,
)
from covmodel.coverage.models import (
    CodeElement,
    CodeElementType,
    CodeFile,
    MethodMetric,
    Metric,
    MetricType,
)
from covmodel.coverage.records import CounterRecord, MethodRecord

_QUANTUM = Decimal(1).scaleb(-METRIC_DECIMALS)


def split_signature(signature: str) -> tuple[str, str, str] | None:
    """Split "name(args)rest" at the last closing parenthesis and its opening match.

    Returns (name, args, rest), or None when there is no balanced trailing
    group preceded by a non-empty name.
    """
    close = signature.rfind(")")
    if close == -1:
        return None

    depth = 0
    for index in range(close, -1, -1):
        char = signature[index]
        if char == ")":
            depth += 1
        elif char == "(":
            depth -= 1
            if depth == 0:
                if index == 0:
                    return None
                return signature[:index], signature[index + 1 : close], signature[close + 1 :]
    return None


def short_signature(full_name: str) -> str:
    """'bar(II)V' -> 'bar(...)', 'bar()V' -> 'bar()'."""
    parts = split_signature(full_name)
    if parts is None:
        return full_name
    name, args, _ = parts
    return f"{name}({'...' if args else ''})"


def element_signature(full_name: str) -> str:
    """'bar(II)V' -> 'bar(II)'."""
    parts = split_signature(full_name)
    if parts is None:
        return full_name
    name, args, _ = parts
    return f"{name}({args})"


def is_lambda(method: MethodRecord) -> bool:
    return method.full_name.startswith(LAMBDA_METHOD_PREFIX)


def coverage_percentage(counter: CounterRecord) -> Decimal | None:
    """100 * covered / total, rounded half away from zero; None without data."""
    if counter.total == 0:
        return None
    value = Decimal(100 * counter.covered) / Decimal(counter.total)
    return value.quantize(_QUANTUM, rounding=ROUND_HALF_UP)


def _coverage_metric(name: str, value: Decimal | None) -> Metric:
    return Metric(
        name=name,
        explanation_url=CODE_COVERAGE_URL,
        metric_type=MetricType.COVERAGE_PERCENTUAL,
        value=value,
    )


def extract_method_metrics(methods: Iterable[MethodRecord]) -> list[MethodMetric]:
    """Build Coverage / Branch coverage metrics for each reportable method.

    Lambdas and methods without a LINE counter are skipped. A missing BRANCH
    counter still yields a Branch coverage metric without value.
    """
    result: list[MethodMetric] = []

    for method in methods:
        if is_lambda(method):
            continue

        line_counter = method.counter(LINE_COUNTER)
        if line_counter is None:
            continue

        branch_counter = method.counter(BRANCH_COUNTER)
        metrics = [
            _coverage_metric(COVERAGE_METRIC, coverage_percentage(line_counter)),
            _coverage_metric(
                BRANCH_COVERAGE_METRIC,
                coverage_percentage(branch_counter) if branch_counter is not None else None,
            ),
        ]

        result.append(
            MethodMetric(
                full_name=method.full_name,
                short_name=short_signature(method.full_name),
                metrics=metrics,
                line=method.line,
            )
        )

    return result


def assign_code_elements(
    code_file: CodeFile,
    methods: Sequence[MethodRecord],
    total_lines: int,
) -> list[CodeElement]:
    """Turn method start lines into contiguous ranges covering the file.

    Each element ends one line before the next element starts; the last one
    ends at total_lines. Quotas are computed against code_file.
    """
    starts = sorted(
        ((element_signature(m.full_name), m.line or 0) for m in methods if not is_lambda(m)),
        key=lambda item: item[1],
    )

    elements: list[CodeElement] = []
    for index, (name, first_line) in enumerate(starts):
        last_line = starts[index + 1][1] - 1 if index + 1 < len(starts) else total_lines
        elements.append(
            CodeElement(
                name=name,
                kind=CodeElementType.METHOD,
                first_line=first_line,
                last_line=last_line,
                coverage_quota=code_file.coverage_quota(first_line, last_line),
            )
        )
    return elements
