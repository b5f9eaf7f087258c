"""Report format constants.

Values fixed by the JaCoCo XML format and by the coverage model.
These are not user-configurable; see models.py for configurable values.
"""

# =============================================================================
# JaCoCo naming conventions
# =============================================================================

NESTED_CLASS_SEPARATOR = "$"
"""Separates an inner/nested class name from its outer class name."""

LAMBDA_METHOD_PREFIX = "lambda$"
"""Prefix of compiler-synthesized lambda methods, which are not reported."""

LINE_COUNTER = "LINE"
BRANCH_COUNTER = "BRANCH"

# =============================================================================
# Metrics
# =============================================================================

COVERAGE_METRIC = "Coverage"
BRANCH_COVERAGE_METRIC = "Branch coverage"

CODE_COVERAGE_URL = "https://en.wikipedia.org/wiki/Code_coverage"
"""Stable explanation reference attached to every coverage metric."""

METRIC_DECIMALS = 2
"""Decimal places of method coverage percentages."""

# =============================================================================
# Coverage array values
# =============================================================================

LINE_NOT_INSTRUMENTED = -1
LINE_NOT_COVERED = 0
LINE_COVERED = 1

PARSER_NAME = "JacocoParser"
