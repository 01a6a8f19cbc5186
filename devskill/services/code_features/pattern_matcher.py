"""
Structure counts and complexity estimates from per-language regex tables.
"""

from dataclasses import dataclass
from typing import List, Pattern

from devskill.services.code_features.patterns import (
    CONTROL_FLOW_PATTERNS,
    class_patterns_for,
    function_patterns_for,
    import_patterns_for,
)


@dataclass(frozen=True)
class StructureCounts:
    function_count: int = 0
    class_count: int = 0
    import_count: int = 0


@dataclass(frozen=True)
class ComplexityMetrics:
    cyclomatic_complexity: int = 1
    nesting_depth: int = 0


def _matches_any(patterns: List[Pattern], line: str) -> bool:
    return any(p.search(line) for p in patterns)


def count_structures(lines: List[str], language_tag: str) -> StructureCounts:
    """
    Count lines declaring functions, classes and imports.

    Each line adds at most one to each category no matter how many patterns
    of that category it matches.
    """
    function_patterns = function_patterns_for(language_tag)
    class_patterns = class_patterns_for(language_tag)
    import_patterns = import_patterns_for(language_tag)

    functions = classes = imports = 0
    for line in lines:
        if _matches_any(function_patterns, line):
            functions += 1
        if _matches_any(class_patterns, line):
            classes += 1
        if _matches_any(import_patterns, line):
            imports += 1

    return StructureCounts(function_count=functions, class_count=classes, import_count=imports)


def measure_complexity(lines: List[str]) -> ComplexityMetrics:
    """
    Estimate cyclomatic complexity and brace nesting depth.

    Braces are counted raw: braces inside strings or comments skew the depth,
    and the running counter may go negative on unbalanced input. Only the
    maximum (floored at 0) is reported.
    """
    complexity = 1
    depth = 0
    max_depth = 0

    for line in lines:
        trimmed = line.strip()

        for pattern in CONTROL_FLOW_PATTERNS:
            complexity += len(pattern.findall(trimmed))

        depth += trimmed.count("{") - trimmed.count("}")
        max_depth = max(max_depth, depth)

    return ComplexityMetrics(cyclomatic_complexity=complexity, nesting_depth=max_depth)
