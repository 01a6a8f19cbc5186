"""
Language-independent structural and quality signals derived from line text.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import List

from devskill.core.numeric import round2, safe_ratio

LONG_LINE_THRESHOLD = 100
MAX_INDENT_SIZE = 8
DEFAULT_INDENT_SIZE = 2

_LEADING_WHITESPACE = re.compile(r"^(\s+)")
_EMPTY_BRACES = re.compile(r"\{\s*\}")
_PASS_STATEMENT = re.compile(r"^\s*pass\s*$", re.MULTILINE)


@dataclass(frozen=True)
class StructuralMetrics:
    average_line_length: float
    max_line_length: int
    indentation_consistency: float
    indentation_style: str  # "spaces" | "tabs" | "mixed"
    indentation_size: int


@dataclass(frozen=True)
class QualityMetrics:
    duplicate_line_ratio: float
    long_line_ratio: float
    empty_block_count: int


def scan_structure(lines: List[str]) -> StructuralMetrics:
    lengths = [len(line) for line in lines]
    average = safe_ratio(sum(lengths), len(lengths))
    longest = max(lengths, default=0)

    tab_lines = 0
    space_lines = 0
    space_indents: List[int] = []

    for line in lines:
        match = _LEADING_WHITESPACE.match(line)
        if not match:
            continue
        indent = match.group(1)
        if "\t" in indent:
            tab_lines += 1
        else:
            space_lines += 1
            space_indents.append(len(indent))

    style = "spaces"
    if tab_lines > 0 and space_lines > 0:
        style = "mixed"
    elif tab_lines > space_lines:
        style = "tabs"

    size = DEFAULT_INDENT_SIZE
    if space_indents:
        size = min(min(space_indents), MAX_INDENT_SIZE)

    if space_indents:
        consistent = sum(1 for width in space_indents if width % size == 0)
        consistency = consistent / len(space_indents)
    else:
        consistency = 1.0

    return StructuralMetrics(
        average_line_length=round2(average),
        max_line_length=longest,
        indentation_consistency=round2(consistency),
        indentation_style=style,
        indentation_size=size,
    )


def scan_quality(lines: List[str]) -> QualityMetrics:
    """Duplicate lines, overlong lines and empty blocks."""
    normalized = [line.strip() for line in lines if line.strip()]
    occurrences = Counter(normalized)
    duplicates = sum(count - 1 for count in occurrences.values() if count > 1)

    long_lines = sum(1 for line in lines if len(line) > LONG_LINE_THRESHOLD)

    full_text = "\n".join(lines)
    empty_blocks = len(_EMPTY_BRACES.findall(full_text)) + len(_PASS_STATEMENT.findall(full_text))

    return QualityMetrics(
        duplicate_line_ratio=round2(safe_ratio(duplicates, len(normalized))),
        long_line_ratio=round2(safe_ratio(long_lines, len(lines))),
        empty_block_count=empty_blocks,
    )
