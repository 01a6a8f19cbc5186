"""
Line classification: blank, comment or code.

Both passes are folds over the line list with a small immutable state record,
so the classifier holds no instance state between calls.
"""

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, List

from devskill.core.numeric import round2, safe_ratio
from devskill.services.code_features.patterns import CommentPatterns, comment_patterns_for


@dataclass(frozen=True)
class LineCounts:
    """Running tally for the classification fold."""
    blank_lines: int = 0
    comment_lines: int = 0
    code_lines: int = 0
    inside_block_comment: bool = False

    @property
    def total_lines(self) -> int:
        return self.blank_lines + self.comment_lines + self.code_lines


@dataclass(frozen=True)
class CommentMetrics:
    comment_density: float = 0.0
    block_comment_count: int = 0
    inline_comment_count: int = 0
    docstring_count: int = 0


def _opens_unclosed_block(trimmed: str, patterns: CommentPatterns) -> bool:
    # Strip the first block-start marker so "/* note */" does not stay open.
    remainder = patterns.block_start.sub("", trimmed, count=1)
    return patterns.block_end.search(remainder) is None


def _classify_step(patterns: CommentPatterns):
    def step(state: LineCounts, line: str) -> LineCounts:
        trimmed = line.strip()

        if not trimmed:
            return replace(state, blank_lines=state.blank_lines + 1)

        if state.inside_block_comment:
            return replace(
                state,
                comment_lines=state.comment_lines + 1,
                inside_block_comment=patterns.block_end.search(trimmed) is None,
            )

        if patterns.block_start.search(trimmed):
            return replace(
                state,
                comment_lines=state.comment_lines + 1,
                inside_block_comment=_opens_unclosed_block(trimmed, patterns),
            )

        if any(p.search(trimmed) for p in patterns.single_line):
            return replace(state, comment_lines=state.comment_lines + 1)

        return replace(state, code_lines=state.code_lines + 1)

    return step


def classify_lines(lines: Iterable[str], language_tag: str) -> LineCounts:
    """
    Count blank, comment and code lines.

    An unterminated block comment swallows every remaining non-blank line as
    a comment.
    """
    patterns = comment_patterns_for(language_tag)
    return reduce(_classify_step(patterns), lines, LineCounts())


@dataclass(frozen=True)
class _CommentKindState:
    block: int = 0
    inline: int = 0
    docstring: int = 0
    inside_block_comment: bool = False


def _comment_kind_step(patterns: CommentPatterns):
    def step(state: _CommentKindState, line: str) -> _CommentKindState:
        trimmed = line.strip()

        if state.inside_block_comment:
            if patterns.block_end.search(trimmed):
                return replace(state, inside_block_comment=False)
            return state

        if patterns.docstring is not None and patterns.docstring.search(trimmed):
            return replace(state, docstring=state.docstring + 1)

        if patterns.block_start.search(trimmed):
            return replace(
                state,
                block=state.block + 1,
                inside_block_comment=_opens_unclosed_block(trimmed, patterns),
            )

        if any(p.search(trimmed) for p in patterns.single_line):
            return replace(state, inline=state.inline + 1)

        return state

    return step


def count_comment_kinds(lines: List[str], language_tag: str, code_lines: int) -> CommentMetrics:
    """Count block comments, single-line comments and docstring openers."""
    patterns = comment_patterns_for(language_tag)
    state = reduce(_comment_kind_step(patterns), lines, _CommentKindState())

    total_comments = state.block + state.inline + state.docstring
    return CommentMetrics(
        comment_density=round2(safe_ratio(total_comments, code_lines)),
        block_comment_count=state.block,
        inline_comment_count=state.inline,
        docstring_count=state.docstring,
    )
