"""
Identifier naming-convention metrics.
"""

import re
from dataclasses import dataclass

from devskill.core.numeric import round2
from devskill.services.code_features.patterns import is_keyword

_IDENTIFIER = re.compile(r"\b([a-zA-Z_][a-zA-Z0-9_]*)\b", re.ASCII)
_SINGLE_CHAR = re.compile(r"\b([a-zA-Z])\b", re.ASCII)
_CAMEL_CASE = re.compile(r"[a-z][A-Z]")
_SNAKE_CASE = re.compile(r"[a-z]_[a-z]")


@dataclass(frozen=True)
class NamingMetrics:
    average_variable_name_length: float = 0.0
    camel_case_ratio: float = 0.0
    snake_case_ratio: float = 0.0
    single_char_var_count: int = 0


def analyze_naming(code: str) -> NamingMetrics:
    """
    Naming-convention ratios over identifiers longer than one character.

    camelCase and snake_case are not exclusive: ``parse_jsonValue`` counts
    toward both. Single-letter names are counted in a separate scan.
    """
    identifiers = [
        name for name in _IDENTIFIER.findall(code)
        if len(name) > 1 and not is_keyword(name)
    ]
    if not identifiers:
        return NamingMetrics()

    total = len(identifiers)
    camel = sum(1 for name in identifiers if _CAMEL_CASE.search(name))
    snake = sum(1 for name in identifiers if _SNAKE_CASE.search(name))
    single_chars = sum(1 for name in _SINGLE_CHAR.findall(code) if not is_keyword(name))

    return NamingMetrics(
        average_variable_name_length=round2(sum(len(name) for name in identifiers) / total),
        camel_case_ratio=round2(camel / total),
        snake_case_ratio=round2(snake / total),
        single_char_var_count=single_chars,
    )
