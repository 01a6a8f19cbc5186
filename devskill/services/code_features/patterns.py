"""
Per-language pattern tables for the heuristic scanners.

Each table maps a language tag to a plain record or pattern list and always
carries a ``default`` entry. Lookups go through the ``*_for`` helpers so an
unknown or malformed tag silently falls back to the default table.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Tuple


@dataclass(frozen=True)
class CommentPatterns:
    """Comment syntax for one language family."""
    single_line: Tuple[Pattern, ...]
    block_start: Pattern
    block_end: Pattern
    docstring: Optional[Pattern] = None


# ---------------------------------------------------------
# 1. COMMENTS
# ---------------------------------------------------------

COMMENT_PATTERNS: Dict[str, CommentPatterns] = {
    "default": CommentPatterns(
        single_line=(re.compile(r"^\s*//"),),
        block_start=re.compile(r"/\*"),
        block_end=re.compile(r"\*/"),
    ),
    "python": CommentPatterns(
        single_line=(re.compile(r"^\s*#"),),
        block_start=re.compile(r"'''"),
        block_end=re.compile(r"'''"),
        docstring=re.compile(r'^\s*"""'),
    ),
    "ruby": CommentPatterns(
        single_line=(re.compile(r"^\s*#"),),
        block_start=re.compile(r"=begin"),
        block_end=re.compile(r"=end"),
    ),
    "html": CommentPatterns(
        single_line=(),
        block_start=re.compile(r"<!--"),
        block_end=re.compile(r"-->"),
    ),
    "css": CommentPatterns(
        single_line=(),
        block_start=re.compile(r"/\*"),
        block_end=re.compile(r"\*/"),
    ),
    "shell": CommentPatterns(
        single_line=(re.compile(r"^\s*#"),),
        block_start=re.compile(r": '"),
        block_end=re.compile(r"'"),
    ),
}


# ---------------------------------------------------------
# 2. CODE STRUCTURE
# ---------------------------------------------------------

FUNCTION_PATTERNS: Dict[str, List[Pattern]] = {
    "default": [
        re.compile(r"function\s+\w+"),
        re.compile(r"\w+\s*=\s*function"),
        re.compile(r"\w+\s*=\s*\([^)]*\)\s*=>"),
        re.compile(r"\w+\s*:\s*function"),
    ],
    "python": [
        re.compile(r"^\s*def\s+\w+"),
        re.compile(r"^\s*async\s+def\s+\w+"),
    ],
    "java": [
        re.compile(r"\b(public|private|protected|static)?\s*(void|int|String|boolean|\w+)\s+\w+\s*\("),
    ],
    "csharp": [
        re.compile(r"\b(public|private|protected|internal|static)?\s*(void|int|string|bool|\w+)\s+\w+\s*\("),
    ],
    "go": [
        re.compile(r"^\s*func\s+(\([^)]+\)\s*)?\w+"),
    ],
    "rust": [
        re.compile(r"^\s*(pub\s+)?fn\s+\w+"),
    ],
    "ruby": [
        re.compile(r"^\s*def\s+\w+"),
    ],
}

CLASS_PATTERNS: Dict[str, List[Pattern]] = {
    "default": [
        re.compile(r"\bclass\s+\w+"),
    ],
    "python": [
        re.compile(r"^\s*class\s+\w+"),
    ],
    "java": [
        re.compile(r"\b(public|private|protected)?\s*class\s+\w+"),
        re.compile(r"\binterface\s+\w+"),
    ],
    "go": [
        re.compile(r"^\s*type\s+\w+\s+struct"),
    ],
    "rust": [
        re.compile(r"^\s*(pub\s+)?struct\s+\w+"),
        re.compile(r"^\s*(pub\s+)?enum\s+\w+"),
    ],
}

IMPORT_PATTERNS: Dict[str, List[Pattern]] = {
    "default": [
        re.compile(r"^\s*import\s+"),
        re.compile(r"^\s*from\s+.+\s+import"),
        re.compile(r"\brequire\s*\("),
    ],
    "python": [
        re.compile(r"^\s*import\s+"),
        re.compile(r"^\s*from\s+.+\s+import"),
    ],
    "java": [
        re.compile(r"^\s*import\s+"),
        re.compile(r"^\s*package\s+"),
    ],
    "go": [
        re.compile(r"^\s*import\s+"),
    ],
    "rust": [
        re.compile(r"^\s*use\s+"),
        re.compile(r"^\s*extern\s+crate"),
    ],
    "csharp": [
        re.compile(r"^\s*using\s+"),
    ],
}


# ---------------------------------------------------------
# 3. COMPLEXITY
# ---------------------------------------------------------

CONTROL_FLOW_KEYWORDS = [
    "if", "else", "elif", "for", "while", "switch", "case",
    "try", "catch", "except", "finally", "with", "match",
    "&&", "||", "?", "??",
]


def _keyword_regex(keyword: str) -> Pattern:
    # Tokens of two characters or fewer ("if", "&&", "?") are matched literally,
    # longer keywords on word boundaries.
    if len(keyword) <= 2:
        return re.compile(re.escape(keyword))
    return re.compile(r"\b" + re.escape(keyword) + r"\b")


CONTROL_FLOW_PATTERNS: List[Pattern] = [_keyword_regex(k) for k in CONTROL_FLOW_KEYWORDS]


# ---------------------------------------------------------
# 4. NAMING
# ---------------------------------------------------------

# One shared superset across languages.
COMMON_KEYWORDS = frozenset([
    "if", "else", "for", "while", "do", "switch", "case", "break", "continue",
    "return", "function", "class", "const", "let", "var", "import", "export",
    "from", "try", "catch", "finally", "throw", "new", "this", "super",
    "public", "private", "protected", "static", "void", "int", "string",
    "boolean", "true", "false", "null", "undefined", "async", "await",
    "def", "self", "None", "True", "False", "and", "or", "not", "in",
    "fn", "mut", "pub", "impl", "struct", "enum", "trait",
    "func", "package", "type", "interface", "map", "range", "defer",
])


def is_keyword(word: str) -> bool:
    return word in COMMON_KEYWORDS or word.lower() in COMMON_KEYWORDS


# ---------------------------------------------------------
# LOOKUPS
# ---------------------------------------------------------

def comment_patterns_for(tag: str) -> CommentPatterns:
    return COMMENT_PATTERNS.get(tag, COMMENT_PATTERNS["default"])


def function_patterns_for(tag: str) -> List[Pattern]:
    return FUNCTION_PATTERNS.get(tag, FUNCTION_PATTERNS["default"])


def class_patterns_for(tag: str) -> List[Pattern]:
    return CLASS_PATTERNS.get(tag, CLASS_PATTERNS["default"])


def import_patterns_for(tag: str) -> List[Pattern]:
    return IMPORT_PATTERNS.get(tag, IMPORT_PATTERNS["default"])
