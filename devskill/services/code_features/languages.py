"""
Language detection from file paths.

Maps file extensions to display names and normalizes those names to the
short language tags used to select pattern tables.
"""

import os

UNKNOWN_LANGUAGE = "Unknown"
DEFAULT_TAG = "default"

EXTENSION_MAP = {
    # JavaScript/TypeScript
    ".js": "JavaScript",
    ".jsx": "JavaScript React",
    ".ts": "TypeScript",
    ".tsx": "TypeScript React",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",

    # Python
    ".py": "Python",
    ".pyw": "Python",
    ".pyx": "Python",

    # JVM
    ".java": "Java",
    ".class": "Java Bytecode",
    ".jar": "Java Archive",
    ".kt": "Kotlin",
    ".kts": "Kotlin Script",
    ".scala": "Scala",

    # C family
    ".c": "C",
    ".cpp": "C++",
    ".cxx": "C++",
    ".cc": "C++",
    ".h": "C Header",
    ".hpp": "C++ Header",
    ".hxx": "C++ Header",
    ".cs": "C#",
    ".csx": "C# Script",

    ".go": "Go",
    ".rs": "Rust",
    ".rb": "Ruby",
    ".erb": "Ruby ERB",
    ".php": "PHP",
    ".phtml": "PHP",
    ".swift": "Swift",
    ".hs": "Haskell",
    ".lua": "Lua",
    ".r": "R",
    ".dart": "Dart",
    ".sql": "SQL",

    # Web
    ".html": "HTML",
    ".htm": "HTML",
    ".css": "CSS",
    ".scss": "SCSS",
    ".sass": "Sass",
    ".less": "Less",
    ".vue": "Vue",
    ".svelte": "Svelte",

    # Shell
    ".sh": "Shell",
    ".bash": "Bash",
    ".zsh": "Zsh",
    ".fish": "Fish",

    # Config / data / prose
    ".json": "JSON",
    ".xml": "XML",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".toml": "TOML",
    ".ini": "INI",
    ".md": "Markdown",
    ".markdown": "Markdown",
    ".txt": "Plain Text",
    ".log": "Log File",
}

NON_CODE_LANGUAGES = {
    UNKNOWN_LANGUAGE, "JSON", "XML", "YAML", "TOML", "INI",
    "Plain Text", "Log File", "Markdown",
}


def get_extension(file_path: str) -> str:
    """Lower-cased extension without the leading dot ('' when there is none)."""
    _, ext = os.path.splitext(os.path.basename(file_path or ""))
    return ext[1:].lower() if ext else ""


def detect_language(file_path: str) -> str:
    ext = get_extension(file_path)
    if not ext:
        return UNKNOWN_LANGUAGE
    return EXTENSION_MAP.get("." + ext, UNKNOWN_LANGUAGE)


def is_code_file(file_path: str) -> bool:
    """False for unknown extensions and for config, data and prose formats."""
    return detect_language(file_path) not in NON_CODE_LANGUAGES


def language_tag(language: str) -> str:
    """
    Normalize a display name ("TypeScript React", "C# Script") to a pattern
    table key. Anything unrecognized, including malformed input, maps to
    ``default``.
    """
    lang = (language or "").lower()

    if "python" in lang:
        return "python"
    if "java" in lang and "javascript" not in lang:
        return "java"
    if "c#" in lang:
        return "csharp"
    if "go" in lang:
        return "go"
    if "rust" in lang:
        return "rust"
    if "ruby" in lang:
        return "ruby"
    if "html" in lang:
        return "html"
    if "css" in lang or "scss" in lang or "sass" in lang:
        return "css"
    if "shell" in lang or "bash" in lang:
        return "shell"

    return DEFAULT_TAG
