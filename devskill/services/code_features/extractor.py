"""
Privacy-safe code feature extraction.

IMPORTANT: source text is processed in memory for the duration of one call.
It is never stored, logged or returned; only the numeric and enumerated
fields of CodeFeatures leave this module.
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from devskill.core.config import DEFAULT_MAX_ANALYSIS_BYTES, DEFAULT_MIN_ANALYSIS_CHARS
from devskill.core.numeric import round2, safe_ratio
from devskill.services.behavior_engine.metrics import FileCounters
from devskill.services.code_features.languages import (
    detect_language,
    get_extension,
    is_code_file,
    language_tag,
)
from devskill.services.code_features.line_classifier import classify_lines, count_comment_kinds
from devskill.services.code_features.naming import analyze_naming
from devskill.services.code_features.pattern_matcher import count_structures, measure_complexity
from devskill.services.code_features.structural import scan_quality, scan_structure

logger = logging.getLogger(__name__)

# Bump when extraction logic changes; cached features with another version
# must be re-extracted.
EXTRACTION_VERSION = "1.0.0"


@dataclass(frozen=True)
class TemporalMetrics:
    typing_speed: float = 0.0     # characters per active second
    edit_frequency: float = 0.0   # edits per active minute
    paste_ratio: float = 0.0      # paste events / (typed characters + paste events)


@dataclass(frozen=True)
class CodeFeatures:
    """Numeric summary of one snippet. Contains no source text."""

    # Basic metrics
    total_lines: int
    code_lines: int
    comment_lines: int
    blank_lines: int

    # Structural metrics
    average_line_length: float
    max_line_length: int
    indentation_consistency: float
    indentation_style: str
    indentation_size: int

    # Comment metrics
    comment_density: float
    block_comment_count: int
    inline_comment_count: int
    docstring_count: int

    # Code structure
    function_count: int
    class_count: int
    import_count: int

    # Complexity
    cyclomatic_complexity: int
    nesting_depth: int

    # Naming
    average_variable_name_length: float
    camel_case_ratio: float
    snake_case_ratio: float
    single_char_var_count: int

    # Quality
    duplicate_line_ratio: float
    long_line_ratio: float
    empty_block_count: int

    # Temporal (from tracking counters)
    typing_speed: float
    edit_frequency: float
    paste_ratio: float

    # Metadata
    language: str
    language_tag: str
    file_extension: str
    extraction_timestamp: int
    extraction_version: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class FeatureExtractor:
    """
    Orchestrates the line, structural, pattern and naming scanners into one
    versioned CodeFeatures record.
    """

    @staticmethod
    def should_analyze(
        file_path: str,
        content_length: int,
        min_length: int = DEFAULT_MIN_ANALYSIS_CHARS,
        max_length: int = DEFAULT_MAX_ANALYSIS_BYTES,
    ) -> bool:
        """
        Eligibility gate. Callers must check this before ``extract``;
        extraction itself does not re-check the size bounds.
        """
        if not is_code_file(file_path):
            return False
        if content_length < min_length:
            return False
        if content_length > max_length:
            return False
        return True

    @staticmethod
    def extract(
        code: str,
        file_path: str,
        counters: Optional[FileCounters] = None,
    ) -> CodeFeatures:
        """
        Extract features from code content.

        Args:
            code: Raw source, processed in memory only
            file_path: Used for language detection
            counters: Optional tracking counters for the temporal features

        Returns:
            CodeFeatures (privacy-safe, no raw code)
        """
        logger.debug(f"Extracting features from {file_path}")

        language = detect_language(file_path)
        tag = language_tag(language)
        # CRLF and LF sources yield the same lines.
        lines = [line.rstrip("\r") for line in code.split("\n")]

        line_counts = classify_lines(lines, tag)
        total_lines = len(lines)
        code_lines = max(0, total_lines - line_counts.blank_lines - line_counts.comment_lines)

        structure = scan_structure(lines)
        comments = count_comment_kinds(lines, tag, code_lines)
        declarations = count_structures(lines, tag)
        complexity = measure_complexity(lines)
        naming = analyze_naming(code)
        quality = scan_quality(lines)
        temporal = FeatureExtractor.temporal_metrics(counters)

        features = CodeFeatures(
            total_lines=total_lines,
            code_lines=code_lines,
            comment_lines=line_counts.comment_lines,
            blank_lines=line_counts.blank_lines,
            average_line_length=structure.average_line_length,
            max_line_length=structure.max_line_length,
            indentation_consistency=structure.indentation_consistency,
            indentation_style=structure.indentation_style,
            indentation_size=structure.indentation_size,
            comment_density=comments.comment_density,
            block_comment_count=comments.block_comment_count,
            inline_comment_count=comments.inline_comment_count,
            docstring_count=comments.docstring_count,
            function_count=declarations.function_count,
            class_count=declarations.class_count,
            import_count=declarations.import_count,
            cyclomatic_complexity=complexity.cyclomatic_complexity,
            nesting_depth=complexity.nesting_depth,
            average_variable_name_length=naming.average_variable_name_length,
            camel_case_ratio=naming.camel_case_ratio,
            snake_case_ratio=naming.snake_case_ratio,
            single_char_var_count=naming.single_char_var_count,
            duplicate_line_ratio=quality.duplicate_line_ratio,
            long_line_ratio=quality.long_line_ratio,
            empty_block_count=quality.empty_block_count,
            typing_speed=temporal.typing_speed,
            edit_frequency=temporal.edit_frequency,
            paste_ratio=temporal.paste_ratio,
            language=language,
            language_tag=tag,
            file_extension=get_extension(file_path),
            extraction_timestamp=int(time.time() * 1000),
            extraction_version=EXTRACTION_VERSION,
        )

        logger.debug(
            f"Features extracted for {file_path}: total_lines={features.total_lines}, "
            f"code_lines={features.code_lines}, complexity={features.cyclomatic_complexity}"
        )
        return features

    @staticmethod
    def temporal_metrics(counters: Optional[FileCounters]) -> TemporalMetrics:
        if counters is None:
            return TemporalMetrics()

        active_seconds = counters.active_time_ms / 1000
        active_minutes = counters.active_time_ms / 60000
        total_inputs = counters.keystroke_count + counters.paste_count

        return TemporalMetrics(
            typing_speed=round2(safe_ratio(counters.keystroke_count, active_seconds)),
            edit_frequency=round2(safe_ratio(counters.edit_count, active_minutes)),
            paste_ratio=round2(safe_ratio(counters.paste_count, total_inputs)),
        )


should_analyze = FeatureExtractor.should_analyze
extract = FeatureExtractor.extract
