from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List

from devskill.core.numeric import safe_ratio
from devskill.services.behavior_engine.metrics import FileCounters

UNKNOWN_PRIMARY_LANGUAGE = "unknown"


@dataclass
class BehavioralMetrics:
    """
    Session-level behavior aggregated over one or more FileCounters.
    Input to the SkillScorer.
    """
    # Typing
    typing_to_total_ratio: float = 0.0
    average_typing_speed: float = 0.0   # typed chars per active minute
    keystroke_count: int = 0
    paste_count: int = 0

    # Edits
    edit_count: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    backspace_ratio: float = 0.0

    # Time
    active_time_ms: int = 0
    idle_time_ms: int = 0
    focus_ratio: float = 0.0

    # Languages (first-encountered order)
    languages: List[str] = field(default_factory=list)
    primary_language: str = UNKNOWN_PRIMARY_LANGUAGE
    language_distribution: Dict[str, float] = field(default_factory=dict)

    # Files
    file_count: int = 0
    average_file_active_time: float = 0.0
    file_switch_count: int = 0

    @property
    def edits_per_minute(self) -> float:
        return safe_ratio(self.edit_count, self.active_time_ms / 60000)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def aggregate_behavior(
    counters: Iterable[FileCounters],
    active_time_ms: int,
    idle_time_ms: int,
) -> BehavioralMetrics:
    """
    Sum per-file counters into BehavioralMetrics.

    ``counters`` is materialized into a list first; pass a snapshot if the
    session may still be receiving events.
    """
    files = list(counters)

    keystrokes = sum(f.keystroke_count for f in files)
    pastes = sum(f.paste_count for f in files)
    lines_added = sum(f.lines_added for f in files)
    lines_deleted = sum(f.lines_deleted for f in files)
    edits = sum(f.edit_count for f in files)

    language_counts: Dict[str, int] = {}
    for f in files:
        language_counts[f.language] = language_counts.get(f.language, 0) + 1

    languages = list(language_counts)
    primary = UNKNOWN_PRIMARY_LANGUAGE
    best = 0
    for lang in languages:
        # Strictly greater: ties keep the first-encountered language.
        if language_counts[lang] > best:
            primary, best = lang, language_counts[lang]

    total_files = len(files)
    distribution = {
        lang: count / total_files * 100 for lang, count in language_counts.items()
    }

    return BehavioralMetrics(
        typing_to_total_ratio=safe_ratio(keystrokes, keystrokes + pastes),
        average_typing_speed=safe_ratio(keystrokes, active_time_ms / 60000),
        keystroke_count=keystrokes,
        paste_count=pastes,
        edit_count=edits,
        lines_added=lines_added,
        lines_deleted=lines_deleted,
        backspace_ratio=safe_ratio(lines_deleted, lines_added),
        active_time_ms=active_time_ms,
        idle_time_ms=idle_time_ms,
        focus_ratio=safe_ratio(active_time_ms, active_time_ms + idle_time_ms),
        languages=languages,
        primary_language=primary,
        language_distribution=distribution,
        file_count=total_files,
        average_file_active_time=safe_ratio(sum(f.active_time_ms for f in files), total_files),
        file_switch_count=sum(f.switch_to_count + f.switch_from_count for f in files),
    )
