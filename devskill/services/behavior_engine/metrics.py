from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class EditDelta:
    """
    One text-change event reported by the editor for a single file.
    Consumed immediately by the PasteClassifier, never stored.
    """
    characters_added: int
    characters_deleted: int
    lines_added: int
    lines_deleted: int
    timestamp_ms: int

    @property
    def is_empty(self) -> bool:
        return self.characters_added == 0 and self.characters_deleted == 0


@dataclass
class FileCounters:
    """
    Mutable per-file counters for one tracking session.

    keystroke_count counts typed CHARACTERS while paste_count counts paste
    EVENTS; ratios built from the two inherit that asymmetry.
    """
    path: str
    language: str
    first_seen: int = 0
    last_active_timestamp: int = 0

    # Typing
    keystroke_count: int = 0
    paste_count: int = 0
    typing_to_total_ratio: float = 0.0

    # Edits
    edit_count: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    average_edit_size: float = 0.0

    # Time
    active_time_ms: int = 0
    idle_time_ms: int = 0
    total_time_ms: int = 0

    # File interaction
    switch_to_count: int = 0
    switch_from_count: int = 0
    open_count: int = 0

    # Feature extraction bookkeeping
    code_analysis_count: int = 0
    last_analysis_timestamp: Optional[int] = None


@dataclass
class SessionTotals:
    """Session-wide aggregates, updated alongside the per-file counters."""
    keystrokes: int = 0
    pastes: int = 0
    edits: int = 0
    active_time_ms: int = 0
    idle_time_ms: int = 0
    code_analyses: int = 0
    files_edited: List[str] = field(default_factory=list)
    languages_used: List[str] = field(default_factory=list)
