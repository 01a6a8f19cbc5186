from dataclasses import dataclass
from enum import Enum
from typing import Optional

from devskill.core.numeric import safe_ratio
from devskill.services.behavior_engine.metrics import EditDelta, FileCounters, SessionTotals


class EstimatedSource(str, Enum):
    CLIPBOARD = "clipboard"
    AUTOCOMPLETE = "autocomplete"


@dataclass(frozen=True)
class PasteClassification:
    is_paste: bool
    estimated_source: Optional[EstimatedSource] = None


class PasteClassifier:
    """
    Labels each edit delta as typing or paste.

    A pure function of the current delta and the gap to the previous delta on
    the SAME file. Rules are evaluated in order; the first match wins.

    Calibration assumes a sustained human typing ceiling of roughly
    3 characters per second (~200 chars/min).
    """

    # ---------------------------------------------------------
    # 1. THRESHOLDS
    # ---------------------------------------------------------

    TYPING_CEILING_CHARS = 30
    # At or below this size an insertion is always typing, even when instant.

    MULTILINE_MIN_LINES = 3
    MULTILINE_MAX_GAP_MS = 50

    BULK_INSERT_CHARS = 300
    # 300 chars would take ~100 seconds to type; timing is irrelevant.

    # (min characters exclusive, max gap exclusive) pairs, widest gap first.
    INSTANT_INSERT_RULES = (
        (150, 20),
        (100, 10),
        (50, 5),
    )

    CLIPBOARD_SOURCE_CHARS = 200

    # ---------------------------------------------------------
    # 2. CLASSIFICATION
    # ---------------------------------------------------------

    def classify(self, delta: EditDelta, gap_ms: float) -> PasteClassification:
        """
        Args:
            delta: The edit being classified
            gap_ms: Milliseconds since the previous edit on the same file

        Returns:
            PasteClassification with ``is_paste`` and, for pastes, an
            estimated source.
        """
        if self._is_paste(delta.characters_added, gap_ms, delta.lines_added):
            source = (
                EstimatedSource.CLIPBOARD
                if delta.characters_added > self.CLIPBOARD_SOURCE_CHARS
                else EstimatedSource.AUTOCOMPLETE
            )
            return PasteClassification(is_paste=True, estimated_source=source)
        return PasteClassification(is_paste=False)

    def _is_paste(self, characters_added: int, gap_ms: float, lines_added: int) -> bool:
        if characters_added <= self.TYPING_CEILING_CHARS:
            return False

        if lines_added >= self.MULTILINE_MIN_LINES and gap_ms < self.MULTILINE_MAX_GAP_MS:
            return True

        if characters_added > self.BULK_INSERT_CHARS:
            return True

        for min_chars, max_gap_ms in self.INSTANT_INSERT_RULES:
            if characters_added > min_chars and gap_ms < max_gap_ms:
                return True

        return False

    # ---------------------------------------------------------
    # 3. COUNTER UPDATES
    # ---------------------------------------------------------

    def apply(
        self,
        counters: FileCounters,
        delta: EditDelta,
        classification: PasteClassification,
        totals: Optional[SessionTotals] = None,
    ) -> None:
        """
        Fold one classified delta into the file's counters (and the session
        totals when given). The caller must serialize calls per file.
        """
        if classification.is_paste:
            counters.paste_count += 1
            if totals is not None:
                totals.pastes += 1
        else:
            counters.keystroke_count += delta.characters_added
            if totals is not None:
                totals.keystrokes += delta.characters_added

        counters.edit_count += 1
        counters.lines_added += delta.lines_added
        counters.lines_deleted += delta.lines_deleted
        counters.average_edit_size += (
            delta.characters_added - counters.average_edit_size
        ) / counters.edit_count
        if totals is not None:
            totals.edits += 1

        # Characters over (characters + paste events).
        counters.typing_to_total_ratio = safe_ratio(
            counters.keystroke_count,
            counters.keystroke_count + counters.paste_count,
        )

    def classify_and_apply(
        self,
        counters: FileCounters,
        delta: EditDelta,
        gap_ms: float,
        totals: Optional[SessionTotals] = None,
    ) -> PasteClassification:
        classification = self.classify(delta, gap_ms)
        self.apply(counters, delta, classification, totals)
        return classification
