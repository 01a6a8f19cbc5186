import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List

from devskill.core.numeric import round_score
from devskill.services.behavior_engine.metrics import FileCounters
from devskill.services.skill_engine.behavioral import BehavioralMetrics, aggregate_behavior
from devskill.services.skill_engine.resources import (
    RECOMMENDATION_TEMPLATES,
    LearningResource,
    SkillCategory,
)

logger = logging.getLogger(__name__)


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class SkillScore:
    category: SkillCategory
    score: int
    level: SkillLevel
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "score": self.score,
            "level": self.level.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class SkillProfile:
    overall_score: int
    overall_level: SkillLevel
    category_scores: List[SkillScore]
    strengths: List[str]
    weaknesses: List[str]
    analyzed_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_score": self.overall_score,
            "overall_level": self.overall_level.value,
            "category_scores": [s.to_dict() for s in self.category_scores],
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "analyzed_at": self.analyzed_at,
        }


@dataclass(frozen=True)
class Recommendation:
    category: SkillCategory
    priority: Priority
    issue: str
    suggestion: str
    learning_resources: List[LearningResource] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "priority": self.priority.value,
            "issue": self.issue,
            "suggestion": self.suggestion,
            "learning_resources": [r.to_dict() for r in self.learning_resources],
        }


@dataclass(frozen=True)
class SkillAnalysisResult:
    profile: SkillProfile
    recommendations: List[Recommendation]
    session_id: str
    total_active_time_ms: int
    total_keystrokes: int
    total_pastes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "session_id": self.session_id,
            "total_active_time_ms": self.total_active_time_ms,
            "total_keystrokes": self.total_keystrokes,
            "total_pastes": self.total_pastes,
        }


class SkillScorer:
    """
    Turns session behavior into five 0-100 category scores, an overall
    profile and prioritized recommendations.

    Every category is weighted equally. Sorting is stable, so ties always
    resolve in the fixed category order below.
    """

    # ---------------------------------------------------------
    # 1. THRESHOLDS
    # ---------------------------------------------------------

    EXPERT_MIN = 80
    ADVANCED_MIN = 60
    INTERMEDIATE_MIN = 40

    RECOMMENDATION_THRESHOLD = 70
    # Categories at or above this score never get a recommendation.

    PASTE_RELIANCE_RATIO = 0.5
    # Coding proficiency is only flagged when typing is under half of input.

    EDIT_RATE_PENALTY = 10
    # Points lost per edit/minute.

    POINTS_PER_LANGUAGE = 20

    SUMMARY_SIZE = 2  # strengths and weaknesses

    # ---------------------------------------------------------
    # 2. PIPELINE
    # ---------------------------------------------------------

    def analyze(
        self,
        counters: Iterable[FileCounters],
        session_id: str,
        total_active_time_ms: int,
        total_idle_time_ms: int,
    ) -> SkillAnalysisResult:
        """
        Aggregate, score and recommend in one pass.

        Args:
            counters: Snapshot of a session's FileCounters
            session_id: Echoed back in the result
            total_active_time_ms: Session active time
            total_idle_time_ms: Session idle time
        """
        logger.info(f"Starting skill analysis for session {session_id}")

        metrics = aggregate_behavior(counters, total_active_time_ms, total_idle_time_ms)
        profile = self.score_skills(metrics)
        recommendations = self.recommend(profile.category_scores, metrics)

        logger.info(f"Skill analysis complete: overall score {profile.overall_score}")

        return SkillAnalysisResult(
            profile=profile,
            recommendations=recommendations,
            session_id=session_id,
            total_active_time_ms=metrics.active_time_ms,
            total_keystrokes=metrics.keystroke_count,
            total_pastes=metrics.paste_count,
        )

    def score_skills(self, metrics: BehavioralMetrics) -> SkillProfile:
        return self.build_profile(self.calculate_category_scores(metrics))

    def calculate_category_scores(self, metrics: BehavioralMetrics) -> List[SkillScore]:
        edits_per_minute = metrics.edits_per_minute

        raw_scores = [
            (
                SkillCategory.CODING_PROFICIENCY,
                round_score(metrics.typing_to_total_ratio * 100),
                self._coding_description(metrics),
            ),
            (
                SkillCategory.PROBLEM_SOLVING,
                round_score(100 - edits_per_minute * self.EDIT_RATE_PENALTY),
                self._problem_solving_description(edits_per_minute),
            ),
            (
                SkillCategory.FOCUS_CONSISTENCY,
                round_score(metrics.focus_ratio * 100),
                self._focus_description(metrics),
            ),
            (
                SkillCategory.CODE_QUALITY,
                round_score((1 - metrics.backspace_ratio) * 100),
                self._quality_description(metrics),
            ),
            (
                SkillCategory.LANGUAGE_VERSATILITY,
                len(self._distinct_languages(metrics)) * self.POINTS_PER_LANGUAGE,
                self._versatility_description(metrics),
            ),
        ]

        scores = []
        for category, raw, description in raw_scores:
            score = self._clamp(raw)
            scores.append(SkillScore(
                category=category,
                score=score,
                level=self.score_to_level(score),
                description=description,
            ))
        return scores

    def build_profile(self, category_scores: List[SkillScore]) -> SkillProfile:
        overall = round_score(sum(s.score for s in category_scores) / len(category_scores)) if category_scores else 0

        ranked = sorted(category_scores, key=lambda s: s.score, reverse=True)
        strengths = [s.category.label for s in ranked[:self.SUMMARY_SIZE]]
        weaknesses = [s.category.label for s in ranked[-self.SUMMARY_SIZE:]]

        return SkillProfile(
            overall_score=overall,
            overall_level=self.score_to_level(overall),
            category_scores=list(category_scores),
            strengths=strengths,
            weaknesses=weaknesses,
            analyzed_at=datetime.now(timezone.utc).isoformat(),
        )

    def recommend(
        self,
        category_scores: List[SkillScore],
        metrics: BehavioralMetrics,
    ) -> List[Recommendation]:
        """
        One recommendation per category scoring below the threshold, lowest
        score first. The first emitted recommendation is HIGH priority, the
        second MEDIUM, the rest LOW.
        """
        recommendations: List[Recommendation] = []

        for score in sorted(category_scores, key=lambda s: s.score):
            if score.score >= self.RECOMMENDATION_THRESHOLD:
                continue
            if (
                score.category == SkillCategory.CODING_PROFICIENCY
                and metrics.typing_to_total_ratio >= self.PASTE_RELIANCE_RATIO
            ):
                continue

            template = RECOMMENDATION_TEMPLATES[score.category]
            recommendations.append(Recommendation(
                category=score.category,
                priority=self._priority_for_rank(len(recommendations)),
                issue=template.issue,
                suggestion=template.suggestion,
                learning_resources=list(template.resources),
            ))

        return recommendations

    # ---------------------------------------------------------
    # 3. HELPERS
    # ---------------------------------------------------------

    def score_to_level(self, score: float) -> SkillLevel:
        if score >= self.EXPERT_MIN:
            return SkillLevel.EXPERT
        if score >= self.ADVANCED_MIN:
            return SkillLevel.ADVANCED
        if score >= self.INTERMEDIATE_MIN:
            return SkillLevel.INTERMEDIATE
        return SkillLevel.BEGINNER

    @staticmethod
    def _clamp(score: int) -> int:
        return max(0, min(100, score))

    @staticmethod
    def _distinct_languages(metrics: BehavioralMetrics) -> List[str]:
        return list(dict.fromkeys(metrics.languages))

    @staticmethod
    def _priority_for_rank(rank: int) -> Priority:
        if rank == 0:
            return Priority.HIGH
        if rank == 1:
            return Priority.MEDIUM
        return Priority.LOW

    def _coding_description(self, metrics: BehavioralMetrics) -> str:
        ratio = round_score(metrics.typing_to_total_ratio * 100)
        if ratio >= 80:
            return f"Excellent! {ratio}% of code is typed from scratch, showing strong fundamentals."
        if ratio >= 60:
            return f"Good typing ratio ({ratio}%). Consider reducing paste reliance for better retention."
        if ratio >= 40:
            return f"Moderate typing ratio ({ratio}%). Practice writing more code from memory."
        return f"Low typing ratio ({ratio}%). Over-reliance on pasting may hinder skill development."

    def _problem_solving_description(self, edits_per_minute: float) -> str:
        if edits_per_minute < 2:
            return f"Efficient problem-solving with {edits_per_minute:.1f} edits/min. You plan well before coding."
        if edits_per_minute < 5:
            return f"Decent efficiency ({edits_per_minute:.1f} edits/min). Room for improvement in planning."
        return (
            f"High edit frequency ({edits_per_minute:.1f} edits/min) suggests trial-and-error "
            f"approach. Plan before coding."
        )

    def _focus_description(self, metrics: BehavioralMetrics) -> str:
        focus = round_score(metrics.focus_ratio * 100)
        if focus >= 80:
            return f"Excellent focus! {focus}% active time shows strong concentration."
        if focus >= 60:
            return f"Good focus ({focus}% active). Consider using focus techniques for improvement."
        return f"Low focus ({focus}% active). High idle time may indicate distractions or workflow issues."

    def _quality_description(self, metrics: BehavioralMetrics) -> str:
        deletions = round_score(metrics.backspace_ratio * 100)
        if deletions <= 20:
            return f"High quality code with only {deletions}% deletions. Few corrections needed."
        if deletions <= 40:
            return f"Moderate quality ({deletions}% deletions). Consider using linters to catch errors early."
        return f"High deletion rate ({deletions}%) suggests frequent corrections. Review code standards."

    def _versatility_description(self, metrics: BehavioralMetrics) -> str:
        languages = self._distinct_languages(metrics)
        count = len(languages)
        langs = ", ".join(languages[:3])
        if count >= 5:
            return f"Excellent versatility! Working with {count} languages: {langs}, and more."
        if count >= 3:
            return f"Good versatility with {count} languages: {langs}."
        if count == 2:
            return f"Moderate versatility. Working with {langs}. Consider learning a third language."
        if count == 1:
            return f"Limited to {langs}. Expanding to other languages can boost career opportunities."
        return "No languages tracked yet. Expanding to other languages can boost career opportunities."


def score_skills(metrics: BehavioralMetrics) -> SkillProfile:
    return SkillScorer().score_skills(metrics)


def recommend(category_scores: List[SkillScore], metrics: BehavioralMetrics) -> List[Recommendation]:
    return SkillScorer().recommend(category_scores, metrics)
