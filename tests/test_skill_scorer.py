"""Tests for behavior aggregation, skill scoring and recommendations."""

import pytest

from devskill.services.behavior_engine.metrics import FileCounters
from devskill.services.skill_engine import (
    BehavioralMetrics,
    Priority,
    SkillCategory,
    SkillLevel,
    SkillScorer,
    aggregate_behavior,
)


@pytest.fixture
def scorer():
    return SkillScorer()


def scores_by_category(profile):
    return {s.category: s.score for s in profile.category_scores}


class TestAggregateBehavior:
    def test_sums_counters(self):
        files = [
            FileCounters(path="a.py", language="Python", keystroke_count=300, paste_count=0,
                         edit_count=10, lines_added=10, lines_deleted=2, active_time_ms=4000),
            FileCounters(path="b.ts", language="TypeScript", keystroke_count=100, paste_count=4,
                         edit_count=5, lines_added=10, lines_deleted=3, active_time_ms=2000,
                         switch_to_count=2, switch_from_count=1),
        ]
        metrics = aggregate_behavior(files, active_time_ms=60_000, idle_time_ms=20_000)

        assert metrics.keystroke_count == 400
        assert metrics.paste_count == 4
        assert metrics.edit_count == 15
        assert metrics.typing_to_total_ratio == pytest.approx(400 / 404)
        assert metrics.backspace_ratio == pytest.approx(0.25)
        assert metrics.focus_ratio == pytest.approx(0.75)
        assert metrics.edits_per_minute == pytest.approx(15.0)
        assert metrics.average_typing_speed == pytest.approx(400.0)
        assert metrics.file_count == 2
        assert metrics.average_file_active_time == pytest.approx(3000.0)
        assert metrics.file_switch_count == 3

    def test_languages_in_first_seen_order(self):
        files = [
            FileCounters(path="a.ts", language="TypeScript"),
            FileCounters(path="b.py", language="Python"),
            FileCounters(path="c.py", language="Python"),
            FileCounters(path="d.ts", language="TypeScript"),
        ]
        metrics = aggregate_behavior(files, 0, 0)
        assert metrics.languages == ["TypeScript", "Python"]
        assert metrics.primary_language == "TypeScript"
        assert metrics.language_distribution == {"TypeScript": 50.0, "Python": 50.0}

    def test_no_files(self):
        metrics = aggregate_behavior([], 0, 0)
        assert metrics.primary_language == "unknown"
        assert metrics.languages == []
        assert metrics.typing_to_total_ratio == 0.0
        assert metrics.focus_ratio == 0.0


class TestCategoryScores:
    def test_empty_metrics(self, scorer):
        profile = scorer.score_skills(BehavioralMetrics())
        scores = scores_by_category(profile)

        assert scores[SkillCategory.CODING_PROFICIENCY] == 0
        assert scores[SkillCategory.PROBLEM_SOLVING] == 100
        assert scores[SkillCategory.FOCUS_CONSISTENCY] == 0
        assert scores[SkillCategory.CODE_QUALITY] == 100
        assert scores[SkillCategory.LANGUAGE_VERSATILITY] == 0
        assert profile.overall_score == 40
        assert profile.overall_level == SkillLevel.INTERMEDIATE

    def test_scores_are_clamped(self, scorer):
        metrics = BehavioralMetrics(
            edit_count=100,
            active_time_ms=60_000,
            lines_added=10,
            backspace_ratio=3.0,
            languages=["Python", "Go", "Rust", "Java", "C", "Ruby"],
        )
        scores = scores_by_category(scorer.score_skills(metrics))
        assert scores[SkillCategory.PROBLEM_SOLVING] == 0
        assert scores[SkillCategory.CODE_QUALITY] == 0
        assert scores[SkillCategory.LANGUAGE_VERSATILITY] == 100

    def test_versatility_counts_distinct_languages(self, scorer):
        metrics = BehavioralMetrics(languages=["Python"] * 5)
        profile = scorer.score_skills(metrics)
        scores = scores_by_category(profile)
        assert scores[SkillCategory.LANGUAGE_VERSATILITY] == 20

        versatility = next(
            s for s in profile.category_scores if s.category == SkillCategory.LANGUAGE_VERSATILITY
        )
        assert versatility.description.startswith("Limited to Python.")

    def test_halves_round_up(self, scorer):
        metrics = BehavioralMetrics(typing_to_total_ratio=0.625)
        scores = scores_by_category(scorer.score_skills(metrics))
        assert scores[SkillCategory.CODING_PROFICIENCY] == 63

    def test_overall_between_min_and_max(self, scorer):
        metrics = BehavioralMetrics(
            typing_to_total_ratio=0.9,
            edit_count=3,
            active_time_ms=60_000,
            focus_ratio=0.55,
            backspace_ratio=0.3,
            languages=["Python", "Go"],
        )
        profile = scorer.score_skills(metrics)
        values = [s.score for s in profile.category_scores]
        assert min(values) <= profile.overall_score <= max(values)

    @pytest.mark.parametrize(
        "score,level",
        [
            (100, SkillLevel.EXPERT),
            (80, SkillLevel.EXPERT),
            (79, SkillLevel.ADVANCED),
            (60, SkillLevel.ADVANCED),
            (59, SkillLevel.INTERMEDIATE),
            (40, SkillLevel.INTERMEDIATE),
            (39, SkillLevel.BEGINNER),
            (0, SkillLevel.BEGINNER),
        ],
    )
    def test_levels(self, scorer, score, level):
        assert scorer.score_to_level(score) == level


class TestProfile:
    def test_strengths_and_weaknesses_keep_category_order_on_ties(self, scorer):
        profile = scorer.score_skills(BehavioralMetrics())
        assert profile.strengths == ["Problem Solving", "Code Quality"]
        assert profile.weaknesses == ["Focus & Consistency", "Language Versatility"]

    def test_to_dict(self, scorer):
        data = scorer.score_skills(BehavioralMetrics()).to_dict()
        assert data["overall_level"] == "intermediate"
        assert len(data["category_scores"]) == 5
        assert data["category_scores"][0]["category"] == "coding_proficiency"
        assert data["analyzed_at"].endswith("+00:00")


class TestRecommendations:
    def test_lowest_scores_first_with_one_high(self, scorer):
        metrics = BehavioralMetrics()
        profile = scorer.score_skills(metrics)
        recommendations = scorer.recommend(profile.category_scores, metrics)

        assert [r.category for r in recommendations] == [
            SkillCategory.CODING_PROFICIENCY,
            SkillCategory.FOCUS_CONSISTENCY,
            SkillCategory.LANGUAGE_VERSATILITY,
        ]
        assert [r.priority for r in recommendations] == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]
        assert len(recommendations[0].learning_resources) == 2

    def test_coding_skipped_when_mostly_typed(self, scorer):
        metrics = BehavioralMetrics(
            typing_to_total_ratio=0.6,
            focus_ratio=1.0,
            languages=["Python", "Go", "Rust", "Java"],
        )
        profile = scorer.score_skills(metrics)
        recommendations = scorer.recommend(profile.category_scores, metrics)

        categories = [r.category for r in recommendations]
        assert SkillCategory.CODING_PROFICIENCY not in categories
        assert recommendations == []

    def test_high_priority_moves_to_first_emitted(self, scorer):
        metrics = BehavioralMetrics(
            typing_to_total_ratio=0.55,
            focus_ratio=0.65,
            languages=["Python", "Go", "Rust", "Java"],
        )
        profile = scorer.score_skills(metrics)
        recommendations = scorer.recommend(profile.category_scores, metrics)

        assert [r.category for r in recommendations] == [SkillCategory.FOCUS_CONSISTENCY]
        assert recommendations[0].priority == Priority.HIGH

    def test_nothing_recommended_at_or_above_threshold(self, scorer):
        metrics = BehavioralMetrics(
            typing_to_total_ratio=0.7,
            focus_ratio=0.7,
            languages=["a", "b", "c", "d"],
        )
        profile = scorer.score_skills(metrics)
        assert all(s.score >= 70 for s in profile.category_scores)
        assert scorer.recommend(profile.category_scores, metrics) == []

    def test_at_most_five(self, scorer):
        metrics = BehavioralMetrics(
            edit_count=100,
            active_time_ms=60_000,
            backspace_ratio=1.0,
        )
        profile = scorer.score_skills(metrics)
        recommendations = scorer.recommend(profile.category_scores, metrics)
        assert len(recommendations) == 5
        assert sum(1 for r in recommendations if r.priority == Priority.HIGH) == 1


class TestAnalyze:
    def test_end_to_end(self, scorer):
        files = [
            FileCounters(path="a.py", language="Python", keystroke_count=900, paste_count=1,
                         edit_count=20, lines_added=40, lines_deleted=4),
        ]
        result = scorer.analyze(files, "session-1", total_active_time_ms=600_000, total_idle_time_ms=0)

        assert result.session_id == "session-1"
        assert result.total_keystrokes == 900
        assert result.total_pastes == 1
        assert result.total_active_time_ms == 600_000

        scores = scores_by_category(result.profile)
        assert scores[SkillCategory.CODING_PROFICIENCY] == 100
        assert scores[SkillCategory.PROBLEM_SOLVING] == 80
        assert scores[SkillCategory.FOCUS_CONSISTENCY] == 100
        assert scores[SkillCategory.CODE_QUALITY] == 90
        assert scores[SkillCategory.LANGUAGE_VERSATILITY] == 20

        assert [r.category for r in result.recommendations] == [SkillCategory.LANGUAGE_VERSATILITY]
        assert result.to_dict()["recommendations"][0]["priority"] == "high"
