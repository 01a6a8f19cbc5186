"""
Canned recommendation templates, one per skill category.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class SkillCategory(str, Enum):
    CODING_PROFICIENCY = "coding_proficiency"
    PROBLEM_SOLVING = "problem_solving"
    FOCUS_CONSISTENCY = "focus_consistency"
    CODE_QUALITY = "code_quality"
    LANGUAGE_VERSATILITY = "language_versatility"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    SkillCategory.CODING_PROFICIENCY: "Coding Proficiency",
    SkillCategory.PROBLEM_SOLVING: "Problem Solving",
    SkillCategory.FOCUS_CONSISTENCY: "Focus & Consistency",
    SkillCategory.CODE_QUALITY: "Code Quality",
    SkillCategory.LANGUAGE_VERSATILITY: "Language Versatility",
}


class ResourceType(str, Enum):
    ARTICLE = "article"
    VIDEO = "video"
    COURSE = "course"
    DOCUMENTATION = "documentation"
    PRACTICE = "practice"


@dataclass(frozen=True)
class LearningResource:
    title: str
    type: ResourceType
    url: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.value
        return data


@dataclass(frozen=True)
class RecommendationTemplate:
    issue: str
    suggestion: str
    resources: Tuple[LearningResource, LearningResource]


RECOMMENDATION_TEMPLATES: Dict[SkillCategory, RecommendationTemplate] = {
    SkillCategory.CODING_PROFICIENCY: RecommendationTemplate(
        issue="High paste-to-typing ratio indicates over-reliance on external code",
        suggestion=(
            "Practice writing code from scratch. Start with small algorithms "
            "and gradually increase complexity."
        ),
        resources=(
            LearningResource(
                title="LeetCode - Easy Problems",
                type=ResourceType.PRACTICE,
                url="https://leetcode.com/problemset/all/?difficulty=EASY",
                description="Practice coding fundamentals with guided problems",
            ),
            LearningResource(
                title="The Odin Project - Foundations",
                type=ResourceType.COURSE,
                url="https://www.theodinproject.com/paths/foundations/courses/foundations",
                description="Build coding proficiency from the ground up",
            ),
        ),
    ),
    SkillCategory.PROBLEM_SOLVING: RecommendationTemplate(
        issue="High edit frequency suggests trial-and-error approach",
        suggestion=(
            "Plan before coding. Break problems into smaller steps. "
            "Practice pseudocode and flowcharts."
        ),
        resources=(
            LearningResource(
                title="Problem-Solving Techniques",
                type=ResourceType.ARTICLE,
                url="https://www.freecodecamp.org/news/how-to-think-like-a-programmer-lessons-in-problem-solving-d1d8bf1de7d2/",
                description="Learn systematic problem-solving approaches",
            ),
            LearningResource(
                title="Algorithmic Thinking",
                type=ResourceType.COURSE,
                url="https://www.coursera.org/learn/algorithmic-thinking-1",
                description="Develop structured thinking for complex problems",
            ),
        ),
    ),
    SkillCategory.FOCUS_CONSISTENCY: RecommendationTemplate(
        issue="High idle time indicates focus or workflow issues",
        suggestion=(
            "Use Pomodoro technique (25-min focus sessions). Minimize context "
            "switching. Set clear goals before starting."
        ),
        resources=(
            LearningResource(
                title="Deep Work Principles",
                type=ResourceType.ARTICLE,
                url="https://blog.doist.com/deep-work/",
                description="Strategies for maintaining focus while coding",
            ),
            LearningResource(
                title="Pomodoro Timer",
                type=ResourceType.PRACTICE,
                url="https://pomofocus.io/",
                description="Time management technique for better focus",
            ),
        ),
    ),
    SkillCategory.CODE_QUALITY: RecommendationTemplate(
        issue="High delete-to-add ratio suggests frequent corrections",
        suggestion=(
            "Review code standards for your language. Use linters (ESLint, Pylint). "
            "Write tests first (TDD)."
        ),
        resources=(
            LearningResource(
                title="Clean Code Principles",
                type=ResourceType.ARTICLE,
                url="https://github.com/ryanmcdermott/clean-code-javascript",
                description="Best practices for writing maintainable code",
            ),
            LearningResource(
                title="Test-Driven Development",
                type=ResourceType.VIDEO,
                url="https://www.youtube.com/watch?v=Jv2uxzhPFl4",
                description="Write tests first to catch errors early",
            ),
        ),
    ),
    SkillCategory.LANGUAGE_VERSATILITY: RecommendationTemplate(
        issue="Limited language exposure may restrict career opportunities",
        suggestion=(
            "Learn a second language in a different paradigm (e.g., if you know "
            "JavaScript, try Python or Go)."
        ),
        resources=(
            LearningResource(
                title="Python for Beginners",
                type=ResourceType.COURSE,
                url="https://www.python.org/about/gettingstarted/",
                description="Official Python tutorial for new learners",
            ),
            LearningResource(
                title="Go by Example",
                type=ResourceType.DOCUMENTATION,
                url="https://gobyexample.com/",
                description="Hands-on introduction to Go programming",
            ),
        ),
    ),
}
