"""
Skill scoring from session behavior: category scores, profile and
recommendations.
"""

from .behavioral import BehavioralMetrics, aggregate_behavior
from .resources import SkillCategory
from .scorer import Priority, SkillLevel, SkillProfile, SkillScorer

__all__ = [
    "BehavioralMetrics",
    "aggregate_behavior",
    "SkillCategory",
    "Priority",
    "SkillLevel",
    "SkillProfile",
    "SkillScorer",
]
