"""Skill analytics: aggregation and heuristic skill intelligence."""

from skillflow.analytics.aggregator import (
    classify_trend,
    compute_experience_distribution,
    compute_language_distribution,
    compute_location_distribution,
    compute_skill_statistics,
    compute_top_organizations,
)
from skillflow.analytics.intelligence import SkillIntelligence
from skillflow.analytics.service import build_report

__all__ = [
    "SkillIntelligence",
    "build_report",
    "classify_trend",
    "compute_experience_distribution",
    "compute_language_distribution",
    "compute_location_distribution",
    "compute_skill_statistics",
    "compute_top_organizations",
]
