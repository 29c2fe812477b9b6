"""Compose aggregator outputs into a single analytics report."""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from skillflow.analytics.aggregator import (
    compute_experience_distribution,
    compute_language_distribution,
    compute_location_distribution,
    compute_skill_statistics,
    compute_top_organizations,
)
from skillflow.analytics.models import AnalyticsReport, Profile
from skillflow.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_report(
    profiles: Sequence[Profile],
    settings: Optional[Settings] = None,
    current_year: Optional[int] = None,
) -> AnalyticsReport:
    """Run every aggregation over ``profiles``.

    Skill statistics are truncated to ``settings.skill_stats_limit``; the
    ``metadata`` block records how much was analysed before truncation.
    """
    settings = settings or get_settings()
    start_time = time.perf_counter()

    skill_stats = compute_skill_statistics(profiles)
    report = AnalyticsReport(
        skill_stats=skill_stats[: settings.skill_stats_limit],
        location_stats=compute_location_distribution(profiles),
        experience_distribution=compute_experience_distribution(
            profiles, current_year=current_year
        ),
        top_organizations=compute_top_organizations(profiles),
        language_distribution=compute_language_distribution(profiles),
    )

    elapsed_ms = int((time.perf_counter() - start_time) * 1000)
    report.metadata = {
        "profiles_analyzed": len(profiles),
        "distinct_skills": len(skill_stats),
        "elapsed_ms": elapsed_ms,
    }
    logger.debug(
        f"Analyzed {len(profiles)} profiles, {len(skill_stats)} distinct skills"
    )
    return report
