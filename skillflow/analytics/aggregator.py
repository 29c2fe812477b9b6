"""Skill, location and experience aggregation over demo profiles."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from skillflow.analytics.models import (
    PROFICIENCY_LEVELS,
    ExperienceBracketStat,
    LanguageStat,
    LocationStat,
    OrganizationStat,
    Profile,
    SkillStat,
    TrendOption,
)


PROFICIENCY_WEIGHTS: Dict[str, int] = {
    "novice": 1,
    "intermediate": 2,
    "advanced": 3,
    "expert": 4,
}

RISING_SKILL_KEYWORDS = (
    "typescript",
    "react",
    "python",
    "aws",
    "kubernetes",
    "docker",
    "nextjs",
    "node.js",
)
DECLINING_SKILL_KEYWORDS = ("jquery", "flash", "silverlight", "perl", "cobol")

RISING_FREQUENCY_THRESHOLD = 15
DECLINING_FREQUENCY_THRESHOLD = 5

INDUSTRIES_PER_SKILL = 5
LOCATION_LIMIT = 10
ORGANIZATION_LIMIT = 10
UNKNOWN_COUNTRY = "Unknown"


def classify_trend(skill_name: str, frequency: int) -> TrendOption:
    """Classify a skill as rising, stable or declining.

    Keyword matches win over the frequency thresholds.
    """
    lowered = skill_name.lower()
    if any(keyword in lowered for keyword in RISING_SKILL_KEYWORDS):
        return "rising"
    if any(keyword in lowered for keyword in DECLINING_SKILL_KEYWORDS):
        return "declining"
    if frequency > RISING_FREQUENCY_THRESHOLD:
        return "rising"
    if frequency < DECLINING_FREQUENCY_THRESHOLD:
        return "declining"
    return "stable"


def _profile_organizations(profile: Profile) -> List[str]:
    names = (
        organization.name
        for experience in profile.experiences
        for organization in experience.organizations
        if organization.name
    )
    return list(dict.fromkeys(names))


@dataclass(slots=True)
class SkillAccumulator:
    skill_name: str
    count: int = 0
    proficiencies: List[str] = field(default_factory=list)
    industries: Dict[str, None] = field(default_factory=dict)

    def ingest(self, proficiency: str, organizations: Iterable[str]) -> None:
        self.count += 1
        self.proficiencies.append(proficiency)
        for organization in organizations:
            self.industries.setdefault(organization, None)

    def render(self) -> SkillStat:
        histogram = {level: 0 for level in PROFICIENCY_LEVELS}
        for proficiency in self.proficiencies:
            if proficiency in histogram:
                histogram[proficiency] += 1
        total_weight = sum(
            PROFICIENCY_WEIGHTS.get(proficiency, 0)
            for proficiency in self.proficiencies
        )
        return SkillStat(
            skill_name=self.skill_name,
            frequency=self.count,
            average_proficiency=total_weight / len(self.proficiencies),
            industries=list(self.industries)[:INDUSTRIES_PER_SKILL],
            proficiency_histogram=histogram,
            trend=classify_trend(self.skill_name, self.count),
        )


def compute_skill_statistics(profiles: Sequence[Profile]) -> List[SkillStat]:
    """Aggregate per-skill frequency, proficiency and trend statistics.

    The result is sorted by descending frequency; skills with equal
    frequency keep the order in which they were first seen.
    """
    accumulators: Dict[str, SkillAccumulator] = {}
    for profile in profiles:
        organizations = _profile_organizations(profile)
        for skill in profile.skills:
            accumulator = accumulators.get(skill.name)
            if accumulator is None:
                accumulator = accumulators[skill.name] = SkillAccumulator(skill.name)
            accumulator.ingest(skill.proficiency, organizations)

    stats = [accumulator.render() for accumulator in accumulators.values()]
    return sorted(stats, key=lambda stat: stat.frequency, reverse=True)


def _ranked(counter: Counter[str]) -> List[tuple[str, int]]:
    # Counter preserves insertion order, sorted() is stable.
    return sorted(counter.items(), key=lambda item: item[1], reverse=True)


def compute_location_distribution(
    profiles: Sequence[Profile], limit: int = LOCATION_LIMIT
) -> List[LocationStat]:
    """Count profiles per country, most common first, capped at ``limit``."""
    counter: Counter[str] = Counter()
    for profile in profiles:
        country = profile.location.country if profile.location else ""
        counter[country or UNKNOWN_COUNTRY] += 1
    return [
        LocationStat(country=country, count=count)
        for country, count in _ranked(counter)[:limit]
    ]


def _experience_bracket(total_years: int) -> str:
    if total_years < 2:
        return "0-2 years"
    if total_years < 5:
        return "2-5 years"
    if total_years < 10:
        return "5-10 years"
    return "10+ years"


def _total_years(profile: Profile, current_year: int) -> int:
    total = 0
    for experience in profile.experiences:
        if experience.from_year and experience.to_year:
            total += experience.to_year - experience.from_year
        elif experience.from_year:
            total += current_year - experience.from_year
    return total


def compute_experience_distribution(
    profiles: Sequence[Profile], current_year: Optional[int] = None
) -> List[ExperienceBracketStat]:
    """Bucket profiles by accumulated years of experience.

    Open-ended experiences run until ``current_year`` (today's year by
    default). Brackets are reported in the order they were first seen.
    """
    year = current_year or date.today().year
    counter: Counter[str] = Counter()
    for profile in profiles:
        counter[_experience_bracket(_total_years(profile, year))] += 1
    return [
        ExperienceBracketStat(bracket=bracket, count=count)
        for bracket, count in counter.items()
    ]


def compute_top_organizations(
    profiles: Sequence[Profile], limit: int = ORGANIZATION_LIMIT
) -> List[OrganizationStat]:
    counter: Counter[str] = Counter()
    for profile in profiles:
        for experience in profile.experiences:
            for organization in experience.organizations:
                if organization.name and organization.name.strip():
                    counter[organization.name] += 1
    return [
        OrganizationStat(organization=name, count=count)
        for name, count in _ranked(counter)[:limit]
    ]


def compute_language_distribution(profiles: Sequence[Profile]) -> List[LanguageStat]:
    counter: Counter[str] = Counter()
    for profile in profiles:
        for language in profile.languages:
            if language.language and language.language.strip():
                counter[language.language] += 1
    return [
        LanguageStat(language=language, count=count)
        for language, count in _ranked(counter)
    ]
