from __future__ import annotations

"""Domain models shared by the aggregator, the profile store and the API."""

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple


ProficiencyLevel = Literal["novice", "intermediate", "advanced", "expert"]
TrendOption = Literal["rising", "stable", "declining"]

PROFICIENCY_LEVELS: Tuple[ProficiencyLevel, ...] = (
    "novice",
    "intermediate",
    "advanced",
    "expert",
)


@dataclass(frozen=True, slots=True)
class Location:
    name: str
    country: str = ""


@dataclass(frozen=True, slots=True)
class Skill:
    name: str
    proficiency: ProficiencyLevel


@dataclass(frozen=True, slots=True)
class Organization:
    name: str


@dataclass(frozen=True, slots=True)
class Experience:
    organizations: Tuple[Organization, ...] = ()
    name: Optional[str] = None
    from_year: Optional[int] = None
    to_year: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Language:
    language: str
    fluency: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Profile:
    name: str
    username: str
    location: Optional[Location] = None
    headline: Optional[str] = None
    summary: Optional[str] = None
    skills: Tuple[Skill, ...] = ()
    experiences: Tuple[Experience, ...] = ()
    languages: Tuple[Language, ...] = ()


@dataclass(slots=True)
class SkillStat:
    skill_name: str
    frequency: int
    average_proficiency: float
    industries: List[str] = field(default_factory=list)
    proficiency_histogram: Dict[str, int] = field(default_factory=dict)
    trend: TrendOption = "stable"


@dataclass(slots=True)
class LocationStat:
    country: str
    count: int


@dataclass(slots=True)
class ExperienceBracketStat:
    bracket: str
    count: int


@dataclass(slots=True)
class OrganizationStat:
    organization: str
    count: int


@dataclass(slots=True)
class LanguageStat:
    language: str
    count: int


@dataclass(slots=True)
class AnalyticsReport:
    skill_stats: List[SkillStat]
    location_stats: List[LocationStat]
    experience_distribution: List[ExperienceBracketStat] = field(
        default_factory=list
    )
    top_organizations: List[OrganizationStat] = field(default_factory=list)
    language_distribution: List[LanguageStat] = field(default_factory=list)
    metadata: Dict[str, int] = field(default_factory=dict)
