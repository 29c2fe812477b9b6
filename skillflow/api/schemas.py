# skillflow/api/schemas.py
from typing import Any, Dict, List, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

from skillflow.analytics.models import (
    AnalyticsReport,
    Experience,
    Language,
    Location,
    Organization,
    Profile,
    Skill,
    SkillStat,
)

ProficiencyLiteral = Literal["novice", "intermediate", "advanced", "expert"]
TrendLiteral = Literal["rising", "stable", "declining"]
TimeframeLiteral = Literal["short", "medium", "long"]


# --- inbound profile records -------------------------------------------------


class LocationModel(BaseModel):
    name: str = ""
    country: str = ""

    def to_domain(self) -> Location:
        return Location(name=self.name, country=self.country)


class SkillModel(BaseModel):
    name: str
    proficiency: ProficiencyLiteral

    def to_domain(self) -> Skill:
        return Skill(name=self.name, proficiency=self.proficiency)


class OrganizationModel(BaseModel):
    name: str = ""


class ExperienceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    organizations: List[OrganizationModel] = Field(default_factory=list)
    from_year: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("from_year", "fromYear")
    )
    to_year: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("to_year", "toYear")
    )

    @field_validator("from_year", "to_year", mode="before")
    @classmethod
    def blank_year_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_domain(self) -> Experience:
        return Experience(
            name=self.name,
            organizations=tuple(Organization(org.name) for org in self.organizations),
            from_year=self.from_year,
            to_year=self.to_year,
        )


class LanguageModel(BaseModel):
    language: str
    fluency: Optional[str] = None


class ProfileModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    username: str
    location: Optional[LocationModel] = None
    headline: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("headline", "professionalHeadline"),
    )
    summary: Optional[str] = None
    skills: List[SkillModel] = Field(default_factory=list)
    experiences: List[ExperienceModel] = Field(default_factory=list)
    languages: List[LanguageModel] = Field(default_factory=list)

    @field_validator("location", mode="before")
    @classmethod
    def parse_location_string(cls, value: Any) -> Any:
        # "Madrid, Spain" -> {"name": "Madrid, Spain", "country": "Spain"}
        if isinstance(value, str):
            return {"name": value, "country": value.split(", ")[-1]}
        return value

    def to_domain(self) -> Profile:
        return Profile(
            name=self.name,
            username=self.username,
            location=self.location.to_domain() if self.location else None,
            headline=self.headline,
            summary=self.summary,
            skills=tuple(skill.to_domain() for skill in self.skills),
            experiences=tuple(exp.to_domain() for exp in self.experiences),
            languages=tuple(
                Language(language=lang.language, fluency=lang.fluency)
                for lang in self.languages
            ),
        )


# --- requests ----------------------------------------------------------------


class SearchRequestModel(BaseModel):
    query: str = Field(..., description="Free-text search query.")
    limit: Optional[int] = Field(default=None, ge=1)
    stream: bool = Field(default=False, description="Emit Server-Sent Events when true.")

    @field_validator("query")
    @classmethod
    def require_query(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Query parameter is required")
        return value


class AnalyzeRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    profiles: Optional[List[ProfileModel]] = Field(
        default=None, description="Inline profile records."
    )

    # accept BOTH "profiles_url" and "url" on input
    profiles_url: Optional[HttpUrl] = Field(
        default=None,
        validation_alias=AliasChoices("profiles_url", "url"),
        serialization_alias="profiles_url",
        description="Remote JSON array of profile records.",
    )

    @model_validator(mode="after")
    def ensure_profile_source(self) -> "AnalyzeRequestModel":
        if self.profiles is None and self.profiles_url is None:
            raise ValueError(
                "Either `profiles` (inline) or `profiles_url`/`url` must be provided."
            )
        return self


class SkillListRequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    skills: List[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(item) for item in value]
        return [str(value)]


class SkillGapRequestModel(SkillListRequestModel):
    target_role: str = Field(..., min_length=1)


# --- responses ---------------------------------------------------------------


class SkillStatModel(BaseModel):
    skill_name: str
    frequency: int
    average_proficiency: float
    industries: List[str] = Field(default_factory=list)
    proficiency_histogram: Dict[str, int] = Field(default_factory=dict)
    trend: TrendLiteral

    @classmethod
    def from_domain(cls, stat: SkillStat) -> "SkillStatModel":
        return cls(
            skill_name=stat.skill_name,
            frequency=stat.frequency,
            average_proficiency=stat.average_proficiency,
            industries=list(stat.industries),
            proficiency_histogram=dict(stat.proficiency_histogram),
            trend=stat.trend,
        )


class DomainModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class LocationStatModel(DomainModel):
    country: str
    count: int


class ExperienceBracketModel(DomainModel):
    bracket: str
    count: int


class OrganizationStatModel(DomainModel):
    organization: str
    count: int


class LanguageStatModel(DomainModel):
    language: str
    count: int


class ProfileSummaryModel(BaseModel):
    name: str
    username: str
    headline: Optional[str] = None
    top_skills: List[str] = Field(default_factory=list)
    location: Optional[str] = None

    @classmethod
    def from_domain(cls, profile: Profile, top_n: int = 5) -> "ProfileSummaryModel":
        return cls(
            name=profile.name,
            username=profile.username,
            headline=profile.headline,
            top_skills=[skill.name for skill in profile.skills[:top_n]],
            location=profile.location.name if profile.location else None,
        )


class SearchResponseModel(BaseModel):
    total_profiles: int
    skill_analytics: List[SkillStatModel]
    location_distribution: List[LocationStatModel]
    profiles: List[ProfileSummaryModel]
    analysis_stats: Dict[str, int] = Field(default_factory=dict)
    is_demo: bool = True
    demo_message: Optional[str] = None
    message: Optional[str] = None


class AnalyzeResponseModel(BaseModel):
    skill_stats: List[SkillStatModel]
    location_stats: List[LocationStatModel]
    experience_distribution: List[ExperienceBracketModel]
    top_organizations: List[OrganizationStatModel]
    language_distribution: List[LanguageStatModel]
    analysis_stats: Dict[str, int]

    @classmethod
    def from_domain(cls, report: AnalyticsReport) -> "AnalyzeResponseModel":
        return cls(
            skill_stats=[SkillStatModel.from_domain(s) for s in report.skill_stats],
            location_stats=[
                LocationStatModel.model_validate(s) for s in report.location_stats
            ],
            experience_distribution=[
                ExperienceBracketModel.model_validate(s)
                for s in report.experience_distribution
            ],
            top_organizations=[
                OrganizationStatModel.model_validate(s)
                for s in report.top_organizations
            ],
            language_distribution=[
                LanguageStatModel.model_validate(s)
                for s in report.language_distribution
            ],
            analysis_stats=dict(report.metadata),
        )


class SkillCorrelationModel(DomainModel):
    skill: str
    correlation: float
    confidence: float
    market_demand: Literal["high", "medium", "low"]
    trend: TrendLiteral


class SalaryRangeModel(BaseModel):
    min: int
    max: int


class CareerPathModel(DomainModel):
    title: str
    probability: float
    timeframe: str
    required_skills: List[str]
    salary_range: SalaryRangeModel

    @classmethod
    def from_domain(cls, path) -> "CareerPathModel":
        return cls(
            title=path.title,
            probability=path.probability,
            timeframe=path.timeframe,
            required_skills=list(path.required_skills),
            salary_range=SalaryRangeModel(min=path.salary_min, max=path.salary_max),
        )


class SkillGapModel(DomainModel):
    skill: str
    current_level: str
    recommended_level: str
    priority: Literal["critical", "high", "medium", "low"]
    learning_resources: List[str]


class MarketInsightModel(DomainModel):
    skill: str
    demand: int
    supply: int
    competition: Literal["high", "medium", "low"]
    opportunities: int
    average_salary: int
    growth_rate: float


class DemandPredictionModel(DomainModel):
    skill: str
    timeframe: TimeframeLiteral
    current_demand: int
    predicted_demand: int
    confidence: float
    factors: List[str]
