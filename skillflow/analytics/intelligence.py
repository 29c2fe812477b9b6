"""Lookup-table skill intelligence: correlations, career paths, gaps and demand."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Literal, Optional, Tuple

from skillflow.analytics.models import TrendOption


LevelOption = Literal["high", "medium", "low"]
PriorityOption = Literal["critical", "high", "medium", "low"]
TimeframeOption = Literal["short", "medium", "long"]


@dataclass(frozen=True, slots=True)
class MarketTrend:
    demand: int
    trend: TrendOption
    growth: float


@dataclass(slots=True)
class SkillCorrelation:
    skill: str
    correlation: float
    confidence: float
    market_demand: LevelOption = "low"
    trend: TrendOption = "stable"


@dataclass(slots=True)
class CareerPath:
    title: str
    probability: float
    timeframe: str
    required_skills: List[str]
    salary_min: int
    salary_max: int


@dataclass(slots=True)
class SkillGap:
    skill: str
    current_level: str
    recommended_level: str
    priority: PriorityOption
    learning_resources: List[str] = field(default_factory=list)


@dataclass(slots=True)
class MarketInsight:
    skill: str
    demand: int
    supply: int
    competition: LevelOption
    opportunities: int
    average_salary: int
    growth_rate: float


@dataclass(slots=True)
class DemandPrediction:
    skill: str
    timeframe: TimeframeOption
    current_demand: int
    predicted_demand: int
    confidence: float
    factors: List[str]


SKILL_CORRELATIONS: Dict[str, Tuple[SkillCorrelation, ...]] = {
    "React": (
        SkillCorrelation("JavaScript", 0.95, 0.98),
        SkillCorrelation("TypeScript", 0.78, 0.92),
        SkillCorrelation("Node.js", 0.72, 0.89),
        SkillCorrelation("Redux", 0.65, 0.85),
        SkillCorrelation("Next.js", 0.58, 0.82),
        SkillCorrelation("GraphQL", 0.45, 0.77),
        SkillCorrelation("Jest", 0.52, 0.79),
    ),
    "Python": (
        SkillCorrelation("Django", 0.68, 0.91),
        SkillCorrelation("FastAPI", 0.45, 0.83),
        SkillCorrelation("PostgreSQL", 0.72, 0.88),
        SkillCorrelation("Docker", 0.58, 0.86),
        SkillCorrelation("AWS", 0.62, 0.84),
        SkillCorrelation("Machine Learning", 0.55, 0.79),
        SkillCorrelation("Pandas", 0.48, 0.82),
    ),
    "JavaScript": (
        SkillCorrelation("HTML5", 0.92, 0.97),
        SkillCorrelation("CSS3", 0.89, 0.95),
        SkillCorrelation("React", 0.73, 0.91),
        SkillCorrelation("Node.js", 0.67, 0.88),
        SkillCorrelation("TypeScript", 0.61, 0.85),
        SkillCorrelation("Vue.js", 0.42, 0.78),
    ),
    "Machine Learning": (
        SkillCorrelation("Python", 0.88, 0.94),
        SkillCorrelation("TensorFlow", 0.72, 0.89),
        SkillCorrelation("Scikit-learn", 0.68, 0.87),
        SkillCorrelation("Pandas", 0.75, 0.91),
        SkillCorrelation("NumPy", 0.71, 0.89),
        SkillCorrelation("Jupyter", 0.65, 0.86),
    ),
}

MARKET_TRENDS: Dict[str, MarketTrend] = {
    "React": MarketTrend(92, "rising", 15.2),
    "Python": MarketTrend(88, "rising", 18.7),
    "TypeScript": MarketTrend(85, "rising", 22.3),
    "Node.js": MarketTrend(78, "stable", 8.4),
    "Machine Learning": MarketTrend(95, "rising", 28.5),
    "Docker": MarketTrend(82, "rising", 12.8),
    "Kubernetes": MarketTrend(89, "rising", 31.2),
    "GraphQL": MarketTrend(71, "rising", 19.6),
}

SALARY_MAP: Dict[str, int] = {
    "Machine Learning": 145000,
    "Kubernetes": 135000,
    "React": 115000,
    "Python": 120000,
    "TypeScript": 125000,
    "Node.js": 110000,
    "Docker": 125000,
    "AWS": 130000,
}
DEFAULT_SALARY = 100000

POPULAR_SKILLS = frozenset({"JavaScript", "Python", "React", "Java"})
EMERGING_SKILLS = frozenset({"Rust", "Go", "Kubernetes", "Machine Learning"})

# (skill, recommended level, priority)
ROLE_REQUIREMENTS: Dict[str, Tuple[Tuple[str, str, PriorityOption], ...]] = {
    "Senior Software Engineer": (
        ("System Design", "advanced", "critical"),
        ("Leadership", "intermediate", "high"),
        ("Cloud Architecture", "intermediate", "high"),
        ("Performance Optimization", "advanced", "medium"),
    ),
    "Machine Learning Engineer": (
        ("MLOps", "advanced", "critical"),
        ("Model Deployment", "advanced", "critical"),
        ("Data Engineering", "intermediate", "high"),
        ("Statistics", "advanced", "high"),
    ),
}

LEARNING_RESOURCES: Dict[str, Tuple[str, ...]] = {
    "System Design": (
        "High Scalability Blog",
        "Designing Data-Intensive Applications",
        "System Design Interview Course",
    ),
    "MLOps": (
        "MLOps Specialization (Coursera)",
        "MLflow Documentation",
        "Kubeflow Tutorials",
    ),
    "Leadership": (
        "The Manager's Path",
        "Leadership in Tech Bootcamp",
        "Engineering Management Newsletter",
    ),
    "Cloud Architecture": (
        "AWS Solutions Architect Certification",
        "Cloud Architecture Patterns",
        "Multi-Cloud Strategy Guide",
    ),
}
DEFAULT_LEARNING_RESOURCES = ("Online Courses", "Documentation", "Practice Projects")

DEMAND_FACTORS: Dict[str, Tuple[str, ...]] = {
    "React": (
        "Growing SPA adoption",
        "Enterprise digital transformation",
        "Mobile-first development",
    ),
    "Python": ("AI/ML boom", "Data science growth", "Automation demand"),
    "Machine Learning": (
        "AI investment surge",
        "Business intelligence needs",
        "Automation trends",
    ),
    "Kubernetes": (
        "Cloud-native adoption",
        "Microservices architecture",
        "DevOps transformation",
    ),
}
DEFAULT_DEMAND_FACTORS = ("Industry growth", "Digital transformation", "Market demand")

TIMEFRAME_MULTIPLIERS: Dict[str, float] = {"short": 1.1, "medium": 1.3, "long": 1.8}

DEFAULT_MARKET_DEMAND = 60
DEFAULT_PREDICTION_DEMAND = 70


def market_demand_level(skill: str) -> LevelOption:
    trend = MARKET_TRENDS.get(skill)
    demand = trend.demand if trend else DEFAULT_MARKET_DEMAND
    if demand > 80:
        return "high"
    if demand > 60:
        return "medium"
    return "low"


def competition_level(skill: str) -> LevelOption:
    if skill in POPULAR_SKILLS:
        return "high"
    if skill in EMERGING_SKILLS:
        return "medium"
    return "low"


class SkillIntelligence:
    """Heuristic skill insights backed by static tables.

    Figures that have no table entry are drawn from ``rng`` so that a seeded
    ``random.Random`` gives reproducible output.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def analyze_skill_correlations(self, primary_skill: str) -> List[SkillCorrelation]:
        correlations = [
            replace(
                correlation,
                market_demand=market_demand_level(correlation.skill),
                trend=(
                    MARKET_TRENDS[correlation.skill].trend
                    if correlation.skill in MARKET_TRENDS
                    else "stable"
                ),
            )
            for correlation in SKILL_CORRELATIONS.get(primary_skill, ())
        ]
        return sorted(correlations, key=lambda item: item.correlation, reverse=True)

    def generate_career_paths(self, current_skills: Iterable[str]) -> List[CareerPath]:
        skills = set(current_skills)
        paths: List[CareerPath] = []

        if "Python" in skills or "Machine Learning" in skills:
            paths.append(
                CareerPath(
                    title="Senior Machine Learning Engineer",
                    probability=0.78,
                    timeframe="18-24 months",
                    required_skills=["TensorFlow", "PyTorch", "MLOps", "Cloud Platforms"],
                    salary_min=130000,
                    salary_max=200000,
                )
            )
        if "React" in skills or "JavaScript" in skills:
            paths.append(
                CareerPath(
                    title="Senior Full Stack Engineer",
                    probability=0.72,
                    timeframe="12-18 months",
                    required_skills=["TypeScript", "Cloud Architecture", "System Design"],
                    salary_min=120000,
                    salary_max=180000,
                )
            )
        if "Docker" in skills or "AWS" in skills:
            paths.append(
                CareerPath(
                    title="Platform Engineering Lead",
                    probability=0.68,
                    timeframe="15-24 months",
                    required_skills=["Kubernetes", "Terraform", "Monitoring", "Security"],
                    salary_min=140000,
                    salary_max=220000,
                )
            )
        if "Python" in skills or "SQL" in skills:
            paths.append(
                CareerPath(
                    title="Senior Data Scientist",
                    probability=0.65,
                    timeframe="20-30 months",
                    required_skills=[
                        "Advanced Statistics",
                        "A/B Testing",
                        "Business Intelligence",
                    ],
                    salary_min=125000,
                    salary_max=190000,
                )
            )

        return sorted(paths, key=lambda path: path.probability, reverse=True)

    def identify_skill_gaps(
        self, current_skills: Iterable[str], target_role: str
    ) -> List[SkillGap]:
        skills = set(current_skills)
        return [
            SkillGap(
                skill=skill,
                current_level="beginner",
                recommended_level=level,
                priority=priority,
                learning_resources=list(
                    LEARNING_RESOURCES.get(skill, DEFAULT_LEARNING_RESOURCES)
                ),
            )
            for skill, level, priority in ROLE_REQUIREMENTS.get(target_role, ())
            if skill not in skills
        ]

    def generate_market_insights(self, skills: Iterable[str]) -> List[MarketInsight]:
        insights = []
        for skill in skills:
            trend = MARKET_TRENDS.get(skill)
            insights.append(
                MarketInsight(
                    skill=skill,
                    demand=trend.demand if trend else self.rng.randint(60, 99),
                    supply=self.rng.randint(50, 79),
                    competition=competition_level(skill),
                    opportunities=self.rng.randint(500, 1499),
                    average_salary=SALARY_MAP.get(skill, DEFAULT_SALARY),
                    growth_rate=trend.growth if trend else self.rng.randint(5, 24),
                )
            )
        return sorted(insights, key=lambda insight: insight.demand, reverse=True)

    def predict_skill_demand(
        self, skill: str, timeframe: TimeframeOption = "medium"
    ) -> DemandPrediction:
        trend = MARKET_TRENDS.get(skill)
        current = trend.demand if trend else DEFAULT_PREDICTION_DEMAND
        predicted = min(100.0, current * TIMEFRAME_MULTIPLIERS[timeframe])
        return DemandPrediction(
            skill=skill,
            timeframe=timeframe,
            current_demand=current,
            predicted_demand=round(predicted),
            confidence=0.75 + self.rng.random() * 0.2,
            factors=list(DEMAND_FACTORS.get(skill, DEFAULT_DEMAND_FACTORS)),
        )
