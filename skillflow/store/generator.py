"""Synthesize full demo profiles from search results."""

from __future__ import annotations

import random
from datetime import date
from typing import Dict, List, Optional, Tuple

from skillflow.analytics.models import (
    PROFICIENCY_LEVELS,
    Experience,
    Language,
    Location,
    Organization,
    Profile,
    Skill,
)
from skillflow.store.models import SearchResult


SKILL_SETS: Dict[str, Tuple[str, ...]] = {
    "Python": (
        "Python", "Django", "FastAPI", "Flask", "PostgreSQL",
        "AWS", "Docker", "Git", "Linux", "REST APIs",
    ),
    "JavaScript": (
        "JavaScript", "TypeScript", "React", "Node.js", "Express",
        "MongoDB", "HTML5", "CSS3", "Git", "npm",
    ),
    "React": (
        "React", "JavaScript", "TypeScript", "Redux", "Next.js",
        "CSS3", "HTML5", "Jest", "Webpack", "Git",
    ),
    "Data Science": (
        "Python", "Pandas", "NumPy", "Scikit-learn", "TensorFlow",
        "SQL", "Jupyter", "Matplotlib", "Statistics", "Machine Learning",
    ),
    "DevOps": (
        "Docker", "Kubernetes", "AWS", "Python", "Terraform",
        "Jenkins", "Git", "Linux", "Monitoring", "CI/CD",
    ),
}

# Checked in order; the first keyword found in the title picks the skill set.
TITLE_SKILL_SETS: Tuple[Tuple[str, str], ...] = (
    ("Python", "Python"),
    ("JavaScript", "JavaScript"),
    ("React", "React"),
    ("Data", "Data Science"),
    ("DevOps", "DevOps"),
)
FALLBACK_SKILL_SET = "Python"

COMPANIES: Tuple[str, ...] = (
    "Google", "Microsoft", "Amazon", "Meta", "Apple",
    "Netflix", "Spotify", "Airbnb", "Uber", "Tesla",
    "Shopify", "Stripe", "Datadog", "Twilio", "Slack",
    "GitHub", "GitLab", "Docker", "MongoDB", "Redis",
)

LANGUAGES: Tuple[Language, ...] = (
    Language("English", "Fluent"),
    Language("Spanish", "Native"),
    Language("Portuguese", "Conversational"),
)

EXPERIENCE_COUNT = 3


def _senior(title: str) -> str:
    return title if title.startswith("Senior ") else f"Senior {title}"


def skill_set_for_title(title: str) -> Tuple[str, ...]:
    for keyword, skill_set in TITLE_SKILL_SETS:
        if keyword in title:
            return SKILL_SETS[skill_set]
    return SKILL_SETS[FALLBACK_SKILL_SET]


class ProfileGenerator:
    """Expands a ``SearchResult`` into a complete ``Profile``.

    All randomness flows through ``rng``; pass a seeded ``random.Random`` for
    reproducible profiles.
    """

    def __init__(
        self, rng: Optional[random.Random] = None, current_year: Optional[int] = None
    ) -> None:
        self.rng = rng or random.Random()
        self.current_year = current_year

    def _year(self) -> int:
        return self.current_year or date.today().year

    def _skills(self, title: str) -> Tuple[Skill, ...]:
        return tuple(
            Skill(name=name, proficiency=self.rng.choice(PROFICIENCY_LEVELS))
            for name in skill_set_for_title(title)
        )

    def _experiences(self, title: str) -> Tuple[Experience, ...]:
        current_year = self._year()
        experiences: List[Experience] = []
        for index in range(EXPERIENCE_COUNT):
            start_year = current_year - (index * 2 + 1)
            experiences.append(
                Experience(
                    name=_senior(title) if index == 0 else title,
                    organizations=(Organization(self.rng.choice(COMPANIES)),),
                    from_year=start_year,
                    to_year=None if index == 0 else start_year + 2,
                )
            )
        return tuple(experiences)

    def _languages(self) -> Tuple[Language, ...]:
        return LANGUAGES[: self.rng.randint(1, len(LANGUAGES))]

    def generate(self, result: SearchResult) -> Profile:
        return Profile(
            name=result.name,
            username=result.username,
            location=Location(name=result.location, country=result.country),
            headline=result.professional_title,
            summary=result.summary,
            skills=self._skills(result.professional_title),
            experiences=self._experiences(result.professional_title),
            languages=self._languages(),
        )
