"""Pytest configuration for tests."""

from typing import Iterable, Optional, Tuple

import pytest

from skillflow.analytics.models import (
    Experience,
    Language,
    Location,
    Organization,
    Profile,
    Skill,
)


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


def make_profile(
    username: str,
    skills: Iterable[Tuple[str, str]] = (),
    country: Optional[str] = None,
    organizations: Iterable[str] = (),
    languages: Iterable[str] = (),
) -> Profile:
    """Build a profile with one single-organization experience per name."""
    return Profile(
        name=username.replace("-", " ").title(),
        username=username,
        location=Location(name=f"Somewhere, {country}", country=country)
        if country is not None
        else None,
        skills=tuple(Skill(name, level) for name, level in skills),
        experiences=tuple(
            Experience(organizations=(Organization(org),)) for org in organizations
        ),
        languages=tuple(Language(language) for language in languages),
    )


@pytest.fixture
def profile_factory():
    return make_profile
