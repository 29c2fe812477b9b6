"""SkillFlow Analytics: talent analytics over demo professional profiles."""

__version__ = "1.0.0"
