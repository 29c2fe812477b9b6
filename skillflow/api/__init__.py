"""HTTP surface for SkillFlow Analytics."""
