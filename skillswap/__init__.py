"""SkillSwap API: skill-bartering profile matching and search."""

__version__ = "1.0.0"
