"""Intel Brief - AI-simulated briefings over a curated list of social/media sources."""

__version__ = "0.1.0"
