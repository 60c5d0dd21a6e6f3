"""Monthly per-club winner draw for the 2000 Club fundraiser."""

__version__ = "0.1.0"
