"""AI-assisted clerical flows for the clinic management application."""

__version__ = "0.1.0"
