"""Team Matcher - AI-assisted project staffing."""

__version__ = "0.1.0"
