"""Client for the Selcom Pay checkout and utility payment API, with a demo checkout command."""

__version__ = "0.1.0"