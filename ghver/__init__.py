"""ghver: stable / latest / edge version pointers for GitHub repositories."""

__version__ = "0.1.0"
