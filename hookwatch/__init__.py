"""hookwatch - scheduled webhook calls with an in-memory response dashboard."""

__version__ = "0.1.0"
