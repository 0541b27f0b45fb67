"""Asteroid gliders: particles tracing the level curves of a planetary field."""

__version__ = "0.3.0"
