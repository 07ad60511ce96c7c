"""Generators for game state machine scaffolding and table cache codecs."""

__version__ = "0.1.0"