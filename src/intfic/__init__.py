"""Branching interactive fiction driven by plain-text story files."""

__version__ = "0.1.0"
