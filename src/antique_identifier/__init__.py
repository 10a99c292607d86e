"""Antique identification from photographs using classifier output and image heuristics."""

__version__ = "0.1.0"
