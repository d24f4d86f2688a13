"""Idea Pool: rank ideas by Impact, Ease and Confidence."""

__version__ = "0.1.0"
