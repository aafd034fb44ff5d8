"""Wellness coaching assessments: sleep and mental performance scoring."""

__version__ = "0.1.0"
