"""Conductor - build platform bundles from canonical prompts."""

__version__ = "0.1.0"
