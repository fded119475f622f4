"""Faceless Video Factory - assembles vertical short-form videos from narration and stock media."""

__version__ = "1.0.0"
