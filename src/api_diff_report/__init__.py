"""Render OpenAPI difference trees as indented text reports."""

__version__ = "0.1.0"
