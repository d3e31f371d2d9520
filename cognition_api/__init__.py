"""Cognition Berries backend: courses, images, forum, commerce and progress over MongoDB."""

__version__ = "0.1.0"
