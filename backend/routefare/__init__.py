"""Delivery pricing across a fixed network of named routes."""

__version__ = "1.0.0"
