"""Ports layer - Abstract interfaces (Protocols) for the application."""

from .feed import FeedRepositoryPort

__all__ = ["FeedRepositoryPort"]
