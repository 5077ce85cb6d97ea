"""Utility functions."""

from .hashing import hash_task

__all__ = ["hash_task"]
