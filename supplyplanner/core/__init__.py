"""Core numeric helpers."""

from .numeric import sanitize, sanitize_count, clamp, bounded

__all__ = ["sanitize", "sanitize_count", "clamp", "bounded"]
