"""Compact direct-evaluation interpreter with its objects and verbs."""

__all__ = ["kobject", "verbs", "interp"]