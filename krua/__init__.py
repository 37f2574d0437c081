"""Small interpreters and libraries for a k-like array language."""

__version__ = "0.1.0"
__all__ = ["mini", "skrawl"]