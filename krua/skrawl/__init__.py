"""Richer object model, tokenizer and structural verbs for the array language."""

__all__ = ["tokens", "kobject", "structure"]