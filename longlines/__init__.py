"""Soft/hard line-break handling for word-wrapped prose."""

__all__: list[str] = []
