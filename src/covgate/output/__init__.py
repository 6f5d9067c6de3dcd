"""Reporters — markdown comment, terminal, JSON, GitHub Actions commands."""
