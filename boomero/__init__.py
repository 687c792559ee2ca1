"""Boomero - two-player closing dart game."""
