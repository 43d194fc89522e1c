"""Pantry Tracker: a single-page inventory backed by a Supabase table."""

__version__ = "1.0.0"
