"""Presentation-facing JSON API."""
