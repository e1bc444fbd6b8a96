"""Presentation-side formatting and rendering helpers."""
