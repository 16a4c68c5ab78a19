"""Placeholder grammar and codec."""
