"""Digest helpers."""
