"""Request hooks."""
