"""Host-side request interface."""
