"""Domain models and schemas."""
