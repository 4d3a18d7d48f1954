"""Infrastructure adapters: storage."""
