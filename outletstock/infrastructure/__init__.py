"""Infrastructure adapters: storage and external sources."""
