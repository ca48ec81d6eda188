"""Storage, persistence, and progress logging backends."""
