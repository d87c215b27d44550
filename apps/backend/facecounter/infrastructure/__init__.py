"""Infrastructure adapters (credential stores, session stores, providers)."""
