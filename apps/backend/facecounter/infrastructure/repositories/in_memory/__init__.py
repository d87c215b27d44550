"""in_memory credential store backend."""
