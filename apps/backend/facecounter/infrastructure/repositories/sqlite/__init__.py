"""sqlite credential store backend."""
