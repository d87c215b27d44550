"""
============================================================
TARJETA CRC
============================================================
Class: facecounter.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer las implementaciones concretas del credential store en un único
  punto de importación.

Collaborators:
- InMemory (tests / CREDENTIAL_STORE=memory)
- SQLite (embebido, default)
- Supabase (nube)
============================================================
"""

from .in_memory.user import InMemoryUserRepository
from .sqlite.user import SqliteUserRepository
from .supabase.user import SupabaseUserRepository, create_supabase_client

__all__ = [
    "InMemoryUserRepository",
    "SqliteUserRepository",
    "SupabaseUserRepository",
    "create_supabase_client",
]
