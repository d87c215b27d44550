"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/api.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import InterviewFeedback, InterviewMessage, OAuthIdentity, User
from .profile import deserialize_profile, serialize_profile
from .repositories import UserRepository
from .services import InterviewLLMService, OAuthProvider, PasswordHasher, SessionStore

__all__ = [
    "User",
    "OAuthIdentity",
    "InterviewMessage",
    "InterviewFeedback",
    "serialize_profile",
    "deserialize_profile",
    "UserRepository",
    "PasswordHasher",
    "SessionStore",
    "OAuthProvider",
    "InterviewLLMService",
]
