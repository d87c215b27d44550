"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del dominio (User + conversación de entrevista)

Responsabilidades:
    - Definir el registro de usuario persistido por el credential store.
    - Definir las shapes de mensajes y feedback del coach de entrevistas.
    - Mantener el contrato de datos centralizado y estable.

Colaboradores:
    - domain/repositories.py: UserRepository devuelve User.
    - application/usecases/*: consumen y producen estas entidades.
    - infrastructure/repositories/*: mapean filas -> User.

Notas:
    - Solo "shapes" de datos: sin lógica de persistencia.
    - password_hash NUNCA sale de la capa de aplicación hacia HTTP.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (única entidad persistente)."""

    id: str
    email: str
    password_hash: str | None = None
    profile: dict[str, Any] | None = None

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)


@dataclass(frozen=True, slots=True)
class OAuthIdentity:
    """Perfil verificado devuelto por el proveedor de identidad."""

    email: str
    name: str | None = None


# Roles de la conversación tal como los maneja el cliente.
ROLE_AI = "ai"
ROLE_USER = "user"


@dataclass(frozen=True, slots=True)
class InterviewMessage:
    """Un turno de la entrevista simulada."""

    role: str
    content: str


@dataclass(slots=True)
class InterviewFeedback:
    """Evaluación final de una entrevista."""

    score: int
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    summary: str = ""
