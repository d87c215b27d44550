"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hash de passwords (Argon2)

Responsabilidades:
    - Hashear passwords con un hash lento y con sal (Argon2id).
    - Verificar password vs hash SIN lanzar excepciones.
    - Igualar el costo de verificación cuando no hay hash que verificar
      (email desconocido / cuenta solo-OAuth) usando un hash dummy.

Colaboradores:
    - argon2.PasswordHasher
    - domain.services.PasswordHasher (contrato)
    - application/usecases/auth: sign_up, log_in

Decisiones de diseño:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - Nunca se loguea el password ni el hash.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from ..domain.services import PasswordHasher as PasswordHasherPort


class Argon2PasswordHasher(PasswordHasherPort):
    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or PasswordHasher()
        # R: hash de referencia que ninguna cuenta almacena.
        self._dummy_hash = self._hasher.hash("facecounter-timing-equalizer")

    def hash(self, password: str) -> str:
        """Hashea un password usando Argon2."""
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Verifica password vs hash almacenado (False ante mismatch o hash inválido)."""
        if not password_hash:
            # Mismo costo que una verificación real; el resultado se descarta.
            self._check(password, self._dummy_hash)
            return False
        return self._check(password, password_hash)

    def _check(self, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
