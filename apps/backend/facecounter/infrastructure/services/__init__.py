"""
Infrastructure Services (Infrastructure Layer)

Facade/Barrel del paquete `infrastructure.services`: re-exporta los adapters
concretos para que el composition root importe desde un único lugar.

Component: infrastructure.services (Facade)
Responsibilities:
  - Publicar un "surface area" estable del paquete
Collaborators:
  - container (inyecta dependencias)
Constraints:
  - No contener lógica (solo re-export)
"""

# ---------------------------------------------------------------------------
# Identity provider
# ---------------------------------------------------------------------------
from .google_oauth import GoogleOAuthAdapter  # noqa: F401

# ---------------------------------------------------------------------------
# LLM
# ---------------------------------------------------------------------------
from .llm.fake_llm import FakeInterviewLLMService  # noqa: F401
from .llm.google_llm_service import GoogleInterviewLLMService  # noqa: F401

# ---------------------------------------------------------------------------
# Resilience
# ---------------------------------------------------------------------------
from .retry import create_retry_decorator, is_transient_error  # noqa: F401
