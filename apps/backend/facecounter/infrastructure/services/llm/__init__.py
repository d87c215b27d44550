"""Interview coach adapters (Gemini + deterministic fake)."""
