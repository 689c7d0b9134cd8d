# Model clients. Each one exposes:
#   model            -> current model name
#   set_model(name)
#   stream(messages, params) -> Iterator[str]   (text fragments in arrival order)

from __future__ import annotations

from ...errors import MissingApiKeyError
from .echo_dev_client import EchoDevClient

PROVIDERS = ("gemini", "openai", "ollama", "echo")


def build_model_client(settings):
    """Pick a client from settings.LLM_PROVIDER. Raises MissingApiKeyError when a hosted provider has no key."""
    provider = (settings.LLM_PROVIDER or "gemini").strip().lower()

    if provider == "gemini":
        if not settings.GEMINI_API_KEY:
            raise MissingApiKeyError("GEMINI_API_KEY environment variable not set")
        from .gemini_client import GeminiClient
        return GeminiClient(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
    if provider == "openai":
        if not settings.OPENAI_API_KEY:
            raise MissingApiKeyError("OPENAI_API_KEY environment variable not set")
        from .openai_client import OpenAIClient
        return OpenAIClient(api_key=settings.OPENAI_API_KEY, model=settings.OPENAI_MODEL)
    if provider == "ollama":
        from .ollama_client import OllamaClient
        return OllamaClient(model=settings.OLLAMA_MODEL, host=settings.OLLAMA_HOST, timeout=settings.OLLAMA_TIMEOUT)
    if provider == "echo":
        return EchoDevClient()
    raise ValueError(f"Unknown LLM_PROVIDER {provider!r} (expected one of {', '.join(PROVIDERS)})")


__all__ = ["build_model_client", "EchoDevClient", "PROVIDERS"]
