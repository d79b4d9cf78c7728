from typing import Any, Optional

from google import genai
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from src.config.common_settings import (
    GOOGLE_API_KEY,
    LOCATION as _LOCATION,
    OPENAI_API_KEY,
    PROJECT_ID as _PROJECT_ID,
    RESOLVER_LLM_PROVIDER,
    RESOLVER_MODEL,
)
from src.resolution.exceptions import ProviderConfigurationError
from src.utils.logger import logger

# Prefer the dedicated Google package
try:
    from langchain_google_vertexai import ChatVertexAI
    _HAS_VERTEX = True
except ImportError:
    ChatVertexAI = None  # type: ignore
    _HAS_VERTEX = False

DEFAULT_PROVIDER = RESOLVER_LLM_PROVIDER


def create_genai_client(api_key: Optional[str] = None) -> Optional[genai.Client]:
    """Gemini API client used for context caches and cached-content completions.

    Returns None when no API key is configured; callers treat that as
    degraded (uncached) mode rather than an error.
    """
    key = api_key or GOOGLE_API_KEY
    if not key:
        return None
    return genai.Client(api_key=key)


def requires_global_region(model_name: str) -> bool:
    """Gemini 3 preview models require the 'global' location on Vertex AI."""
    return model_name.lower().startswith("gemini-3")


def create_chat_model(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    project: Optional[str] = None,
    location: Optional[str] = None,
    temperature: Optional[float] = None,
) -> BaseChatModel:
    """LangChain chat model for inline-only resolution (no context cache support)."""
    provider_name = (provider or DEFAULT_PROVIDER).lower()

    if provider_name == "vertex_ai":
        if not _HAS_VERTEX:
            raise ProviderConfigurationError("Vertex AI chat model not available. Install langchain-google-vertexai and configure GCP env.")
        model_id = model or RESOLVER_MODEL
        vertex_project = project or _PROJECT_ID

        if requires_global_region(model_id):
            vertex_location = "global"
        else:
            vertex_location = location or _LOCATION

        return ChatVertexAI(
            model_name=model_id,
            project=vertex_project,
            location=vertex_location,
            temperature=0.0 if temperature is None else float(temperature),
        )

    if provider_name == "openai":
        api_key = api_key or OPENAI_API_KEY
        if not api_key:
            raise ProviderConfigurationError("OPENAI_API_KEY not set")
        model_id = model or "gpt-4o-mini"
        return ChatOpenAI(
            model=model_id,
            api_key=api_key,
            timeout=60,
            max_retries=0,
            temperature=0.0 if temperature is None else float(temperature),
        )

    raise ProviderConfigurationError(f"Unsupported chat model provider: {provider_name}")


def resolve_model_override(entity_type: str, default_provider: Optional[str] = None, default_model: Optional[str] = None) -> dict:
    """Provider/model/temperature for an entity type, honoring `RESOLVER_MODEL_OVERRIDES`."""
    from src.config.resolver_models import RESOLVER_MODEL_OVERRIDES

    override = (RESOLVER_MODEL_OVERRIDES or {}).get(entity_type, {})
    settings = {
        "provider": (override.get("provider") or default_provider or DEFAULT_PROVIDER).lower(),
        "model": override.get("model") or default_model,
        "temperature": override.get("temperature"),
    }
    logger.info(
        "LLMFactory: resolver model for %s provider=%s model=%s temperature=%s",
        entity_type, settings["provider"], settings["model"], settings["temperature"],
    )
    return settings


def extract_text_content(content: Any) -> str:
    """
    Normalize LLM message content to a plain text string.

    Gemini 3 models return content as a list of blocks with type/text structure
    instead of a plain string. This function handles both formats.

    Examples:
        >>> extract_text_content("Hello world")
        'Hello world'
        >>> extract_text_content([{"type": "text", "text": "Hello"}])
        'Hello'
    """
    if isinstance(content, list):
        for part in content:
            if isinstance(part, dict) and part.get("type") == "text":
                text_value = part.get("text", "")
                if text_value:
                    return text_value
            elif isinstance(part, str) and part:
                return part
        return " ".join([
            p.get("text", "") for p in content
            if isinstance(p, dict) and p.get("text")
        ])
    if isinstance(content, str):
        return content
    return str(content) if content is not None else ""
