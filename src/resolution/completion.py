"""
LLM completion clients used by the resolvers.

A client takes a system message and a user message (or a cached-content
handle plus the user message) and returns the model's raw text. Only the
Gemini API client can bind a context cache; LangChain-backed clients
(Vertex AI, OpenAI) always run with inline reference context.
"""
from typing import Optional, Protocol, runtime_checkable

from google import genai
from google.genai import types
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from src.config.common_settings import RESOLVER_MODEL
from src.llm.factory import create_chat_model, create_genai_client, extract_text_content, resolve_model_override

from .exceptions import ProviderConfigurationError


@runtime_checkable
class CompletionClient(Protocol):
    """Request/response text completion."""

    model: str
    supports_cached_content: bool

    async def complete(
        self,
        system: Optional[str],
        user: str,
        cached_content: Optional[str] = None,
    ) -> str:
        ...


class GeminiCompletionClient:
    """Completions through the Gemini API, optionally against a context cache."""

    supports_cached_content = True

    def __init__(self, client: Optional[genai.Client], model: str, temperature: float = 0.0):
        self._client = client
        self.model = model
        self.temperature = temperature

    async def complete(
        self,
        system: Optional[str],
        user: str,
        cached_content: Optional[str] = None,
    ) -> str:
        if self._client is None:
            raise ProviderConfigurationError("GOOGLE_API_KEY not set; Gemini completions are unavailable")

        if cached_content:
            # The cache already holds the system instruction and the API rejects
            # a second one, so per-call framing travels with the user turn.
            contents = f"{system}\n\n{user}" if system else user
            config = types.GenerateContentConfig(
                temperature=self.temperature,
                cached_content=cached_content,
            )
        else:
            contents = user
            config = types.GenerateContentConfig(
                temperature=self.temperature,
                system_instruction=system,
            )

        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=contents,
            config=config,
        )
        return response.text or ""


class LangChainCompletionClient:
    """Completions through any LangChain chat model. Inline context only."""

    supports_cached_content = False

    def __init__(self, llm: BaseChatModel, model: Optional[str] = None):
        self._llm = llm
        self.model = model or getattr(llm, "model_name", None) or getattr(llm, "model", None) or "unknown"

    async def complete(
        self,
        system: Optional[str],
        user: str,
        cached_content: Optional[str] = None,
    ) -> str:
        messages = []
        if system:
            messages.append(SystemMessage(content=system))
        messages.append(HumanMessage(content=user))
        response = await self._llm.ainvoke(messages)
        return extract_text_content(getattr(response, "content", response))


def create_completion_client(
    entity_type: Optional[str] = None,
    genai_client: Optional[genai.Client] = None,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> CompletionClient:
    """Completion client for an entity type, honoring per-entity overrides.

    ``provider`` "gemini" reuses ``genai_client`` (created from the configured
    key when omitted); a missing key still yields a client whose calls fail,
    which resolvers turn into ``None``. ``model`` is the Gemini model and is
    ignored for the LangChain providers, which use the override model or
    their own default.
    """
    settings = resolve_model_override(entity_type or "default", provider)
    temperature = settings["temperature"]

    if settings["provider"] == "gemini":
        client = genai_client if genai_client is not None else create_genai_client()
        return GeminiCompletionClient(
            client,
            settings["model"] or model or RESOLVER_MODEL,
            temperature=0.0 if temperature is None else float(temperature),
        )

    llm = create_chat_model(
        provider=settings["provider"],
        model=settings["model"],
        temperature=temperature,
    )
    return LangChainCompletionClient(llm, model=settings["model"])
