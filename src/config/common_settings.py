import os
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _list_env(name: str, default: str) -> list:
    raw = os.environ.get(name) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


# --------------------------------------------------
# Gemini Configuration
# --------------------------------------------------
# Absence of a key is not an error: caching is disabled and resolvers
# fall back to inline reference context.
GOOGLE_API_KEY = os.environ.get("GOOGLE_API_KEY") or os.environ.get("GOOGLE_GENERATIVE_AI_API_KEY")

RESOLVER_MODEL = os.environ.get("RESOLVER_MODEL") or "gemini-2.5-flash"

# Available providers: "gemini", "vertex_ai", "openai"
RESOLVER_LLM_PROVIDER = (os.environ.get("RESOLVER_LLM_PROVIDER") or "gemini").lower()

# --------------------------------------------------
# Context Cache Configuration
# --------------------------------------------------
CACHE_TTL_SECONDS = _int_env("CACHE_TTL_SECONDS", 3600)
CACHE_INIT_TIMEOUT_SECONDS = _int_env("CACHE_INIT_TIMEOUT_SECONDS", 60)
CACHE_LIST_PAGE_SIZE = _int_env("CACHE_LIST_PAGE_SIZE", 50)
CACHED_ENTITY_TYPES = _list_env("CACHED_ENTITY_TYPES", "protocols,chains,stablecoins,bridges")

# --------------------------------------------------
# Vertex AI / OpenAI (inline-only providers)
# --------------------------------------------------
PROJECT_ID = os.environ.get("PROJECT_ID") or os.environ.get("GOOGLE_CLOUD_PROJECT")
LOCATION = os.environ.get("LOCATION") or "us-central1"
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")

# --------------------------------------------------
# API Key Configuration
# --------------------------------------------------
RESOLVER_API_TOKEN = os.environ.get("RESOLVER_API_TOKEN")
