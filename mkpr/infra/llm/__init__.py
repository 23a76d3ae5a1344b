from mkpr.infra.llm.base import BaseLLMClient
from mkpr.infra.llm.client import build_messages, request_pr_description
from mkpr.infra.llm.factory import get_generator_client, reset_clients
from mkpr.infra.llm.models import list_models, resolve_model_name
from mkpr.infra.llm.ollama_client import OllamaClient
from mkpr.infra.llm.openai_client import OpenAIClient

__all__ = [
    "BaseLLMClient",
    "OllamaClient",
    "OpenAIClient",
    "get_generator_client",
    "reset_clients",
    "build_messages",
    "request_pr_description",
    "list_models",
    "resolve_model_name",
]
