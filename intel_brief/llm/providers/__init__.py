from .base import FeedProviderInterface
from .google import GeminiProvider, create_gemini_client
from .openai import OpenAICompatibleProvider, OpenAICompatibleConfig, DEEPSEEK_CONFIG, QWEN_CONFIG

__all__ = [
    "FeedProviderInterface",
    "GeminiProvider",
    "create_gemini_client",
    "OpenAICompatibleProvider",
    "OpenAICompatibleConfig",
    "DEEPSEEK_CONFIG",
    "QWEN_CONFIG",
]
