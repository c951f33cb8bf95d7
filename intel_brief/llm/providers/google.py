"""
Provider implementation for Google Gemini via the native google-genai SDK.
"""
from typing import List, Optional

from google import genai
from google.genai import types

from intel_brief.llm.exception import ProviderError
from intel_brief.llm.normalizer import GenerationClock
from intel_brief.llm.prompt_manager import PromptManager
from intel_brief.models import AIProvider, AppSettings, Sentiment, Source

from .base import FeedProviderInterface

DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"

FEED_ITEM_FIELDS = ["sourceName", "platform", "content", "summary", "topic",
                    "sentiment", "relevanceScore", "timestamp"]


def build_feed_schema() -> types.Schema:
    """JSON array of feed items; every field required, sentiment limited to the enum."""
    string = types.Schema(type=types.Type.STRING)
    return types.Schema(
        type=types.Type.ARRAY,
        items=types.Schema(
            type=types.Type.OBJECT,
            properties={
                "sourceName": string,
                "platform": string,
                "content": types.Schema(type=types.Type.STRING, description="The simulated full post content"),
                "summary": types.Schema(type=types.Type.STRING, description="A concise 1-sentence summary"),
                "topic": string,
                "sentiment": types.Schema(type=types.Type.STRING, enum=[s.value for s in Sentiment]),
                "relevanceScore": types.Schema(type=types.Type.INTEGER, description="0 to 100"),
                "timestamp": types.Schema(type=types.Type.STRING, description="Relative time, e.g., '2h ago'"),
            },
            required=FEED_ITEM_FIELDS,
        ),
    )


class GeminiProvider(FeedProviderInterface):
    """
    LLM Provider for Google Gemini models using structured output.

    The ``genai.Client`` is created once at process start (see containers.py)
    from the environment credential and handed in here; this class never reads
    the environment itself.
    """

    PROVIDER_NAME = "gemini"

    def __init__(self, client: Optional[genai.Client], prompt_manager: PromptManager,
                 model: str = DEFAULT_GEMINI_MODEL, clock: Optional[GenerationClock] = None):
        self.client = client
        self.model = model
        super().__init__(prompt_manager, clock)
        self.logger.info(f"GeminiProvider initialized for model '{self.model}' (client configured: {client is not None})")

    @property
    def provider(self) -> AIProvider:
        return AIProvider.Gemini

    def get_identifier(self) -> str:
        return self.PROVIDER_NAME

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self.prompt_manager.get_system_prompt(),
            response_mime_type="application/json",
            response_schema=build_feed_schema(),
        )

    def request_completion(self, sources: List[Source], settings: AppSettings) -> str:
        if self.client is None:
            raise ProviderError("Gemini client is not configured (set GEMINI_API_KEY or API_KEY).")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=self.prompt_manager.get_user_prompt(sources),
                config=self.build_config(),
            )
        except Exception as e:
            self.logger.error(f"Gemini Error: {e}", exc_info=True)
            status_code = getattr(e, "code", None)
            raise ProviderError(f"Gemini request failed: {e}",
                                status_code=status_code if isinstance(status_code, int) else None) from e
        return response.text or "[]"


def create_gemini_client(api_key: Optional[str]) -> Optional[genai.Client]:
    """Builds the SDK client once at startup; None when no credential is available."""
    if not api_key:
        return None
    return genai.Client(api_key=api_key)
