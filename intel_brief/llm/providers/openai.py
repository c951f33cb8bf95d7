from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from intel_brief.llm.exception import MissingCredentialError, ResponseParseError
from intel_brief.llm.normalizer import GenerationClock
from intel_brief.llm.prompt_manager import PromptManager
from intel_brief.models import AIProvider, AppSettings, Source
from intel_brief.utils.api_client import ApiClient

from .base import FeedProviderInterface


JSON_SYSTEM_MESSAGE = "You are a helpful assistant that outputs JSON."


@dataclass(frozen=True)
class OpenAICompatibleConfig:
    """Endpoint settings for one OpenAI-compatible chat-completions API."""
    provider: AIProvider
    api_url: str
    model: str
    tag: str


DEEPSEEK_CONFIG = OpenAICompatibleConfig(
    provider=AIProvider.DeepSeek,
    api_url="https://api.deepseek.com/chat/completions",
    model="deepseek-reasoner",
    tag="deepseek",
)

# DashScope OpenAI compatible endpoint
QWEN_CONFIG = OpenAICompatibleConfig(
    provider=AIProvider.Qwen,
    api_url="https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions",
    model="qwen-plus",
    tag="qwen",
)


class OpenAICompatibleProvider(FeedProviderInterface):
    """
    Provider implementation for OpenAI-compatible chat-completions APIs
    (DeepSeek, Qwen/DashScope). Configurations differ only in URL, model and tag.
    """

    def __init__(self, config: OpenAICompatibleConfig, api_client: ApiClient,
                 prompt_manager: PromptManager, clock: Optional[GenerationClock] = None):
        self.config = config
        self.api_client = api_client
        super().__init__(prompt_manager, clock)

    @property
    def provider(self) -> AIProvider:
        return self.config.provider

    def get_identifier(self) -> str:
        return self.config.tag

    def get_headers(self, api_key: str) -> Dict[str, str]:
        return {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {api_key}'
        }

    def prepare_request_payload(self, sources: List[Source]) -> Dict[str, Any]:
        prompt = self.prompt_manager.get_combined_prompt(sources)
        return {
            'model': self.config.model,
            'messages': [
                {'role': 'system', 'content': JSON_SYSTEM_MESSAGE},
                {'role': 'user', 'content': prompt}
            ],
            'response_format': {'type': 'json_object'},
            'stream': False
        }

    def parse_response(self, response_data: Dict[str, Any]) -> str:
        """Assistant message text of the first choice; '[]' when absent."""
        try:
            content = response_data.get('choices', [{}])[0].get('message', {}).get('content')
        except (IndexError, AttributeError, TypeError) as e:
            self.logger.warning(f"Unexpected response shape from '{self.get_identifier()}': {e}. Response: {response_data}")
            return "[]"
        if not content:
            self.logger.warning(f"Provider '{self.get_identifier()}' returned empty content.")
            return "[]"
        if not isinstance(content, str):
            raise ResponseParseError(
                f"Provider '{self.get_identifier()}' returned non-text content of type {type(content).__name__}",
                raw_text=repr(content))
        return content

    def request_completion(self, sources: List[Source], settings: AppSettings) -> str:
        api_key = settings.key_for(self.provider).strip()
        if not api_key:
            raise MissingCredentialError(self.get_identifier())

        payload = self.prepare_request_payload(sources)
        self.logger.info(f"Requesting briefing from {self.config.api_url} (model={self.config.model})")
        try:
            data = self.api_client.post(self.config.api_url, self.get_headers(api_key), payload)
        except Exception as e:
            self.logger.error(f"{self.get_identifier()} Error: {e}", exc_info=True)
            raise
        return self.parse_response(data)
