import abc
import logging
from typing import List, Optional

from intel_brief.llm.normalizer import GenerationClock, extract_records, normalize_records
from intel_brief.llm.prompt_manager import PromptManager
from intel_brief.models import AIProvider, AppSettings, FeedItem, Source


class FeedProviderInterface(abc.ABC):
    """
    Abstract Base Class for briefing providers.
    Each implementation turns the active sources into one round trip to a
    generative-AI backend and returns normalized FeedItems.
    """

    def __init__(self, prompt_manager: PromptManager, clock: Optional[GenerationClock] = None):
        """
        Args:
            prompt_manager: Builds the system and user instructions.
            clock: Source of generation stamps used in FeedItem ids.
        """
        self.prompt_manager = prompt_manager
        self.clock = clock or GenerationClock()
        self.logger = logging.getLogger(f'intel_brief.llm.provider.{self.get_identifier()}')

    @property
    @abc.abstractmethod
    def provider(self) -> AIProvider:
        """The AIProvider value this implementation serves."""

    @abc.abstractmethod
    def get_identifier(self) -> str:
        """Short tag used as the FeedItem id prefix (e.g. 'gemini', 'deepseek')."""

    @abc.abstractmethod
    def request_completion(self, sources: List[Source], settings: AppSettings) -> str:
        """
        Performs the provider call.

        Returns:
            The raw text the model produced (expected to contain JSON).

        Raises:
            LLMError subclasses on credential, transport or HTTP failures.
        """

    def generate(self, sources: List[Source], settings: AppSettings) -> List[FeedItem]:
        """Calls the provider and normalizes its answer."""
        text = self.request_completion(sources, settings)
        records = extract_records(text)
        items = normalize_records(records, self.get_identifier(), self.clock.next_stamp())
        self.logger.info(f"{self.get_identifier()}: normalized {len(items)} of {len(records)} records")
        return items
