"""
Feed adapter

协调 provider 选择：根据 AppSettings.provider 把请求分发给对应的
FeedProviderInterface 实现，返回规范化后的 FeedItem 列表。
"""

import logging
from typing import Dict, Iterable, List

from intel_brief.llm.exception import LLMError
from intel_brief.llm.providers.base import FeedProviderInterface
from intel_brief.models import AIProvider, AppSettings, FeedItem, Source


class FeedAdapter:
    """
    Entry point for briefing generation.

    Providers are registered by their ``AIProvider`` value; adding a backend
    means registering one more FeedProviderInterface instance.
    """

    def __init__(self, providers: Iterable[FeedProviderInterface]):
        self.logger = logging.getLogger('intel_brief.llm.feed_adapter')
        self._providers: Dict[AIProvider, FeedProviderInterface] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: FeedProviderInterface) -> None:
        if provider.provider in self._providers:
            self.logger.warning(f"Replacing provider registered for {provider.provider.value}")
        self._providers[provider.provider] = provider
        self.logger.debug(f"Registered provider '{provider.get_identifier()}' for {provider.provider.value}")

    def get_provider(self, provider: AIProvider) -> FeedProviderInterface:
        try:
            return self._providers[provider]
        except KeyError:
            raise LLMError(f"No provider registered for {provider.value if isinstance(provider, AIProvider) else provider}") from None

    @property
    def available_providers(self) -> List[AIProvider]:
        return list(self._providers)

    def generate_briefing(self, sources: List[Source], settings: AppSettings) -> List[FeedItem]:
        """
        生成一次简报。

        Args:
            sources: 用户的信息源列表，只有 active 的源会进入 prompt。
            settings: 当前选择的 provider 和各 provider 的 API key。

        Returns:
            新的 FeedItem 列表；没有 active 源时直接返回空列表，不发起任何请求。

        Raises:
            LLMError: 缺少凭据、HTTP 非 2xx、SDK 调用失败或返回内容无法解析。
        """
        active_sources = [s for s in sources if s.active]
        if not active_sources:
            self.logger.info("No active sources, skipping briefing request.")
            return []

        provider = self.get_provider(settings.provider)
        self.logger.info(f"Generating briefing with '{provider.get_identifier()}' for {len(active_sources)} active sources")
        items = provider.generate(active_sources, settings)
        self.logger.info(f"Briefing from '{provider.get_identifier()}' produced {len(items)} items")
        return items
