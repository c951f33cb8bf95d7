# intel_brief/core/briefing_service.py
"""
简报服务

调用方一侧的状态：当前展示的简报、加载状态和最近一次错误。
同一时间只允许一个简报请求在进行。
"""
import logging
import threading
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from intel_brief.config.settings_manager import SettingsManager
from intel_brief.core.analysis_service import AnalysisService, ALL_TOPICS
from intel_brief.core.source_manager import SourceManager
from intel_brief.llm.exception import BriefingInProgressError, LLMError
from intel_brief.llm.feed_adapter import FeedAdapter
from intel_brief.models import AnalysisSummary, FeedItem


class BriefingService(QObject):
    """Owns the displayed feed; every successful briefing replaces it wholesale."""

    briefing_started = Signal()
    briefing_finished = Signal(object)  # List[FeedItem]
    briefing_failed = Signal(str)     # human-readable error message

    def __init__(self, feed_adapter: FeedAdapter, source_manager: SourceManager,
                 settings_manager: SettingsManager, analysis_service: AnalysisService):
        super().__init__()
        self.logger = logging.getLogger('intel_brief.core.briefing_service')
        self.feed_adapter = feed_adapter
        self.source_manager = source_manager
        self.settings_manager = settings_manager
        self.analysis_service = analysis_service

        self._items: List[FeedItem] = []
        self._in_flight = threading.Lock()
        self.last_error: Optional[str] = None

    @property
    def items(self) -> List[FeedItem]:
        return list(self._items)

    @property
    def is_loading(self) -> bool:
        return self._in_flight.locked()

    def generate_briefing(self) -> List[FeedItem]:
        """
        请求一次新的简报并替换当前的列表。

        Raises:
            BriefingInProgressError: 已有请求在进行中。
            LLMError: provider 调用失败；此时保留之前的列表，错误信息写入 last_error。
        """
        if not self._in_flight.acquire(blocking=False):
            raise BriefingInProgressError("A briefing is already being generated.")
        try:
            self.last_error = None
            self.briefing_started.emit()
            sources = self.source_manager.get_sources()
            settings = self.settings_manager.get_settings()
            try:
                items = self.feed_adapter.generate_briefing(sources, settings)
            except LLMError as e:
                self.last_error = str(e)
                self.logger.error(f"Briefing failed with provider {settings.provider.value}: {e}")
                self.briefing_failed.emit(self.last_error)
                raise
            self._items = items
            self.logger.info(f"Briefing replaced with {len(items)} items.")
            self.briefing_finished.emit(list(items))
            return list(items)
        finally:
            self._in_flight.release()

    def visible_items(self, topic: str = ALL_TOPICS) -> List[FeedItem]:
        return self.analysis_service.filter_by_topic(self._items, topic)

    def summary(self) -> AnalysisSummary:
        return self.analysis_service.summarize(self._items, self.source_manager.get_sources())
