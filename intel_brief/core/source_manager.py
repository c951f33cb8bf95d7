# intel_brief/core/source_manager.py
import logging
import uuid
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from intel_brief.models import Platform, Source

logger = logging.getLogger('intel_brief.core.source_manager')


def get_default_sources() -> List[Source]:
    """预设的信息源，帮助用户快速开始。"""
    return [
        Source(id="1", name="@elonmusk", handle_or_url="@elonmusk", platform=Platform.X, active=True),
        Source(id="2", name="Y Combinator", handle_or_url="@ycombinator", platform=Platform.X, active=True),
        Source(id="3", name="TechCrunch", handle_or_url="https://techcrunch.com", platform=Platform.News, active=True),
    ]


class SourceManager(QObject):
    """负责管理信息源列表的添加、删除和启用/停用。只保存在内存中。"""

    sources_updated = Signal()  # 信息源列表发生变化

    def __init__(self, sources: Optional[List[Source]] = None):
        super().__init__()
        self.sources: List[Source] = list(sources) if sources is not None else get_default_sources()
        logger.debug(f"SourceManager initialized with {len(self.sources)} sources.")

    def get_sources(self) -> List[Source]:
        """获取所有信息源的列表（副本）。"""
        return list(self.sources)

    def get_active_sources(self) -> List[Source]:
        return [s for s in self.sources if s.active]

    def get_source(self, source_id: str) -> Optional[Source]:
        return next((s for s in self.sources if s.id == source_id), None)

    def add_source(self, handle: str, platform: Platform = Platform.X) -> Optional[Source]:
        """
        添加一个新的信息源。

        Args:
            handle: 用户输入的账号或 URL。空白输入会被忽略。
            platform: 所属平台。

        Returns:
            新建的 Source；输入为空时返回 None。
        """
        handle = (handle or "").strip()
        if not handle:
            logger.debug("SourceManager: Ignoring empty handle.")
            return None

        source = Source(
            id=uuid.uuid4().hex,
            name=handle if handle.startswith("@") else f"@{handle}",
            handle_or_url=handle,
            platform=Platform(platform),
            active=True,
        )
        self.sources.append(source)
        logger.info(f"SourceManager: Added source '{source.name}' ({source.platform.value}) with ID {source.id}.")
        self.sources_updated.emit()
        return source

    def remove_source(self, source_id: str) -> bool:
        source = self.get_source(source_id)
        if source is None:
            logger.warning(f"SourceManager: Source with ID '{source_id}' not found for removal.")
            return False
        self.sources.remove(source)
        logger.info(f"SourceManager: Removed source '{source.name}' (ID: {source_id}).")
        self.sources_updated.emit()
        return True

    def toggle_source(self, source_id: str) -> Optional[bool]:
        """切换启用状态，返回新的状态；找不到时返回 None。"""
        source = self.get_source(source_id)
        if source is None:
            logger.warning(f"SourceManager: Source with ID '{source_id}' not found for toggle.")
            return None
        source.active = not source.active
        logger.info(f"SourceManager: Source '{source.name}' is now {'active' if source.active else 'inactive'}.")
        self.sources_updated.emit()
        return source.active
