# intel_brief/llm/normalizer.py
"""
模型输出规范化模块

将 provider 返回的（可能不规范的）JSON 文本解析为原始记录，
并把每条记录映射为统一的 FeedItem。所有外部字段都会做校验和兜底。
"""

import json
import logging
import math
import threading
import time
from typing import Any, Dict, List, Optional

from intel_brief.llm.exception import ResponseParseError
from intel_brief.models import FeedItem, Platform, Sentiment

logger = logging.getLogger('intel_brief.llm.normalizer')

DEFAULT_TOPIC = "General"
DEFAULT_TIMESTAMP = "Just now"
DEFAULT_RELEVANCE = 50
DEFAULT_SOURCE_NAME = "Unknown source"

# 按顺序匹配。有意不采用 twitter/x 优先的顺序：xiaohongshu 排在单字母 x 之前，否则 "XiaoHongShu" 会被归为 X
PLATFORM_KEYWORDS = [
    ("twitter", Platform.X),
    ("xiaohongshu", Platform.XiaoHongShu),
    ("x", Platform.X),
    ("zhihu", Platform.Zhihu),
    ("news", Platform.News),
]


def map_string_to_platform(value: Any) -> Platform:
    """Case-insensitive substring heuristic. Total: anything unmatched is Blog."""
    if isinstance(value, Platform):
        return value
    text = str(value or "").strip().lower()
    if not text:
        return Platform.Blog
    for member in Platform:
        if text == member.value.lower():
            return member
    for keyword, platform in PLATFORM_KEYWORDS:
        if keyword in text:
            return platform
    return Platform.Blog


def coerce_sentiment(value: Any) -> Sentiment:
    if isinstance(value, Sentiment):
        return value
    text = str(value or "").strip().lower()
    for member in Sentiment:
        if text == member.value.lower():
            return member
    if text:
        logger.debug(f"Unknown sentiment value {value!r}, using Neutral")
    return Sentiment.Neutral


def coerce_relevance(value: Any) -> int:
    """Integer in [0, 100]; missing, non-numeric or NaN values become 50, infinities clamp."""
    if value is None or isinstance(value, bool):
        return DEFAULT_RELEVANCE
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric relevanceScore {value!r}, using {DEFAULT_RELEVANCE}")
        return DEFAULT_RELEVANCE
    if math.isnan(number):
        return DEFAULT_RELEVANCE
    if math.isinf(number):
        return 100 if number > 0 else 0
    return max(0, min(100, int(round(number))))


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value)
    return text if text.strip() else default


def strip_code_fences(text: str) -> str:
    """Removes Markdown ```json / ``` markers the model may wrap its JSON in."""
    return text.replace("```json", "").replace("```", "").strip()


def extract_records(text: Optional[str]) -> List[Any]:
    """
    Leniently parses provider text into a list of raw records.

    - Markdown code fences are stripped first.
    - ``{"items": [...]}`` is unwrapped to the inner list.
    - Any other non-list value is wrapped as a one-element list.

    Raises:
        ResponseParseError: the text is not valid JSON.
    """
    cleaned = strip_code_fences(text or "")
    if not cleaned:
        return []
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON from provider: {e}. Text: {cleaned[:200]!r}")
        raise ResponseParseError(f"Provider returned invalid JSON: {e}", raw_text=text) from e

    if isinstance(data, dict) and isinstance(data.get("items"), list):
        data = data["items"]
    if not isinstance(data, list):
        data = [data]
    return data


def to_feed_item(record: Dict[str, Any], provider_tag: str, index: int, generation_stamp: int) -> FeedItem:
    return FeedItem(
        id=f"{provider_tag}-{index}-{generation_stamp}",
        source_name=_text(record.get("sourceName"), DEFAULT_SOURCE_NAME),
        platform=map_string_to_platform(record.get("platform")),
        content=_text(record.get("content"), ""),
        summary=_text(record.get("summary"), ""),
        topic=_text(record.get("topic"), DEFAULT_TOPIC),
        sentiment=coerce_sentiment(record.get("sentiment")),
        timestamp=_text(record.get("timestamp"), DEFAULT_TIMESTAMP),
        relevance_score=coerce_relevance(record.get("relevanceScore")),
    )


def normalize_records(records: List[Any], provider_tag: str, generation_stamp: int) -> List[FeedItem]:
    """Maps raw records to FeedItems, preserving order. Non-object entries are skipped."""
    items: List[FeedItem] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"{provider_tag}: skipping non-object record at index {index}: {record!r}")
            continue
        items.append(to_feed_item(record, provider_tag, index, generation_stamp))
    return items


class GenerationClock:
    """Millisecond stamps that never repeat within a process."""

    def __init__(self, time_func=time.time):
        self._time_func = time_func
        self._last = 0
        self._lock = threading.Lock()

    def next_stamp(self) -> int:
        with self._lock:
            stamp = int(self._time_func() * 1000)
            if stamp <= self._last:
                stamp = self._last + 1
            self._last = stamp
            return stamp
