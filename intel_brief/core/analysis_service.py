"""
简报统计：主题分布、情感分布以及按主题筛选。
"""
import logging
from collections import Counter
from typing import List, Optional, Tuple

from intel_brief.models import AnalysisSummary, FeedItem, Sentiment, Source

ALL_TOPICS = "All"
HIGH_RELEVANCE_THRESHOLD = 80


class AnalysisService:
    """Pure computations over one briefing; holds no state."""

    def __init__(self):
        self.logger = logging.getLogger('intel_brief.core.analysis_service')

    def topic_distribution(self, items: List[FeedItem]) -> List[Tuple[str, int]]:
        """Topic counts in first-seen order."""
        counts = Counter(item.topic for item in items)
        seen = dict.fromkeys(item.topic for item in items)
        return [(topic, counts[topic]) for topic in seen]

    def sentiment_breakdown(self, items: List[FeedItem]) -> List[Tuple[str, int]]:
        """Fixed Positive/Neutral/Negative order; zero counts are omitted."""
        counts = Counter(item.sentiment for item in items)
        return [(s.value, counts[s]) for s in Sentiment if counts[s] > 0]

    def filter_by_topic(self, items: List[FeedItem], topic: str = ALL_TOPICS) -> List[FeedItem]:
        if not topic or topic == ALL_TOPICS:
            return list(items)
        return [item for item in items if item.topic == topic]

    @staticmethod
    def is_high_relevance(item: FeedItem) -> bool:
        return item.relevance_score > HIGH_RELEVANCE_THRESHOLD

    def summarize(self, items: List[FeedItem], sources: Optional[List[Source]] = None) -> AnalysisSummary:
        summary = AnalysisSummary(
            total_items=len(items),
            top_topics=self.topic_distribution(items),
            sentiment_breakdown=self.sentiment_breakdown(items),
            active_sources=sum(1 for s in sources if s.active) if sources is not None else None,
        )
        self.logger.debug(f"Summary computed: {summary}")
        return summary
