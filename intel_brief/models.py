#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
数据模型模块 - 定义信息简报中使用的数据结构
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple


class Platform(str, Enum):
    """信息源所在平台 (值为界面上展示的名称)"""
    X = "X (Twitter)"
    Zhihu = "Zhihu"
    XiaoHongShu = "XiaoHongShu"
    News = "News Media"
    Blog = "Blog/RSS"


class Sentiment(str, Enum):
    Positive = "Positive"
    Neutral = "Neutral"
    Negative = "Negative"


class AIProvider(str, Enum):
    """可选的生成式 AI 后端"""
    Gemini = "Gemini"
    DeepSeek = "DeepSeek"
    Qwen = "Qwen"


@dataclass
class Source:
    """用户跟踪的账号/信息源"""
    id: str
    name: str
    handle_or_url: str  # e.g. @elonmusk or https://...
    platform: Platform
    active: bool = True

    def describe(self) -> str:
        """Prompt form: ``name (platform, handle: handleOrUrl)``."""
        return f"{self.name} ({self.platform.value}, handle: {self.handle_or_url})"


@dataclass
class FeedItem:
    """一次简报中的单条模拟动态，只由 FeedAdapter 生成"""
    id: str
    source_name: str
    platform: Platform
    content: str
    summary: str
    topic: str
    sentiment: Sentiment
    timestamp: str  # free text such as '2h ago'
    relevance_score: int  # 0-100

    def to_dict(self) -> dict:
        """将 FeedItem 转换为与原始 JSON 字段名一致的字典。"""
        return {
            "id": self.id,
            "sourceName": self.source_name,
            "platform": self.platform.value,
            "content": self.content,
            "summary": self.summary,
            "topic": self.topic,
            "sentiment": self.sentiment.value,
            "timestamp": self.timestamp,
            "relevanceScore": self.relevance_score,
        }


@dataclass
class AppSettings:
    """用户设置：当前选择的 provider 及各 provider 的 API key"""
    provider: AIProvider = AIProvider.Gemini
    keys: Dict[AIProvider, str] = field(default_factory=dict)

    def key_for(self, provider: AIProvider) -> str:
        return self.keys.get(provider) or ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider.value,
            "keys": {p.value: k for p, k in self.keys.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSettings":
        """
        从持久化的字典恢复设置。

        Unknown provider names are dropped from ``keys``; an unknown selected
        provider raises ValueError so the caller can fall back to defaults.
        """
        provider = AIProvider(data.get("provider", AIProvider.Gemini.value))
        keys: Dict[AIProvider, str] = {}
        for name, key in (data.get("keys") or {}).items():
            try:
                keys[AIProvider(name)] = str(key) if key is not None else ""
            except ValueError:
                continue
        return cls(provider=provider, keys=keys)


@dataclass
class AnalysisSummary:
    """简报统计结果"""
    total_items: int
    top_topics: List[Tuple[str, int]] = field(default_factory=list)
    sentiment_breakdown: List[Tuple[str, int]] = field(default_factory=list)
    active_sources: Optional[int] = None
