# tests/conftest.py
import json
import logging
import os
import sys
from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QCoreApplication

# 将项目根目录添加到 Python 路径
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from intel_brief.llm.normalizer import GenerationClock
from intel_brief.llm.prompt_manager import PromptManager
from intel_brief.models import AIProvider, AppSettings, Platform, Source

# 确保测试可以捕获到 INFO 级别的日志
logging.getLogger('intel_brief').setLevel(logging.INFO)


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """QObject signals and QSettings want an application instance."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def sample_sources():
    return [
        Source(id="1", name="@elonmusk", handle_or_url="@elonmusk", platform=Platform.X, active=True),
        Source(id="2", name="Zhihu Daily", handle_or_url="https://zhihu.com/daily", platform=Platform.Zhihu, active=False),
        Source(id="3", name="TechCrunch", handle_or_url="https://techcrunch.com", platform=Platform.News, active=True),
    ]


@pytest.fixture
def raw_records():
    return [
        {
            "sourceName": "@elonmusk",
            "platform": "X",
            "content": "Starship flight 9 is go.",
            "summary": "星舰第九次试飞获批。",
            "topic": "Tech",
            "sentiment": "Positive",
            "relevanceScore": 91,
            "timestamp": "2h ago",
        },
        {
            "sourceName": "TechCrunch",
            "platform": "News Media",
            "content": "Markets slide on chip export rules.",
            "summary": "芯片出口新规导致市场下跌。",
            "topic": "Finance",
            "sentiment": "Negative",
            "relevanceScore": 74,
            "timestamp": "5h ago",
        },
    ]


@pytest.fixture
def raw_json(raw_records):
    return json.dumps(raw_records, ensure_ascii=False)


@pytest.fixture
def prompt_manager():
    return PromptManager()


@pytest.fixture
def fixed_clock():
    """Clock whose wall time never moves; stamps still increase by one per call."""
    return GenerationClock(time_func=lambda: 1_700_000_000.0)


@pytest.fixture
def deepseek_settings():
    return AppSettings(provider=AIProvider.DeepSeek, keys={AIProvider.DeepSeek: "sk-test-deepseek"})


@pytest.fixture
def fake_gemini_client(raw_json):
    client = MagicMock()
    client.models.generate_content.return_value = MagicMock(text=raw_json)
    return client


@pytest.fixture
def settings_file(tmp_path):
    return str(tmp_path / "settings.ini")
