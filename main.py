#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Intel Brief - 主程序入口

初始化日志、加载 .env、构建依赖注入容器，并用当前的信息源和设置生成一次简报，
结果打印到标准输出。
"""

import os
import sys

from dotenv import load_dotenv

from intel_brief.containers import Container
from intel_brief.config.settings_manager import get_gemini_api_key
from intel_brief.llm.exception import LLMError
from intel_brief.llm.providers.google import DEFAULT_GEMINI_MODEL
from intel_brief.utils.logger import setup_logging, get_logger

project_root = os.path.dirname(os.path.abspath(__file__))


def build_container() -> Container:
    container = Container()
    container.config.from_dict({
        "paths": {
            "settings_file": os.getenv("INTEL_BRIEF_SETTINGS_FILE")
                             or os.path.join(project_root, "data", "settings.ini"),
        },
        "http": {
            # None: no explicit timeout, the HTTP library default applies
            "timeout": None,
        },
        "gemini": {
            "api_key": get_gemini_api_key(),
            "model": os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        },
        "prompt": {
            "target_language": os.getenv("INTEL_BRIEF_SUMMARY_LANGUAGE", "Chinese"),
        },
    })
    return container


def main() -> int:
    # 先加载 .env，INTEL_BRIEF_LOG_LEVEL 也可以写在其中
    dotenv_path = os.path.join(project_root, '.env')
    dotenv_loaded = os.path.exists(dotenv_path)
    if dotenv_loaded:
        load_dotenv(dotenv_path=dotenv_path)

    setup_logging()
    logger = get_logger("intel_brief.main")

    if dotenv_loaded:
        logger.info(f"已加载 .env 文件: {dotenv_path}")
    else:
        logger.info(f".env 文件未找到于: {dotenv_path}，跳过加载环境变量。")

    container = build_container()
    briefing_service = container.briefing_service()
    settings = container.settings_manager().get_settings()
    logger.info(f"应用程序启动, provider: {settings.provider.value}")

    try:
        items = briefing_service.generate_briefing()
    except LLMError as e:
        print(f"Briefing failed: {e}", file=sys.stderr)
        return 1

    if not items:
        print("No results.")
        return 0

    summary = briefing_service.summary()
    print(f"Daily Intelligence Brief - {summary.total_items} items from {summary.active_sources} active sources")
    print("Topics: " + ", ".join(f"{name} ({count})" for name, count in summary.top_topics))
    print("Sentiment: " + ", ".join(f"{name} ({count})" for name, count in summary.sentiment_breakdown))
    for item in items:
        print()
        print(f"[{item.platform.value}] {item.source_name} · {item.timestamp} · relevance {item.relevance_score}%")
        print(f"  {item.summary}")
        print(f"  #{item.topic} · {item.sentiment.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
