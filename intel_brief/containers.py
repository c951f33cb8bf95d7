"""依赖注入容器定义"""

from dependency_injector import containers, providers

from intel_brief.config.settings_manager import SettingsManager
from intel_brief.core.analysis_service import AnalysisService
from intel_brief.core.briefing_service import BriefingService
from intel_brief.core.source_manager import SourceManager
from intel_brief.llm.feed_adapter import FeedAdapter
from intel_brief.llm.normalizer import GenerationClock
from intel_brief.llm.prompt_manager import PromptManager
from intel_brief.llm.providers import (
    DEEPSEEK_CONFIG,
    QWEN_CONFIG,
    GeminiProvider,
    OpenAICompatibleProvider,
    create_gemini_client,
)
from intel_brief.utils.api_client import ApiClient


class Container(containers.DeclarativeContainer):
    """应用程序依赖注入容器"""

    # 配置: 在 main.py 中通过 from_dict 提供
    config = providers.Configuration()

    # --- 基础组件 ---
    api_client = providers.Singleton(
        ApiClient,
        default_timeout=config.http.timeout
    )

    prompt_manager = providers.Singleton(
        PromptManager,
        target_language=config.prompt.target_language
    )

    generation_clock = providers.Singleton(GenerationClock)

    # Gemini SDK client: 进程启动时根据环境变量创建一次，之后不再改变
    gemini_client = providers.Singleton(
        create_gemini_client,
        api_key=config.gemini.api_key
    )

    # --- Providers ---
    gemini_provider = providers.Singleton(
        GeminiProvider,
        client=gemini_client,
        prompt_manager=prompt_manager,
        model=config.gemini.model,
        clock=generation_clock
    )

    deepseek_provider = providers.Singleton(
        OpenAICompatibleProvider,
        config=DEEPSEEK_CONFIG,
        api_client=api_client,
        prompt_manager=prompt_manager,
        clock=generation_clock
    )

    qwen_provider = providers.Singleton(
        OpenAICompatibleProvider,
        config=QWEN_CONFIG,
        api_client=api_client,
        prompt_manager=prompt_manager,
        clock=generation_clock
    )

    feed_adapter = providers.Singleton(
        FeedAdapter,
        providers=providers.List(gemini_provider, deepseek_provider, qwen_provider)
    )

    # --- 核心服务 ---
    settings_manager = providers.Singleton(
        SettingsManager,
        settings_file=config.paths.settings_file
    )

    source_manager = providers.Singleton(SourceManager)

    analysis_service = providers.Singleton(AnalysisService)

    briefing_service = providers.Singleton(
        BriefingService,
        feed_adapter=feed_adapter,
        source_manager=source_manager,
        settings_manager=settings_manager,
        analysis_service=analysis_service
    )
