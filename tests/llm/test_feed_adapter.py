# tests/llm/test_feed_adapter.py
import pytest
from unittest.mock import MagicMock

from intel_brief.llm.exception import LLMError, MissingCredentialError
from intel_brief.llm.feed_adapter import FeedAdapter
from intel_brief.llm.providers.base import FeedProviderInterface
from intel_brief.llm.providers.google import GeminiProvider
from intel_brief.llm.providers.openai import DEEPSEEK_CONFIG, QWEN_CONFIG, OpenAICompatibleProvider
from intel_brief.models import AIProvider, AppSettings, Platform, Source
from intel_brief.utils.api_client import ApiClient


@pytest.fixture
def mock_api_client(raw_json):
    client = MagicMock(spec=ApiClient)
    client.post.return_value = {"choices": [{"message": {"content": raw_json}}]}
    return client


@pytest.fixture
def adapter(fake_gemini_client, mock_api_client, prompt_manager, fixed_clock):
    return FeedAdapter([
        GeminiProvider(fake_gemini_client, prompt_manager, clock=fixed_clock),
        OpenAICompatibleProvider(DEEPSEEK_CONFIG, mock_api_client, prompt_manager, fixed_clock),
        OpenAICompatibleProvider(QWEN_CONFIG, mock_api_client, prompt_manager, fixed_clock),
    ])


@pytest.mark.parametrize("sources", [
    [],
    [Source(id="1", name="@a", handle_or_url="@a", platform=Platform.X, active=False)],
])
@pytest.mark.parametrize("provider", list(AIProvider))
def test_no_active_sources_means_no_call(adapter, fake_gemini_client, mock_api_client, sources, provider):
    settings = AppSettings(provider=provider, keys={p: "k" for p in AIProvider})

    assert adapter.generate_briefing(sources, settings) == []

    fake_gemini_client.models.generate_content.assert_not_called()
    mock_api_client.post.assert_not_called()


def test_dispatches_by_selected_provider(adapter, fake_gemini_client, mock_api_client, sample_sources):
    gemini_items = adapter.generate_briefing(sample_sources, AppSettings(provider=AIProvider.Gemini))
    assert all(i.id.startswith("gemini-") for i in gemini_items)
    mock_api_client.post.assert_not_called()

    qwen_settings = AppSettings(provider=AIProvider.Qwen, keys={AIProvider.Qwen: "sk-qwen"})
    qwen_items = adapter.generate_briefing(sample_sources, qwen_settings)
    assert all(i.id.startswith("qwen-") for i in qwen_items)
    assert mock_api_client.post.call_args.args[0] == QWEN_CONFIG.api_url
    fake_gemini_client.models.generate_content.assert_called_once()


def test_inactive_sources_are_not_sent(adapter, mock_api_client, sample_sources, deepseek_settings):
    adapter.generate_briefing(sample_sources, deepseek_settings)

    prompt = mock_api_client.post.call_args.args[2]["messages"][1]["content"]
    assert "TechCrunch" in prompt
    assert "Zhihu Daily" not in prompt


def test_empty_key_fails_before_network(adapter, mock_api_client, sample_sources):
    settings = AppSettings(provider=AIProvider.DeepSeek, keys={AIProvider.DeepSeek: ""})

    with pytest.raises(MissingCredentialError):
        adapter.generate_briefing(sample_sources, settings)
    mock_api_client.post.assert_not_called()


def test_repeated_calls_give_same_content_and_new_ids(adapter, sample_sources, deepseek_settings):
    first = adapter.generate_briefing(sample_sources, deepseek_settings)
    second = adapter.generate_briefing(sample_sources, deepseek_settings)

    assert [i.content for i in first] == [i.content for i in second]
    assert [i.summary for i in first] == [i.summary for i in second]
    assert not {i.id for i in first} & {i.id for i in second}
    assert first is not second


def test_unregistered_provider_raises(prompt_manager, sample_sources):
    adapter = FeedAdapter([])

    with pytest.raises(LLMError, match="No provider registered"):
        adapter.generate_briefing(sample_sources, AppSettings(provider=AIProvider.Gemini))


def test_new_provider_is_pure_registration(sample_sources, prompt_manager):
    class StubProvider(FeedProviderInterface):
        @property
        def provider(self):
            return AIProvider.Qwen

        def get_identifier(self):
            return "stub"

        def request_completion(self, sources, settings):
            return '[{"sourceName": "Stub", "platform": "blog"}]'

    adapter = FeedAdapter([])
    adapter.register(StubProvider(prompt_manager))

    items = adapter.generate_briefing(sample_sources, AppSettings(provider=AIProvider.Qwen))

    assert adapter.available_providers == [AIProvider.Qwen]
    assert items[0].id.startswith("stub-0-")
    assert items[0].platform is Platform.Blog
