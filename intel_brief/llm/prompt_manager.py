import logging
from typing import List, Tuple

from intel_brief.models import Source

JSON_ONLY_DIRECTIVE = "IMPORTANT: Return ONLY valid JSON."

OUTPUT_FORMAT = """
    Output Format JSON Array:
    [
      {
        "sourceName": "string",
        "platform": "string (X, Zhihu, XiaoHongShu, News, Blog)",
        "content": "string (full post text)",
        "summary": "string (1 sentence summary in {language})",
        "topic": "string (e.g. AI, Finance, Politics)",
        "sentiment": "string (Positive, Neutral, Negative)",
        "relevanceScore": number (0-100),
        "timestamp": "string (e.g. '2h ago')"
      }
    ]
"""


class PromptManager:
    """
    Builds the instruction pair sent to every provider.
    """

    def __init__(self, target_language: str = "Chinese",
                 interests: Tuple[str, ...] = ("Tech", "Global Markets", "AI"),
                 min_items: int = 5, max_items: int = 8):
        self.logger = logging.getLogger('intel_brief.llm.prompt_manager')
        self.target_language = target_language
        self.interests = interests
        self.min_items = min_items
        self.max_items = max_items

    def get_system_prompt(self) -> str:
        if len(self.interests) > 1:
            interests = ", ".join(self.interests[:-1]) + f", and {self.interests[-1]}"
        else:
            interests = "".join(self.interests)
        lang = self.target_language
        return f"""
  You are an advanced information filtering assistant.
  Act as a data simulation engine for a user interested in {interests}.

  Your task:
  1. Analyze the provided list of tracked sources.
  2. Generate {self.min_items} to {self.max_items} hypothetical, high-quality feed items that these sources might have posted recently. Vary the topics (Tech, Finance, Politics, Lifestyle, AI).
  3. Analyze each item to assign a sentiment and a relevance score (0-100).
  4. The 'summary' field MUST be in {lang} (summarize the content in {lang}).
  5. If the generated 'content' is not in {lang}, you MUST append the {lang} translation to the 'content' field (e.g., "Original Text... \\n\\n[Translation]: ...").
  6. Return the data strictly as a JSON array.
"""

    @staticmethod
    def describe_sources(sources: List[Source]) -> str:
        """Active sources only, joined by ', '."""
        return ", ".join(s.describe() for s in sources if s.active)

    def get_user_prompt(self, sources: List[Source]) -> str:
        sources_description = self.describe_sources(sources)
        self.logger.debug(f"User prompt built for sources: {sources_description}")
        return f"""
    Sources to simulate:
    [{sources_description}]
""" + OUTPUT_FORMAT.replace("{language}", self.target_language)

    def get_combined_prompt(self, sources: List[Source]) -> str:
        """System and user instructions in a single message, for chat-completion providers."""
        return f"{self.get_system_prompt()}\n\n{self.get_user_prompt(sources)}\n\n{JSON_ONLY_DIRECTIVE}"
