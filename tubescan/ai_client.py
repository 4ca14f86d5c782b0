"""Text-generation client for SEO critique, caption advice and parodies.

Talks to any OpenAI-compatible chat completions endpoint (OpenRouter by
default). Keys, model and response language are passed in explicitly through
``AiSettings``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import openai

from tubescan.errors import AiRequestError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "qwen/qwen3-235b-a22b:free"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
SUPPORTED_LANGUAGES = ("en", "ko")


@dataclass(frozen=True)
class AiSettings:
    api_key: str
    model: str = DEFAULT_MODEL
    language: str = "en"


SEO_PROMPT = """
You are a YouTube SEO expert. Analyze this YouTube Shorts content and provide detailed SEO recommendations:

Title: "{title}"
Description: "{description}"
Hashtags: {hashtags}

Please provide:
1. An overall SEO score (0-100)
2. Title optimization feedback (current length, ideal length, and improvement suggestions)
   - Don't suggest rewriting the title
   - Provide specific reasons why the current title needs improvement
   - Each feedback point should be actionable advice
3. Description optimization feedback (current length, ideal length, what's missing)
   - Analyze keyword placement and density
4. Hashtag optimization (current count, ideal count, relevant hashtags to add)
5. Scores for each section: Title, Description, Hashtags, Overall (each X/100)

Format your response with clear sections and bullet points. Do NOT provide rewritten content.
"""

PARODY_PROMPT = '''
Create a humorous parody version of this YouTube Shorts script. Make it entertaining and slightly exaggerated while keeping the same basic structure and topic.

Original caption:
"""
{caption}
"""

Requirements:
1. Maintain the same general topic but add humor and exaggeration
2. Keep approximately the same length as the original
3. Make it entertaining but not offensive
4. Add a touch of satire about typical YouTube creator styles
'''

CAPTION_PROMPT = '''
You are a YouTube Shorts script optimization expert. Analyze this caption/script and provide optimization advice (do NOT rewrite the script):

Caption:
"""
{caption}
"""

Score each category 0-100 and give specific, actionable advice:
1. Hook (first few seconds)
2. Structure (emotional journey, flow, pacing)
3. Language style
4. Voice & perspective
5. Emotional impact
6. Core message and call to action
'''


class AiClient:
    def __init__(self, settings: AiSettings, base_url: str = DEFAULT_BASE_URL, client=None):
        if not settings.api_key:
            raise AiRequestError("An API key for the text-generation service is required")
        self.settings = settings
        self.client = client or openai.OpenAI(api_key=settings.api_key, base_url=base_url)

    def _system_prompt(self) -> str:
        language = "Respond in Korean language." if self.settings.language == "ko" else "Respond in English language."
        return f"You are a helpful YouTube content analysis assistant. {language}"

    def complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": self._system_prompt()},
                    {"role": "user", "content": prompt},
                ],
            )
        except openai.OpenAIError as exc:
            logger.error("AI request failed: %s", exc)
            raise AiRequestError(f"AI request failed: {exc}") from exc

        choices = getattr(response, "choices", None) or []
        content: Optional[str] = choices[0].message.content if choices else None
        if not content:
            raise AiRequestError("No response from AI")
        return content

    def analyze_seo(self, title: str, description: str, hashtags: Iterable[str]) -> str:
        return self.complete(SEO_PROMPT.format(title=title, description=description, hashtags=", ".join(hashtags)))

    def generate_parody(self, caption: str) -> str:
        return self.complete(PARODY_PROMPT.format(caption=caption))

    def analyze_caption_optimization(self, caption: str) -> str:
        return self.complete(CAPTION_PROMPT.format(caption=caption))
