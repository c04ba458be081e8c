"""
Prompt construction for summary generation.
"""

from dataclasses import dataclass
from typing import Dict, List

from ..config.constants import BULLET_MAX_TOKENS, MAX_PARAGRAPHS, SUMMARY_TEMPERATURE
from ..models.base import BaseModel
from ..models.summary import (
    BULLET_COUNTS,
    PARAGRAPH_WORDS,
    LengthPreset,
    OutputStyle,
)


@dataclass
class PromptSpec(BaseModel):
    """System/user message pair plus the completion budget for one call."""
    system_message: str
    user_message: str
    max_tokens: int
    target_count: int
    style: OutputStyle = OutputStyle.BULLETS
    temperature: float = SUMMARY_TEMPERATURE

    def to_messages(self) -> List[Dict[str, str]]:
        """Chat-completions message list."""
        return [
            {"role": "system", "content": self.system_message},
            {"role": "user", "content": self.user_message},
        ]


class PromptBuilder:
    """Builds the prompts sent to the language model."""

    BULLET_SYSTEM_PROMPT = (
        "You are an expert news editor who writes accurate summaries of blog posts. "
        "Respond with exactly {count} bullet point{plural}, one per line. "
        "Each bullet point is at most two lines long (about 20-25 words) and states "
        "one complete idea taken from the source. "
        "Do not add numbering, headings, introductions or closing remarks, and do not "
        "change or add to the meaning of the source."
    )

    BULLET_USER_PROMPT = (
        "Summarize the following content in exactly {count} bullet point{plural}. "
        "Language: {language}. Write only the bullet points, one per line:"
    )

    PARAGRAPH_SYSTEM_PROMPT = (
        "You are a helpful assistant that creates concise, accurate summaries of blog posts. "
        "Format your response as 2-3 short paragraphs (each maximum 2 lines, approximately "
        "20-25 words). Each paragraph should be a separate, complete thought. Keep summaries "
        "brief and focused on key points, and do not change the meaning of the source. "
        "Put each paragraph on its own line, without numbering."
    )

    PARAGRAPH_USER_PROMPT = (
        "Please provide a concise summary of the following content in approximately "
        "{words} words. Format the summary as 2-3 short paragraphs (each paragraph should "
        "be maximum 2 lines, approximately 20-25 words). Language: {language}. Write only "
        "the summary paragraphs, one per line, no additional text or numbering:"
    )

    def build(self,
              content: str,
              length: LengthPreset,
              language: str,
              style: OutputStyle = OutputStyle.BULLETS) -> PromptSpec:
        """Build the prompt for ``content``.

        Args:
            content: Cleaned plain-text post content
            length: Length preset (anything unknown resolves to medium)
            language: Target language code, passed through verbatim
            style: Bullet points (default) or paragraphs

        Returns:
            PromptSpec ready for the completion client
        """
        length = LengthPreset.resolve(length)
        style = OutputStyle.resolve(style)

        if style == OutputStyle.PARAGRAPHS:
            return self._build_paragraphs(content, length, language)
        return self._build_bullets(content, length, language)

    def target_count(self, length: LengthPreset, style: OutputStyle = OutputStyle.BULLETS) -> int:
        """Number of summary units kept for a preset."""
        if OutputStyle.resolve(style) == OutputStyle.PARAGRAPHS:
            return MAX_PARAGRAPHS
        return BULLET_COUNTS[LengthPreset.resolve(length)]

    def _build_bullets(self, content: str, length: LengthPreset, language: str) -> PromptSpec:
        count = BULLET_COUNTS[length]
        plural = "" if count == 1 else "s"

        instruction = self.BULLET_USER_PROMPT.format(count=count, plural=plural, language=language)

        return PromptSpec(
            system_message=self.BULLET_SYSTEM_PROMPT.format(count=count, plural=plural),
            user_message=f"{instruction}\n\n{content}",
            max_tokens=BULLET_MAX_TOKENS,
            target_count=count,
            style=OutputStyle.BULLETS,
        )

    def _build_paragraphs(self, content: str, length: LengthPreset, language: str) -> PromptSpec:
        words = PARAGRAPH_WORDS[length]

        instruction = self.PARAGRAPH_USER_PROMPT.format(words=words, language=language)

        return PromptSpec(
            system_message=self.PARAGRAPH_SYSTEM_PROMPT,
            user_message=f"{instruction}\n\n{content}",
            # Roughly 1.5 tokens per target word leaves room for formatting
            max_tokens=int(words * 1.5),
            target_count=MAX_PARAGRAPHS,
            style=OutputStyle.PARAGRAPHS,
        )
