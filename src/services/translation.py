"""Static lookup "translation" of posts and comments.

There is no translation service behind this: texts are rewritten from a
YAML table shipped with the app. The table has two sections:

    phrases:   exact text (whitespace-trimmed) -> replacement text
    words:     single word (case-insensitive) -> replacement word

A whole-text phrase match wins; otherwise every word found in ``words`` is
substituted in place, keeping a leading capital letter. Unknown words pass
through untouched, so translating never fails.
"""

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Optional

import yaml

from src.core.exceptions import TranslationTableError
from src.core.types import PostDTO, CommentDTO

logger = logging.getLogger("postscroll")

_WORD_PATTERN = re.compile(r"\w+")


class StaticTranslator:
    """Pure text substitution over a phrase table and a word table."""

    def __init__(self, phrases: Optional[dict] = None, words: Optional[dict] = None):
        self._phrases = {str(k).strip(): str(v) for k, v in (phrases or {}).items()}
        self._words = {str(k).lower(): str(v) for k, v in (words or {}).items()}

    @classmethod
    def from_yaml(cls, path: Path) -> "StaticTranslator":
        """Build a translator from a YAML table.

        Raises:
            TranslationTableError: File unreadable, not YAML, or wrong shape
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise TranslationTableError(f"Cannot read translation table {path}: {e}")

        if not isinstance(data, dict):
            raise TranslationTableError(f"Translation table {path} must be a mapping")

        phrases = data.get("phrases") or {}
        words = data.get("words") or {}
        if not isinstance(phrases, dict) or not isinstance(words, dict):
            raise TranslationTableError(
                f"Translation table {path}: 'phrases' and 'words' must be mappings"
            )

        logger.info(f"Loaded translation table {path.name} "
                    f"({len(phrases)} phrases, {len(words)} words)")
        return cls(phrases, words)

    @classmethod
    def load(cls, path: Path) -> "StaticTranslator":
        """Like from_yaml(), but falls back to an identity translator."""
        try:
            return cls.from_yaml(path)
        except TranslationTableError as e:
            logger.warning(f"{e}. Translation toggle will show original text.")
            return cls()

    def translate_text(self, text: str) -> str:
        phrase = self._phrases.get(text.strip())
        if phrase is not None:
            return phrase
        if not self._words:
            return text
        return _WORD_PATTERN.sub(self._substitute_word, text)

    def translate_post(self, post: PostDTO) -> PostDTO:
        return replace(
            post,
            title=self.translate_text(post.title),
            body=self.translate_text(post.body),
        )

    def translate_comment(self, comment: CommentDTO) -> CommentDTO:
        # email is an address, not prose
        return replace(
            comment,
            name=self.translate_text(comment.name),
            body=self.translate_text(comment.body),
        )

    def _substitute_word(self, match: re.Match) -> str:
        word = match.group(0)
        translated = self._words.get(word.lower())
        if translated is None:
            return word
        if word[0].isupper():
            return translated[:1].upper() + translated[1:]
        return translated
