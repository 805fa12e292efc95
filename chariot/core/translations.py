# File: chariot/core/translations.py
"""
Language-keyed content containers.

Every translatable document (spell, monster) persists its content as a JSON
object keyed by 2-letter language code. `TranslationMap` wraps that object
with code validation on insertion and the "active language" view used by the
services. It deliberately knows nothing about SRD protection or the
last-active rule; those live in the translatable service.
"""

import copy
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from chariot.core.exceptions import InvalidLanguageCodeException

LANGUAGE_CODE_PATTERN = re.compile(r"[a-z]{2}")

ContentBlock = Dict[str, Any]


def is_valid_language_code(lang: Any) -> bool:
    """Return True if `lang` is a lowercase 2-letter ISO code."""
    return isinstance(lang, str) and LANGUAGE_CODE_PATTERN.fullmatch(lang) is not None


def validate_language_code(lang: Any) -> str:
    """
    Validate a language code.

    Raises:
        InvalidLanguageCodeException: If the code is not a lowercase 2-letter ISO code
    """
    if not is_valid_language_code(lang):
        raise InvalidLanguageCodeException(lang)
    return lang


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_active_block(block: Optional[Mapping[str, Any]]) -> bool:
    """A block is active while it exists and carries no deletion stamp."""
    return block is not None and block.get("deleted_at") is None


class TranslationMap:
    """
    Ordered mapping of language code to content block.

    Iteration follows insertion order, which is also the order in which
    languages were added to the owning entity.
    """

    def __init__(self, blocks: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._blocks: Dict[str, ContentBlock] = {}
        for lang, block in (blocks or {}).items():
            self.set(lang, block)

    def get(self, lang: str) -> Optional[ContentBlock]:
        return self._blocks.get(lang)

    def set(self, lang: str, block: Mapping[str, Any]) -> None:
        """Insert or overwrite the block for `lang`."""
        validate_language_code(lang)
        self._blocks[lang] = dict(block)

    def is_active(self, lang: str) -> bool:
        return is_active_block(self._blocks.get(lang))

    def active_languages(self) -> List[str]:
        return [lang for lang, block in self._blocks.items() if is_active_block(block)]

    def active_items(self, languages: Optional[Iterable[str]] = None) -> List[Tuple[str, ContentBlock]]:
        """
        Active (lang, block) pairs in insertion order.

        Args:
            languages: Optional subset of languages to keep

        Returns:
            List of (lang, block) tuples
        """
        wanted = set(languages) if languages is not None else None
        return [
            (lang, block)
            for lang, block in self._blocks.items()
            if is_active_block(block) and (wanted is None or lang in wanted)
        ]

    def to_dict(self) -> Dict[str, ContentBlock]:
        """Deep copy of the underlying mapping, ready to be persisted."""
        return copy.deepcopy(self._blocks)

    def __contains__(self, lang: object) -> bool:
        return lang in self._blocks

    def __iter__(self) -> Iterator[str]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return f"<TranslationMap(languages={list(self._blocks)}, active={self.active_languages()})>"
