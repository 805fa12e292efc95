# File: chariot/services/localization_service.py

"""
Language resolution for translatable documents.

Reads ask for a language; documents may not have it. The service picks the
language to serve, falling back in a deterministic way, and embeds spell
summaries into monster spellcasting entries in the language being served.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from chariot.core.exceptions import TranslationNotFoundException
from chariot.core.translations import TranslationMap, is_valid_language_code

logger = logging.getLogger(__name__)

SPELL_SUMMARY_FIELDS = (
    "srd",
    "name",
    "description",
    "level",
    "school",
    "casting_time",
    "range",
    "components",
    "duration",
    "effect_type",
    "damage",
    "healing",
)


class LocalizationService:
    """
    Resolves which translation of a document to serve.

    The default locale is configuration, handed in by the caller.
    """

    def __init__(self, default_locale: str):
        """
        Initialize the LocalizationService.

        Args:
            default_locale: Language used when a read does not ask for one
        """
        self.default_locale = default_locale

    def resolve_language(self, tmap: TranslationMap, requested: Optional[str] = None) -> Optional[str]:
        """
        Pick the language to serve.

        The requested language (or the default locale) wins when it names an
        active translation. Otherwise the first active language, in insertion
        order, is used.

        Args:
            tmap: Translations of the document
            requested: Language asked for by the client

        Returns:
            Language code, or None if the document has no active translation
        """
        requested = requested or self.default_locale
        if is_valid_language_code(requested) and tmap.is_active(requested):
            return requested

        active = tmap.active_languages()
        if not active:
            return None

        logger.debug(f"Language '{requested}' unavailable, falling back to '{active[0]}'")
        return active[0]

    def resolve_and_fetch(self, entity: Any, requested: Optional[str] = None) -> Tuple[str, Dict[str, Any]]:
        """
        Resolve the language for a document and return its block.

        Raises:
            TranslationNotFoundException: If the document has no active translation
        """
        tmap = entity.translation_map()
        lang = self.resolve_language(tmap, requested)
        if lang is None:
            raise TranslationNotFoundException(
                entity.__class__.__name__, entity.id, requested or self.default_locale
            )
        return lang, dict(tmap.get(lang))

    def summarize_spell(self, spell: Any, lang: str) -> Optional[Dict[str, Any]]:
        """Spell summary in `lang`, or in the spell's first language."""
        tmap = spell.translation_map()
        resolved = self.resolve_language(tmap, lang)
        if resolved is None:
            return None
        block = tmap.get(resolved)
        summary = {"id": spell.id, "lang": resolved}
        summary.update({name: block.get(name) for name in SPELL_SUMMARY_FIELDS})
        summary["srd"] = bool(summary["srd"])
        summary["components"] = list(summary["components"] or [])
        return summary

    def populate_spellcasting(
        self,
        block: Mapping[str, Any],
        lang: str,
        spells_by_id: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Replace spell ids in a monster block with spell summaries.

        Ids with no live spell are dropped.

        Args:
            block: Monster content block
            lang: Language the block is served in
            spells_by_id: Live spells keyed by id

        Returns:
            A new block; the input is left untouched
        """
        populated = dict(block)
        entries: List[Dict[str, Any]] = []
        for entry in block.get("spellcasting") or []:
            new_entry = dict(entry)
            summaries = []
            for spell_id in entry.get("spells") or []:
                spell = spells_by_id.get(spell_id)
                summary = self.summarize_spell(spell, lang) if spell is not None else None
                if summary is None:
                    logger.warning(f"Spell #{spell_id} referenced in '{lang}' block is unavailable, skipping")
                    continue
                summaries.append(summary)
            new_entry["spells"] = summaries
            entries.append(new_entry)
        populated["spellcasting"] = entries
        return populated
