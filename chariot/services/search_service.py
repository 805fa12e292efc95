# File: chariot/services/search_service.py

"""
Search criteria for translatable documents.

The builder turns the `name` / `lang` query parameters into SQLAlchemy
conditions over the JSON `translations` column, together with the languages
each result should be projected to. Sorting and page-size handling live here
as well so both resource families list documents the same way.

Key behaviours:
- Soft-deleted documents never match
- `name` is a case-insensitive substring match on a translation name
- Without `lang`, a `name` search spans every language in use
- Only active translations ever match
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import and_, false, or_

from chariot.core.exceptions import ValidationException
from chariot.core.translations import validate_language_code

logger = logging.getLogger(__name__)

# Accepted sort keys, camelCase aliases included
SORT_FIELDS: Dict[str, str] = {
    "tag": "tag",
    "id": "id",
    "created_at": "created_at",
    "createdAt": "created_at",
    "updated_at": "updated_at",
    "updatedAt": "updated_at",
}


def escape_like(value: str, escape_char: str = "\\") -> str:
    """Escape LIKE wildcards so that `value` matches literally."""
    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", f"{escape_char}%")
        .replace("_", f"{escape_char}_")
    )


@dataclass
class SearchCriteria:
    """
    Result of TranslationSearchBuilder.build.

    Attributes:
        conditions: WHERE clauses, combined with AND
        languages: Languages every result is projected to, None for all active ones
        name_filter: Set when each result must be narrowed to the translations whose
                     name contains this text
    """

    conditions: List[Any] = field(default_factory=list)
    languages: Optional[List[str]] = None
    name_filter: Optional[str] = None

    @property
    def requires_post_filter(self) -> bool:
        return self.name_filter is not None

    def project(self, entity: Any) -> Optional[List[str]]:
        """
        Languages of `entity` to include in the response.

        Returns:
            List of language codes, or None to include every active translation
        """
        if self.languages is not None:
            return list(self.languages)
        if self.name_filter is None:
            return None

        needle = self.name_filter.lower()
        return [
            lang
            for lang, block in entity.translation_map().active_items()
            if needle in str(block.get("name") or "").lower()
        ]


class TranslationSearchBuilder:
    """Builds search criteria over a translatable model."""

    def __init__(self, model: Any):
        self.model = model

    def _active_block(self, lang: str):
        translations = self.model.translations
        return and_(
            translations[(lang, "name")].as_string().is_not(None),
            translations[(lang, "deleted_at")].as_string().is_(None),
        )

    def _name_matches(self, lang: str, pattern: str):
        return and_(
            self.model.translations[(lang, "name")].as_string().ilike(pattern, escape="\\"),
            self.model.translations[(lang, "deleted_at")].as_string().is_(None),
        )

    def build(
        self,
        name: Optional[str] = None,
        lang: Optional[str] = None,
        known_languages: Sequence[str] = (),
    ) -> SearchCriteria:
        """
        Build search criteria.

        Args:
            name: Substring of a translation name
            lang: Language to restrict to
            known_languages: Languages in use, needed for a `name` search without `lang`

        Returns:
            SearchCriteria

        Raises:
            InvalidLanguageCodeException: If `lang` is malformed
        """
        criteria = SearchCriteria(conditions=[self.model.deleted_at.is_(None)])
        name = name or None

        if lang:
            validate_language_code(lang)
            criteria.languages = [lang]
            if name:
                criteria.conditions.append(self._name_matches(lang, f"%{escape_like(name)}%"))
            else:
                criteria.conditions.append(self._active_block(lang))
        elif name:
            pattern = f"%{escape_like(name)}%"
            clauses = [self._name_matches(code, pattern) for code in known_languages]
            criteria.conditions.append(or_(*clauses) if clauses else false())
            criteria.name_filter = name

        logger.debug(
            f"{self.model.__name__} search: name={name!r} lang={lang!r} "
            f"conditions={len(criteria.conditions)} post_filter={criteria.requires_post_filter}"
        )
        return criteria

    def order_by(self, sort: Optional[str] = None) -> List[Any]:
        """
        ORDER BY clauses for a sort parameter.

        `sort` names a field, optionally prefixed with '-' for descending.
        Without it documents come by tag, certified first. `tag DESC` breaks
        ties on any other field and `id` always comes last.

        Raises:
            ValidationException: If the field cannot be sorted on
        """
        clauses = []
        primary = None

        if sort:
            descending = sort.startswith("-")
            key = sort[1:] if descending else sort
            if key not in SORT_FIELDS:
                raise ValidationException(
                    f"Invalid sort field '{key}'",
                    {"sort": [f"must be one of: {', '.join(SORT_FIELDS)}"]},
                )
            primary = SORT_FIELDS[key]
            column = getattr(self.model, primary)
            clauses.append(column.desc() if descending else column.asc())

        if primary != "tag":
            clauses.append(self.model.tag.desc())
        if primary != "id":
            clauses.append(self.model.id.asc())
        return clauses


def resolve_page_size(offset: Optional[int], default: int, maximum: int) -> int:
    """Clamp a requested page size between 1 and `maximum`."""
    if offset is None:
        return min(default, maximum)
    return max(1, min(offset, maximum))
