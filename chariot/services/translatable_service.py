# File: chariot/services/translatable_service.py

"""
Translation lifecycle for spells and monsters.

A translatable document keeps one content block per language. This service
owns the rules around those blocks:
- language codes are validated before anything else
- SRD blocks can never be modified or deleted
- deletion is soft, for translations and documents alike
- a document always keeps at least one active translation
- `languages` is rewritten from the active blocks after every change

Each operation checks everything first, mutates only when all checks pass
and returns a ServiceResult whose message carries the elapsed time.
"""

import logging
import time
from typing import Any, Dict, List, Optional, TypeVar

from sqlalchemy.orm import Session

from chariot.core.config import settings
from chariot.core.exceptions import (
    EntityGoneException,
    EntityNotFoundException,
    InvalidLanguageCodeException,
    LastActiveTranslationException,
    SrdEntityProtectedException,
    SrdTranslationProtectedException,
    TranslationAlreadyExistsException,
    TranslationGoneException,
    TranslationNotFoundException,
)
from chariot.core.translations import (
    TranslationMap,
    is_active_block,
    utc_now,
    validate_language_code,
)
from chariot.repositories.translatable_repository import TranslatableRepository
from chariot.services.base_service import BaseService, ServiceResult
from chariot.services.localization_service import LocalizationService
from chariot.services.search_service import TranslationSearchBuilder, resolve_page_size

T = TypeVar("T")
logger = logging.getLogger(__name__)


class TranslatableService(BaseService[T]):
    """
    Generic service for documents stored as per-language content blocks.

    Subclasses set `entity_type` and may override `_validate_content` and
    `_present` for resource-specific rules and output.
    """

    entity_type = "Entity"

    # Managed by the service, never taken from client content
    RESERVED_BLOCK_KEYS = frozenset({"srd", "created_at", "updated_at", "deleted_at"})

    def __init__(
        self,
        session: Session,
        repository: TranslatableRepository,
        localization_service: Optional[LocalizationService] = None,
    ):
        """
        Initialize the service.

        Args:
            session: Database session for persistence operations
            repository: Repository for the managed document type
            localization_service: Language resolver, built from settings if omitted
        """
        super().__init__(session, repository=repository)
        self.localization = localization_service or LocalizationService(settings.DEFAULT_LOCALE)
        self.search_builder = TranslationSearchBuilder(repository.model)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _validate_content(
        self,
        tmap: TranslationMap,
        lang: str,
        content: Dict[str, Any],
    ) -> None:
        """
        Resource-specific checks on a block about to be written.

        Args:
            tmap: Current translations of the document (empty on create)
            lang: Language being written
            content: The complete block content after the change

        Raises:
            ValidationException: If the content is inconsistent
        """

    def _present(self, entities: List[T], languages: List[Optional[List[str]]]) -> List[Dict[str, Any]]:
        """Render documents, each restricted to its own list of languages."""
        return [entity.to_dict(langs) for entity, langs in zip(entities, languages)]

    def _present_one(self, entity: T, languages: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._present([entity], [languages])[0]

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_live_entity(self, id: str) -> T:
        """
        Load a document that exists and is not soft-deleted.

        Raises:
            EntityNotFoundException: If no document has this id
            EntityGoneException: If the document was soft-deleted
        """
        entity = self.repository.get_by_id(id)
        if entity is None:
            error = EntityNotFoundException(self.entity_type, id)
            logger.error(error.message)
            raise error
        if entity.is_deleted:
            error = EntityGoneException(self.entity_type, id)
            logger.error(error.message)
            raise error
        return entity

    def _validated_lang(self, lang: str) -> str:
        try:
            return validate_language_code(lang)
        except InvalidLanguageCodeException as e:
            logger.error(e.message)
            raise

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def find_all(
        self,
        name: Optional[str] = None,
        lang: Optional[str] = None,
        sort: Optional[str] = None,
        page: int = 0,
        offset: Optional[int] = None,
    ) -> ServiceResult[List[Dict[str, Any]]]:
        """
        Search documents and return one page of them.

        Args:
            name: Case-insensitive substring of a translation name
            lang: Language to restrict results to
            sort: Sort field, '-' prefix for descending
            page: Zero-based page number
            offset: Page size

        Returns:
            ServiceResult with the page of documents and pagination metadata
        """
        start = time.perf_counter()
        if lang:
            self._validated_lang(lang)

        known_languages = self.repository.distinct_languages() if name and not lang else []
        criteria = self.search_builder.build(name=name, lang=lang, known_languages=known_languages)
        order_by = self.search_builder.order_by(sort)
        size = resolve_page_size(offset, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
        page = max(page, 0)

        total = self.repository.count_matching(criteria)
        entities = self.repository.search(criteria, order_by, skip=page * size, limit=size)
        data = self._present(entities, [criteria.project(entity) for entity in entities])

        return self._result(
            data,
            f"{len(data)} {self.entity_type.lower()}(s) found",
            start,
            pagination={"page": page, "offset": size, "total_items": total},
        )

    def find_one(self, id: str, lang: Optional[str] = None) -> ServiceResult[Dict[str, Any]]:
        """
        Fetch a document projected to the best available language.

        The requested language is served when active; otherwise the
        resolver falls back, so a live document always answers.
        """
        start = time.perf_counter()
        entity = self.get_live_entity(id)
        resolved, _ = self.localization.resolve_and_fetch(entity, lang)
        return self._result(
            self._present_one(entity, [resolved]),
            f"{self.entity_type} #{id} found in '{resolved}'",
            start,
        )

    def create(self, lang: str, content: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        """
        Create a homebrew document with one translation.

        Args:
            lang: Language of the initial translation
            content: Block content

        Returns:
            ServiceResult with the new document
        """
        start = time.perf_counter()
        self._validated_lang(lang)
        self._validate_content(TranslationMap(), lang, content)

        now = utc_now().isoformat()
        tmap = TranslationMap()
        tmap.set(lang, self._new_block(content, now))

        with self.transaction():
            entity = self.repository.model(tag=0)
            entity.apply_translation_map(tmap)
            self.repository.save(entity)

        self._log_operation("create", self.entity_type, entity.id, {"lang": lang})
        return self._result(self._present_one(entity), f"{self.entity_type} #{entity.id} created", start)

    def update_tag(self, id: str, tag: int) -> ServiceResult[Dict[str, Any]]:
        """Change the certification tag of a live document."""
        start = time.perf_counter()
        entity = self.get_live_entity(id)
        self._ensure_no_srd(entity, "modify")

        with self.transaction():
            entity.tag = tag
            self.repository.save(entity)

        self._log_operation("update_tag", self.entity_type, id, {"tag": tag})
        return self._result(self._present_one(entity), f"{self.entity_type} #{id} updated", start)

    def delete(self, id: str) -> ServiceResult[Dict[str, Any]]:
        """
        Soft-delete a document.

        Only the document is stamped; its translation blocks are left as they are.
        Documents holding SRD content cannot be deleted.
        """
        start = time.perf_counter()
        entity = self.get_live_entity(id)
        self._ensure_no_srd(entity, "delete")

        with self.transaction():
            entity.deleted_at = utc_now()
            self.repository.save(entity)

        self._log_operation("delete", self.entity_type, id)
        return self._result(self._present_one(entity), f"{self.entity_type} #{id} deleted", start)

    # ------------------------------------------------------------------
    # Translations
    # ------------------------------------------------------------------

    def list_translations(self, id: str) -> ServiceResult[List[Dict[str, Any]]]:
        """Summaries of the active translations, in `languages` order."""
        start = time.perf_counter()
        entity = self.get_live_entity(id)
        tmap = entity.translation_map()

        summaries = []
        for lang in entity.languages or []:
            block = tmap.get(lang)
            if not is_active_block(block):
                continue
            summaries.append(
                {
                    "lang": lang,
                    "srd": bool(block.get("srd")),
                    "name": block.get("name"),
                    "created_at": block.get("created_at"),
                    "updated_at": block.get("updated_at"),
                }
            )

        return self._result(
            summaries,
            f"{len(summaries)} translation(s) found for {self.entity_type.lower()} #{id}",
            start,
        )

    def get_translation(self, id: str, lang: str) -> ServiceResult[Dict[str, Any]]:
        """
        Return one translation block verbatim.

        Raises:
            TranslationGoneException: If the block was soft-deleted
            TranslationNotFoundException: If there is no block for `lang`
        """
        start = time.perf_counter()
        entity = self.get_live_entity(id)
        self._validated_lang(lang)
        block = self._existing_block(entity, lang)
        return self._result(
            dict(block),
            f"Translation '{lang}' for {self.entity_type.lower()} #{id} found",
            start,
        )

    def add_translation(self, id: str, lang: str, content: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        """
        Add a translation in a new language.

        A language that was ever present, even soft-deleted, cannot be added again.

        Raises:
            InvalidLanguageCodeException: If `lang` is malformed
            TranslationAlreadyExistsException: If the language key already exists
            ValidationException: If resource-specific checks fail
        """
        start = time.perf_counter()
        self._validated_lang(lang)
        entity = self.get_live_entity(id)
        tmap = entity.translation_map()

        if lang in tmap:
            error = TranslationAlreadyExistsException(self.entity_type, id, lang)
            logger.error(error.message)
            raise error

        self._validate_content(tmap, lang, content)

        tmap.set(lang, self._new_block(content, utc_now().isoformat()))
        with self.transaction():
            entity.apply_translation_map(tmap)
            self.repository.save(entity)

        self._log_operation("add_translation", self.entity_type, id, {"lang": lang})
        return self._result(
            self._present_one(entity, [lang]),
            f"Translation '{lang}' added to {self.entity_type.lower()} #{id}",
            start,
        )

    def update_translation(self, id: str, lang: str, changes: Dict[str, Any]) -> ServiceResult[Dict[str, Any]]:
        """
        Partially update a homebrew translation.

        Raises:
            SrdTranslationProtectedException: If the block is SRD content
        """
        start = time.perf_counter()
        self._validated_lang(lang)
        entity = self.get_live_entity(id)
        block = self._existing_block(entity, lang)

        if block.get("srd"):
            error = SrdTranslationProtectedException(self.entity_type, id, lang, operation="modify")
            logger.error(error.message)
            raise error

        changes = {k: v for k, v in changes.items() if k not in self.RESERVED_BLOCK_KEYS}
        updated = dict(block)
        updated.update(changes)
        tmap = entity.translation_map()
        self._validate_content(tmap, lang, updated)

        updated["updated_at"] = utc_now().isoformat()
        tmap.set(lang, updated)
        with self.transaction():
            entity.apply_translation_map(tmap)
            self.repository.save(entity)

        self._log_operation("update_translation", self.entity_type, id, {"lang": lang, "fields": sorted(changes)})
        return self._result(
            self._present_one(entity, [lang]),
            f"Translation '{lang}' updated for {self.entity_type.lower()} #{id}",
            start,
        )

    def delete_translation(self, id: str, lang: str) -> ServiceResult[Dict[str, Any]]:
        """
        Soft-delete one translation.

        Raises:
            TranslationNotFoundException: If there is no block for `lang`
            TranslationGoneException: If the block is already deleted
            SrdTranslationProtectedException: If the block is SRD content
            LastActiveTranslationException: If it is the only active translation
        """
        start = time.perf_counter()
        self._validated_lang(lang)
        entity = self.get_live_entity(id)
        block = self._existing_block(entity, lang)

        if block.get("srd"):
            error = SrdTranslationProtectedException(self.entity_type, id, lang)
            logger.error(error.message)
            raise error

        tmap = entity.translation_map()
        if tmap.active_languages() == [lang]:
            error = LastActiveTranslationException(self.entity_type, id, lang)
            logger.error(error.message)
            raise error

        stamped = dict(block)
        stamped["deleted_at"] = utc_now().isoformat()
        tmap.set(lang, stamped)
        with self.transaction():
            entity.apply_translation_map(tmap)
            self.repository.save(entity)

        self._log_operation("delete_translation", self.entity_type, id, {"lang": lang})
        return self._result(
            {"deleted_language": lang, "remaining_languages": list(entity.languages)},
            f"Translation '{lang}' deleted from {self.entity_type.lower()} #{id}",
            start,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _new_block(self, content: Dict[str, Any], now: str) -> Dict[str, Any]:
        block = {k: v for k, v in content.items() if k not in self.RESERVED_BLOCK_KEYS}
        block.update({"srd": False, "created_at": now, "updated_at": now, "deleted_at": None})
        return block

    def _ensure_no_srd(self, entity: T, operation: str) -> None:
        """SRD documents are read-only as a whole, soft-deleted SRD blocks included."""
        if any(block.get("srd") for block in (entity.translations or {}).values()):
            error = SrdEntityProtectedException(self.entity_type, entity.id, operation)
            logger.error(error.message)
            raise error

    def _existing_block(self, entity: T, lang: str) -> Dict[str, Any]:
        """Block for `lang`; Gone takes priority over NotFound."""
        block = entity.translation_map().get(lang)
        if block is None:
            error = TranslationNotFoundException(self.entity_type, entity.id, lang)
            logger.error(error.message)
            raise error
        if not is_active_block(block):
            error = TranslationGoneException(self.entity_type, entity.id, lang)
            logger.error(error.message)
            raise error
        return block
