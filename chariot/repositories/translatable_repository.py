# File: chariot/repositories/translatable_repository.py

import logging
from typing import Any, Iterable, List, Optional, Sequence, Set, TypeVar

from sqlalchemy import func, select

from chariot.repositories.base_repository import BaseRepository

T = TypeVar("T")

logger = logging.getLogger(__name__)


class TranslatableRepository(BaseRepository[T]):
    """
    Repository for documents that store their content per language.

    Search methods take a criteria object exposing `conditions`, a list of
    SQLAlchemy boolean clauses built by the search service.
    """

    def distinct_languages(self) -> List[str]:
        """
        Distinct language codes used by live documents, in first-seen order.

        Returns:
            List of 2-letter language codes
        """
        model_class = self._get_model()
        stmt = select(model_class.languages).where(model_class.deleted_at.is_(None))

        seen: Set[str] = set()
        ordered: List[str] = []
        for languages in self.session.execute(stmt).scalars():
            for lang in languages or []:
                if lang not in seen:
                    seen.add(lang)
                    ordered.append(lang)

        logger.debug(f"{model_class.__name__} distinct languages: {ordered}")
        return ordered

    def search(
        self,
        criteria: Any,
        order_by: Sequence[Any] = (),
        skip: int = 0,
        limit: Optional[int] = 100,
    ) -> List[T]:
        """
        Find documents matching the criteria.

        Args:
            criteria: Object with a `conditions` list of SQLAlchemy clauses
            order_by: ORDER BY clauses
            skip: Number of records to skip
            limit: Maximum number of records to return, None for all

        Returns:
            List of matching documents
        """
        model_class = self._get_model()
        stmt = select(model_class).where(*criteria.conditions)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    def count_matching(self, criteria: Any) -> int:
        """
        Count documents matching the criteria.

        Args:
            criteria: Object with a `conditions` list of SQLAlchemy clauses

        Returns:
            Number of matching documents
        """
        model_class = self._get_model()
        stmt = select(func.count(model_class.id)).select_from(model_class).where(*criteria.conditions)
        return self.session.execute(stmt).scalar_one()

    def find_existing_ids(self, ids: Iterable[str]) -> Set[str]:
        """
        Keep only the ids of live documents.

        Args:
            ids: Candidate primary keys

        Returns:
            Subset of `ids` that exist and are not soft-deleted
        """
        wanted = set(ids)
        if not wanted:
            return set()
        model_class = self._get_model()
        stmt = select(model_class.id).where(
            model_class.id.in_(wanted), model_class.deleted_at.is_(None)
        )
        return set(self.session.execute(stmt).scalars().all())

    def get_many(self, ids: Iterable[str]) -> List[T]:
        """Load live documents by id, in no particular order."""
        wanted = set(ids)
        if not wanted:
            return []
        model_class = self._get_model()
        stmt = select(model_class).where(
            model_class.id.in_(wanted), model_class.deleted_at.is_(None)
        )
        return list(self.session.execute(stmt).scalars().all())
