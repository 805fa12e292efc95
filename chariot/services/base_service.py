# File: chariot/services/base_service.py

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from chariot.core.config import settings
from chariot.core.exceptions import (
    ChariotException,
    ConcurrentModificationException,
    DatabaseException,
)
from chariot.repositories.base_repository import BaseRepository

T = TypeVar("T")
logger = logging.getLogger(__name__)


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a service operation: the payload and a timing message."""

    data: T
    message: str
    pagination: Optional[Dict[str, int]] = field(default=None)


def elapsed_ms(start: float) -> int:
    return int(round((time.perf_counter() - start) * 1000))


class BaseService(Generic[T]):
    """
    Base service for all Chariot services.

    Provides common functionality including:
    - Transaction management
    - Error handling and standardization
    - Operation logging
    """

    def __init__(
        self,
        session: Session,
        repository: Optional[BaseRepository] = None,
    ):
        """
        Initialize service with dependencies.

        Args:
            session: Database session for persistence operations
            repository: Repository instance (subclasses may set it themselves)
        """
        self.session = session
        self.repository = repository

    @contextmanager
    def transaction(self):
        """
        Provide a transactional scope around operations.

        Yields:
            None

        Raises:
            ChariotException: Domain errors are re-raised unchanged
            Exception: Any other error, transformed when `_transform_error` knows it
        """
        try:
            yield
            self.session.commit()
        except ChariotException as e:
            self.session.rollback()
            logger.error(f"Transaction aborted: {e.message}", extra={"error": e.to_dict()})
            raise
        except Exception as e:
            self.session.rollback()
            logger.error(f"Transaction failed: {str(e)}", exc_info=True)

            transformed = self._transform_error(e)
            if transformed:
                raise transformed from e
            raise

    def _result(self, data: Any, message: str, start: float, **extra) -> ServiceResult:
        """Build a ServiceResult whose message carries the elapsed time."""
        text = f"{message} in {elapsed_ms(start)}ms"
        logger.info(text)
        return ServiceResult(data=data, message=text, **extra)

    def _log_operation(
        self,
        operation: str,
        entity_type: str,
        entity_id: Any = None,
        details: Dict[str, Any] = None,
    ) -> None:
        """
        Log an operation for auditing purposes.

        Args:
            operation: Operation name (create, add_translation, delete, ...)
            entity_type: Type of entity being operated on
            entity_id: Optional entity ID
            details: Optional operation details
        """
        if not settings.LOG_TRANSLATION_OPERATIONS:
            return

        log_data = {
            "operation": operation,
            "entity_type": entity_type,
            "entity_id": entity_id,
            "timestamp": datetime.now().isoformat(),
            "details": details,
        }

        logger.info(f"{operation.upper()} {entity_type} {entity_id}", extra=log_data)

    def _transform_error(self, error: Exception) -> Optional[ChariotException]:
        """
        Transform persistence errors to domain exceptions.

        Args:
            error: The original exception

        Returns:
            Transformed domain exception, or None to re-raise original
        """
        entity_type = self.repository.model.__name__ if self.repository and self.repository.model else None
        if isinstance(error, StaleDataError):
            return ConcurrentModificationException(
                f"{entity_type or 'Entity'} was modified by another request, please retry"
            )
        if isinstance(error, SQLAlchemyError):
            return DatabaseException(
                "Database error while saving changes", entity_type=entity_type
            )
        return None
