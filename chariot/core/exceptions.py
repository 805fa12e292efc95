# File: chariot/core/exceptions.py

from datetime import datetime
from typing import Any, Dict, List, Optional


class ChariotException(Exception):
    """Base exception for all Chariot errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize a Chariot exception.

        Args:
            message: Human-readable error message
            code: Optional machine-processable error code
            details: Additional error details
        """
        self.message = message
        self.code = code or "GENERIC_ERROR"
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "timestamp": datetime.now().isoformat(),
        }


# Validation exceptions
class ValidationException(ChariotException):
    """Raised when input validation fails."""

    def __init__(
        self, message: str, validation_errors: Optional[Dict[str, List[str]]] = None
    ):
        super().__init__(
            message, "VALIDATION_001", {"validation_errors": validation_errors or {}}
        )


class InvalidLanguageCodeException(ValidationException):
    """Raised when a language code is not a lowercase 2-letter ISO code."""

    def __init__(self, lang: Any):
        super().__init__(
            f"Invalid language code '{lang}': must be a 2-letter ISO code in lowercase (e.g., fr, en, es)",
            {"lang": ["must match ^[a-z]{2}$"]},
        )
        self.code = "VALIDATION_002"
        self.lang = lang


# Lookup exceptions
class NotFoundException(ChariotException):
    """Base exception for resources that do not exist."""

    CODE_PREFIX = "NOT_FOUND_"


class EntityNotFoundException(NotFoundException):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            f"{entity_type} #{entity_id} not found",
            f"{self.CODE_PREFIX}001",
            {"entity_type": entity_type, "entity_id": entity_id},
        )


class TranslationNotFoundException(NotFoundException):
    """Raised when an entity has no translation for a language."""

    def __init__(self, entity_type: str, entity_id: Any, lang: str):
        super().__init__(
            f"Translation '{lang}' not found for {entity_type.lower()} #{entity_id}",
            f"{self.CODE_PREFIX}002",
            {"entity_type": entity_type, "entity_id": entity_id, "lang": lang},
        )


class GoneException(ChariotException):
    """Base exception for resources that existed but were soft-deleted."""

    CODE_PREFIX = "GONE_"


class EntityGoneException(GoneException):
    """Raised when a requested entity has been soft-deleted."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            f"{entity_type} #{entity_id} has been deleted",
            f"{self.CODE_PREFIX}001",
            {"entity_type": entity_type, "entity_id": entity_id},
        )


class TranslationGoneException(GoneException):
    """Raised when a requested translation has been soft-deleted."""

    def __init__(self, entity_type: str, entity_id: Any, lang: str):
        super().__init__(
            f"Translation '{lang}' for {entity_type.lower()} #{entity_id} has been deleted",
            f"{self.CODE_PREFIX}002",
            {"entity_type": entity_type, "entity_id": entity_id, "lang": lang},
        )


# Conflict exceptions
class DuplicateEntityException(ChariotException):
    """Raised when an attempt is made to create something that already exists."""

    def __init__(
        self,
        message: str = "Duplicate entity detected",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, "DUPLICATE_ENTITY", details or {})


class TranslationAlreadyExistsException(DuplicateEntityException):
    """Raised when adding a language key that is already present, deleted or not."""

    def __init__(self, entity_type: str, entity_id: Any, lang: str):
        super().__init__(
            f"Translation for language '{lang}' already exists for {entity_type.lower()} #{entity_id}",
            {"entity_type": entity_type, "entity_id": entity_id, "lang": lang},
        )


class ConcurrentModificationException(ChariotException):
    """Raised when a concurrent modification is detected."""

    def __init__(
        self,
        message: str,
        expected_version: Optional[int] = None,
        actual_version: Optional[int] = None,
    ):
        details = {}
        if expected_version is not None:
            details["expected_version"] = expected_version
        if actual_version is not None:
            details["actual_version"] = actual_version
        super().__init__(message, "CONCURRENCY_001", details)


# Forbidden operations
class ForbiddenOperationException(ChariotException):
    """Base exception for operations that are never allowed on a resource."""

    CODE_PREFIX = "FORBIDDEN_"


class SrdTranslationProtectedException(ForbiddenOperationException):
    """Raised when trying to delete or modify an SRD translation."""

    def __init__(self, entity_type: str, entity_id: Any, lang: str, operation: str = "delete"):
        super().__init__(
            f"Cannot {operation} SRD translation '{lang}' for {entity_type.lower()} #{entity_id}: SRD content is protected",
            f"{self.CODE_PREFIX}001",
            {"entity_type": entity_type, "entity_id": entity_id, "lang": lang, "operation": operation},
        )


class SrdEntityProtectedException(ForbiddenOperationException):
    """Raised when trying to delete or modify a document that holds SRD content."""

    def __init__(self, entity_type: str, entity_id: Any, operation: str = "delete"):
        super().__init__(
            f"Cannot {operation} {entity_type.lower()} #{entity_id}: it has at least one SRD translation",
            f"{self.CODE_PREFIX}003",
            {"entity_type": entity_type, "entity_id": entity_id, "operation": operation},
        )


class LastActiveTranslationException(ForbiddenOperationException):
    """Raised when deleting a translation would leave an entity without content."""

    def __init__(self, entity_type: str, entity_id: Any, lang: str):
        super().__init__(
            f"Cannot delete translation '{lang}' for {entity_type.lower()} #{entity_id}: it is the last active translation",
            f"{self.CODE_PREFIX}002",
            {"entity_type": entity_type, "entity_id": entity_id, "lang": lang},
        )


class DatabaseException(ChariotException):
    """
    Exception raised for database-related errors.
    """

    CODE_PREFIX = "DATABASE_"

    def __init__(
        self,
        message: str,
        entity_type: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if entity_type:
            error_details["entity_type"] = entity_type
        code = error_code or f"{self.CODE_PREFIX}001"
        super().__init__(message=message, code=code, details=error_details)
