# tests/core/test_exceptions.py
from chariot.core.exceptions import (
    ChariotException,
    ConcurrentModificationException,
    DuplicateEntityException,
    EntityGoneException,
    EntityNotFoundException,
    ForbiddenOperationException,
    GoneException,
    InvalidLanguageCodeException,
    LastActiveTranslationException,
    NotFoundException,
    SrdTranslationProtectedException,
    TranslationAlreadyExistsException,
    TranslationGoneException,
    TranslationNotFoundException,
    ValidationException,
)


def test_error_kinds():
    assert isinstance(InvalidLanguageCodeException("EN"), ValidationException)
    assert isinstance(EntityNotFoundException("Spell", "1"), NotFoundException)
    assert isinstance(TranslationNotFoundException("Spell", "1", "fr"), NotFoundException)
    assert isinstance(EntityGoneException("Spell", "1"), GoneException)
    assert isinstance(TranslationGoneException("Spell", "1", "fr"), GoneException)
    assert isinstance(TranslationAlreadyExistsException("Spell", "1", "fr"), DuplicateEntityException)
    assert isinstance(SrdTranslationProtectedException("Spell", "1", "en"), ForbiddenOperationException)
    assert isinstance(LastActiveTranslationException("Spell", "1", "en"), ForbiddenOperationException)
    assert isinstance(ConcurrentModificationException("conflict"), ChariotException)


def test_messages():
    assert str(EntityNotFoundException("Spell", "abc")) == "Spell #abc not found"
    assert str(EntityGoneException("Monster", "abc")) == "Monster #abc has been deleted"
    assert "'FR'" in str(InvalidLanguageCodeException("FR"))
    assert "modify" in str(SrdTranslationProtectedException("Spell", "abc", "en", operation="modify"))


def test_to_dict():
    error = TranslationNotFoundException("Spell", "abc", "de")
    data = error.to_dict()

    assert data["code"] == "NOT_FOUND_002"
    assert data["message"] == "Translation 'de' not found for spell #abc"
    assert data["details"] == {"entity_type": "Spell", "entity_id": "abc", "lang": "de"}
    assert "timestamp" in data


def test_validation_errors_are_kept():
    error = ValidationException("Bad content", {"components": ["expected 3 component(s)"]})
    assert error.details == {"validation_errors": {"components": ["expected 3 component(s)"]}}
