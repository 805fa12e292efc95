"""
Spells API endpoints for Chariot.

Provides search, document management and per-language translation
management for spells. Business rules live in SpellService; these routes
parse input, call the service and map domain errors to HTTP statuses.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from chariot.api.deps import get_spell_service
from chariot.core.exceptions import (
    ConcurrentModificationException,
    DuplicateEntityException,
    ForbiddenOperationException,
    GoneException,
    NotFoundException,
    ValidationException,
)
from chariot.schemas.common import (
    ApiResponse,
    PaginatedResponse,
    Pagination,
    TagUpdate,
    TranslatableDocument,
    TranslationDeleted,
    TranslationSummary,
)
from chariot.schemas.search_params import TranslatableSearchParams
from chariot.schemas.spell import SpellContent, SpellContentUpdate, SpellCreate
from chariot.services.spell_service import SpellService

router = APIRouter()
logger = logging.getLogger(__name__)


# --- Spell Documents ---

@router.get("/", response_model=PaginatedResponse[TranslatableDocument])
def list_spells(
    *,
    name: Optional[str] = Query(None, description="Case-insensitive substring of a spell name"),
    lang: Optional[str] = Query(None, description="Language code (e.g., 'en', 'fr')"),
    sort: Optional[str] = Query(None, description="Sort field, prefix with '-' for descending"),
    page: int = Query(0, ge=0, description="Zero-based page number"),
    offset: Optional[int] = Query(None, ge=1, description="Page size"),
    spell_service: SpellService = Depends(get_spell_service),
) -> PaginatedResponse[TranslatableDocument]:
    """
    Search spells.

    With `lang`, every spell is projected to that language. With `name` only,
    each spell shows the translations whose name matches.
    """
    search_params = TranslatableSearchParams(name=name, lang=lang, sort=sort, page=page, offset=offset)
    logger.info(f"Listing spells with {search_params.model_dump(exclude_none=True)}")

    try:
        result = spell_service.find_all(**search_params.model_dump())
        return PaginatedResponse[TranslatableDocument](
            message=result.message,
            data=result.data,
            pagination=Pagination(**result.pagination),
        )
    except ValidationException as e:
        logger.warning(f"Validation error listing spells: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error listing spells: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving spells.")


@router.get("/{spell_id}", response_model=ApiResponse[TranslatableDocument])
def get_spell(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    lang: Optional[str] = Query(None, description="Preferred language, falls back when unavailable"),
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[TranslatableDocument]:
    """Get a spell in the requested language, or the best available one."""
    try:
        result = spell_service.find_one(spell_id, lang)
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error getting spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving spell.")


@router.post("/", response_model=ApiResponse[TranslatableDocument], status_code=status.HTTP_201_CREATED)
def create_spell(
    *,
    spell_in: SpellCreate,
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[TranslatableDocument]:
    """Create a homebrew spell with its first translation."""
    logger.info(f"Creating spell '{spell_in.content.name}' in '{spell_in.lang}'")
    try:
        result = spell_service.create(spell_in.lang, spell_in.content.model_dump())
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except ValidationException as e:
        logger.warning(f"Failed to create spell '{spell_in.content.name}': {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error creating spell '{spell_in.content.name}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error creating spell.")


@router.patch("/{spell_id}", response_model=ApiResponse[TranslatableDocument])
def update_spell_tag(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    tag_in: TagUpdate,
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[TranslatableDocument]:
    """Change the certification tag of a spell."""
    try:
        result = spell_service.update_tag(spell_id, tag_in.tag)
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except ForbiddenOperationException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except ConcurrentModificationException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error updating spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating spell.")


@router.delete("/{spell_id}", response_model=ApiResponse[TranslatableDocument])
def delete_spell(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[TranslatableDocument]:
    """Soft-delete a spell."""
    logger.info(f"Deleting spell {spell_id}")
    try:
        result = spell_service.delete(spell_id)
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except ForbiddenOperationException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except ConcurrentModificationException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error deleting spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting spell.")


# --- Spell Translations ---

@router.get("/{spell_id}/translations", response_model=ApiResponse[List[TranslationSummary]])
def list_spell_translations(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[List[TranslationSummary]]:
    """List the active translations of a spell."""
    try:
        result = spell_service.list_translations(spell_id)
        return ApiResponse[List[TranslationSummary]](message=result.message, data=result.data)
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error listing translations of spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving spell translations."
        )


@router.get("/{spell_id}/translations/{lang}", response_model=ApiResponse[Dict[str, Any]])
def get_spell_translation(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[Dict[str, Any]]:
    """Get one translation of a spell."""
    try:
        result = spell_service.get_translation(spell_id, lang)
        return ApiResponse[Dict[str, Any]](message=result.message, data=result.data)
    except ValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error getting translation '{lang}' of spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving spell translation."
        )


@router.post(
    "/{spell_id}/translations/{lang}",
    response_model=ApiResponse[TranslatableDocument],
    status_code=status.HTTP_201_CREATED,
)
def add_spell_translation(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    content_in: SpellContent,
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[TranslatableDocument]:
    """Add a translation in a new language. New translations are never SRD."""
    logger.info(f"Adding translation '{lang}' to spell {spell_id}")
    try:
        result = spell_service.add_translation(spell_id, lang, content_in.model_dump())
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except ValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except (DuplicateEntityException, ConcurrentModificationException) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error adding translation '{lang}' to spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error adding spell translation."
        )


@router.patch("/{spell_id}/translations/{lang}", response_model=ApiResponse[TranslatableDocument])
def update_spell_translation(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    content_in: SpellContentUpdate,
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[TranslatableDocument]:
    """Partially update a homebrew translation. SRD translations are read-only."""
    update_data = content_in.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No update data.")

    logger.info(f"Updating translation '{lang}' of spell {spell_id}: {sorted(update_data)}")
    try:
        result = spell_service.update_translation(spell_id, lang, update_data)
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except ValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ForbiddenOperationException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except ConcurrentModificationException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error updating translation '{lang}' of spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating spell translation."
        )


@router.delete("/{spell_id}/translations/{lang}", response_model=ApiResponse[TranslationDeleted])
def delete_spell_translation(
    *,
    spell_id: str = Path(..., description="Spell ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    spell_service: SpellService = Depends(get_spell_service),
) -> ApiResponse[TranslationDeleted]:
    """
    Soft-delete one translation of a spell.

    SRD translations and the last active translation cannot be deleted.
    """
    logger.info(f"Deleting translation '{lang}' of spell {spell_id}")
    try:
        result = spell_service.delete_translation(spell_id, lang)
        return ApiResponse[TranslationDeleted](message=result.message, data=result.data)
    except ValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ForbiddenOperationException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except ConcurrentModificationException as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error deleting translation '{lang}' of spell {spell_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting spell translation."
        )
