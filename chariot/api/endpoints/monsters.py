"""
Monsters API endpoints for Chariot.

Provides search, document management and per-language translation
management for monsters. Business rules live in MonsterService; these routes
parse input, call the service and map domain errors to HTTP statuses.

Spell ids in spellcasting entries are answered as spell summaries in the
language each translation is served in.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from chariot.api.deps import get_monster_service
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
from chariot.schemas.monster import MonsterContent, MonsterContentUpdate, MonsterCreate
from chariot.services.monster_service import MonsterService

router = APIRouter()
logger = logging.getLogger(__name__)


# --- Monster Documents ---

@router.get("/", response_model=PaginatedResponse[TranslatableDocument])
def list_monsters(
    *,
    name: Optional[str] = Query(None, description="Case-insensitive substring of a monster name"),
    lang: Optional[str] = Query(None, description="Language code (e.g., 'en', 'fr')"),
    sort: Optional[str] = Query(None, description="Sort field, prefix with '-' for descending"),
    page: int = Query(0, ge=0, description="Zero-based page number"),
    offset: Optional[int] = Query(None, ge=1, description="Page size"),
    monster_service: MonsterService = Depends(get_monster_service),
) -> PaginatedResponse[TranslatableDocument]:
    """
    Search monsters.

    With `lang`, every monster is projected to that language. With `name` only,
    each monster shows the translations whose name matches.
    """
    search_params = TranslatableSearchParams(name=name, lang=lang, sort=sort, page=page, offset=offset)
    logger.info(f"Listing monsters with {search_params.model_dump(exclude_none=True)}")

    try:
        result = monster_service.find_all(**search_params.model_dump())
        return PaginatedResponse[TranslatableDocument](
            message=result.message,
            data=result.data,
            pagination=Pagination(**result.pagination),
        )
    except ValidationException as e:
        logger.warning(f"Validation error listing monsters: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error listing monsters: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving monsters.")


@router.get("/{monster_id}", response_model=ApiResponse[TranslatableDocument])
def get_monster(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    lang: Optional[str] = Query(None, description="Preferred language, falls back when unavailable"),
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[TranslatableDocument]:
    """Get a monster in the requested language, or the best available one."""
    try:
        result = monster_service.find_one(monster_id, lang)
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error getting monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving monster.")


@router.post("/", response_model=ApiResponse[TranslatableDocument], status_code=status.HTTP_201_CREATED)
def create_monster(
    *,
    monster_in: MonsterCreate,
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[TranslatableDocument]:
    """Create a homebrew monster with its first translation."""
    logger.info(f"Creating monster '{monster_in.content.name}' in '{monster_in.lang}'")
    try:
        result = monster_service.create(monster_in.lang, monster_in.content.model_dump())
        return ApiResponse[TranslatableDocument](message=result.message, data=result.data)
    except ValidationException as e:
        logger.warning(f"Failed to create monster '{monster_in.content.name}': {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error creating monster '{monster_in.content.name}': {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error creating monster.")


@router.patch("/{monster_id}", response_model=ApiResponse[TranslatableDocument])
def update_monster_tag(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    tag_in: TagUpdate,
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[TranslatableDocument]:
    """Change the certification tag of a monster."""
    try:
        result = monster_service.update_tag(monster_id, tag_in.tag)
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
        logger.error(f"Unexpected error updating monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating monster.")


@router.delete("/{monster_id}", response_model=ApiResponse[TranslatableDocument])
def delete_monster(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[TranslatableDocument]:
    """Soft-delete a monster."""
    logger.info(f"Deleting monster {monster_id}")
    try:
        result = monster_service.delete(monster_id)
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
        logger.error(f"Unexpected error deleting monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting monster.")


# --- Monster Translations ---

@router.get("/{monster_id}/translations", response_model=ApiResponse[List[TranslationSummary]])
def list_monster_translations(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[List[TranslationSummary]]:
    """List the active translations of a monster."""
    try:
        result = monster_service.list_translations(monster_id)
        return ApiResponse[List[TranslationSummary]](message=result.message, data=result.data)
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error listing translations of monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving monster translations."
        )


@router.get("/{monster_id}/translations/{lang}", response_model=ApiResponse[Dict[str, Any]])
def get_monster_translation(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[Dict[str, Any]]:
    """Get one translation of a monster."""
    try:
        result = monster_service.get_translation(monster_id, lang)
        return ApiResponse[Dict[str, Any]](message=result.message, data=result.data)
    except ValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except GoneException as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error getting translation '{lang}' of monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error retrieving monster translation."
        )


@router.post(
    "/{monster_id}/translations/{lang}",
    response_model=ApiResponse[TranslatableDocument],
    status_code=status.HTTP_201_CREATED,
)
def add_monster_translation(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    content_in: MonsterContent,
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[TranslatableDocument]:
    """Add a translation in a new language. New translations are never SRD."""
    logger.info(f"Adding translation '{lang}' to monster {monster_id}")
    try:
        result = monster_service.add_translation(monster_id, lang, content_in.model_dump())
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
        logger.error(f"Unexpected error adding translation '{lang}' to monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error adding monster translation."
        )


@router.patch("/{monster_id}/translations/{lang}", response_model=ApiResponse[TranslatableDocument])
def update_monster_translation(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    content_in: MonsterContentUpdate,
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[TranslatableDocument]:
    """Partially update a homebrew translation. SRD translations are read-only."""
    update_data = content_in.model_dump(exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No update data.")

    logger.info(f"Updating translation '{lang}' of monster {monster_id}: {sorted(update_data)}")
    try:
        result = monster_service.update_translation(monster_id, lang, update_data)
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
        logger.error(f"Unexpected error updating translation '{lang}' of monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating monster translation."
        )


@router.delete("/{monster_id}/translations/{lang}", response_model=ApiResponse[TranslationDeleted])
def delete_monster_translation(
    *,
    monster_id: str = Path(..., description="Monster ID"),
    lang: str = Path(..., description="Language code (e.g., 'en', 'fr')"),
    monster_service: MonsterService = Depends(get_monster_service),
) -> ApiResponse[TranslationDeleted]:
    """
    Soft-delete one translation of a monster.

    SRD translations and the last active translation cannot be deleted.
    """
    logger.info(f"Deleting translation '{lang}' of monster {monster_id}")
    try:
        result = monster_service.delete_translation(monster_id, lang)
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
        logger.error(f"Unexpected error deleting translation '{lang}' of monster {monster_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting monster translation."
        )
