# api/catalogs/views.py
"""
Option catalog endpoints. One parameterized router serves every catalog.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from db_models.catalog import CATALOGS
from .models import OptionCreate, OptionRead, CatalogList
from . import db_manager

router = APIRouter(prefix="/catalogs", tags=["catalogs"])


@router.get("", response_model=CatalogList, summary="List catalog names")
async def list_catalogs_endpoint(current_user: CurrentUser) -> CatalogList:
    return CatalogList(catalogs=list(CATALOGS))


@router.get(
    "/{catalog}",
    response_model=list[OptionRead],
    summary="List options of a catalog",
)
async def list_options_endpoint(
    catalog: str,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> list[OptionRead]:
    try:
        options = await db_manager.list_options(db, catalog)
    except db_manager.UnknownCatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return [OptionRead.model_validate(o) for o in options]


@router.post(
    "/{catalog}",
    response_model=OptionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add an option to a catalog",
)
async def add_option_endpoint(
    catalog: str,
    payload: OptionCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> OptionRead:
    try:
        option = await db_manager.add_option(db, catalog, payload.name)
    except db_manager.UnknownCatalogError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except db_manager.DuplicateOptionError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return OptionRead.model_validate(option)


@router.delete(
    "/{catalog}/{option_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an option",
)
async def delete_option_endpoint(
    catalog: str,
    option_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> Response:
    try:
        await db_manager.delete_option(db, catalog, option_id)
    except (db_manager.UnknownCatalogError, db_manager.OptionNotFoundError) as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
