# api/assets/views.py
"""
Asset registry endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser
from api.catalogs.db_manager import UnknownCatalogNameError
from .models import AssetCreate, AssetUpdate, AssetRead
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


@router.post(
    "",
    response_model=AssetRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register an asset",
)
async def create_asset_endpoint(
    payload: AssetCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    try:
        asset = await db_manager.create_asset(db, payload.model_dump())
    except UnknownCatalogNameError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return AssetRead.model_validate(asset)


@router.get(
    "",
    response_model=list[AssetRead],
    summary="List or search assets",
)
async def list_assets_endpoint(
    current_user: CurrentUser,
    q: str | None = Query(None, min_length=1, description="Search text"),
    db: AsyncSession = Depends(get_session),
) -> list[AssetRead]:
    """
    List all assets ordered by tag. With `q`, match tag, machine code,
    name or serial number.
    """
    assets = await db_manager.list_assets(db, q)
    return [AssetRead.model_validate(a) for a in assets]


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get asset by ID",
)
async def get_asset_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    try:
        asset = await db_manager.get_asset_or_raise(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return AssetRead.model_validate(asset)


@router.patch(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Edit an asset",
)
async def update_asset_endpoint(
    asset_id: int,
    payload: AssetUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    try:
        asset = await db_manager.update_asset(
            db, asset_id, payload.model_dump(exclude_unset=True)
        )
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except UnknownCatalogNameError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an asset",
)
async def delete_asset_endpoint(
    asset_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> Response:
    try:
        await db_manager.delete_asset(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except db_manager.AssetOnLoanError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return Response(status_code=status.HTTP_204_NO_CONTENT)
