# api/borrows/views.py
"""
Borrow ledger endpoints: lend, return, edit, list.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from core.deps import CurrentUser, Today
from core.lifecycle import (
    AlreadyReturnedError,
    BorrowValidationError,
    DuplicateBorrowError,
    ReopenLoanError,
)
from api.assets.db_manager import AssetNotFoundError
from api.catalogs.db_manager import UnknownCatalogNameError
from .models import BorrowCreate, BorrowUpdate, BorrowRead, ActiveAssetsResponse
from . import db_manager

router = APIRouter(prefix="/borrows", tags=["borrows"])


@router.post(
    "",
    response_model=BorrowRead,
    status_code=status.HTTP_201_CREATED,
    summary="Lend an asset",
)
async def create_borrow_endpoint(
    payload: BorrowCreate,
    current_user: CurrentUser,
    today: Today,
    db: AsyncSession = Depends(get_session),
) -> BorrowRead:
    """
    Record a new loan. Rejected with 409 while the asset has an open loan.
    Without a lender name the signed-in user is recorded as lender.
    """
    try:
        record = await db_manager.create_borrow(
            db,
            payload.model_dump(),
            today=today,
            lender_default=current_user.full_name,
        )
    except DuplicateBorrowError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except (BorrowValidationError, UnknownCatalogNameError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return BorrowRead.model_validate(record)


@router.get(
    "",
    response_model=list[BorrowRead],
    summary="List borrow records",
)
async def list_borrows_endpoint(
    current_user: CurrentUser,
    returned: bool | None = Query(None, description="Only returned (true) or outstanding (false) loans"),
    db: AsyncSession = Depends(get_session),
) -> list[BorrowRead]:
    records = await db_manager.list_borrows(db, returned)
    return [BorrowRead.model_validate(r) for r in records]


@router.get(
    "/active-assets",
    response_model=ActiveAssetsResponse,
    summary="Assets currently on loan",
)
async def active_assets_endpoint(
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> ActiveAssetsResponse:
    active = await db_manager.get_active_asset_ids(db)
    return ActiveAssetsResponse(asset_ids=sorted(active))


@router.get(
    "/{borrow_id}",
    response_model=BorrowRead,
    summary="Get borrow record by ID",
)
async def get_borrow_endpoint(
    borrow_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> BorrowRead:
    try:
        record = await db_manager.get_borrow_or_raise(db, borrow_id)
    except db_manager.BorrowNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return BorrowRead.model_validate(record)


@router.post(
    "/{borrow_id}/return",
    response_model=BorrowRead,
    summary="Mark a loan as returned today",
)
async def mark_returned_endpoint(
    borrow_id: int,
    current_user: CurrentUser,
    today: Today,
    db: AsyncSession = Depends(get_session),
) -> BorrowRead:
    try:
        record = await db_manager.mark_returned(db, borrow_id, today=today)
    except db_manager.BorrowNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except AlreadyReturnedError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc

    return BorrowRead.model_validate(record)


@router.patch(
    "/{borrow_id}",
    response_model=BorrowRead,
    summary="Edit a borrow record",
)
async def update_borrow_endpoint(
    borrow_id: int,
    payload: BorrowUpdate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_session),
) -> BorrowRead:
    """
    Edit borrower details or dates. Sending an end_date marks the loan
    returned; an end date earlier than the borrow date is rejected.
    """
    try:
        record = await db_manager.update_borrow(
            db, borrow_id, payload.model_dump(exclude_unset=True)
        )
    except db_manager.BorrowNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except ReopenLoanError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        ) from exc
    except (BorrowValidationError, UnknownCatalogNameError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return BorrowRead.model_validate(record)
