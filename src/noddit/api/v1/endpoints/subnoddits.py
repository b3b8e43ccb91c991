# src/noddit/api/v1/endpoints/subnoddits.py
"""Subnoddit endpoints for the Noddit API."""

from fastapi import APIRouter, Query, status

from noddit.core.settings import settings
from noddit.models import Subnoddit
from noddit.schemas.subnoddit import SubnodditCreate, SubnodditResponse
from noddit.services import subnoddit_service
from noddit.services.exceptions import NotFoundError

from ..dependencies import CurrentUserIdDep, SessionDep

router = APIRouter(prefix="/subnoddits", tags=["subnoddits"])


@router.get("/", response_model=list[SubnodditResponse])
async def list_subnoddits(
    db: SessionDep,
    limit: int = Query(settings.default_page_limit, ge=1, le=settings.max_page_limit),
    offset: int = Query(0, ge=0),
) -> list[Subnoddit]:
    """List all subnoddits."""
    return list(subnoddit_service.list_subnoddits(db, skip=offset, limit=limit))


@router.get("/{subnoddit_id}", response_model=SubnodditResponse)
async def get_subnoddit(subnoddit_id: int, db: SessionDep) -> Subnoddit:
    """Get a specific subnoddit by ID."""
    subnoddit = subnoddit_service.get_subnoddit(db, subnoddit_id)
    if subnoddit is None:
        raise NotFoundError("Subnoddit not found")
    return subnoddit


@router.post("/", response_model=SubnodditResponse, status_code=status.HTTP_201_CREATED)
async def create_subnoddit(
    subnoddit_data: SubnodditCreate,
    _current_user_id: CurrentUserIdDep,
    db: SessionDep,
) -> Subnoddit:
    """Create a new subnoddit."""
    return subnoddit_service.create_subnoddit(db, subnoddit_data)
