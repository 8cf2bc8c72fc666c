"""Curry catalog routes"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, require_admin
from domain.enums import CatalogKind
from domain.models import AppUser
from domain.schemas.catalog_schemas import (
    CurryCreate,
    CurryEnvelope,
    CurryListResponse,
    CurryResponse,
    CurryUpdate,
    DeleteEntryResponse,
)
from services.catalog_service import CatalogService

router = APIRouter(prefix="/curries", tags=["Curries"])
logger = logging.getLogger("canteen.api.curries")

KIND = CatalogKind.CURRY


@router.get("", response_model=CurryListResponse)
def list_curries(
    available: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """All curries, newest first, wrapped as ``{"curries": [...]}``"""
    curries = CatalogService.list_entries(db, KIND, available)
    return {"curries": [CurryResponse.model_validate(c) for c in curries]}


@router.get("/{curry_id}", response_model=CurryResponse)
def get_curry(curry_id: UUID, db: Session = Depends(get_db)):
    return CatalogService.get_entry(db, KIND, curry_id)


@router.post("", response_model=CurryEnvelope, status_code=status.HTTP_201_CREATED)
def create_curry(
    payload: CurryCreate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    curry = CatalogService.create_entry(db, KIND, admin, payload.name)
    return {
        "message": "Curry created successfully",
        "curry": CurryResponse.model_validate(curry),
    }


@router.put("/{curry_id}", response_model=CurryEnvelope)
def update_curry(
    curry_id: UUID,
    payload: CurryUpdate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    curry = CatalogService.update_entry(
        db, KIND, curry_id, admin, name=payload.name, available=payload.available
    )
    return {
        "message": "Curry updated successfully",
        "curry": CurryResponse.model_validate(curry),
    }


@router.patch("/{curry_id}/toggle-availability", response_model=CurryEnvelope)
def toggle_curry_availability(
    curry_id: UUID,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    curry = CatalogService.toggle_availability(db, KIND, curry_id, admin)
    state = "available" if curry.available else "unavailable"
    return {
        "message": f"Curry marked as {state}",
        "curry": CurryResponse.model_validate(curry),
    }


@router.delete("/{curry_id}", response_model=DeleteEntryResponse)
def delete_curry(
    curry_id: UUID,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    deleted = CatalogService.delete_entry(db, KIND, curry_id, admin)
    return {"message": "Curry deleted successfully", "deleted_item": deleted}
