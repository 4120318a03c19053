from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from . import store_models, store_schemas
from .database import get_db
from .identity import IdentityResolver, StoreAddress

router = APIRouter(prefix="/stores", tags=["stores"])


@router.post("", response_model=store_schemas.StoreId)
def add_store(payload: store_schemas.StoreCreate, db: Session = Depends(get_db)):
    """Register a store; an already known address returns the existing id"""
    address = StoreAddress(
        street_number=payload.street_number,
        street_name=payload.street_name,
        city=payload.city,
        country_code=payload.country_code,
    )
    store_id = IdentityResolver(db).resolve_store(address, payload.name, payload.latitude, payload.longitude)
    return store_schemas.StoreId(id=store_id)


@router.get("", response_model=List[store_schemas.Store])
def list_stores(db: Session = Depends(get_db)):
    """All stores by name"""
    return db.query(store_models.Store).order_by(store_models.Store.name.asc()).all()


@router.get("/{store_id}", response_model=store_schemas.Store)
def get_store(store_id: int, db: Session = Depends(get_db)):
    """Get a single store by ID"""
    return IdentityResolver(db).get_store(store_id)
