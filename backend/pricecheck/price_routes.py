from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from . import price_schemas
from .database import get_db
from .ingestion import IngestionOrchestrator

router = APIRouter(prefix="/prices", tags=["prices"])


@router.post("", response_model=List[price_schemas.Comparison])
def report_price(payload: price_schemas.PriceReportCreate, db: Session = Depends(get_db)):
    """Report a price seen in a store and get the prices of the same product nearby"""
    return IngestionOrchestrator(db).submit_price_report(
        payload.name,
        payload.barcode,
        payload.price,
        payload.store_id,
        payload.latitude,
        payload.longitude,
    )
