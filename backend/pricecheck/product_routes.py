from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
import datetime

from . import product_models, product_schemas
from .database import get_db
from .identity import IdentityResolver

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", status_code=status.HTTP_201_CREATED)
def add_product(payload: product_schemas.ProductCreate, db: Session = Depends(get_db)):
    """Store a scanned product; a known barcode gets its last scan price/date updated"""
    product_id = IdentityResolver(db).resolve_product(payload.name, payload.barcode)

    product = db.query(product_models.Product).filter(product_models.Product.id == product_id).first()
    product.price = payload.price
    product.scanned_at = datetime.date.today()
    db.commit()
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=List[product_schemas.Product])
def list_products(db: Session = Depends(get_db)):
    """All products, most recently scanned first"""
    return db.query(product_models.Product).order_by(
        product_models.Product.scanned_at.desc().nulls_last(),
        product_models.Product.id.desc(),
    ).all()
