from sqlalchemy import Column, Integer, String, Float, Date
from .database import Base


class Product(Base):
    """A product, identified by its EAN-13 barcode."""
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    barcode = Column(String(13), nullable=False, unique=True, index=True)  # never changes once assigned

    # Legacy scan fields, only written by POST /products
    price = Column(Float, nullable=True)
    scanned_at = Column(Date, nullable=True, index=True)
