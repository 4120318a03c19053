from sqlalchemy import Column, Integer, Float, Date, ForeignKey, UniqueConstraint
from .database import Base


class Price(Base):
    """
    One observed price per product, store and calendar day.
    Rows are never updated or deleted so older days form the price history.
    """
    __tablename__ = 'prices'
    __table_args__ = (
        UniqueConstraint('product_id', 'store_id', 'date', name='unique_price_per_day'),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey('products.id'), nullable=False, index=True)
    store_id = Column(Integer, ForeignKey('stores.id'), nullable=False, index=True)
    price = Column(Float, nullable=False)
    date = Column(Date, nullable=False, index=True)
