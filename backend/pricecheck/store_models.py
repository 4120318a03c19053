from sqlalchemy import Column, Integer, String, Float, DateTime, UniqueConstraint
from .database import Base
import datetime


class Store(Base):
    """
    A physical store location.

    The postal address (street_number, street_name, city, country_code) is the
    business key: one row per address. The point (latitude/longitude) is only
    used for distance computation and is not updated after creation.
    """
    __tablename__ = 'stores'
    __table_args__ = (
        UniqueConstraint('street_number', 'street_name', 'city', 'country_code', name='uq_store_address'),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)

    street_number = Column(Integer, nullable=False)
    street_name = Column(String(200), nullable=False)
    city = Column(String(100), nullable=False)
    country_code = Column(String(2), nullable=False)

    # Geo-Daten (Umkreissuche)
    latitude = Column(Float, nullable=False, index=True)
    longitude = Column(Float, nullable=False)

    created_at = Column(DateTime, default=datetime.datetime.utcnow)
