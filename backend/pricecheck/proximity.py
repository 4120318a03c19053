"""
Nearby price lookup.

Given the price a user just reported at one store, find what the same
product costs at the other stores around them. Every hit carries the
difference to the reported price, both absolute and relative.

Note on ``relative_price_change``: it is the absolute change divided by the
*observed* (other store's) price, not by the reported one. Clients rely on
that denominator, do not switch it. A zero observed price has no relative
change (None).
"""
import datetime
import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .barcode import validate_ean13
from .config import Settings
from .errors import StorageUnavailable
from .geo import distance_meters, latitude_margin
from .price_models import Price
from .price_schemas import Comparison
from .product_models import Product
from .store_models import Store

logger = logging.getLogger(__name__)


def price_deltas(observed_price: float, reference_price: float) -> Tuple[float, Optional[float]]:
    """Return ``(absolute_change, relative_change)`` of ``observed_price`` against the reference."""
    absolute = observed_price - reference_price
    if observed_price == 0:
        return absolute, None
    return absolute, absolute / observed_price


class ProximityPriceQuery:
    def __init__(self, db: Session, window_days: Optional[int] = None):
        self.db = db
        self.window_days = Settings.PRICE_WINDOW_DAYS if window_days is None else window_days

    def nearby_prices(self, barcode: str, reference_store_id: int, reference_price: float,
                      lat: float, lon: float, radius_meters: Optional[float] = None) -> List[Comparison]:
        """
        Prices of ``barcode`` at every other store within ``radius_meters`` of (lat, lon).

        The reference store is always left out, whatever its distance. The
        radius is inclusive. Results are sorted cheapest first, most recent
        first among equal prices.
        """
        validate_ean13(barcode)
        radius = Settings.PROXIMITY_RADIUS_METERS if radius_meters is None else radius_meters

        rows = self._candidates(barcode, reference_store_id, lat, radius)

        comparisons = []
        for row in rows:
            distance = distance_meters(lat, lon, row.latitude, row.longitude)
            if distance > radius:
                continue
            absolute, relative = price_deltas(row.price, reference_price)
            comparisons.append(Comparison(
                name=row.name,
                price=row.price,
                absolute_price_change=absolute,
                relative_price_change=relative,
                date=row.date,
                store_name=row.store_name,
                distance=distance,
            ))

        comparisons.sort(key=lambda c: (c.price, -c.date.toordinal()))
        logger.debug("Found %d nearby prices for %s within %sm of (%s, %s)",
                     len(comparisons), barcode, radius, lat, lon)
        return comparisons

    def _candidates(self, barcode: str, reference_store_id: int, lat: float, radius: float):
        # Latitude band only; longitude degrees shrink towards the poles
        margin = latitude_margin(radius)
        q = self.db.query(
            Price.price,
            Price.date,
            Product.name,
            Store.name.label('store_name'),
            Store.latitude,
            Store.longitude,
        ).join(Store, Price.store_id == Store.id).join(Product, Price.product_id == Product.id).filter(
            Product.barcode == barcode,
            Store.id != reference_store_id,
            Store.latitude.between(lat - margin, lat + margin),
        )
        if self.window_days:
            since = datetime.date.today() - datetime.timedelta(days=self.window_days)
            q = q.filter(Price.date >= since)

        try:
            return q.all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailable("nearby price query failed") from exc
