"""Price report pipeline: resolve product, record the price, compare nearby."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .barcode import validate_ean13
from .errors import ValidationError
from .identity import IdentityResolver
from .ledger import PriceLedger
from .price_schemas import Comparison
from .proximity import ProximityPriceQuery

logger = logging.getLogger(__name__)


class IngestionOrchestrator:
    def __init__(self, db: Session, resolver: Optional[IdentityResolver] = None,
                 ledger: Optional[PriceLedger] = None, proximity: Optional[ProximityPriceQuery] = None,
                 radius_meters: Optional[float] = None):
        self.resolver = resolver or IdentityResolver(db)
        self.ledger = ledger or PriceLedger(db)
        self.proximity = proximity or ProximityPriceQuery(db)
        self.radius_meters = radius_meters

    def submit_price_report(self, name: str, barcode: str, price: float, store_id: int,
                            lat: float, lon: float) -> List[Comparison]:
        """
        Record a user's price report and return prices for the same product nearby.

        Steps run strictly in order and the first failure stops the pipeline.
        The price row is committed before the comparison query runs, so a
        failing query still leaves the report recorded.
        """
        # Input checks first, nothing touches the database on bad input
        validate_ean13(barcode)
        if not name:
            raise ValidationError("product name is required", field="name")
        if price is None:
            raise ValidationError("price is required", field="price")

        product_id = self.resolver.resolve_product(name, barcode)
        self.resolver.get_store(store_id)
        self.ledger.record_price(product_id, store_id, price)

        comparisons = self.proximity.nearby_prices(
            barcode, store_id, price, lat, lon, radius_meters=self.radius_meters)
        logger.info("Price report barcode=%s store=%s price=%.2f -> %d nearby prices",
                    barcode, store_id, price, len(comparisons))
        return comparisons
