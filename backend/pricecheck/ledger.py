"""Append-only price ledger: at most one observation per product, store and day."""
import datetime
import logging
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import NotFoundError, StorageUnavailable
from .price_models import Price

logger = logging.getLogger(__name__)

DAILY_KEY = ('product_id', 'store_id', 'date')


class PriceLedger:
    def __init__(self, db: Session):
        self.db = db

    def record_price(self, product_id: int, store_id: int, price: float,
                     date: Optional[datetime.date] = None) -> bool:
        """
        Record ``price`` for the product at the store on ``date`` (default today).

        The first observation of the day wins: a second one for the same
        product, store and date is dropped without error and without touching
        the stored price. Returns True if a row was written.
        """
        observed_on = date or datetime.date.today()
        values = dict(product_id=product_id, store_id=store_id, price=price, date=observed_on)

        try:
            result = self.db.execute(self._insert_ignoring_duplicates(values))
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # Dialects without ON CONFLICT land here for duplicates too
            if self._exists(product_id, store_id, observed_on):
                written = False
            else:
                raise NotFoundError(
                    f"product {product_id} or store {store_id} does not exist",
                    product_id=product_id, store_id=store_id,
                ) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailable("could not record price") from exc
        else:
            written = result.rowcount != 0

        if written:
            logger.info("Recorded price %.2f for product=%s store=%s on %s", price, product_id, store_id, observed_on)
        else:
            logger.debug("Price for product=%s store=%s on %s already recorded, ignoring", product_id, store_id, observed_on)
        return written

    def history(self, product_id: int, store_id: int) -> List[Price]:
        """All observations for the pair, newest first."""
        try:
            return self.db.query(Price).filter(
                Price.product_id == product_id,
                Price.store_id == store_id,
            ).order_by(Price.date.desc()).all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailable("could not read price history") from exc

    def _insert_ignoring_duplicates(self, values: dict):
        dialect = self.db.get_bind().dialect.name
        if dialect == 'postgresql':
            return postgresql.insert(Price).values(**values).on_conflict_do_nothing(
                constraint='unique_price_per_day')
        if dialect == 'sqlite':
            return sqlite.insert(Price).values(**values).on_conflict_do_nothing(
                index_elements=list(DAILY_KEY))
        return Price.__table__.insert().values(**values)

    def _exists(self, product_id: int, store_id: int, date: datetime.date) -> bool:
        return self.db.query(Price.id).filter(and_(
            Price.product_id == product_id,
            Price.store_id == store_id,
            Price.date == date,
        )).first() is not None
