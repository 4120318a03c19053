"""
Identity resolution for products (by barcode) and stores (by postal address).

Both follow the same create-if-absent pattern: look the row up by its
business key, insert it when missing, and when the insert loses a race
against a concurrent request (the unique constraint fires) roll back and
return the row the other request created.
"""
import logging
from typing import Callable, NamedTuple, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .barcode import validate_ean13
from .config import STORE_NAME_POLICIES, Settings
from .errors import ConstraintRace, NotFoundError, StorageUnavailable, ValidationError
from .product_models import Product
from .store_models import Store

logger = logging.getLogger(__name__)


class StoreAddress(NamedTuple):
    """Postal address of a store; the four parts together identify it."""
    street_number: int
    street_name: str
    city: str
    country_code: str


class IdentityResolver:
    def __init__(self, db: Session, store_name_policy: Optional[str] = None):
        policy = (store_name_policy or Settings.STORE_NAME_POLICY).lower()
        if policy not in STORE_NAME_POLICIES:
            raise ValueError(f"store_name_policy must be one of {STORE_NAME_POLICIES}, got {policy!r}")
        self.db = db
        self.store_name_policy = policy

    # ===== PRODUCTS =====

    def resolve_product(self, name: str, barcode: str) -> int:
        """Return the id of the product with ``barcode``, creating it under ``name`` if unknown."""
        validate_ean13(barcode)
        if not name:
            raise ValidationError("product name is required", field="name")

        product, created = self._resolve(
            find=lambda: self._find_product(barcode),
            create=lambda: self._insert(Product(name=name, barcode=barcode), barcode=barcode),
            what="product",
        )
        if created:
            logger.info("Created product id=%s barcode=%s name=%r", product.id, barcode, name)
        return product.id

    def _find_product(self, barcode: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.barcode == barcode).first()

    # ===== STORES =====

    def resolve_store(self, address: StoreAddress, name: str, lat: float, lon: float) -> int:
        """
        Return the id of the store at ``address``, creating it if unknown.

        The name of a known store does not have to match. With the ``refresh``
        policy a different name replaces the stored one; the location is never
        moved once the store exists.
        """
        address = StoreAddress(*address)
        if not name:
            raise ValidationError("store name is required", field="name")

        store, created = self._resolve(
            find=lambda: self._find_store(address),
            create=lambda: self._insert(
                Store(name=name, latitude=lat, longitude=lon, **address._asdict()),
                address=address,
            ),
            what="store",
        )
        if created:
            logger.info("Created store id=%s name=%r at %s", store.id, name, address)
        elif self.store_name_policy == 'refresh' and store.name != name:
            self._rename_store(store, name)
        return store.id

    def get_store(self, store_id: int) -> Store:
        try:
            store = self.db.query(Store).filter(Store.id == store_id).first()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailable("store lookup failed") from exc
        if store is None:
            raise NotFoundError(f"store {store_id} not found", store_id=store_id)
        return store

    def _find_store(self, address: StoreAddress) -> Optional[Store]:
        return self.db.query(Store).filter(
            Store.street_number == address.street_number,
            Store.street_name == address.street_name,
            Store.city == address.city,
            Store.country_code == address.country_code,
        ).first()

    def _rename_store(self, store: Store, name: str):
        old_name = store.name
        store.name = name
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailable("store rename failed") from exc
        logger.info("Renamed store id=%s from %r to %r", store.id, old_name, name)

    # ===== create-if-absent =====

    def _resolve(self, find: Callable, create: Callable, what: str):
        """Run find, then create; returns ``(row, created)``."""
        try:
            row = find()
            if row is not None:
                return row, False
            try:
                return create(), True
            except ConstraintRace as race:
                logger.info("Concurrent insert of %s %s, resolving existing row", what, race.details)
                row = find()
                if row is None:
                    # the constraint that fired was not the business key
                    raise StorageUnavailable(f"{what} insert rejected by the database") from race
                return row, False
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailable(f"could not resolve {what}") from exc

    def _insert(self, row, **key):
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConstraintRace(f"{type(row).__name__} already exists", **key) from exc
        self.db.refresh(row)
        return row
