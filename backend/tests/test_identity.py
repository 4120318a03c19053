from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from pricecheck.errors import NotFoundError, StorageUnavailable, ValidationError
from pricecheck.identity import IdentityResolver, StoreAddress
from pricecheck.product_models import Product
from pricecheck.store_models import Store

BARCODE = "1234567890123"
ADDRESS = StoreAddress(12, "Hauptstrasse", "Hamburg", "DE")


def test_resolve_product_is_idempotent(db):
    resolver = IdentityResolver(db)
    first = resolver.resolve_product("Milk", BARCODE)
    second = resolver.resolve_product("Whole milk", BARCODE)

    assert first == second
    assert db.query(Product).count() == 1
    assert db.query(Product).one().name == "Milk"


def test_resolve_product_distinct_barcodes(db):
    resolver = IdentityResolver(db)
    assert resolver.resolve_product("Milk", BARCODE) != resolver.resolve_product("Bread", "4006381333931")


def test_resolve_product_rejects_bad_barcode_before_query():
    db = Mock()
    with pytest.raises(ValidationError):
        IdentityResolver(db).resolve_product("Milk", "12345")
    assert db.mock_calls == []


def test_resolve_product_recovers_from_lost_race(db, monkeypatch):
    existing = Product(name="Milk", barcode=BARCODE)
    db.add(existing)
    db.commit()

    resolver = IdentityResolver(db)
    real_find = resolver._find_product
    lookups = []

    def stale_then_real(barcode):
        # first lookup happens before the concurrent insert became visible
        lookups.append(barcode)
        return None if len(lookups) == 1 else real_find(barcode)

    monkeypatch.setattr(resolver, "_find_product", stale_then_real)

    assert resolver.resolve_product("Milch", BARCODE) == existing.id
    assert len(lookups) == 2
    assert db.query(Product).count() == 1


def test_resolve_store_is_idempotent(db):
    resolver = IdentityResolver(db)
    first = resolver.resolve_store(ADDRESS, "REWE", 53.55, 9.99)
    second = resolver.resolve_store(ADDRESS, "REWE", 53.60, 10.10)

    assert first == second
    assert db.query(Store).count() == 1
    # location stays where it was first reported
    assert db.query(Store).one().latitude == 53.55


def test_resolve_store_accepts_plain_tuple(db):
    resolver = IdentityResolver(db)
    assert resolver.resolve_store(tuple(ADDRESS), "REWE", 0, 0) == resolver.resolve_store(ADDRESS, "REWE", 0, 0)


def test_resolve_store_different_address_creates_new(db):
    resolver = IdentityResolver(db)
    first = resolver.resolve_store(ADDRESS, "REWE", 53.55, 9.99)
    second = resolver.resolve_store(ADDRESS._replace(street_number=14), "REWE", 53.55, 9.99)
    assert first != second


def test_refresh_policy_renames_store(db):
    resolver = IdentityResolver(db, store_name_policy="refresh")
    store_id = resolver.resolve_store(ADDRESS, "REWE", 0, 0)
    resolver.resolve_store(ADDRESS, "REWE City", 0, 0)
    assert resolver.get_store(store_id).name == "REWE City"


def test_keep_policy_keeps_first_name(db):
    resolver = IdentityResolver(db, store_name_policy="keep")
    store_id = resolver.resolve_store(ADDRESS, "REWE", 0, 0)
    resolver.resolve_store(ADDRESS, "REWE City", 0, 0)
    assert resolver.get_store(store_id).name == "REWE"


def test_unknown_name_policy_is_rejected(db):
    with pytest.raises(ValueError):
        IdentityResolver(db, store_name_policy="sometimes")


def test_resolve_store_recovers_from_lost_race(db, monkeypatch):
    resolver = IdentityResolver(db)
    store_id = resolver.resolve_store(ADDRESS, "REWE", 0, 0)

    real_find = resolver._find_store
    lookups = []

    def stale_then_real(address):
        lookups.append(address)
        return None if len(lookups) == 1 else real_find(address)

    monkeypatch.setattr(resolver, "_find_store", stale_then_real)

    assert resolver.resolve_store(ADDRESS, "REWE", 0, 0) == store_id
    assert db.query(Store).count() == 1


def test_get_store_missing(db):
    with pytest.raises(NotFoundError) as excinfo:
        IdentityResolver(db).get_store(999)
    assert excinfo.value.details["store_id"] == 999


def test_storage_failure_is_reported_as_unavailable():
    db = Mock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

    with pytest.raises(StorageUnavailable) as excinfo:
        IdentityResolver(db).resolve_product("Milk", BARCODE)

    assert isinstance(excinfo.value.__cause__, OperationalError)
    db.rollback.assert_called_once()
