from __future__ import annotations

import json
from pathlib import Path

import pytest

from faultline.common.config_loader import load_error_catalog
from faultline.core.define import define_error
from faultline.core.entity import format_message
from faultline.core.predicates import is_domain_error, is_error, is_infrastructure_error
from faultline.core.serialization import to_json, to_map

OrderRejected = define_error(
    "domain",
    "OrderRejected",
    default_message="invalid order",
    default_reason="out_of_stock",
)
InventoryOffline = define_error("infrastructure", "InventoryOffline", default_message="inventory offline")


def reserve_stock(sku: str, stock: dict[str, int], available: bool = True):
    if not available:
        raise InventoryOffline(context={"sku": sku})
    if stock.get(sku, 0) < 1:
        return OrderRejected.create(context={"sku": sku})
    stock[sku] -= 1
    return None


def place_order(sku: str, stock: dict[str, int], available: bool = True) -> dict:
    try:
        error = reserve_stock(sku, stock, available)
    except Exception as exc:
        if is_infrastructure_error(exc):
            return {"status": "retry", "error": to_map(exc)}
        raise
    if is_domain_error(error):
        return {"status": "rejected", "error": to_map(error)}
    return {"status": "accepted"}


@pytest.mark.integration
def test_out_of_stock_order_is_rejected_with_domain_error():
    error = OrderRejected.create(context={"sku": "A1"})

    assert is_domain_error(error)
    assert format_message(error) == "invalid order: out_of_stock"
    assert to_map(error)["context"] == {"sku": "A1"}


@pytest.mark.integration
def test_errors_flow_as_values_and_exceptions():
    stock = {"A1": 1}

    assert place_order("A1", stock) == {"status": "accepted"}

    rejected = place_order("A1", stock)
    assert rejected["status"] == "rejected"
    assert rejected["error"]["reason"] == "out_of_stock"
    assert rejected["error"]["env"]["function"].endswith("reserve_stock/3")

    retry = place_order("A1", stock, available=False)
    assert retry["status"] == "retry"
    assert retry["error"]["message"] == "inventory offline"
    assert retry["error"]["env"] == {}


@pytest.mark.integration
def test_catalog_errors_behave_like_defined_errors(tmp_path: Path):
    catalog_path = tmp_path / "orders.yml"
    catalog_path.write_text(
        """version: 1
errors:
  OrderRejected:
    kind: domain
    default_message: invalid order
    default_reason: out_of_stock
""",
        encoding="utf-8",
    )
    catalog = load_error_catalog(catalog_path, module="orders.errors")

    error = catalog["OrderRejected"].create(context={"sku": "A1", "handle": object()})
    decoded = json.loads(to_json(error))

    assert is_error(error) and is_domain_error(error)
    assert str(error) == "invalid order: out_of_stock"
    assert decoded["error_type"] == "orders.errors.OrderRejected"
    assert decoded["context"]["sku"] == "A1"
    assert decoded["context"]["handle"].startswith("<object object")
