"""Builds supplier and inventory listings from the static templates."""

from typing import List, Optional

from data.mock_data import PRODUCTS, SUPPLIERS, WAREHOUSES
from models import InventoryItem, Supplier


def generate_suppliers() -> List[Supplier]:
    """Return the supplier directory."""
    return [Supplier(id=i + 1, **template) for i, template in enumerate(SUPPLIERS)]


def get_supplier(supplier_id: int) -> Optional[Supplier]:
    for supplier in generate_suppliers():
        if supplier.id == supplier_id:
            return supplier
    return None


def generate_inventory(warehouse: Optional[str] = None, low_stock: bool = False) -> List[InventoryItem]:
    """Return stock items, optionally filtered by warehouse name and low stock."""
    items = []
    for i, (name, category, wh, stock, reorder, expiry, price, unit) in enumerate(PRODUCTS):
        item = InventoryItem(
            id=i + 1,
            sku=f"{category[:3].upper()}-{i + 1:04d}",
            name=name,
            category=category,
            warehouse=WAREHOUSES[wh],
            quantity=stock,
            unitOfMeasure=unit,
            reorderLevel=reorder,
            unitPrice=price,
            expiryDate=expiry,
            lowStock=stock <= reorder,
        )
        if warehouse and item.warehouse.lower() != warehouse.lower():
            continue
        if low_stock and not item.lowStock:
            continue
        items.append(item)
    return items
