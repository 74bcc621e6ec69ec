"""API routes for the ERP cache service."""

from fastapi import APIRouter, HTTPException, Request
from typing import List, Optional
import logging

from models import CacheEntryInfo, CacheStats, InventoryItem, Supplier
from services.cache import TTLCache
from services.data_generator import generate_inventory, generate_suppliers, get_supplier

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


def _cache(request: Request) -> TTLCache:
    return request.app.state.cache


@router.get("/suppliers", response_model=List[Supplier])
async def get_suppliers():
    """List suppliers."""
    suppliers = generate_suppliers()
    logger.info(f"Returning {len(suppliers)} suppliers")
    return suppliers


@router.get("/suppliers/{supplier_id}", response_model=Supplier)
async def get_supplier_by_id(supplier_id: int):
    supplier = get_supplier(supplier_id)
    if supplier is None:
        raise HTTPException(status_code=404, detail=f"Supplier {supplier_id} not found")
    return supplier


@router.get("/inventory", response_model=List[InventoryItem])
async def get_inventory(warehouse: Optional[str] = None, low_stock: bool = False):
    """List warehouse stock, optionally filtered by warehouse and low stock."""
    items = generate_inventory(warehouse=warehouse, low_stock=low_stock)
    logger.info(f"Returning {len(items)} inventory items (warehouse={warehouse}, low_stock={low_stock})")
    return items


@router.get("/cache/stats", response_model=CacheStats)
async def get_cache_stats(request: Request):
    """Current cache occupancy and hit/miss counters."""
    return _cache(request).stats()


@router.get("/cache/entries/{key:path}", response_model=CacheEntryInfo)
async def get_cache_entry(key: str, request: Request):
    info = _cache(request).entry_info(key)
    if info is None:
        raise HTTPException(status_code=404, detail="Cache entry not found")
    return info


@router.delete("/cache")
async def clear_cache(request: Request):
    """Drop every cached response."""
    _cache(request).clear()
    logger.info("Cache cleared")
    return {"cleared": True}


@router.delete("/cache/entries/{key:path}")
async def delete_cache_entry(key: str, request: Request):
    _cache(request).delete(key)
    return {"deleted": key}
