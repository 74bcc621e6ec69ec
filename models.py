"""Data models for the ERP cache service."""

from pydantic import BaseModel
from typing import List, Optional
from enum import Enum


class SupplierStatus(str, Enum):
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    INACTIVE = "inactive"


class Supplier(BaseModel):
    id: int
    name: str
    contactPerson: str
    email: str
    phone: str
    city: str
    materials: List[str]
    status: SupplierStatus


class InventoryItem(BaseModel):
    id: int
    sku: str
    name: str
    category: str
    warehouse: str
    quantity: int
    unitOfMeasure: str
    reorderLevel: int
    unitPrice: float
    expiryDate: Optional[str] = None
    lowStock: bool


class CacheStats(BaseModel):
    size: int
    capacity: int
    usage_percent: int
    default_ttl: float
    hits: int
    misses: int
    evictions: int
    expirations: int


class CacheEntryInfo(BaseModel):
    key: str
    hit_count: int
    stored_at: float
    ttl_seconds: float
    expires_in: float
