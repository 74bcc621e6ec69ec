"""Environment-driven settings for the ERP cache service."""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    cache_capacity: int = 1000
    cache_default_ttl: float = 300
    cache_sweep_interval: float = 120
    response_cache_ttl: float = 300
    response_cache_paths: List[str] = field(default_factory=lambda: ["/suppliers", "/inventory"])
    cors_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            cache_capacity=int(os.getenv("CACHE_CAPACITY", 1000)),
            cache_default_ttl=float(os.getenv("CACHE_DEFAULT_TTL", 300)),
            cache_sweep_interval=float(os.getenv("CACHE_SWEEP_INTERVAL", 120)),
            response_cache_ttl=float(os.getenv("RESPONSE_CACHE_TTL", 300)),
            response_cache_paths=_split(os.getenv("RESPONSE_CACHE_PATHS", "/suppliers,/inventory")),
            cors_origins=_split(os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")),
            port=int(os.getenv("PORT", 8000)),
        )
