"""
Storage layer - conversation store and catalog/order lookup
"""

from typing import Optional

from loguru import logger

from bizassist.config.settings import Settings, settings as default_settings
from bizassist.storage.base import Storage
from bizassist.storage.memory import MemStorage
from bizassist.storage.seed import CATALOG_PRODUCTS, SAMPLE_ORDERS, sample_products


def create_storage(config: Optional[Settings] = None) -> Storage:
    """Build the storage backend named by STORAGE_BACKEND, seeded if configured."""
    config = config or default_settings
    backend = config.storage_backend.lower()

    if backend == "memory":
        storage: Storage = MemStorage()
    elif backend == "sql":
        from bizassist.infra.database import Database
        from bizassist.storage.sql import SQLStorage

        storage = SQLStorage(Database(config.resolved_database_url()))
    else:
        raise ValueError(f"Unsupported storage backend: {backend}. Supported: 'memory', 'sql'")

    if config.seed_sample_data:
        added = storage.seed(sample_products(), SAMPLE_ORDERS)
        logger.info(f"Seeded {added} sample records into {backend} storage")

    return storage


__all__ = [
    "CATALOG_PRODUCTS",
    "MemStorage",
    "SAMPLE_ORDERS",
    "Storage",
    "create_storage",
    "sample_products",
]
