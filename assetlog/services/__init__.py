"""Service layer."""

from assetlog.services.inventory_service import InventoryService

__all__ = ["InventoryService"]
