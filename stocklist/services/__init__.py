from .inventory_service import InventoryPage, InventoryRequest, InventoryService, Redirect
from .session_store import FlaskSessionStore, SessionStore

__all__ = [
    "FlaskSessionStore",
    "InventoryPage",
    "InventoryRequest",
    "InventoryService",
    "Redirect",
    "SessionStore",
]
