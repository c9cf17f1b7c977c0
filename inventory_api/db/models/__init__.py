from inventory_api.db.models.item import ItemRecord
from inventory_api.db.models.user import UserRecord

__all__ = ["ItemRecord", "UserRecord"]
