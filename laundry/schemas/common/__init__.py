from laundry.schemas.common.base import BaseSchema

__all__ = ["BaseSchema"]
