from laundry.services.base.base_service import BaseService
from laundry.services.base.transaction_manager import TransactionContext, TransactionManager

__all__ = ["BaseService", "TransactionContext", "TransactionManager"]
