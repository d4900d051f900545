"""
Base service class providing common functionality for all services.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from laundry.config.settings import Settings
from laundry.core.exceptions import BaseAppException
from laundry.services.base.transaction_manager import TransactionManager
from laundry.utils.date_utils import Clock


class BaseService:
    """
    Base service with common behaviors:
    - Shared transaction manager, settings and clock
    - One logger per service class
    - Infrastructure failures logged once and turned into ``None``
    """

    def __init__(self, transactions: TransactionManager, config: Settings, clock: Clock):
        self.transactions = transactions
        self.config = config
        self.clock = clock
        self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def _now(self) -> datetime:
        return self.clock.now()

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a failed operation with its context.

        Returns ``None``, the sentinel every public operation reports for an
        infrastructure failure.
        """
        context = {
            "operation": operation,
            "exception_type": type(exception).__name__,
        }
        if isinstance(exception, BaseAppException):
            context["error_code"] = exception.error_code.value
        if additional_context:
            context.update(additional_context)

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )
        return None
