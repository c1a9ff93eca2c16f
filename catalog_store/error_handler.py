"""Error handling helpers for degraded read paths and best-effort writes."""
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_store_failure(
        self,
        exc: Exception,
        operation: str,
        fallback: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Log a storage failure and hand back ``fallback``.

        Only call this from call sites that are allowed to degrade (related
        items, bootstrap writes). Mutations must let the error propagate.
        """
        logger.error(
            "Store failure during %s: %s (context=%s)",
            operation,
            exc,
            context or {},
            exc_info=True,
        )
        return fallback

