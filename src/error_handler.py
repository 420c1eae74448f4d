"""Error handling helpers for the API boundary."""
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception while processing request: %s", exc, exc_info=True)
        return {
            "success": False,
            "message": "An internal error occurred while processing your request. Please try again later.",
            "error": type(exc).__name__,
            "metadata": {"context": context or {}},
        }
