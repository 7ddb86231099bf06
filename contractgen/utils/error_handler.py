"""Centralized error handling for contract generation."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import wraps
from typing import Any, Dict, List, Optional

from fastapi import HTTPException


logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Types of errors that can occur in the system."""
    VALIDATION_ERROR = "validation_error"
    PROCESSING_ERROR = "processing_error"
    CONFIGURATION_ERROR = "configuration_error"
    DOCUMENT_ERROR = "document_error"
    SYSTEM_ERROR = "system_error"


@dataclass
class ErrorDetail:
    """Detailed error information."""
    error_type: ErrorType
    message: str
    details: Dict[str, Any]
    timestamp: datetime
    context: Optional[Dict[str, Any]] = None
    suggestions: Optional[List[str]] = None


class ValidationError(Exception):
    """Invalid request input."""

    def __init__(self, message: str, details: Dict[str, Any] = None, suggestions: List[str] = None):
        self.message = message
        self.details = details or {}
        self.suggestions = suggestions or []
        super().__init__(self.message)


class ProcessingError(Exception):
    """Runtime failure while producing a contract."""

    def __init__(self, message: str, details: Dict[str, Any] = None, suggestions: List[str] = None):
        self.message = message
        self.details = details or {}
        self.suggestions = suggestions or []
        super().__init__(self.message)


class ConfigurationError(ProcessingError):
    """Contract configuration document is missing or cannot be parsed."""


class DocumentError(ProcessingError):
    """Template cannot be opened, or an output file cannot be written."""


class ErrorHandler:
    """Centralized error classification and logging."""

    def __init__(self):
        self.error_log: List[ErrorDetail] = []

    def handle_error(self, error: Exception, context: Dict[str, Any] = None) -> ErrorDetail:
        """Handle and log an error."""
        error_detail = self._create_error_detail(error, context)
        self._log_error(error_detail)
        self.error_log.append(error_detail)
        return error_detail

    def _create_error_detail(self, error: Exception, context: Dict[str, Any] = None) -> ErrorDetail:
        error_type = self._determine_error_type(error)

        details = {
            "exception_type": type(error).__name__,
        }
        suggestions = []

        if isinstance(error, (ValidationError, ProcessingError)):
            details.update(error.details)
            suggestions.extend(error.suggestions)

        return ErrorDetail(
            error_type=error_type,
            message=str(error),
            details=details,
            timestamp=datetime.now(),
            context=context,
            suggestions=suggestions
        )

    def _determine_error_type(self, error: Exception) -> ErrorType:
        """Determine the type of error."""
        if isinstance(error, ValidationError):
            return ErrorType.VALIDATION_ERROR
        elif isinstance(error, ConfigurationError):
            return ErrorType.CONFIGURATION_ERROR
        elif isinstance(error, DocumentError):
            return ErrorType.DOCUMENT_ERROR
        elif isinstance(error, ProcessingError):
            return ErrorType.PROCESSING_ERROR
        else:
            return ErrorType.SYSTEM_ERROR

    def _log_error(self, error_detail: ErrorDetail):
        logger.error(
            f"Error [{error_detail.error_type.value}]: {error_detail.message}",
            extra={
                "error_type": error_detail.error_type.value,
                "details": error_detail.details,
                "context": error_detail.context,
                "suggestions": error_detail.suggestions,
                "timestamp": error_detail.timestamp.isoformat()
            }
        )

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors."""
        error_counts = {}
        for error in self.error_log:
            error_type = error.error_type.value
            error_counts[error_type] = error_counts.get(error_type, 0) + 1

        return {
            "total_errors": len(self.error_log),
            "error_counts": error_counts,
            "last_error": self.error_log[-1] if self.error_log else None,
            "generated_at": datetime.now().isoformat()
        }


# Global error handler instance
error_handler = ErrorHandler()


def handle_exceptions(func):
    """Decorator for handling exceptions in API endpoints."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except ValidationError as e:
            error_detail = error_handler.handle_error(e)
            raise HTTPException(
                status_code=400,
                detail={
                    "error": error_detail.message,
                    "error_type": error_detail.error_type.value,
                    "details": error_detail.details,
                    "suggestions": error_detail.suggestions
                }
            )
        except ProcessingError as e:
            error_detail = error_handler.handle_error(e)
            raise HTTPException(
                status_code=422,
                detail={
                    "error": error_detail.message,
                    "error_type": error_detail.error_type.value,
                    "details": error_detail.details,
                    "suggestions": error_detail.suggestions
                }
            )
        except Exception as e:
            error_detail = error_handler.handle_error(e)
            raise HTTPException(
                status_code=500,
                detail={
                    "error": "Internal server error",
                    "error_type": error_detail.error_type.value,
                    "details": error_detail.details,
                    "suggestions": error_detail.suggestions
                }
            )

    return wrapper
