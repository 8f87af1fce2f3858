"""
Exception hierarchy for elevare

The scoring engine itself never raises for well-typed input; these exceptions
belong to the layers around it (configuration, snapshot providers, services).
Every ElevareError carries a request id and a message safe to show end users,
and logs itself once when raised.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)

DEFAULT_USER_MESSAGE = "An error occurred. Please try again."


class ElevareError(Exception):
    """
    Base exception for all elevare errors

    Args:
        message: Internal description, logged but not meant for end users
        user_id: User the failing operation was running for
        request_id: Correlation id (generated when omitted)
        operation: Name of the failing operation, e.g. "get_next_best"
        context: Extra structured fields for the log record
        cause: Underlying exception, logged with its traceback
        user_message: Text safe to show the user

    Example:
        raise ElevareError(
            message="Snapshot provider returned no catalog",
            user_id="user-1",
            operation="get_suggestions",
            context={"provider": "postgres"}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or DEFAULT_USER_MESSAGE
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def _log_fields(self) -> Dict[str, Any]:
        # LogRecord already owns "message"; prefix ours
        fields = {
            "error_type": self.error_type,
            "error_message": self.message,
            "error_context": self.context,
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.cause is not None:
            fields["cause"] = repr(self.cause)
        return fields

    def _log_error(self) -> None:
        logger.error(
            f"{self.error_type}: {self.message}",
            extra=self._log_fields(),
            exc_info=self.cause,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Public view of the error (no context, no cause)"""
        return {
            "error": self.error_type,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat(),
        }


# ==========================================
# Validation Errors (Input Data)
# ==========================================

class ValidationError(ElevareError):
    """
    Raised when supplied snapshot data fails validation

    Examples:
    - Negative progress counters
    - Malformed snapshot file

    Example:
        raise ValidationError(
            message="Snapshot must contain an 'achievements' list",
            field="achievements",
            value=None
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


# ==========================================
# Data Access Errors
# ==========================================

class DataError(ElevareError):
    """
    Base class for snapshot provider failures
    """
    pass


class RecordNotFoundError(DataError):
    """Requested record does not exist"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(ElevareError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helpers
# ==========================================

def wrap_provider_exception(
    error: Exception,
    operation: str,
    user_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> ElevareError:
    """
    Convert an arbitrary snapshot provider exception into an ElevareError

    Elevare errors pass through untouched so that e.g. RecordNotFoundError
    keeps its type.

    Example:
        try:
            stats = await provider.get_user_stats(user_id)
        except Exception as e:
            raise wrap_provider_exception(e, operation="get_user_stats", user_id=user_id)
    """
    if isinstance(error, ElevareError):
        return error

    return DataError(
        message=f"{operation} failed: {str(error)}",
        user_id=user_id,
        operation=operation,
        context=context,
        cause=error,
        user_message="We couldn't load your achievement progress. Please try again."
    )
