"""Domain Errors - Centralized Exception Hierarchy"""
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error - all errors extend this"""

    error_code: str = "DOMAIN_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to API response dict"""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


# Validation Errors
class ValidationError(DomainError):
    """Input validation failed"""
    error_code = "VALIDATION_ERROR"
    http_status = 400


class InvalidInputError(ValidationError):
    """Configuration text is null or empty"""
    error_code = "INVALID_INPUT"


class ConfigurationError(ValidationError):
    """Users configuration document is misauthored"""
    error_code = "INVALID_USERS_CONFIGURATION"


class InvalidJsonFormatError(ConfigurationError):
    """Users configuration is not syntactically valid JSON"""
    error_code = "INVALID_JSON_FORMAT"


class StructuralValidationError(ConfigurationError):
    """A JSON field is missing or has the wrong type"""
    error_code = "STRUCTURAL_VALIDATION_ERROR"


# Not Found Errors
class NotFoundError(DomainError):
    """Resource not found"""
    error_code = "NOT_FOUND"
    http_status = 404


class UserNotFoundError(NotFoundError):
    """User not found in the identity directory"""
    error_code = "USER_NOT_FOUND"


class StepNotFoundError(NotFoundError):
    """Step instance not found"""
    error_code = "STEP_NOT_FOUND"
