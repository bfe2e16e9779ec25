"""
Common exception classes for the application
"""
from typing import Optional, Dict, Any

class ContentCalendarError(Exception):
    """Base exception class for content calendar errors"""
    http_status = 500

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}
        
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to standard error format"""
        return {
            "code": self.code,
            "message": str(self),
            "details": self.details
        }

class ConfigurationError(ContentCalendarError):
    """Raised when there's an error in configuration or environment variables"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)

class ValidationError(ContentCalendarError):
    """Raised when a required field is missing or has an unknown value"""
    http_status = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)

class NotFoundError(ContentCalendarError):
    """Raised when a requested resource is not found"""
    http_status = 404

    def __init__(self, resource_type: str, resource_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(message, code="RESOURCE_NOT_FOUND", details=details)
        self.resource_type = resource_type
        self.resource_id = resource_id

class StoreError(ContentCalendarError):
    """Raised when the underlying document store fails"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, code: str = "STORE_ERROR"):
        super().__init__(message, code=code, details=details)

class ConflictError(StoreError):
    """Raised when a conditional update finds the document changed underneath it"""
    http_status = 409

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details, code="CONFLICT")
