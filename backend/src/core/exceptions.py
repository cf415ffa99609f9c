"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""
from typing import Dict, List, Optional


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthenticationException(DomainException):
    """Authentication failed"""
    pass


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str, errors: Optional[List[Dict[str, str]]] = None):
        self.field = field
        self.message = message
        self.errors = errors or [{"field": field, "message": message}]
        super().__init__(f"{field}: {message}")


class InvalidStatusTransitionException(ValidationException):
    """Job status change not allowed from the current state"""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__("status", f"Cannot change status from '{current}' to '{target}'")


class ConfigurationException(DomainException):
    """Required business configuration is missing or invalid"""
    pass


class RepositoryException(DomainException):
    """Database operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")
