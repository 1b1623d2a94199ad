"""
Shared infrastructure for the Unibro client.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- http: JSON client for the REST backend
- storage: Persistent key-value storage

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    UnibroError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    AuthRequiredError,
    RemoteRejectionError,
    ExternalServiceError,
    NetworkFailureError,
)
from .http import ApiClient, get_api_client, reset_api_client
from .models import ApiResponse, OperationResult, WireModel
from .storage import KeyValueStorage, InMemoryStorage, JsonFileStorage, create_storage

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "UnibroError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "AuthRequiredError",
    "RemoteRejectionError",
    "ExternalServiceError",
    "NetworkFailureError",
    "ApiClient",
    "get_api_client",
    "reset_api_client",
    "ApiResponse",
    "OperationResult",
    "WireModel",
    "KeyValueStorage",
    "InMemoryStorage",
    "JsonFileStorage",
    "create_storage",
]
