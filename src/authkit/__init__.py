"""
AuthKit - IntegrationOS embed token SDK
=======================================

Provisions short-lived embed tokens that let end users open the embedded
connection widget, scoped to the tenant's active connected platforms.

Key Features:
    - **Async Client**: httpx-based, one sequential workflow per ``create`` call
    - **Typed Payloads**: Pydantic models for every platform response
    - **Typed Results**: Success or failure values instead of raised transport errors
    - **Logging**: Console logs plus optional JSON error log, secrets redacted

Modules:
    core: Workflow, endpoint resolution, exceptions, configuration
    models: Pydantic models for platform payloads, results and errors
    utils: Logging, HTTP tracing, client factory
    api: Optional FastAPI service exposing the workflow over HTTP

Example:
    Issue a token::

        from authkit import AuthKit

        authkit = AuthKit("sk_test_...")
        result = await authkit.create({"group": "customer-1", "label": "Customer"})
        if result.ok:
            token = result.token
        else:
            print(result.status_code, result.to_dict())
"""

from __future__ import annotations

from authkit.core.authkit import AuthKit, filter_connected_platforms, payload_environment, secret_environment
from authkit.core.endpoints import Endpoint, HeaderKind
from authkit.core.exceptions import AuthKitError, ConfigurationError, RemoteCallError, ResponseValidationError
from authkit.models.result_models import AuthKitConfig, EmbedTokenFailure, EmbedTokenResult, EmbedTokenSuccess

__version__ = "1.0.0"

__all__ = [
    "AuthKit",
    "AuthKitConfig",
    "AuthKitError",
    "ConfigurationError",
    "EmbedTokenFailure",
    "EmbedTokenResult",
    "EmbedTokenSuccess",
    "Endpoint",
    "HeaderKind",
    "RemoteCallError",
    "ResponseValidationError",
    "filter_connected_platforms",
    "payload_environment",
    "secret_environment",
]
