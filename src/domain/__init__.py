"""Domain layer: errors, schemas, constants."""

from .errors import (
    ConfigError,
    ErrorCodes,
    FetchError,
    GatewayError,
    RenderError,
    ShellUnavailable,
    StaticAssetMissing,
    UnknownRouteError,
)
from .schemas import (
    AboutInfo,
    DocumentRequest,
    FetchSource,
    Platform,
    Product,
    RenderLog,
    RenderMode,
    RequestKind,
    ResponseState,
)

__all__ = [
    "GatewayError",
    "ConfigError",
    "RenderError",
    "UnknownRouteError",
    "FetchError",
    "StaticAssetMissing",
    "ShellUnavailable",
    "ErrorCodes",
    "DocumentRequest",
    "RenderMode",
    "Platform",
    "RequestKind",
    "ResponseState",
    "FetchSource",
    "Product",
    "AboutInfo",
    "RenderLog",
]
