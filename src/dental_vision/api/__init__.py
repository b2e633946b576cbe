"""HTTP access to the backend and inference services."""

from .client import ApiClient, Timeouts, decode_json
from .factory import (
    get_backend_client,
    get_inference_client,
    reset_clients,
    set_token_supplier,
)

__all__ = [
    "ApiClient",
    "Timeouts",
    "decode_json",
    "get_backend_client",
    "get_inference_client",
    "reset_clients",
    "set_token_supplier",
]
