"""Process-wide ApiClient instances.

Two clients live for the lifetime of the process: one for the backend service
and one for the third-party inference service. Both are created on first use;
a lock makes concurrent first access build at most one instance per target.
"""

from collections.abc import Callable
import logging
import threading

from dental_vision import constants
from dental_vision.config import resolve_config
from dental_vision.exceptions import ConfigurationError

from .client import ApiClient, Timeouts

log = logging.getLogger(__name__)

TokenSupplier = Callable[[], str | None]

_lock = threading.Lock()
_backend_client: ApiClient | None = None
_inference_client: ApiClient | None = None
_token_supplier: TokenSupplier | None = None


def _configured_token() -> str | None:
    return resolve_config().inference_token


def set_token_supplier(supplier: TokenSupplier | None) -> None:
    """Install the callable that provides the inference bearer token.

    Only affects an inference client that has not been built yet.
    """
    global _token_supplier
    with _lock:
        _token_supplier = supplier


def bearer_headers(token: str) -> dict[str, str]:
    return {constants.AUTHORIZATION_HEADER: f"{constants.BEARER} {token}"}


def get_backend_client() -> ApiClient:
    """Shared client for the Dental Vision backend (no extra headers)."""
    global _backend_client
    if _backend_client is None:
        with _lock:
            if _backend_client is None:
                config = resolve_config()
                _backend_client = ApiClient(
                    config.backend_url,
                    timeouts=Timeouts(
                        request=config.request_timeout,
                        connect=config.connect_timeout,
                        socket=config.socket_timeout,
                    ),
                )
                log.debug("Created backend client for %s", config.backend_url)
    return _backend_client


def get_inference_client() -> ApiClient:
    """Shared client for the inference service, authenticated with a bearer token.

    Raises:
        ConfigurationError: If no token is available on first use.
    """
    global _inference_client
    if _inference_client is None:
        with _lock:
            if _inference_client is None:
                config = resolve_config()
                supplier = _token_supplier or _configured_token
                token = supplier()
                if not token:
                    raise ConfigurationError(
                        "Inference token is not set. Set DENTAL_VISION_INFERENCE_TOKEN "
                        "or install a token supplier with set_token_supplier()."
                    )
                _inference_client = ApiClient(
                    config.inference_url,
                    bearer_headers(token),
                    timeouts=Timeouts(
                        request=config.analysis_timeout,
                        connect=config.connect_timeout,
                        socket=config.analysis_timeout,
                    ),
                )
                log.debug("Created inference client for %s", config.inference_url)
    return _inference_client


def reset_clients() -> list[ApiClient]:
    """Forget both singletons and return the instances that were live.

    Callers own closing the returned clients. Intended for tests and for
    re-reading configuration.
    """
    global _backend_client, _inference_client, _token_supplier
    with _lock:
        live = [c for c in (_backend_client, _inference_client) if c is not None]
        _backend_client = None
        _inference_client = None
        _token_supplier = None
    return live
