"""Client core for Dental Vision AI: image picking, analysis and clinical insight."""

import importlib.metadata
import logging

from dental_vision.api import (
    ApiClient,
    Timeouts,
    get_backend_client,
    get_inference_client,
    reset_clients,
    set_token_supplier,
)
from dental_vision.auth import (
    AuthError,
    AuthResult,
    AuthSuccess,
    BackendAuthenticationProvider,
    DemoAuthenticationProvider,
    LoginUseCase,
)
from dental_vision.config import ResolvedConfig, config_scope, resolve_config
from dental_vision.core.types import Failure, Result, Success, unwrap
from dental_vision.exceptions import (
    ApiError,
    ConfigurationError,
    DecodeError,
    DentalVisionError,
    HttpStatusError,
    TransportError,
    UnknownRiskLevelError,
    ValidationError,
)
from dental_vision.gemini import (
    ClinicalInsight,
    ClinicalInsightRequest,
    ClinicalInsightResponse,
    InsightClient,
    RiskLevel,
    create_insight_client,
)
from dental_vision.pickers import (
    FilePicker,
    FilePickerResult,
    PickCancelled,
    PickError,
    PickSuccess,
    create_file_picker,
)
from dental_vision.pipeline import InsightPipeline, PipelineOutcome, Stage
from dental_vision.services import InferenceService

# Version handling
try:
    __version__ = importlib.metadata.version("dental-vision")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Pipeline
    "InsightPipeline",
    "PipelineOutcome",
    "Stage",
    # File picking
    "FilePicker",
    "FilePickerResult",
    "PickSuccess",
    "PickCancelled",
    "PickError",
    "create_file_picker",
    # HTTP
    "ApiClient",
    "Timeouts",
    "get_backend_client",
    "get_inference_client",
    "reset_clients",
    "set_token_supplier",
    "InferenceService",
    # Clinical insight
    "ClinicalInsight",
    "ClinicalInsightRequest",
    "ClinicalInsightResponse",
    "InsightClient",
    "RiskLevel",
    "create_insight_client",
    # Authentication
    "AuthError",
    "AuthResult",
    "AuthSuccess",
    "BackendAuthenticationProvider",
    "DemoAuthenticationProvider",
    "LoginUseCase",
    # Configuration
    "ResolvedConfig",
    "config_scope",
    "resolve_config",
    # Results
    "Failure",
    "Result",
    "Success",
    "unwrap",
    # Exceptions
    "ApiError",
    "ConfigurationError",
    "DecodeError",
    "DentalVisionError",
    "HttpStatusError",
    "TransportError",
    "UnknownRiskLevelError",
    "ValidationError",
]
