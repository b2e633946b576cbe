"""
Project-wide constants for the Dental Vision client core
"""  # noqa: D200, D212, D415

# ==============================================================================
# Service Endpoints
# ==============================================================================

BACKEND_URL = "https://backenddental-vision-ai.onrender.com"
INFERENCE_URL = "https://davidhosp-dental-vision-yolo12.hf.space"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"
GEMINI_MODEL = "gemini-1.5-flash-latest"

PATIENTS_ENDPOINT = "/api/v1/patients"
APPOINTMENTS_ENDPOINT = "/api/v1/patients/{id}/appointments"
ALL_APPOINTMENTS_ENDPOINT = "/api/v1/appointments"
REPORTS_ENDPOINT = "/api/v1/reports"
SYSTEM_STATS_ENDPOINT = "/api/v1/system/statistics"
ANALYSIS_ENDPOINT = "/api/v1/analysis"
LOGIN_ENDPOINT = "/api/v1/auth/login"
HEALTH_ENDPOINT = "/health"

GRADIO_PREDICT_ENDPOINT = "/gradio_api/call/predict_dental_image"

# ==============================================================================
# HTTP Configuration
# ==============================================================================

CONTENT_TYPE_JSON = "application/json"
AUTHORIZATION_HEADER = "Authorization"
BEARER = "Bearer"

REQUEST_TIMEOUT = 30.0  # seconds, whole request
CONNECT_TIMEOUT = 15.0  # seconds
SOCKET_TIMEOUT = 30.0  # seconds, per read/write
ANALYSIS_TIMEOUT = 60.0  # seconds, image inference is slow

DEFAULT_CONFIDENCE_THRESHOLD = 0.5

# ==============================================================================
# File Picking
# ==============================================================================

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg")
EXTENSION_TO_MIME = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
}
DEFAULT_IMAGE_MIME = "image/jpeg"
DIALOG_TITLE = "Select Dental Image"

# ==============================================================================
# Authentication
# ==============================================================================

DEMO_EMAIL = "admin@dentalvision.ai"
DEMO_PASSWORD = "admin123"  # noqa: S105
MIN_PASSWORD_LENGTH = 6
LOGIN_DELAY = 1.0  # seconds, simulated round trip
