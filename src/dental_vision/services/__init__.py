"""Backend and inference service wrappers with their wire models."""

from .backend import (
    AnalysisService,
    AppointmentService,
    PatientService,
    ReportService,
    SystemService,
)
from .dto import (
    AnalysisSummary,
    ApiResponse,
    AppointmentDTO,
    AppointmentListResponse,
    CreateAppointmentRequest,
    CreatePatientDTO,
    DentalAnalysisDTO,
    DentalAnalysisSummaryDTO,
    DentalDetectionDTO,
    GenerateReportRequest,
    GradioDataItem,
    GradioSummary,
    ImageAnalysisResult,
    LoginRequest,
    LoginResponse,
    PaginationInfo,
    PatientDTO,
    PatientListResponse,
    ReportDTO,
    SeverityDistributionDTO,
    SystemStatisticsDTO,
    UpdateAppointmentStatusRequest,
    UserDTO,
)
from .inference import InferenceService

__all__ = [
    "AnalysisService",
    "AnalysisSummary",
    "ApiResponse",
    "AppointmentDTO",
    "AppointmentListResponse",
    "AppointmentService",
    "CreateAppointmentRequest",
    "CreatePatientDTO",
    "DentalAnalysisDTO",
    "DentalAnalysisSummaryDTO",
    "DentalDetectionDTO",
    "GenerateReportRequest",
    "GradioDataItem",
    "GradioSummary",
    "ImageAnalysisResult",
    "InferenceService",
    "LoginRequest",
    "LoginResponse",
    "PaginationInfo",
    "PatientDTO",
    "PatientListResponse",
    "PatientService",
    "ReportDTO",
    "ReportService",
    "SeverityDistributionDTO",
    "SystemService",
    "SystemStatisticsDTO",
    "UpdateAppointmentStatusRequest",
    "UserDTO",
]
