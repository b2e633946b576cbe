"""Wire models for the backend and the inference service.

Field names follow the services' snake_case JSON. Unknown fields are ignored
so that additive server changes do not break decoding.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class _Dto(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ApiResponse(_Dto, Generic[T]):
    """Envelope the backend wraps around every payload."""

    success: bool = True
    data: T | None = None
    message: str | None = None


# --- Auth ---


class UserDTO(_Dto):
    id: str
    username: str
    email: str
    role: str
    created_at: str


class LoginRequest(_Dto):
    username: str
    password: str


class LoginResponse(_Dto):
    access_token: str
    token_type: str
    user: UserDTO


# --- Patients ---


class PatientDTO(_Dto):
    id: str
    name: str
    age: int
    gender: str
    email: str | None = None
    phone: str | None = None
    created_at: str
    updated_at: str


class CreatePatientDTO(_Dto):
    name: str
    age: int
    gender: str
    email: str
    phone: str


class PaginationInfo(_Dto):
    total: int
    page: int
    per_page: int
    pages: int | None = None
    has_next: bool | None = None
    has_prev: bool | None = None


class PatientListResponse(_Dto):
    patients: list[PatientDTO]
    total: int | None = None
    page: int | None = None
    limit: int | None = None
    # Older backends nest paging information instead
    pagination: PaginationInfo | None = None


# --- Appointments ---


class AppointmentDTO(_Dto):
    id: str
    patient_id: str
    appointment_date: str
    appointment_type: str
    status: str
    duration_minutes: int = 60
    treatment_description: str | None = None
    doctor_name: str | None = None
    clinic_location: str | None = None
    created_at: str
    updated_at: str


class CreateAppointmentRequest(_Dto):
    patient_id: str
    appointment_date: str
    appointment_type: str
    duration_minutes: int = 60
    treatment_description: str | None = None
    doctor_name: str | None = "Dr. General"
    clinic_location: str | None = "Main Clinic"


class UpdateAppointmentStatusRequest(_Dto):
    status: str
    treatment_description: str | None = None


class AppointmentListResponse(_Dto):
    appointments: list[AppointmentDTO]
    total: int | None = None
    page: int | None = None
    limit: int | None = None


# --- Reports ---


class DateRangeDTO(_Dto):
    start: str
    end: str


class ReportMetadataDTO(_Dto):
    include_images: bool
    include_recommendations: bool
    analysis_count: int
    date_range: DateRangeDTO


class ReportDTO(_Dto):
    id: str
    patient_id: str
    report_type: str
    file_path: str
    metadata: ReportMetadataDTO
    created_at: str


class GenerateReportRequest(_Dto):
    patient_id: str
    report_type: str = "individual"
    include_images: bool = True
    include_recommendations: bool = True
    date_from: str | None = None
    date_to: str | None = None


# --- Stored analyses ---


class DentalDetectionDTO(_Dto):
    class_name: str = Field(alias="class")
    confidence: float
    bbox: list[float]
    fdi_number: str | None = None


class SeverityDistributionDTO(_Dto):
    mild: int
    moderate: int
    severe: int


class DentalAnalysisSummaryDTO(_Dto):
    total_detections: int
    healthy_teeth: int
    caries_detected: int
    severity_distribution: SeverityDistributionDTO
    recommendations: list[str]


class DentalAnalysisDTO(_Dto):
    id: str
    patient_id: str | None = None
    image_path: str
    confidence_threshold: float
    detections: list[DentalDetectionDTO]
    summary: DentalAnalysisSummaryDTO
    created_at: str


# --- System ---


class PatientStatsDTO(_Dto):
    total: int = Field(default=0, alias="total_patients")
    new_this_month: int = Field(default=0, alias="recent_registrations")


class AnalysisStatsDTO(_Dto):
    total: int = Field(default=0, alias="total_analyses")
    this_month: int = 0


class AppointmentStatsDTO(_Dto):
    scheduled: int = Field(default=0, alias="total_appointments")
    completed: int = Field(default=0, alias="completed_appointments")


class ReportStatsDTO(_Dto):
    generated: int = Field(default=0, alias="total_generated")
    downloads: int = Field(default=0, alias="total_downloads")


class MonthlyDataDTO(_Dto):
    month: str
    analyses: int = 0
    appointments: int = 0


class SystemStatisticsDTO(_Dto):
    patients: PatientStatsDTO = Field(default_factory=PatientStatsDTO)
    analyses: AnalysisStatsDTO = Field(default_factory=AnalysisStatsDTO)
    appointments: AppointmentStatsDTO = Field(default_factory=AppointmentStatsDTO)
    reports: ReportStatsDTO = Field(default_factory=ReportStatsDTO)
    monthly_trend: list[MonthlyDataDTO] = Field(default_factory=list)


# --- Inference service ---


class AnalysisSummary(BaseModel):
    """Counts the insight step needs from one image analysis."""

    model_config = ConfigDict(frozen=True)

    total_teeth_detected: int = Field(ge=0)
    cavity_count: int = Field(ge=0)
    healthy_count: int = Field(ge=0)
    average_confidence: float = Field(ge=0.0, le=1.0)

    @property
    def health_percentage(self) -> float:
        if self.total_teeth_detected == 0:
            return 0.0
        return 100.0 * self.healthy_count / self.total_teeth_detected


class GradioSummary(_Dto):
    total_detections: int = Field(default=0, ge=0)
    healthy_teeth: int = Field(default=0, ge=0)
    caries_detected: int = Field(default=0, ge=0)
    average_confidence: float = Field(default=0.0, allow_inf_nan=False)
    severity_distribution: dict[str, int] | None = None
    recommendations: list[str] | None = None


class GradioDataItem(_Dto):
    image: str | None = None
    # Detections arrive as a JSON-encoded string
    detections: str | None = None
    summary: GradioSummary | None = None


class ImageAnalysisResult(_Dto):
    """Inference service reply: an event to poll, a direct result, or an error."""

    event_id: str | None = None
    data: list[GradioDataItem] | None = None
    error: str | None = None
    duration: float | None = None

    @property
    def summary(self) -> AnalysisSummary | None:
        """First summary carried in ``data``, if any."""
        for item in self.data or ():
            if item.summary is not None:
                s = item.summary
                return AnalysisSummary(
                    total_teeth_detected=s.total_detections,
                    cavity_count=s.caries_detected,
                    healthy_count=s.healthy_teeth,
                    average_confidence=min(max(s.average_confidence, 0.0), 1.0),
                )
        return None
