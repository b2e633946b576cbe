"""Typed wrappers over the Dental Vision backend REST API.

Every call returns a ``Result``; nothing here raises for remote failures.
Services take an ``ApiClient`` and default to the shared backend client.
"""

from typing import Any

from dental_vision import constants
from dental_vision.api import ApiClient, get_backend_client
from dental_vision.core.types import Result
from dental_vision.exceptions import ApiError

from .dto import (
    ApiResponse,
    AppointmentDTO,
    AppointmentListResponse,
    CreateAppointmentRequest,
    CreatePatientDTO,
    DentalAnalysisDTO,
    GenerateReportRequest,
    PatientDTO,
    PatientListResponse,
    ReportDTO,
    SystemStatisticsDTO,
    UpdateAppointmentStatusRequest,
)


class _BackendService:
    def __init__(self, api_client: ApiClient | None = None) -> None:
        self._api = api_client or get_backend_client()


class PatientService(_BackendService):
    async def get_patients(
        self, page: int = 1, limit: int = 10
    ) -> Result[ApiResponse[PatientListResponse], ApiError]:
        return await self._api.get(
            constants.PATIENTS_ENDPOINT,
            ApiResponse[PatientListResponse],
            params={"page": page, "limit": limit},
        )

    async def get_patient(self, patient_id: str) -> Result[ApiResponse[PatientDTO], ApiError]:
        return await self._api.get(
            f"{constants.PATIENTS_ENDPOINT}/{patient_id}", ApiResponse[PatientDTO]
        )

    async def create_patient(
        self, patient: CreatePatientDTO
    ) -> Result[ApiResponse[PatientDTO], ApiError]:
        return await self._api.post(
            constants.PATIENTS_ENDPOINT, ApiResponse[PatientDTO], patient
        )

    async def update_patient(
        self, patient_id: str, patient: CreatePatientDTO
    ) -> Result[ApiResponse[PatientDTO], ApiError]:
        return await self._api.put(
            f"{constants.PATIENTS_ENDPOINT}/{patient_id}", ApiResponse[PatientDTO], patient
        )

    async def delete_patient(self, patient_id: str) -> Result[ApiResponse[Any], ApiError]:
        return await self._api.delete(
            f"{constants.PATIENTS_ENDPOINT}/{patient_id}", ApiResponse[Any]
        )

    async def search_patients(
        self, query: str
    ) -> Result[ApiResponse[list[PatientDTO]], ApiError]:
        return await self._api.post(
            f"{constants.PATIENTS_ENDPOINT}/search",
            ApiResponse[list[PatientDTO]],
            {"query": query},
        )


class AppointmentService(_BackendService):
    @staticmethod
    def _patient_endpoint(patient_id: str) -> str:
        return constants.APPOINTMENTS_ENDPOINT.format(id=patient_id)

    async def get_patient_appointments(
        self, patient_id: str
    ) -> Result[ApiResponse[AppointmentListResponse], ApiError]:
        return await self._api.get(
            self._patient_endpoint(patient_id), ApiResponse[AppointmentListResponse]
        )

    async def create_appointment(
        self, patient_id: str, request: CreateAppointmentRequest
    ) -> Result[ApiResponse[AppointmentDTO], ApiError]:
        return await self._api.post(
            self._patient_endpoint(patient_id), ApiResponse[AppointmentDTO], request
        )

    async def update_appointment_status(
        self,
        patient_id: str,
        appointment_id: str,
        request: UpdateAppointmentStatusRequest,
    ) -> Result[ApiResponse[AppointmentDTO], ApiError]:
        return await self._api.put(
            f"{self._patient_endpoint(patient_id)}/{appointment_id}",
            ApiResponse[AppointmentDTO],
            request,
        )

    async def delete_appointment(
        self, patient_id: str, appointment_id: str
    ) -> Result[ApiResponse[Any], ApiError]:
        return await self._api.delete(
            f"{self._patient_endpoint(patient_id)}/{appointment_id}", ApiResponse[Any]
        )

    async def get_all_appointments(
        self, page: int = 1, limit: int = 50, status: str | None = None
    ) -> Result[ApiResponse[AppointmentListResponse], ApiError]:
        return await self._api.get(
            constants.ALL_APPOINTMENTS_ENDPOINT,
            ApiResponse[AppointmentListResponse],
            params={"page": page, "limit": limit, "status": status},
        )

    async def get_appointment(
        self, appointment_id: str
    ) -> Result[ApiResponse[AppointmentDTO], ApiError]:
        return await self._api.get(
            f"{constants.ALL_APPOINTMENTS_ENDPOINT}/{appointment_id}",
            ApiResponse[AppointmentDTO],
        )

    async def get_eligible_for_analysis(
        self,
    ) -> Result[ApiResponse[list[AppointmentDTO]], ApiError]:
        """Confirmed appointments booked for an AI analysis."""
        return await self._api.get(
            constants.ALL_APPOINTMENTS_ENDPOINT,
            ApiResponse[list[AppointmentDTO]],
            params={"status": "confirmed", "type": "ai_analysis"},
        )


class ReportService(_BackendService):
    async def generate_report(
        self, request: GenerateReportRequest
    ) -> Result[ApiResponse[ReportDTO], ApiError]:
        return await self._api.post(
            f"{constants.REPORTS_ENDPOINT}/generate", ApiResponse[ReportDTO], request
        )

    async def get_reports(
        self, page: int = 1, limit: int = 10
    ) -> Result[ApiResponse[list[ReportDTO]], ApiError]:
        return await self._api.get(
            constants.REPORTS_ENDPOINT,
            ApiResponse[list[ReportDTO]],
            params={"page": page, "limit": limit},
        )

    async def get_report(self, report_id: str) -> Result[ApiResponse[ReportDTO], ApiError]:
        return await self._api.get(
            f"{constants.REPORTS_ENDPOINT}/{report_id}", ApiResponse[ReportDTO]
        )

    async def download_report(self, report_id: str) -> Result[bytes, ApiError]:
        """Raw report document (PDF)."""
        return await self._api.get_bytes(f"{constants.REPORTS_ENDPOINT}/{report_id}/download")

    async def delete_report(self, report_id: str) -> Result[ApiResponse[Any], ApiError]:
        return await self._api.delete(
            f"{constants.REPORTS_ENDPOINT}/{report_id}", ApiResponse[Any]
        )

    async def get_patient_reports(
        self, patient_id: str
    ) -> Result[ApiResponse[list[ReportDTO]], ApiError]:
        return await self._api.get(
            f"{constants.REPORTS_ENDPOINT}/patient/{patient_id}",
            ApiResponse[list[ReportDTO]],
        )

    async def cleanup_reports(self, days: int = 30) -> Result[ApiResponse[Any], ApiError]:
        """Ask the backend to delete reports older than ``days``."""
        return await self._api.post(
            f"{constants.REPORTS_ENDPOINT}/cleanup", ApiResponse[Any], {"days": days}
        )


class SystemService(_BackendService):
    async def get_statistics(self) -> Result[ApiResponse[SystemStatisticsDTO], ApiError]:
        return await self._api.get(
            constants.SYSTEM_STATS_ENDPOINT, ApiResponse[SystemStatisticsDTO]
        )

    async def health_check(self) -> Result[dict[str, Any], ApiError]:
        return await self._api.get(constants.HEALTH_ENDPOINT, dict[str, Any])


class AnalysisService(_BackendService):
    """Stored analyses. New analyses go through ``InferenceService``."""

    async def get_analysis(
        self, analysis_id: str
    ) -> Result[ApiResponse[DentalAnalysisDTO], ApiError]:
        return await self._api.get(
            f"{constants.ANALYSIS_ENDPOINT}/{analysis_id}", ApiResponse[DentalAnalysisDTO]
        )

    async def get_patient_analyses(
        self, patient_id: str
    ) -> Result[ApiResponse[list[DentalAnalysisDTO]], ApiError]:
        return await self._api.get(
            f"{constants.ANALYSIS_ENDPOINT}/patient/{patient_id}",
            ApiResponse[list[DentalAnalysisDTO]],
        )

    async def get_analysis_details(
        self, analysis_id: str
    ) -> Result[ApiResponse[DentalAnalysisDTO], ApiError]:
        return await self._api.get(
            f"{constants.ANALYSIS_ENDPOINT}/{analysis_id}/details",
            ApiResponse[DentalAnalysisDTO],
        )

    async def update_analysis(
        self, analysis_id: str, notes: str
    ) -> Result[ApiResponse[DentalAnalysisDTO], ApiError]:
        return await self._api.put(
            f"{constants.ANALYSIS_ENDPOINT}/{analysis_id}/update",
            ApiResponse[DentalAnalysisDTO],
            {"notes": notes},
        )
