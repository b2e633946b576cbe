"""Image analysis on the hosted detection model."""

import logging

from dental_vision import constants
from dental_vision.api import ApiClient, get_inference_client
from dental_vision.config import resolve_config
from dental_vision.core.types import Failure, Result, Success
from dental_vision.exceptions import ApiError, DecodeError

from .dto import AnalysisSummary, ImageAnalysisResult

log = logging.getLogger(__name__)


class InferenceService:
    """Uploads images to the inference service and reads back detections.

    A reply whose ``error`` field is set is returned as ``Failure(ApiError)``.
    """

    def __init__(
        self,
        api_client: ApiClient | None = None,
        *,
        confidence_threshold: float | None = None,
    ) -> None:
        self._api = api_client or get_inference_client()
        if confidence_threshold is None:
            confidence_threshold = resolve_config().confidence_threshold
        self.confidence_threshold = confidence_threshold

    async def analyze_image(
        self,
        data: bytes,
        name: str,
        mime_type: str,
        confidence_threshold: float | None = None,
    ) -> Result[ImageAnalysisResult, ApiError]:
        threshold = (
            self.confidence_threshold if confidence_threshold is None else confidence_threshold
        )
        log.debug("Submitting %s (%d bytes) for analysis", name, len(data))
        result = await self._api.post_multipart(
            constants.GRADIO_PREDICT_ENDPOINT,
            ImageAnalysisResult,
            files={"file": (name, data, mime_type)},
            data={"confidence_threshold": str(threshold)},
        )
        return self._check(result)

    async def poll_results(self, event_id: str) -> Result[ImageAnalysisResult, ApiError]:
        log.debug("Polling analysis event %s", event_id)
        result = await self._api.get(
            f"{constants.GRADIO_PREDICT_ENDPOINT}/{event_id}", ImageAnalysisResult
        )
        return self._check(result)

    async def analyze(
        self,
        data: bytes,
        name: str,
        mime_type: str,
        confidence_threshold: float | None = None,
    ) -> Result[AnalysisSummary, ApiError]:
        """Submit an image and return its summary, polling once if deferred."""
        result = await self.analyze_image(data, name, mime_type, confidence_threshold)
        if isinstance(result, Failure):
            return result

        reply = result.value
        if reply.summary is None and reply.event_id:
            polled = await self.poll_results(reply.event_id)
            if isinstance(polled, Failure):
                return polled
            reply = polled.value

        summary = reply.summary
        if summary is None:
            return Failure(DecodeError("Inference result carried no summary"))
        log.info(
            "Analysis of %s: %d teeth, %d cavities",
            name,
            summary.total_teeth_detected,
            summary.cavity_count,
        )
        return Success(summary)

    @staticmethod
    def _check(
        result: Result[ImageAnalysisResult, ApiError],
    ) -> Result[ImageAnalysisResult, ApiError]:
        if isinstance(result, Failure):
            return result
        if result.value.error:
            log.warning("Inference service reported an error: %s", result.value.error)
            return Failure(ApiError(f"Inference failed: {result.value.error}"))
        return result
