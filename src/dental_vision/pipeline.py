"""Remote-insight pipeline: pick an image, analyze it, generate the insight.

Stages run strictly in order and the first stage that does not succeed ends
the run. The outcome names the stage reached, so callers can tell a dismissed
picker from a failed analysis or an unusable insight.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from time import perf_counter

from dental_vision.core.types import Failure
from dental_vision.gemini import ClinicalInsight, ClinicalInsightRequest, InsightClient
from dental_vision.pickers import FilePicker, PickCancelled, PickError, PickSuccess
from dental_vision.services import AnalysisSummary, InferenceService

log = logging.getLogger(__name__)


class Stage(enum.Enum):
    PICK = "pick"
    ANALYSIS = "analysis"
    INSIGHT = "insight"
    COMPLETE = "complete"


@dataclasses.dataclass(frozen=True)
class PipelineOutcome:
    """Where a run stopped and what it produced on the way.

    ``stage`` is the stage that stopped the run, or ``COMPLETE``. ``error``
    is the display message of a failure; a dismissed picker has
    ``cancelled=True`` and no error.
    """

    stage: Stage
    image: PickSuccess | None = None
    summary: AnalysisSummary | None = None
    insight: ClinicalInsight | None = None
    error: str | None = None
    cause: Exception | None = dataclasses.field(default=None, repr=False, compare=False)
    cancelled: bool = False
    durations: dict[str, float] = dataclasses.field(
        default_factory=dict, repr=False, compare=False
    )

    @property
    def ok(self) -> bool:
        return self.stage is Stage.COMPLETE


class InsightPipeline:
    def __init__(
        self,
        picker: FilePicker,
        inference: InferenceService,
        insight_client: InsightClient,
    ) -> None:
        self.picker = picker
        self.inference = inference
        self.insight_client = insight_client

    async def run(self, doctor_name: str, patient_name: str) -> PipelineOutcome:
        durations: dict[str, float] = {}

        start = perf_counter()
        picked = await self.picker.pick_image()
        durations[Stage.PICK.value] = perf_counter() - start

        if isinstance(picked, PickCancelled):
            log.info("Pipeline stopped: image selection cancelled")
            return PipelineOutcome(Stage.PICK, cancelled=True, durations=durations)
        if isinstance(picked, PickError):
            log.warning("Pipeline stopped at pick: %s", picked.message)
            return PipelineOutcome(Stage.PICK, error=picked.message, durations=durations)

        start = perf_counter()
        analyzed = await self.inference.analyze(picked.data, picked.name, picked.mime_type)
        durations[Stage.ANALYSIS.value] = perf_counter() - start

        if isinstance(analyzed, Failure):
            log.warning("Pipeline stopped at analysis: %s", analyzed.error)
            return PipelineOutcome(
                Stage.ANALYSIS,
                image=picked,
                error=str(analyzed.error),
                cause=analyzed.error,
                durations=durations,
            )
        summary = analyzed.value

        request = ClinicalInsightRequest(
            doctor_name=doctor_name,
            patient_name=patient_name,
            cavity_count=summary.cavity_count,
            healthy_count=summary.healthy_count,
            confidence=summary.average_confidence,
        )
        start = perf_counter()
        generated = await self.insight_client.get_clinical_insight(request)
        durations[Stage.INSIGHT.value] = perf_counter() - start

        if isinstance(generated, Failure):
            log.warning("Pipeline stopped at insight: %s", generated.error)
            return PipelineOutcome(
                Stage.INSIGHT,
                image=picked,
                summary=summary,
                error=str(generated.error),
                cause=generated.error,
                durations=durations,
            )

        log.info("Pipeline complete for %s", picked.name)
        return PipelineOutcome(
            Stage.COMPLETE,
            image=picked,
            summary=summary,
            insight=generated.value,
            durations=durations,
        )
