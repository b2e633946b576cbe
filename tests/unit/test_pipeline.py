"""Unit tests for the remote-insight pipeline."""

from unittest.mock import AsyncMock

import pytest

from dental_vision.core.types import Failure, Success
from dental_vision.exceptions import DecodeError, HttpStatusError, TransportError
from dental_vision.gemini import InsightClient, RiskLevel
from dental_vision.pickers import PickCancelled, PickError, PickSuccess
from dental_vision.pipeline import InsightPipeline, Stage
from dental_vision.services import AnalysisSummary
from tests.helpers import PNG_BYTES, FakeAdapter, FakePicker, failing_adapter

IMAGE = PickSuccess(data=PNG_BYTES, name="scan.png", mime_type="image/png")
SUMMARY = AnalysisSummary(
    total_teeth_detected=28, cavity_count=2, healthy_count=26, average_confidence=0.87
)


def make_pipeline(picker_result, analysis_result=None, adapter=None):
    picker = FakePicker(picker_result)
    inference = AsyncMock()
    inference.analyze.return_value = analysis_result or Success(SUMMARY)
    adapter = adapter or FakeAdapter()
    pipeline = InsightPipeline(picker, inference, InsightClient(adapter))
    return pipeline, picker, inference, adapter


class TestInsightPipeline:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_complete_run(self):
        pipeline, picker, inference, adapter = make_pipeline(IMAGE)

        outcome = await pipeline.run("Smith", "Jane Doe")

        assert outcome.ok
        assert outcome.stage is Stage.COMPLETE
        assert outcome.image == IMAGE
        assert outcome.summary == SUMMARY
        assert outcome.insight.risk_level is RiskLevel.HIGH
        inference.analyze.assert_awaited_once_with(PNG_BYTES, "scan.png", "image/png")
        prompt = adapter.requests[0].contents[0].parts[0].text
        assert "Jane Doe" in prompt
        assert "87.0%" in prompt
        assert set(outcome.durations) == {"pick", "analysis", "insight"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cancelled_pick_stops_before_analysis(self):
        pipeline, _, inference, adapter = make_pipeline(PickCancelled())

        outcome = await pipeline.run("Smith", "Jane Doe")

        assert outcome.stage is Stage.PICK
        assert outcome.cancelled
        assert outcome.error is None
        inference.analyze.assert_not_awaited()
        assert adapter.requests == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_pick_error_is_reported(self):
        pipeline, _, inference, _ = make_pipeline(PickError("Could not open file"))

        outcome = await pipeline.run("Smith", "Jane Doe")

        assert outcome.stage is Stage.PICK
        assert outcome.error == "Could not open file"
        assert not outcome.cancelled
        inference.analyze.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_analysis_stops_before_insight(self):
        error = TransportError("inference service unreachable")
        pipeline, _, _, adapter = make_pipeline(IMAGE, Failure(error))

        outcome = await pipeline.run("Smith", "Jane Doe")

        assert outcome.stage is Stage.ANALYSIS
        assert outcome.cause is error
        assert outcome.image == IMAGE
        assert adapter.requests == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error", [HttpStatusError(500, "boom"), DecodeError("not an insight")]
    )
    async def test_failed_insight_keeps_analysis(self, error):
        pipeline, *_ = make_pipeline(IMAGE, adapter=failing_adapter(error))

        outcome = await pipeline.run("Smith", "Jane Doe")

        assert outcome.stage is Stage.INSIGHT
        assert outcome.summary == SUMMARY
        assert outcome.insight is None
        assert outcome.error == str(error)
