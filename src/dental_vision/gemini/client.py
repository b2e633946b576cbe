"""Clinical insight client."""

from __future__ import annotations

import logging
from typing import Self

from dental_vision.api.client import ApiClient, Timeouts
from dental_vision.config import ResolvedConfig, resolve_config
from dental_vision.core.types import Failure, Result, Success
from dental_vision.exceptions import ConfigurationError, DecodeError, DentalVisionError

from .adapters import GenerationAdapter, GoogleGenAIAdapter, HttpGenerationAdapter
from .insight import ClinicalInsight, ClinicalInsightRequest
from .mapping import decode_insight_response, encode_insight_request

log = logging.getLogger(__name__)


class InsightClient:
    """Turns detection counts into a structured ``ClinicalInsight``.

    ``TransportError`` and ``HttpStatusError`` mean the service could not be
    used; ``DecodeError`` means it answered with unusable content.
    """

    def __init__(self, adapter: GenerationAdapter) -> None:
        self._adapter = adapter

    async def close(self) -> None:
        """Release the adapter's connections. Safe to call more than once."""
        await self._adapter.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get_clinical_insight(
        self, request: ClinicalInsightRequest
    ) -> Result[ClinicalInsight, DentalVisionError]:
        log.debug(
            "Requesting clinical insight (%d cavities, %d healthy)",
            request.cavity_count,
            request.healthy_count,
        )
        result = await self._adapter.generate(encode_insight_request(request))

        if isinstance(result, Failure):
            log.warning("Clinical insight request failed: %s", result.error)
            return Failure(result.error)

        try:
            parsed = decode_insight_response(result.value)
        except DecodeError as e:
            log.warning("Clinical insight response unusable: %s", e)
            return Failure(e)

        insight = ClinicalInsight.from_response(parsed)
        log.info("Generated clinical insight with risk level %s", insight.risk_level.value)
        return Success(insight)


def create_insight_client(
    config: ResolvedConfig | None = None, *, use_sdk: bool = False
) -> InsightClient:
    """Build an ``InsightClient`` from configuration.

    The REST adapter owns a dedicated ``ApiClient`` for the generation
    endpoint; the SDK adapter manages its own connections. Release the
    client with ``close()`` or ``async with``.

    Raises:
        ConfigurationError: If no Gemini API key is configured.
    """
    config = config or resolve_config()
    if not config.gemini_api_key:
        raise ConfigurationError(
            "Gemini API key is not set. Set DENTAL_VISION_GEMINI_API_KEY."
        )

    if use_sdk:
        adapter: GenerationAdapter = GoogleGenAIAdapter(
            config.gemini_api_key, config.gemini_model
        )
    else:
        api_client = ApiClient(
            config.gemini_base_url,
            timeouts=Timeouts(
                request=config.request_timeout,
                connect=config.connect_timeout,
                socket=config.socket_timeout,
            ),
        )
        adapter = HttpGenerationAdapter(
            api_client, config.gemini_api_key, config.gemini_model
        )
    return InsightClient(adapter)
