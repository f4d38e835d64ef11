"""
Confidence-tiered extraction of consultation-level content.

Three strategies are tried strictly in order and the first success wins:

1. full_analysis: clinical analysis service with the language hint; its
   sections and confidence are taken as-is.
2. simplified_fallback: the same service without the hint; chief complaint
   and HOPI come from it, everything else from the keyword extractors, and
   confidence is lowered (never below a floor).
3. keyword_fallback: keyword extractors only, fixed low confidence.

Each tier is an attempt returning a ``TierResult``; ``first_success`` is the
only place that decides what happens next. ``process`` never raises.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Awaitable, Callable, Optional, Sequence

from ...domain.entities.processed_content import (
    ProcessedContent,
    clamp_confidence,
    empty_content,
)
from ...domain.enums.dental import ExtractionTier
from ..ports.services.clinical_analysis_service import ClinicalAnalysisService
from ..ports.services.event_emitter import EventEmitter, NullEventEmitter
from .section_extractors import extract_all_sections

logger = logging.getLogger(__name__)

__all__ = [
    "ExtractionTier",
    "TierFailure",
    "TierResult",
    "first_success",
    "TranscriptContentExtractor",
]

DEFAULT_ANALYSIS_TIMEOUT = 30.0
SIMPLIFIED_PENALTY = 20
SIMPLIFIED_FLOOR = 30
KEYWORD_CONFIDENCE = 25


@dataclass(frozen=True)
class TierFailure:
    reason: str
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class TierResult:
    tier: ExtractionTier
    content: Optional[ProcessedContent] = None
    failure: Optional[TierFailure] = None

    @property
    def ok(self) -> bool:
        return self.content is not None

    @classmethod
    def success(cls, tier: ExtractionTier, content: ProcessedContent) -> "TierResult":
        return cls(tier=tier, content=content)

    @classmethod
    def failed(cls, tier: ExtractionTier, reason: str, error: Optional[BaseException] = None) -> "TierResult":
        return cls(tier=tier, failure=TierFailure(reason=reason, error=error))


TierAttempt = Callable[[], Awaitable[TierResult]]


async def first_success(
    attempts: Sequence[TierAttempt],
    events: Optional[EventEmitter] = None,
) -> Optional[TierResult]:
    """Run attempts one after another and return the first successful result.

    Returns None only if every attempt failed.
    """
    events = events or NullEventEmitter()
    for attempt in attempts:
        result = await attempt()
        if result.ok:
            events.emit(
                "extraction.tier_succeeded",
                tier=result.tier.value,
                confidence=result.content.confidence,
            )
            return result
        events.emit(
            "extraction.tier_failed",
            tier=result.tier.value,
            reason=result.failure.reason if result.failure else "unknown",
        )
    return None


class TranscriptContentExtractor:
    """Builds ``ProcessedContent`` for a transcript, degrading instead of failing."""

    def __init__(
        self,
        analysis_service: Optional[ClinicalAnalysisService],
        events: Optional[EventEmitter] = None,
        timeout_seconds: float = DEFAULT_ANALYSIS_TIMEOUT,
        simplified_penalty: int = SIMPLIFIED_PENALTY,
        simplified_floor: int = SIMPLIFIED_FLOOR,
        keyword_confidence: int = KEYWORD_CONFIDENCE,
    ):
        self._analysis = analysis_service
        self._events = events or NullEventEmitter()
        self._timeout = timeout_seconds
        self._penalty = simplified_penalty
        self._floor = simplified_floor
        self._keyword_confidence = clamp_confidence(keyword_confidence)

    async def process(self, transcript: str, language: Optional[str] = None) -> ProcessedContent:
        transcript = transcript or ""
        if not transcript.strip():
            logger.info("Empty transcript, using keyword defaults")
            self._events.emit("extraction.empty_transcript")
            return await self._keyword_only(transcript)

        attempts = [lambda: self._keyword_tier(transcript)]
        if self._analysis is not None:
            attempts = [
                lambda: self._full_analysis(transcript, language),
                lambda: self._simplified(transcript),
            ] + attempts

        result = await first_success(attempts, self._events)
        if result is None:
            logger.error("All extraction tiers failed, returning empty sections")
            return empty_content(ExtractionTier.KEYWORD_FALLBACK, confidence=self._keyword_confidence)
        logger.info(f"Extraction resolved in tier {result.tier.value} (confidence {result.content.confidence})")
        return result.content

    async def _keyword_only(self, transcript: str) -> ProcessedContent:
        result = await self._keyword_tier(transcript)
        if result.ok:
            return result.content
        return empty_content(ExtractionTier.KEYWORD_FALLBACK, confidence=self._keyword_confidence)

    async def _call_analysis(
        self, tier: ExtractionTier, transcript: str, language: Optional[str]
    ) -> TierResult:
        """Call the analysis service once, bounded by the timeout, and map its payload."""
        self._events.emit("extraction.tier_started", tier=tier.value)
        try:
            analysis = await asyncio.wait_for(
                self._analysis.analyze(transcript, language), timeout=self._timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Clinical analysis timed out after {self._timeout}s ({tier.value})")
            return TierResult.failed(tier, "timeout", e)
        except Exception as e:
            logger.warning(f"Clinical analysis failed ({tier.value}): {e}")
            return TierResult.failed(tier, "collaborator_error", e)

        if not isinstance(analysis, dict):
            return TierResult.failed(tier, "invalid_payload")
        if analysis.get("auto_extracted") is False:
            logger.warning(f"Clinical analysis reported degraded output ({tier.value})")
            return TierResult.failed(tier, "degraded")
        try:
            content = ProcessedContent.from_analysis(analysis, tier=tier)
        except Exception as e:
            logger.warning(f"Clinical analysis payload could not be mapped ({tier.value}): {e}")
            return TierResult.failed(tier, "invalid_payload", e)
        return TierResult.success(tier, content)

    async def _full_analysis(self, transcript: str, language: Optional[str]) -> TierResult:
        return await self._call_analysis(ExtractionTier.FULL_ANALYSIS, transcript, language)

    async def _simplified(self, transcript: str) -> TierResult:
        tier = ExtractionTier.SIMPLIFIED_FALLBACK
        result = await self._call_analysis(tier, transcript, None)
        if not result.ok:
            return result
        analysed = result.content
        sections = extract_all_sections(transcript, tier=tier)
        confidence = max(self._floor, analysed.confidence - self._penalty)
        content = replace(
            sections,
            chief_complaint=analysed.chief_complaint,
            hopi=analysed.hopi,
            confidence=clamp_confidence(confidence),
            extraction_timestamp=datetime.utcnow().isoformat(),
        )
        return TierResult.success(tier, content)

    async def _keyword_tier(self, transcript: str) -> TierResult:
        tier = ExtractionTier.KEYWORD_FALLBACK
        self._events.emit("extraction.tier_started", tier=tier.value)
        try:
            content = extract_all_sections(transcript, confidence=self._keyword_confidence, tier=tier)
        except Exception as e:
            logger.error(f"Keyword extraction failed: {e}", exc_info=True)
            return TierResult.failed(tier, "keyword_error", e)
        return TierResult.success(tier, content)

