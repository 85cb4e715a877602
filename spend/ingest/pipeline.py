from __future__ import annotations

import logging
from typing import Any, Optional

from api.app.config import settings
from spend.ingest.csv_parser import convert_csv_to_records
from spend.ingest.receiver import FileReceiver
from spend.summary import summarize
from spend.types import PipelineState, SummaryResult

LOG = logging.getLogger(__name__)


class SummaryPipeline:
    """Receive -> parse -> aggregate -> clean up, one attempt per submission."""

    def __init__(self, receiver: FileReceiver, encoding: str = "utf-8-sig") -> None:
        self.receiver = receiver
        self.encoding = encoding

    async def __call__(self, value: Any) -> Optional[SummaryResult]:
        state = PipelineState.IDLE
        result: Optional[SummaryResult] = None
        try:
            state = self._advance(state, PipelineState.RECEIVING)
            async with self.receiver.staged(value) as uploaded:
                if uploaded is None:
                    state = self._advance(state, PipelineState.FAILED)
                    return None

                state = self._advance(state, PipelineState.PARSING)
                records = await convert_csv_to_records(uploaded.filepath, self.encoding)

                state = self._advance(state, PipelineState.AGGREGATING)
                result = summarize(records)

                state = self._advance(state, PipelineState.CLEANING_UP)
            state = self._advance(state, PipelineState.DONE)
            return result
        except Exception:
            LOG.exception("Summary pipeline failed while %s", state.value)
            self._advance(state, PipelineState.FAILED)
            return result

    @staticmethod
    def _advance(current: PipelineState, target: PipelineState) -> PipelineState:
        LOG.debug("pipeline %s -> %s", current.value, target.value)
        return target


def build_pipeline() -> SummaryPipeline:
    receiver = FileReceiver(
        upload_dir=settings.upload_dir,
        max_bytes=settings.max_upload_bytes,
        allowed_types=settings.allowed_mime_types,
    )
    return SummaryPipeline(receiver=receiver, encoding=settings.csv_encoding)


pipeline = build_pipeline()
