from fastapi import APIRouter, Depends, Request

from api.app.config import settings
from spend.ingest.pipeline import SummaryPipeline, pipeline

router = APIRouter(tags=["summary"])


def get_pipeline() -> SummaryPipeline:
    return pipeline


@router.post("/summary")
async def summarize_upload(
    request: Request,
    summary_pipeline: SummaryPipeline = Depends(get_pipeline),
):
    # Read the raw form: a missing or malformed field means "nothing to
    # summarize", not a 422.
    async with request.form() as form:
        value = form.get(settings.upload_field)
        result = await summary_pipeline(value)
    if result is None:
        return None
    return result.model_dump(mode="json", by_alias=True)
