from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from loguru import logger
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from ..intake import IntakePipeline
from .deps import get_pipeline
from .models import ProbeResponse, SubmissionResponse

router = APIRouter()


@router.get("/", response_model=ProbeResponse)
async def probe() -> ProbeResponse:
    return ProbeResponse()


async def _read_form(request: Request) -> FormData:
    """Decoded form fields, or an empty form when the body is not valid form data."""
    try:
        return await request.form()
    except (StarletteHTTPException, MultiPartException) as exc:
        logger.warning("Ignoring undecodable form body: {}", exc)
        return FormData()


@router.post("/", response_model=SubmissionResponse, response_model_exclude_none=True)
async def submit(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    pipeline: IntakePipeline = Depends(get_pipeline),
) -> SubmissionResponse:
    # Read the raw body before form(); Starlette replays the cached body to the form parser.
    body = (await request.body()).decode("utf-8", errors="replace")

    params = dict(request.query_params)
    form = await _read_form(request)
    params.update({k: v for k, v in form.items() if isinstance(v, str)})

    result = await run_in_threadpool(pipeline.handle, params, body, background_tasks.add_task)

    response.status_code = result.status_code
    return SubmissionResponse(status=result.status, message=result.message, timestamp=result.timestamp)
