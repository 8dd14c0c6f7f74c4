from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from compiler.api.deps import get_db, get_optional_user_id, get_simulator
from compiler.core.config import get_settings
from compiler.core.errors import NotFound, ValidationError
from compiler.schemas.run import (
    LanguageOut,
    ModeOut,
    RunCreate,
    RunOut,
    TemplateOut,
)
from compiler.schemas.submission import SharedSubmissionOut
from compiler.services import submissions
from compiler.services.languages import LANGUAGES, get_language
from compiler.services.run import RecordSaved, run_submission
from compiler.services.simulator import ExecutionSimulator

settings = get_settings()
router = APIRouter(prefix="/compile", tags=["compile"])


@router.post("/run", response_model=RunOut)
async def run(
    payload: RunCreate,
    db: AsyncSession = Depends(get_db),
    simulator: ExecutionSimulator = Depends(get_simulator),
    user_id: str | None = Depends(get_optional_user_id),
):
    try:
        outcome = await run_submission(db, simulator, payload, user_id=user_id)
    except ValidationError as e:
        raise HTTPException(400, str(e))
    result = outcome.result
    saved = outcome.record if isinstance(outcome.record, RecordSaved) else None
    return RunOut(
        success=result.success,
        status=result.status,
        output=result.output,
        execution_time=result.execution_time,
        memory=result.memory,
        submission_id=saved.submission_id if saved else None,
        share_id=saved.share_id if saved else None,
    )


@router.get("/languages", response_model=list[LanguageOut])
async def languages():
    return [
        LanguageOut(id=lang.key, name=lang.name, language_id=lang.engine_id)
        for lang in LANGUAGES.values()
    ]


@router.get("/template/{language}", response_model=TemplateOut)
async def template(language: str):
    try:
        lang = get_language(language)
    except ValidationError as e:
        raise HTTPException(400, str(e))
    return TemplateOut(template=lang.template)


@router.get("/mode", response_model=ModeOut)
async def mode():
    if settings.ai_enabled:
        return ModeOut(mode="ai", message="Using AI model for simulated code execution")
    return ModeOut(
        mode="demo", message="Running in demo mode: no AI provider key configured"
    )


@router.get("/share/{share_id}", response_model=SharedSubmissionOut)
async def shared(share_id: str, db: AsyncSession = Depends(get_db)):
    try:
        sub = await submissions.get_shared(db, share_id)
    except NotFound as e:
        raise HTTPException(404, str(e))
    return SharedSubmissionOut.model_validate(sub)
