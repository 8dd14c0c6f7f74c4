import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from compiler.core.errors import PersistenceUnavailable, ValidationError
from compiler.schemas.run import ExecutionResult, RunCreate
from compiler.services import submissions
from compiler.services.languages import Language, get_language
from compiler.services.simulator import ExecutionSimulator

logger = logging.getLogger("compiler.run")


@dataclass(frozen=True)
class RecordSaved:
    submission_id: str
    share_id: str


@dataclass(frozen=True)
class RecordSkipped:
    reason: str


@dataclass(frozen=True)
class RunOutcome:
    """The execution result plus what happened when we tried to store it."""

    result: ExecutionResult
    record: RecordSaved | RecordSkipped

    @property
    def saved(self) -> bool:
        return isinstance(self.record, RecordSaved)


def validate_run(payload: RunCreate) -> Language:
    if not payload.code or not payload.code.strip() or not payload.language:
        raise ValidationError("Code and language are required")
    return get_language(payload.language)


async def run_submission(
    db: AsyncSession,
    simulator: ExecutionSimulator,
    payload: RunCreate,
    user_id: str | None = None,
) -> RunOutcome:
    """validate -> execute -> persist (best effort).

    Raises only ``ValidationError``; simulation failures come back inside the
    result and storage failures as ``RecordSkipped``.
    """
    language = validate_run(payload)
    stdin = payload.input or ""
    result = await simulator.run(payload.code, language, stdin)
    try:
        sub = await submissions.create_submission(
            db,
            user_id=user_id,
            code=payload.code,
            language=language,
            stdin=stdin,
            result=result,
        )
    except PersistenceUnavailable as e:
        logger.warning(
            "could not save submission, returning unsaved result",
            extra={"language": language.key, "reason": str(e)},
        )
        return RunOutcome(result=result, record=RecordSkipped(reason=str(e)))
    return RunOutcome(
        result=result,
        record=RecordSaved(submission_id=sub.id, share_id=sub.share_id),
    )
