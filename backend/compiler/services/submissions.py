"""Persistence for run attempts.

Every write path turns storage failures into ``PersistenceUnavailable`` so
the run flow can degrade instead of failing.
"""
import logging
import secrets
import string

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from compiler.core.config import get_settings
from compiler.core.errors import NotFound, PersistenceUnavailable
from compiler.db.models import Submission
from compiler.schemas.run import ExecutionResult
from compiler.services.languages import Language

logger = logging.getLogger("compiler.submissions")
settings = get_settings()

SHARE_ALPHABET = string.ascii_lowercase + string.digits


def generate_share_id(length: int | None = None) -> str:
    length = length or settings.SHARE_ID_LENGTH
    return "".join(secrets.choice(SHARE_ALPHABET) for _ in range(length))


async def create_submission(
    db: AsyncSession,
    *,
    user_id: str | None,
    code: str,
    language: Language,
    stdin: str,
    result: ExecutionResult,
) -> Submission:
    """Persist one run attempt with a freshly generated share id.

    A share id collision trips the unique constraint; the write is rolled
    back and retried with a new id, up to ``SHARE_ID_ATTEMPTS`` times.
    """
    for attempt in range(1, settings.SHARE_ID_ATTEMPTS + 1):
        sub = Submission(
            user_id=user_id,
            code=code,
            language=language.key,
            language_id=language.engine_id,
            input=stdin,
            output=result.output,
            status=result.status.value,
            execution_time=result.execution_time,
            memory=result.memory,
            share_id=generate_share_id(),
        )
        try:
            db.add(sub)
            await db.commit()
            return sub
        except IntegrityError:
            await db.rollback()
            logger.warning(
                "submission insert rejected, retrying with a new share id",
                extra={"attempt": attempt},
            )
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceUnavailable(str(e)) from e
    raise PersistenceUnavailable(
        f"could not allocate a unique share id after {settings.SHARE_ID_ATTEMPTS} attempts"
    )


async def list_for_owner(
    db: AsyncSession, user_id: str, limit: int | None = None
) -> list[Submission]:
    res = await db.execute(
        select(Submission)
        .where(Submission.user_id == user_id)
        .order_by(Submission.created_at.desc())
        .limit(limit or settings.HISTORY_LIMIT)
    )
    return list(res.scalars().all())


async def get_submission(db: AsyncSession, submission_id: str) -> Submission:
    sub = await db.get(Submission, submission_id)
    if not sub:
        raise NotFound("Submission not found")
    return sub


async def get_shared(db: AsyncSession, share_id: str) -> Submission:
    res = await db.execute(select(Submission).where(Submission.share_id == share_id))
    sub = res.scalar_one_or_none()
    if not sub:
        raise NotFound("Code not found")
    return sub


async def delete_for_owner(db: AsyncSession, submission_id: str, user_id: str):
    """Delete a submission only when ``user_id`` owns it.

    A missing record and someone else's record look the same to the caller.
    """
    res = await db.execute(
        delete(Submission).where(
            Submission.id == submission_id, Submission.user_id == user_id
        )
    )
    await db.commit()
    if not res.rowcount:
        raise NotFound("Submission not found or unauthorized")
