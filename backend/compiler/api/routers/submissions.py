from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from compiler.api.deps import get_current_user, get_db
from compiler.core.errors import NotFound
from compiler.schemas.submission import (
    SubmissionDetail,
    SubmissionList,
    SubmissionOut,
)
from compiler.services import submissions

router = APIRouter(prefix="/submissions", tags=["submissions"])


@router.get("/my", response_model=SubmissionList)
async def my_submissions(
    db: AsyncSession = Depends(get_db), user=Depends(get_current_user)
):
    subs = await submissions.list_for_owner(db, user.id)
    return SubmissionList(submissions=[SubmissionOut.model_validate(s) for s in subs])


# No ownership check here, unlike /compile/share which hides the owner.
@router.get("/{submission_id}", response_model=SubmissionDetail)
async def get_submission(submission_id: str, db: AsyncSession = Depends(get_db)):
    try:
        sub = await submissions.get_submission(db, submission_id)
    except NotFound as e:
        raise HTTPException(404, str(e))
    return SubmissionDetail(submission=SubmissionOut.model_validate(sub))


@router.delete("/{submission_id}")
async def delete_submission(
    submission_id: str,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    try:
        await submissions.delete_for_owner(db, submission_id, user.id)
    except NotFound as e:
        raise HTTPException(404, str(e))
    return {"message": "Submission deleted"}
