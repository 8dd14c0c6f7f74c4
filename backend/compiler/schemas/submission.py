from datetime import datetime
from pydantic import ConfigDict
from compiler.db.enums import SubmissionStatus
from compiler.schemas.run import CamelModel


class SubmissionOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None = None
    code: str
    language: str
    language_id: int
    input: str
    output: str
    status: SubmissionStatus
    execution_time: int | None = None
    memory: int | None = None
    share_id: str
    created_at: datetime | None = None


class SubmissionList(CamelModel):
    submissions: list[SubmissionOut]


class SubmissionDetail(CamelModel):
    submission: SubmissionOut


class SharedSubmissionOut(CamelModel):
    """Public view of a shared submission: no owner, no internal id."""

    model_config = ConfigDict(from_attributes=True)

    code: str
    language: str
    input: str
    output: str
    status: SubmissionStatus
