from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base, Mapped, mapped_column, relationship
from sqlalchemy import (
    Text,
    String,
    Integer,
    ForeignKey,
    TIMESTAMP,
    CheckConstraint,
    func,
)
from uuid import uuid4
from compiler.db.enums import SubmissionStatus
from compiler.services.languages import SUPPORTED_LANGUAGES

Base = declarative_base()


def gen_id():
    return str(uuid4())


def utcnow():
    return datetime.now(timezone.utc)


def _in_list(column: str, values) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_id)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    email: Mapped[str] = mapped_column(String, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, server_default=func.now()
    )
    submissions: Mapped[list["Submission"]] = relationship(back_populates="user")


class Submission(Base):
    __tablename__ = "submissions"
    id: Mapped[str] = mapped_column(String, primary_key=True, default=gen_id)
    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True, default=None
    )
    code: Mapped[str] = mapped_column(Text)
    language: Mapped[str] = mapped_column(String(16))
    language_id: Mapped[int] = mapped_column(Integer)
    input: Mapped[str] = mapped_column(Text, default="")
    output: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(
        String(32), default=SubmissionStatus.pending.value
    )
    # wall-clock latency of the model call, not program runtime
    execution_time: Mapped[int | None] = mapped_column(default=None)
    # simulated figure, nothing is measured
    memory: Mapped[int | None] = mapped_column(default=None)
    share_id: Mapped[str] = mapped_column(String(32), unique=True)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), default=utcnow, server_default=func.now()
    )
    user: Mapped[User | None] = relationship(back_populates="submissions")

    __table_args__ = (
        CheckConstraint(
            _in_list("language", SUPPORTED_LANGUAGES), name="chk_submission_language"
        ),
        CheckConstraint(
            _in_list("status", [s.value for s in SubmissionStatus]),
            name="chk_submission_status",
        ),
    )
