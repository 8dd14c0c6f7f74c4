from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from compiler.db.enums import SubmissionStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RunCreate(BaseModel):
    # presence is checked by the run service so it can answer 400, not 422
    code: str | None = None
    language: str | None = None
    input: str | None = ""


class ExecutionResult(BaseModel):
    success: bool
    output: str
    status: SubmissionStatus
    execution_time: int
    memory: int


class RunOut(CamelModel):
    success: bool
    status: SubmissionStatus
    output: str
    execution_time: int = Field(description="Model latency in ms, not program runtime")
    memory: int = Field(description="Simulated memory estimate in KB, not measured")
    submission_id: str | None = None
    share_id: str | None = None


class TemplateOut(BaseModel):
    template: str


class LanguageOut(CamelModel):
    id: str
    name: str
    language_id: int


class ModeOut(BaseModel):
    mode: str
    message: str
