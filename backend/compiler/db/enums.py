import enum


class SubmissionStatus(str, enum.Enum):
    pending = "pending"
    success = "success"
    error = "error"
    compilation_error = "compilation_error"
    runtime_error = "runtime_error"
    timeout = "timeout"
