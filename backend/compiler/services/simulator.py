"""Simulated execution: ask a chat model what a program would print.

Nothing is compiled or run. The model is prompted to behave like a
deterministic interpreter and its reply is classified with a small set of
error patterns. The classification is a heuristic label, not a verdict.
"""
import logging
import random
import re
import time

import openai

from compiler.core.config import Settings, get_settings
from compiler.core.errors import UpstreamExecutionError
from compiler.db.enums import SubmissionStatus
from compiler.schemas.run import ExecutionResult
from compiler.services.languages import Language

logger = logging.getLogger("compiler.simulator")

SYSTEM_PROMPT = (
    "You are a precise code execution simulator. Output ONLY what the code "
    "would print, no explanations or markdown. For errors, output the error "
    "message exactly as the compiler/interpreter would show it. If the program "
    "prints nothing, respond with an empty output."
)

ERROR_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"error:",
        r"exception",
        r"traceback",
        r"syntaxerror",
        r"nameerror",
        r"typeerror",
        r"undefined",
        r"cannot find",
        r"compilation failed",
        r"segmentation fault",
    )
]

MEMORY_RANGE_KB = (1000, 5999)

_FENCE = re.compile(r"^```[\w+#-]*\n(.*?)\n?```$", re.DOTALL)


def build_prompt(code: str, language: Language, stdin: str = "") -> str:
    lines = [
        f"You are a code execution engine. Execute the following {language.name} "
        "code and provide ONLY the output that would be printed to the console. "
        "Do not include any explanations, just the raw output.",
        "",
        "If there are syntax errors or runtime errors, respond with the error "
        f"message in a format typical for {language.name}.",
        "",
    ]
    stdin_lines = stdin.splitlines() if stdin else []
    if stdin_lines:
        lines.append(
            "The program will read the following input from stdin, one value per line:"
        )
        lines.extend(f"Line {i}: {value}" for i, value in enumerate(stdin_lines, 1))
        lines += [
            "",
            "Important: when the code calls input(), scanf(), cin, Scanner, readline "
            "or any similar function, each call consumes the next line above, "
            "strictly in order. Execute the code as if the user typed these values "
            "when prompted.",
        ]
    else:
        lines.append("The program does not require any input.")
    lines += [
        "",
        "Code:",
        f"```{language.key}",
        code,
        "```",
        "",
        "Execute this code step by step. Respond with ONLY the console output, "
        "nothing else. Do not wrap it in markdown. If the code produces no "
        "output, respond with an empty line.",
    ]
    return "\n".join(lines)


def strip_fences(text: str) -> str:
    text = text.strip()
    m = _FENCE.match(text)
    if m:
        text = m.group(1).strip()
    return text


def classify(output: str) -> tuple[bool, SubmissionStatus]:
    if any(p.search(output) for p in ERROR_PATTERNS):
        return False, SubmissionStatus.runtime_error
    return True, SubmissionStatus.success


def simulated_memory() -> int:
    """Placeholder memory figure in KB. Nothing is measured."""
    return random.randint(*MEMORY_RANGE_KB)


class ExecutionSimulator:
    """Turns ``(code, language, stdin)`` into an :class:`ExecutionResult`.

    ``client`` is any object exposing ``chat.completions.create`` the way
    ``openai.AsyncOpenAI`` does; when omitted one is built from settings on
    first use.
    """

    def __init__(self, client=None, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self.settings.AI_API_KEY,
                base_url=self.settings.AI_BASE_URL,
                timeout=self.settings.AI_TIMEOUT_S,
            )
        return self._client

    async def _complete(self, prompt: str) -> str:
        if self._client is None and not self.settings.ai_enabled:
            raise UpstreamExecutionError("no AI provider key configured (demo mode)")
        try:
            resp = await self.client.chat.completions.create(
                model=self.settings.AI_MODEL,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0,
                max_tokens=self.settings.AI_MAX_TOKENS,
            )
        except openai.OpenAIError as e:
            raise UpstreamExecutionError(str(e)) from e
        if not resp.choices:
            return ""
        return resp.choices[0].message.content or ""

    async def run(
        self, code: str, language: Language, stdin: str = ""
    ) -> ExecutionResult:
        prompt = build_prompt(code, language, stdin)
        started = time.perf_counter()
        try:
            raw = await self._complete(prompt)
        except UpstreamExecutionError as e:
            logger.exception(
                "simulation call failed", extra={"language": language.key}
            )
            return ExecutionResult(
                success=False,
                output=f"AI Execution Error: {e}",
                status=SubmissionStatus.error,
                execution_time=0,
                memory=0,
            )
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        output = strip_fences(raw)
        success, status = classify(output)
        logger.info(
            "simulated run",
            extra={
                "language": language.key,
                "status": status.value,
                "execution_ms": elapsed_ms,
            },
        )
        return ExecutionResult(
            success=success,
            output=output,
            status=status,
            execution_time=elapsed_ms,
            memory=simulated_memory(),
        )
