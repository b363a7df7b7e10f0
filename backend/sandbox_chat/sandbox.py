import logging
from dataclasses import dataclass, field
from typing import Any

from e2b import SandboxQuery
from e2b_code_interpreter import AsyncSandbox

from sandbox_chat.config import Settings
from sandbox_chat.templates import SandboxTemplate

logger = logging.getLogger(__name__)

PAGE_PATH = "/home/user/app/page.tsx"
NEXTJS_PORT = 3000
APP_PATH = "/home/user/app.py"
STREAMLIT_PORT = 8501

_RESULT_FORMATS = (
    "text",
    "html",
    "markdown",
    "svg",
    "png",
    "jpeg",
    "pdf",
    "latex",
    "json",
    "javascript",
)


@dataclass
class ExecutionOutput:
    stdout: str = ""
    stderr: str = ""
    runtime_error: dict[str, Any] | None = None
    results: list[dict[str, Any]] = field(default_factory=list)


def serialize_result(result) -> dict[str, Any]:
    """Keep only the formats the kernel actually produced for a cell result."""
    payload = {}
    for fmt in _RESULT_FORMATS:
        value = getattr(result, fmt, None)
        if value is not None:
            payload[fmt] = value
    if getattr(result, "extra", None):
        payload["extra"] = result.extra
    payload["isMainResult"] = bool(getattr(result, "is_main_result", False))
    return payload


def serialize_error(error) -> dict[str, Any] | None:
    if error is None:
        return None
    return {"name": error.name, "value": error.value, "traceback": error.traceback}


class SandboxService:
    """Runs and writes code in E2B sandboxes, one sandbox per (user, template)."""

    def __init__(self, settings: Settings, sandbox_cls=AsyncSandbox):
        self.settings = settings
        self.sandbox_cls = sandbox_cls

    async def connect(self, user_id: str, template: SandboxTemplate):
        metadata = {"userID": user_id, "template": template.value}
        paginator = self.sandbox_cls.list(
            query=SandboxQuery(metadata=metadata),
            api_key=self.settings.e2b_api_key,
        )
        running = await paginator.next_items()

        for info in running:
            if info.metadata.get("userID") == user_id and info.metadata.get("template") == template.value:
                logger.info("Reusing sandbox %s for user %s (%s)", info.sandbox_id, user_id, template.value)
                sandbox = await self.sandbox_cls.connect(info.sandbox_id, api_key=self.settings.e2b_api_key)
                await sandbox.set_timeout(self.settings.sandbox_timeout)
                return sandbox

        logger.info("Creating %s sandbox for user %s", template.e2b_template, user_id)
        return await self.sandbox_cls.create(
            template=template.e2b_template,
            metadata=metadata,
            timeout=self.settings.sandbox_timeout,
            api_key=self.settings.e2b_api_key,
        )

    async def run_python(self, user_id: str, code: str, template: SandboxTemplate) -> ExecutionOutput:
        sandbox = await self.connect(user_id, template)
        execution = await sandbox.run_code(code)

        # A failing cell is reported back to the model, not raised
        return ExecutionOutput(
            stdout="".join(execution.logs.stdout),
            stderr="".join(execution.logs.stderr),
            runtime_error=serialize_error(execution.error),
            results=[serialize_result(result) for result in execution.results],
        )

    async def write_to_page(self, user_id: str, code: str, template: SandboxTemplate) -> dict[str, str]:
        return await self._write(user_id, code, template, PAGE_PATH, NEXTJS_PORT)

    async def write_to_app(self, user_id: str, code: str, template: SandboxTemplate) -> dict[str, str]:
        return await self._write(user_id, code, template, APP_PATH, STREAMLIT_PORT)

    async def _write(self, user_id, code, template, path, port) -> dict[str, str]:
        sandbox = await self.connect(user_id, template)
        await sandbox.files.write(path, code)
        url = f"https://{sandbox.get_host(port)}"
        logger.debug("Wrote %s in sandbox %s", path, sandbox.sandbox_id)
        return {"url": url}
