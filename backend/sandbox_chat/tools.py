import logging
from dataclasses import dataclass
from typing import Callable

from langchain.tools import tool
from pydantic import BaseModel, Field

from sandbox_chat.prompts import DATA_ANALYST_PROMPT, NEXTJS_PROMPT, STREAMLIT_PROMPT
from sandbox_chat.sandbox import SandboxService
from sandbox_chat.stream import StreamData
from sandbox_chat.templates import SandboxTemplate, resolve_template

logger = logging.getLogger(__name__)

TITLE_DESCRIPTION = "Short title (5 words max) of the artifact."
DESCRIPTION_DESCRIPTION = "Short description (10 words max) of the artifact."


class RunPythonArgs(BaseModel):
    title: str = Field(description=TITLE_DESCRIPTION)
    description: str = Field(description=DESCRIPTION_DESCRIPTION)
    code: str = Field(description="The code to run.")


class WritePageArgs(BaseModel):
    title: str = Field(description=TITLE_DESCRIPTION)
    description: str = Field(description=DESCRIPTION_DESCRIPTION)
    code: str = Field(description="The TSX code to write.")


class WriteAppArgs(BaseModel):
    code: str = Field(description="The Streamlit code to write.")


def run_python_tool(user_id: str, template: SandboxTemplate, sandbox: SandboxService, data: StreamData):
    @tool("runPython", args_schema=RunPythonArgs, description="Runs Python code.")
    async def run_python(title: str, description: str, code: str) -> dict:
        data.append({"tool": "runPython", "state": "running"})
        logger.info("runPython for user %s: %s", user_id, title)

        output = await sandbox.run_python(user_id, code, template)

        data.append({"tool": "runPython", "state": "complete"})
        return {
            "stdout": output.stdout,
            "stderr": output.stderr,
            "runtimeError": output.runtime_error,
            "cellResults": output.results,
        }

    return run_python


def write_page_tool(user_id: str, template: SandboxTemplate, sandbox: SandboxService, data: StreamData):
    @tool(
        "writeCodeToPageTsx",
        args_schema=WritePageArgs,
        description="Writes TSX code to the page.tsx file. You can use tailwind classes.",
    )
    async def write_page(title: str, description: str, code: str) -> dict:
        data.append({"tool": "writeCodeToPageTsx", "state": "running"})

        result = await sandbox.write_to_page(user_id, code, template)
        logger.info("Wrote page.tsx for user %s: %s", user_id, result["url"])

        data.append({"tool": "writeCodeToPageTsx", "state": "complete"})
        return {"url": result["url"]}

    return write_page


def write_app_tool(user_id: str, template: SandboxTemplate, sandbox: SandboxService, data: StreamData):
    @tool("writeCodeToAppPy", args_schema=WriteAppArgs, description="Writes Streamlit code to the app.py file.")
    async def write_app(code: str) -> dict:
        data.append({"tool": "writeCodeToAppPy", "state": "running"})

        result = await sandbox.write_to_app(user_id, code, template)
        logger.info("Wrote app.py for user %s: %s", user_id, result["url"])

        data.append({"tool": "writeCodeToAppPy", "state": "complete"})
        return {"url": result["url"]}

    return write_app


@dataclass(frozen=True)
class TemplateTools:
    prompt: str
    tool_name: str
    make_tool: Callable


# One row per template. Adding a template means adding a row here.
TEMPLATE_TOOLS = {
    SandboxTemplate.CODE_INTERPRETER_MULTILANG: TemplateTools(DATA_ANALYST_PROMPT, "runPython", run_python_tool),
    SandboxTemplate.WEB_COMPONENT: TemplateTools(NEXTJS_PROMPT, "writeCodeToPageTsx", write_page_tool),
    SandboxTemplate.SCRIPT_WRITER: TemplateTools(STREAMLIT_PROMPT, "writeCodeToAppPy", write_app_tool),
}


def select(template, user_id: str, sandbox: SandboxService, data: StreamData) -> tuple[str, list]:
    """Pick the system prompt and the single tool exposed for a template."""
    template = resolve_template(template)
    entry = TEMPLATE_TOOLS[template]
    return entry.prompt, [entry.make_tool(user_id, template, sandbox, data)]
