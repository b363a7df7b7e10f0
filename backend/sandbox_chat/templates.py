from enum import Enum


class InvalidTemplateError(ValueError):
    pass


class SandboxTemplate(str, Enum):
    CODE_INTERPRETER_MULTILANG = "code-interpreter-multilang"
    WEB_COMPONENT = "web-component"
    SCRIPT_WRITER = "script-writer"

    @property
    def e2b_template(self) -> str:
        """Name of the E2B sandbox template booted for this selector."""
        return E2B_TEMPLATES[self]


E2B_TEMPLATES = {
    SandboxTemplate.CODE_INTERPRETER_MULTILANG: "code-interpreter-multilang",
    SandboxTemplate.WEB_COMPONENT: "nextjs-developer",
    SandboxTemplate.SCRIPT_WRITER: "streamlit-developer",
}


def resolve_template(value) -> SandboxTemplate:
    if isinstance(value, SandboxTemplate):
        return value
    try:
        return SandboxTemplate(value)
    except ValueError:
        raise InvalidTemplateError("Invalid sandbox template") from None
