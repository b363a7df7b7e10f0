from types import SimpleNamespace

import pytest

from sandbox_chat.config import Settings
from sandbox_chat.sandbox import ExecutionOutput
from sandbox_chat.stream import StreamData


class FakeSandboxService:
    """Stands in for SandboxService, logging every call into a shared list."""

    def __init__(self, log, output=None, error=None):
        self.log = log
        self.output = output or ExecutionOutput(stdout="2\n")
        self.error = error
        self.calls = []

    async def _call(self, name, user_id, code, template):
        self.calls.append((name, user_id, code, template))
        self.log.append(("sandbox", name))
        if self.error is not None:
            raise self.error

    async def run_python(self, user_id, code, template):
        await self._call("run_python", user_id, code, template)
        return self.output

    async def write_to_page(self, user_id, code, template):
        await self._call("write_to_page", user_id, code, template)
        return {"url": "https://3000-sbx.e2b.dev"}

    async def write_to_app(self, user_id, code, template):
        await self._call("write_to_app", user_id, code, template)
        return {"url": "https://8501-sbx.e2b.dev"}


@pytest.fixture
def settings():
    return Settings(anthropic_api_key="sk-ant-test", e2b_api_key="e2b-test")


@pytest.fixture
def log():
    return []


@pytest.fixture
def data(log):
    return StreamData(writer=lambda event: log.append(("event", event["tool"], event["state"])))


@pytest.fixture
def sandbox(log):
    return FakeSandboxService(log)


@pytest.fixture
def make_sandbox(log):
    def make(**kwargs):
        return FakeSandboxService(log, **kwargs)

    return make


@pytest.fixture
def execution_error():
    return SimpleNamespace(name="ZeroDivisionError", value="division by zero", traceback="Traceback ...")
