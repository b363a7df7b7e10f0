import logging
import os
from typing import Literal

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field

from sandbox_chat.agent import build_agent, build_model, stream_agent
from sandbox_chat.config import load_settings
from sandbox_chat.sandbox import SandboxService
from sandbox_chat.stream import StreamData, relay
from sandbox_chat.templates import resolve_template
from sandbox_chat.tools import select

load_dotenv()

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class Message(BaseModel):
    role: Literal["user", "assistant", "function"]
    content: str
    name: str | None = None


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[Message]
    user_id: str = Field(alias="userID")
    # Plain string so an unknown template fails in the handler, not in validation
    template: str


app = FastAPI(title="Sandbox Chat")

origins = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
    os.environ.get("FRONTEND_URL", "http://localhost:5173"),
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/chat")
async def chat(body: ChatRequest):
    logger.info("userID %s", body.user_id)
    logger.info("template %s", body.template)

    # Fails before anything touches the provider or the sandbox
    template = resolve_template(body.template)

    settings = load_settings()
    data = StreamData()
    sandbox = SandboxService(settings)

    system_prompt, tools = select(template, body.user_id, sandbox, data)
    agent = build_agent(build_model(settings), system_prompt, tools)
    stream = stream_agent(agent, [message.model_dump() for message in body.messages])

    return StreamingResponse(
        relay(stream, data),
        media_type="text/event-stream",
    )
