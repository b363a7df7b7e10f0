import json
import logging
import uuid
from typing import Any, AsyncIterator, Callable

from langchain_core.messages import AIMessage, ToolMessage
from langgraph.config import get_stream_writer

logger = logging.getLogger(__name__)

CLOSED_FRAME = "event: closedConnection\ndata: Stream finished\n\n"


class StreamClosedError(RuntimeError):
    pass


class StreamData:
    """
    Side channel for tool lifecycle events, separate from the generated text.

    Events go through the LangGraph "custom" stream writer of the running graph, unless a
    writer is injected (handy when a tool runs outside a graph).
    """

    def __init__(self, writer: Callable[[Any], None] | None = None):
        self._writer = writer
        self.closed = False

    def append(self, event: dict[str, Any]) -> None:
        if self.closed:
            raise StreamClosedError("Side channel is already closed")
        writer = self._writer or get_stream_writer()
        writer(event)

    def close(self) -> None:
        """Mark the channel closed. Callers see it as the closedConnection frame relay yields next."""
        if self.closed:
            raise StreamClosedError("Side channel was closed twice")
        self.closed = True


def sse(payload: Any, event: str | None = None) -> str:
    frame = f"event: {event}\n" if event else ""
    return f"{frame}data: {json.dumps(payload)}\n\n"


def _tool_result(content):
    # Tool nodes stringify dict results as JSON
    if isinstance(content, str):
        try:
            return json.loads(content)
        except ValueError:
            return content
    return content


def message_payloads(message, message_id: str | None) -> list[dict[str, Any]]:
    if isinstance(message, ToolMessage):
        return [{
            "message_id": message_id,
            "type": "tool_result",
            "name": message.name,
            "data": _tool_result(message.content),
        }]

    if not isinstance(message, AIMessage):
        return []

    payloads = []
    for block in message.content_blocks:
        payload = {"message_id": message_id, "type": block["type"], "data": None}

        if block.get("name") is not None:
            payload["name"] = block["name"]

        if block["type"] == "text":
            if not block["text"]:
                continue
            payload["data"] = block["text"]
        elif block["type"] == "tool_call_chunk":
            payload["data"] = block.get("args")
        elif block["type"] == "tool_call":
            payload["data"] = json.dumps(block.get("args", {}))
        else:
            continue

        payloads.append(payload)
    return payloads


async def relay(stream: AsyncIterator, data: StreamData) -> AsyncIterator[str]:
    """
    Turn the agent's (mode, chunk) events into Server Sent Events.

    LangGraph steps don't carry unique ids, just incrementing numbers, so each step gets a
    uuid4 "message_id" that the frontend uses to render messages separately.
    """
    langgraph_step = None
    message_id = None

    async for mode, chunk in stream:
        if mode == "custom":
            yield sse(chunk, event="data")
            continue

        if mode != "messages":
            continue

        message, metadata = chunk
        if langgraph_step != metadata.get("langgraph_step", None):
            langgraph_step = metadata.get("langgraph_step", None)
            message_id = str(uuid.uuid4())

        for payload in message_payloads(message, message_id):
            yield sse(payload)

    # Only reached once the provider stream is fully drained, tool calls included
    data.close()
    logger.info("Stream finished")
    yield CLOSED_FRAME
