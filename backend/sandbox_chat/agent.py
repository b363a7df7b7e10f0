from langchain.agents import create_agent
from langchain.chat_models import init_chat_model

from sandbox_chat.config import Settings


def build_model(settings: Settings):
    kwargs = {}
    if settings.anthropic_api_url:
        kwargs["base_url"] = settings.anthropic_api_url

    return init_chat_model(
        settings.model,
        model_provider="anthropic",
        api_key=settings.anthropic_api_key,
        max_tokens=settings.max_tokens,
        **kwargs,
    )


def build_agent(model, system_prompt: str, tools: list):
    # No checkpointer, the caller sends the whole history with every request
    return create_agent(model=model, system_prompt=system_prompt, tools=tools)


def to_agent_message(message: dict) -> dict:
    """
    Function results from earlier turns carry no tool_use id, so Anthropic can't take them as
    tool results. They are replayed to the model as user text instead.
    """
    if message["role"] != "function":
        return {"role": message["role"], "content": message["content"]}

    name = message.get("name") or "function"
    return {"role": "user", "content": f"Result of {name}:\n{message['content']}"}


def stream_agent(agent, messages: list[dict]):
    return agent.astream(
        {"messages": [to_agent_message(message) for message in messages]},
        stream_mode=["messages", "custom"],
    )
