"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK.
"""

import logging
import os
from typing import Any, Callable, Optional, Union

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, ModelSettings, Runner

logger = logging.getLogger(__name__)

# Default model to use for agents
DEFAULT_MODEL = "gpt-4o-mini"

# A plain prompt, or a conversation as a list of {"role", "content"} items
AgentInput = Union[str, list[dict[str, Any]]]


def get_model(config: Optional[dict[str, Any]] = None) -> str:
    """Get the model to use for agents.

    Checks the ``[openai] model`` config value, then the OPENAI_MODEL
    environment variable, then falls back to the default.

    Args:
        config: Optional application config.

    Returns:
        Model name string.
    """
    configured = (config or {}).get("openai", {}).get("model")
    return configured or os.environ.get("OPENAI_MODEL", DEFAULT_MODEL)


def get_api_key() -> Optional[str]:
    """Get the OpenAI API key.

    Returns:
        API key string or None if not configured.
    """
    return os.environ.get("OPENAI_API_KEY")


def create_agent(
    name: str,
    instructions: str,
    tools: Optional[list[Callable[..., Any]]] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    top_p: Optional[float] = None,
) -> Agent:
    """Create an AI agent with the specified configuration.

    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        tools: Optional list of tool functions the agent can use.
        model: Optional model override. Uses default if not specified.
        temperature: Optional sampling temperature.
        top_p: Optional nucleus sampling value.

    Returns:
        Configured Agent instance.
    """
    return Agent(
        name=name,
        instructions=instructions,
        tools=tools or [],
        model=model or get_model(),
        model_settings=ModelSettings(temperature=temperature, top_p=top_p),
    )


def _log_agent_call(agent: Agent) -> None:
    logger.debug("Agent: %s | Model: %s", agent.name, agent.model)


def run_agent_sync(agent: Agent, message: AgentInput) -> str:
    """Run an agent synchronously and return the response.

    Args:
        agent: The agent to run.
        message: User message, or the conversation so far.

    Returns:
        Agent's response as a string.
    """
    _log_agent_call(agent)
    result = Runner.run_sync(agent, message)
    return result.final_output


async def run_agent_async(agent: Agent, message: AgentInput) -> str:
    """Run an agent asynchronously and return the response.

    Args:
        agent: The agent to run.
        message: User message, or the conversation so far.

    Returns:
        Agent's response as a string.
    """
    _log_agent_call(agent)
    result = await Runner.run(agent, message)
    return result.final_output
