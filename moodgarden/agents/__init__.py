"""AI agents for MoodGarden.

This module provides the text-generation collaborators:
- GardenWisdomAgent: one-line reflection attached to an entry
- GardenGuardianChat: conversational guardian aware of recent moods
"""

from moodgarden.agents.base import (
    create_agent,
    get_api_key,
    get_model,
    run_agent_async,
    run_agent_sync,
)
from moodgarden.agents.gardener import (
    GardenGuardianChat,
    GardenWisdomAgent,
    garden_summary,
    request_insight,
    request_insight_async,
)

__all__ = [
    # Base utilities
    "create_agent",
    "run_agent_sync",
    "run_agent_async",
    "get_model",
    "get_api_key",
    # Agents
    "GardenWisdomAgent",
    "GardenGuardianChat",
    # Helpers
    "garden_summary",
    "request_insight",
    "request_insight_async",
]
