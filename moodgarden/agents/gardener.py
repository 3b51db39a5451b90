"""Garden wisdom and guardian chat agents.

Both are opaque text producers for the rest of the application: they
never raise, and fall back to a fixed line whenever the model is
unavailable or errors.
"""

import logging
from typing import Any, Optional, Sequence

from agents import Agent

from moodgarden.agents.base import (
    create_agent,
    get_api_key,
    run_agent_async,
    run_agent_sync,
)
from moodgarden.models import MoodEntry, MoodType

logger = logging.getLogger(__name__)


NO_API_KEY_WISDOM = "The garden listens in silence today."
EMPTY_WISDOM = "Every season in the garden serves a purpose."
FAILED_WISDOM = "Even in the shadows, roots grow stronger."

EMPTY_CHAT_REPLY = "The wind whispers, but I cannot quite hear you. Try again?"
FAILED_CHAT_REPLY = "My roots are trembling. Let's try speaking again in a moment."

RECENT_MOOD_COUNT = 5


WISDOM_AGENT_INSTRUCTIONS = """You write "Garden Wisdom": short, poetic reflections
for someone keeping a mood journal shaped like a garden.

Always:
- Use a plant or nature metaphor
- Acknowledge the feeling without judging it
- Offer gentle encouragement
- Stay under 20 words and reply with the reflection only
"""


GUARDIAN_INSTRUCTIONS = """You are the Guardian Spirit of the MoodGarden. Your personality is
gentle, poetic, and wise. You help users reflect on their emotional journey using
nature metaphors (roots, soil, sunlight, storms, seasons).
{garden_summary}
When users talk about their feelings, respond with empathy and help them see their
emotions as part of a natural growth cycle. Keep responses relatively concise but
deeply meaningful.
"""


def wisdom_prompt(mood: MoodType, note: Optional[str]) -> str:
    """Build the prompt asking for a reflection on one entry."""
    return (
        f'User feels {MoodType(mood).value}. Their note: "{note or ""}". '
        'Provide a short, poetic "Garden Wisdom" reflection (max 20 words) that uses '
        "a plant or nature metaphor to acknowledge their feelings and offer gentle "
        "encouragement."
    )


def garden_summary(recent_entries: Sequence[MoodEntry]) -> str:
    """Describe the latest moods for the guardian's instructions.

    Args:
        recent_entries: Entries, newest first.
    """
    if not recent_entries:
        return "The garden is currently empty and waiting for its first seeds."
    moods = [e.mood.value for e in recent_entries[:RECENT_MOOD_COUNT]]
    return f"The user's recent moods are: {', '.join(moods)}."


class GardenWisdomAgent:
    """Agent producing a one-line reflection for a freshly planted mood."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the wisdom agent.

        Args:
            model: Optional model override.
        """
        self.model = model
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the underlying agent."""
        return create_agent(
            name="Garden Wisdom",
            instructions=WISDOM_AGENT_INSTRUCTIONS,
            model=self.model,
            temperature=0.7,
            top_p=0.9,
        )

    def get_wisdom(self, mood: MoodType, note: Optional[str] = None) -> str:
        """Get a reflection for a mood and note.

        Args:
            mood: Mood that was planted.
            note: Optional user note.

        Returns:
            The reflection, or a fallback line.
        """
        if not get_api_key():
            return NO_API_KEY_WISDOM
        try:
            text = run_agent_sync(self._agent, wisdom_prompt(mood, note))
        except Exception as e:
            logger.warning("Garden wisdom generation failed: %s", e)
            return FAILED_WISDOM
        return (text or "").strip() or EMPTY_WISDOM

    async def get_wisdom_async(self, mood: MoodType, note: Optional[str] = None) -> str:
        """Asynchronous variant of ``get_wisdom``."""
        if not get_api_key():
            return NO_API_KEY_WISDOM
        try:
            text = await run_agent_async(self._agent, wisdom_prompt(mood, note))
        except Exception as e:
            logger.warning("Garden wisdom generation failed: %s", e)
            return FAILED_WISDOM
        return (text or "").strip() or EMPTY_WISDOM


class GardenGuardianChat:
    """Conversational guardian aware of the user's recent moods.

    The conversation is carried between turns, so each call to ``reply``
    sees the earlier exchanges.
    """

    def __init__(self, recent_entries: Sequence[MoodEntry], model: Optional[str] = None):
        """Initialize the chat.

        Args:
            recent_entries: Entries, newest first.
            model: Optional model override.
        """
        self.model = model
        self.history: list[dict[str, Any]] = []
        self._agent = create_agent(
            name="Guardian Spirit",
            instructions=GUARDIAN_INSTRUCTIONS.format(
                garden_summary=garden_summary(recent_entries)
            ),
            model=model,
            temperature=0.8,
        )

    def reply(self, message: str) -> str:
        """Send a message and get the guardian's answer.

        Args:
            message: What the user said.

        Returns:
            The guardian's reply, or a fallback line.
        """
        conversation = [*self.history, {"role": "user", "content": message}]
        try:
            text = run_agent_sync(self._agent, conversation)
        except Exception as e:
            logger.warning("Guardian chat failed: %s", e)
            return FAILED_CHAT_REPLY

        answer = (text or "").strip() or EMPTY_CHAT_REPLY
        self.history = [*conversation, {"role": "assistant", "content": answer}]
        return answer


def request_insight(store, entry_id: str, agent: GardenWisdomAgent) -> Optional[str]:
    """Generate wisdom for a stored entry and attach it.

    The insight is delivered through ``store.attach_insight``; if the
    entry was deleted meanwhile, or already has an insight, it is dropped.

    Args:
        store: GardenStore holding the entry.
        entry_id: Entry ID.
        agent: Wisdom agent.

    Returns:
        The attached text, or None if nothing was attached.
    """
    entry = store.get(entry_id)
    if entry is None or entry.insight is not None:
        return None
    text = agent.get_wisdom(entry.mood, entry.note)
    return text if store.attach_insight(entry_id, text) else None


async def request_insight_async(store, entry_id: str, agent: GardenWisdomAgent) -> Optional[str]:
    """Asynchronous variant of ``request_insight``."""
    entry = store.get(entry_id)
    if entry is None or entry.insight is not None:
        return None
    text = await agent.get_wisdom_async(entry.mood, entry.note)
    return text if store.attach_insight(entry_id, text) else None
