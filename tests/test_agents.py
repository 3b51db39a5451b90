"""Tests for the garden wisdom and guardian chat agents.

The model is never called: ``run_agent_sync`` / ``run_agent_async`` are
patched.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from moodgarden.agents.base import DEFAULT_MODEL, get_model
from moodgarden.agents.gardener import (
    EMPTY_CHAT_REPLY,
    EMPTY_WISDOM,
    FAILED_CHAT_REPLY,
    FAILED_WISDOM,
    NO_API_KEY_WISDOM,
    GardenGuardianChat,
    GardenWisdomAgent,
    garden_summary,
    request_insight,
    request_insight_async,
    wisdom_prompt,
)
from moodgarden.db.backends import MemoryBackend
from moodgarden.db.store import GardenStore
from moodgarden.models import MoodEntry, MoodType


T0 = datetime(2025, 2, 1, 7, 30, tzinfo=timezone.utc)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def store() -> GardenStore:
    garden = GardenStore(MemoryBackend())
    garden.initialize()
    garden.add(MoodEntry(id="a", timestamp=T0, mood=MoodType.SAD, note="grey skies"))
    return garden


class TestModelSelection:
    """Model name resolution."""

    def test_config_wins(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "from-env")
        assert get_model({"openai": {"model": "from-config"}}) == "from-config"

    def test_env_used_without_config(self, monkeypatch):
        monkeypatch.setenv("OPENAI_MODEL", "from-env")
        assert get_model({"openai": {"model": None}}) == "from-env"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
        assert get_model() == DEFAULT_MODEL


class TestGardenWisdom:
    """Wisdom generation with fallbacks."""

    def test_prompt_mentions_mood_and_note(self):
        prompt = wisdom_prompt(MoodType.ANXIOUS, "big exam")

        assert "Anxious" in prompt
        assert '"big exam"' in prompt

    def test_no_api_key_returns_silence(self, no_api_key):
        agent = GardenWisdomAgent(model="test-model")
        with patch("moodgarden.agents.gardener.run_agent_sync") as run:
            assert agent.get_wisdom(MoodType.HAPPY, "sun") == NO_API_KEY_WISDOM
            run.assert_not_called()

    def test_reply_is_stripped(self, api_key):
        agent = GardenWisdomAgent(model="test-model")
        with patch("moodgarden.agents.gardener.run_agent_sync", return_value="  Roots deepen.  \n"):
            assert agent.get_wisdom(MoodType.CALM) == "Roots deepen."

    def test_empty_reply_falls_back(self, api_key):
        agent = GardenWisdomAgent(model="test-model")
        with patch("moodgarden.agents.gardener.run_agent_sync", return_value="   "):
            assert agent.get_wisdom(MoodType.CALM) == EMPTY_WISDOM

    def test_failure_falls_back(self, api_key):
        agent = GardenWisdomAgent(model="test-model")
        with patch("moodgarden.agents.gardener.run_agent_sync", side_effect=RuntimeError("503")):
            assert agent.get_wisdom(MoodType.ANGRY, "traffic") == FAILED_WISDOM

    def test_async_failure_falls_back(self, api_key):
        agent = GardenWisdomAgent(model="test-model")
        with patch(
            "moodgarden.agents.gardener.run_agent_async",
            new=AsyncMock(side_effect=RuntimeError("timeout")),
        ):
            assert asyncio.run(agent.get_wisdom_async(MoodType.SAD)) == FAILED_WISDOM


class StubWisdom:
    """Wisdom producer returning fixed text and counting calls."""

    def __init__(self, text: str = "Rain feeds the roots.", on_call=None):
        self.text = text
        self.calls = 0
        self.on_call = on_call

    def get_wisdom(self, mood, note=None):
        self.calls += 1
        if self.on_call:
            self.on_call()
        return self.text

    async def get_wisdom_async(self, mood, note=None):
        return self.get_wisdom(mood, note)


class TestRequestInsight:
    """Insight delivery into the store."""

    def test_attaches_insight(self, store: GardenStore):
        assert request_insight(store, "a", StubWisdom()) == "Rain feeds the roots."
        assert store.get("a").insight == "Rain feeds the roots."

    def test_unknown_entry(self, store: GardenStore):
        stub = StubWisdom()

        assert request_insight(store, "missing", stub) is None
        assert stub.calls == 0

    def test_second_request_is_ignored(self, store: GardenStore):
        request_insight(store, "a", StubWisdom("first"))
        stub = StubWisdom("second")

        assert request_insight(store, "a", stub) is None
        assert store.get("a").insight == "first"
        assert stub.calls == 0

    def test_entry_deleted_while_generating(self, store: GardenStore):
        stub = StubWisdom(on_call=lambda: store.delete("a"))

        assert request_insight(store, "a", stub) is None
        assert store.list() == ()

    def test_async_attaches_insight(self, store: GardenStore):
        result = asyncio.run(request_insight_async(store, "a", StubWisdom("Async dew.")))

        assert result == "Async dew."
        assert store.get("a").insight == "Async dew."


class TestGuardianChat:
    """Conversational guardian."""

    def test_summary_lists_five_most_recent_moods(self):
        moods = [MoodType.HAPPY, MoodType.SAD, MoodType.CALM, MoodType.TIRED, MoodType.ANGRY, MoodType.EXCITED]
        entries = [
            MoodEntry(id=f"e{i}", timestamp=T0 - timedelta(hours=i), mood=m)
            for i, m in enumerate(moods)
        ]

        summary = garden_summary(entries)

        assert summary == "The user's recent moods are: Happy, Sad, Calm, Tired, Angry."

    def test_summary_for_empty_garden(self):
        assert "empty" in garden_summary([])

    def test_conversation_carries_history(self):
        chat = GardenGuardianChat([], model="test-model")
        with patch(
            "moodgarden.agents.gardener.run_agent_sync",
            side_effect=["Storms pass.", "Seeds wait."],
        ) as run:
            assert chat.reply("I feel stormy") == "Storms pass."
            assert chat.reply("And now?") == "Seeds wait."

        second_input = run.call_args_list[1].args[1]
        assert [m["role"] for m in second_input] == ["user", "assistant", "user"]
        assert second_input[1]["content"] == "Storms pass."

    def test_empty_reply_falls_back(self):
        chat = GardenGuardianChat([], model="test-model")
        with patch("moodgarden.agents.gardener.run_agent_sync", return_value=""):
            assert chat.reply("hello") == EMPTY_CHAT_REPLY

    def test_failure_falls_back_and_keeps_history(self):
        chat = GardenGuardianChat([], model="test-model")
        with patch("moodgarden.agents.gardener.run_agent_sync", side_effect=ConnectionError()):
            assert chat.reply("hello") == FAILED_CHAT_REPLY
        assert chat.history == []
