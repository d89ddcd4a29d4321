"""Pytest configuration and shared fixtures."""
import os

import pytest

from chalkboard.chat import ChatPersistence, ConversationOrchestrator
from chalkboard.llm import ChatMessage, LLMProvider, LLMResponse, TokenUsage
from chalkboard.persona import load_persona
from chalkboard.storage import InMemoryKeyValueStore


class FakeLLM(LLMProvider):
    """LLM provider returning canned replies and recording prompts."""

    def __init__(self, replies: list[str] | None = None):
        self.replies = list(replies or ["Great question! 2 + 2 is 4."])
        self.prompts: list[str] = []
        self.closed = False
        self.usage: TokenUsage | None = None

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        self.prompts.append(messages[-1].content)
        return LLMResponse(content=self.replies.pop(0), model=self.model, finish_reason="STOP", usage=self.usage)

    async def close(self) -> None:
        self.closed = True


class FailingLLM(FakeLLM):
    """LLM provider whose every call raises."""

    def __init__(self, error: Exception | None = None):
        super().__init__()
        self.error = error or ConnectionError("network unreachable")

    async def chat_completion(self, messages, **options):
        self.prompts.append(messages[-1].content)
        raise self.error


class ConfirmStub:
    """Confirmation collaborator with a fixed answer."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def supportive_persona():
    return load_persona("supportive")


@pytest.fixture
def harsh_persona():
    return load_persona("harsh")


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def failing_llm():
    return FailingLLM()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def persistence(store):
    return ChatPersistence(store)


@pytest.fixture
def make_orchestrator(supportive_persona, persistence):
    """Build an orchestrator with the supportive persona and in-memory storage."""

    def _make(llm=None, confirm=None, persona=None):
        return ConversationOrchestrator(
            persona=persona or supportive_persona,
            llm=llm or FakeLLM(),
            persistence=persistence,
            confirm=confirm or ConfirmStub(True),
        )

    return _make


@pytest.fixture
def confirm_yes():
    return ConfirmStub(True)


@pytest.fixture
def confirm_no():
    return ConfirmStub(False)
