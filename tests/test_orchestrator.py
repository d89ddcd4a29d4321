"""Unit tests for the conversation orchestrator."""
import asyncio

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from chalkboard.chat import (
    HISTORY_KEY,
    ChatPersistence,
    ChatStatus,
    ConversationOrchestrator,
    DisplayMode,
    FailureKind,
    Speaker,
    Turn,
    classify_failure,
)
from chalkboard.llm import EmptyResponseError, LLMProvider, LLMResponse, TokenUsage
from chalkboard.storage import InMemoryKeyValueStore


class SlowStore(InMemoryKeyValueStore):
    """Store whose writes take a little while."""

    async def set(self, key: str, value: str) -> None:
        await asyncio.sleep(0.01)
        await super().set(key, value)


class TestSubmit:
    """Tests for submitting user messages."""

    @pytest.mark.asyncio
    async def test_success_appends_user_then_assistant(self, make_orchestrator, fake_llm):
        """Test the supportive-persona example scenario."""
        fake_llm.replies = ["Great question! Two plus two is four."]
        orchestrator = make_orchestrator(llm=fake_llm)

        result = await orchestrator.submit("What is 2+2?")

        assert [turn.speaker for turn in result.conversation] == [Speaker.USER, Speaker.ASSISTANT]
        assert result.conversation[0].text == "What is 2+2?"
        assert result.conversation[1].text == "Great question! Two plus two is four."
        assert result.error_message is None
        assert orchestrator.status is ChatStatus.IDLE

    @pytest.mark.asyncio
    async def test_reply_is_kept_verbatim(self, make_orchestrator, fake_llm):
        """Test that whitespace and markup in the reply are not touched."""
        reply = "  **Bold** answer\n\nwith trailing space  "
        fake_llm.replies = [reply]
        orchestrator = make_orchestrator(llm=fake_llm)

        result = await orchestrator.submit("hi")

        assert result.conversation[-1].text == reply

    @pytest.mark.asyncio
    async def test_failure_sets_persona_message(self, make_orchestrator, failing_llm, supportive_persona):
        """Test the failing-call example scenario."""
        orchestrator = make_orchestrator(llm=failing_llm)

        result = await orchestrator.submit("test")

        assert len(result.conversation) == 1
        assert result.conversation[0].speaker is Speaker.USER
        assert result.error_message == supportive_persona.ui.error_message
        assert orchestrator.status is ChatStatus.IDLE

    @pytest.mark.asyncio
    async def test_failure_message_differs_by_persona(
        self, make_orchestrator, failing_llm, harsh_persona, supportive_persona
    ):
        """Test that the harsh persona has its own fallback message."""
        orchestrator = make_orchestrator(llm=failing_llm, persona=harsh_persona)

        result = await orchestrator.submit("test")

        assert result.error_message == harsh_persona.ui.error_message
        assert result.error_message != supportive_persona.ui.error_message

    @pytest.mark.asyncio
    async def test_empty_reply_is_a_failure(self, make_orchestrator, fake_llm, supportive_persona):
        """Test that an empty model response is treated like any other failure."""
        fake_llm.replies = [""]
        orchestrator = make_orchestrator(llm=fake_llm)

        result = await orchestrator.submit("hello")

        assert len(result.conversation) == 1
        assert result.error_message == supportive_persona.ui.error_message

    @pytest.mark.asyncio
    async def test_success_clears_previous_error(self, make_orchestrator, fake_llm):
        """Test that a successful turn removes an earlier error."""
        fake_llm.replies = ["", "Now it works."]
        orchestrator = make_orchestrator(llm=fake_llm)

        first = await orchestrator.submit("one")
        second = await orchestrator.submit("two")

        assert first.error_message is not None
        assert second.error_message is None
        assert [turn.text for turn in second.conversation] == ["one", "two", "Now it works."]

    @pytest.mark.asyncio
    async def test_prompt_ends_with_user_text(self, make_orchestrator, fake_llm):
        """Test that the model receives the built prompt with the user's text."""
        orchestrator = make_orchestrator(llm=fake_llm)

        await orchestrator.submit("Why is the sky blue?")

        assert len(fake_llm.prompts) == 1
        assert fake_llm.prompts[0].endswith("Why is the sky blue?")
        assert "You are Ms. Rivera" in fake_llm.prompts[0]

    @pytest.mark.asyncio
    async def test_only_latest_message_is_sent(self, make_orchestrator, fake_llm):
        """Test that earlier turns are not included in the next prompt."""
        fake_llm.replies = ["first reply", "second reply"]
        orchestrator = make_orchestrator(llm=fake_llm)

        await orchestrator.submit("first question")
        await orchestrator.submit("second question")

        assert "first question" not in fake_llm.prompts[1]
        assert "first reply" not in fake_llm.prompts[1]

    @pytest.mark.asyncio
    async def test_user_turn_visible_before_reply(self, make_orchestrator, fake_llm):
        """Test that listeners see the user turn and typing state before the call resolves."""
        orchestrator = make_orchestrator(llm=fake_llm)
        seen = []
        orchestrator.add_listener(seen.append)

        await orchestrator.submit("What is 2+2?")

        awaiting = [snapshot for snapshot in seen if snapshot.awaiting_response]
        assert awaiting, "typing state was never published"
        assert [turn.text for turn in awaiting[0].conversation] == ["What is 2+2?"]
        assert not seen[-1].awaiting_response
        assert len(seen[-1].conversation) == 2

    @pytest.mark.asyncio
    async def test_history_is_persisted_after_each_append(self, make_orchestrator, persistence):
        """Test that the stored history matches the conversation after a turn."""
        orchestrator = make_orchestrator()

        result = await orchestrator.submit("hello")

        assert await persistence.load_conversation() == list(result.conversation)

    @pytest.mark.asyncio
    async def test_failed_turn_persists_user_turn_only(self, make_orchestrator, failing_llm, persistence):
        orchestrator = make_orchestrator(llm=failing_llm)

        await orchestrator.submit("hello")

        stored = await persistence.load_conversation()
        assert [turn.speaker for turn in stored] == [Speaker.USER]

    @pytest.mark.asyncio
    async def test_orchestrator_usable_after_failure(self, make_orchestrator, fake_llm):
        """Test that a failure does not leave the orchestrator stuck."""
        fake_llm.replies = ["", "recovered"]
        orchestrator = make_orchestrator(llm=fake_llm)

        await orchestrator.submit("first")
        result = await orchestrator.submit("second")

        assert result.conversation[-1].text == "recovered"
        assert orchestrator.status is ChatStatus.IDLE

    @pytest.mark.asyncio
    async def test_submit_ignored_while_awaiting(self, make_orchestrator):
        """Test that a submit arriving during a pending call is a no-op."""
        inner_results = []

        class ReentrantLLM(LLMProvider):
            model = "reentrant"

            async def chat_completion(self, messages, **kwargs):
                inner_results.append(await orchestrator.submit("sneaky second message"))
                return LLMResponse(content="done", model=self.model)

            async def close(self):
                pass

        orchestrator = make_orchestrator(llm=ReentrantLLM())

        await orchestrator.submit("first")

        assert [turn.text for turn in inner_results[0].conversation] == ["first"]
        assert [turn.text for turn in orchestrator.conversation] == ["first", "done"]

    @pytest.mark.asyncio
    async def test_concurrent_submits_make_one_call(self, supportive_persona, fake_llm, confirm_yes):
        """Test that a second submit during the history write is refused."""
        orchestrator = ConversationOrchestrator(
            persona=supportive_persona,
            llm=fake_llm,
            persistence=ChatPersistence(SlowStore()),
            confirm=confirm_yes,
        )

        await asyncio.gather(orchestrator.submit("first"), orchestrator.submit("second"))

        assert len(fake_llm.prompts) == 1
        assert fake_llm.prompts[0].endswith("first")
        assert [turn.speaker for turn in orchestrator.conversation] == [Speaker.USER, Speaker.ASSISTANT]
        assert orchestrator.conversation[0].text == "first"

    @pytest.mark.asyncio
    async def test_user_turn_is_published_as_busy(self, make_orchestrator):
        orchestrator = make_orchestrator()
        seen = []
        orchestrator.add_listener(seen.append)

        await orchestrator.submit("hi")

        with_user_turn = [snapshot for snapshot in seen if snapshot.conversation]
        assert with_user_turn[0].awaiting_response


class TestSubmitValidation:
    """Property tests for input validation."""

    @given(st.text(alphabet=" \t\n\r\x0b\x0c", max_size=20))
    @settings(max_examples=30, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_whitespace_input_is_noop(self, make_orchestrator, text: str):
        """Property test: whitespace-only input never changes the conversation."""
        orchestrator = make_orchestrator()
        seen = []
        orchestrator.add_listener(seen.append)

        result = asyncio.run(orchestrator.submit(text))

        assert result.conversation == ()
        assert result.error_message is None
        assert seen == []

    @given(st.text(min_size=1, max_size=50).filter(lambda s: s.strip()))
    @settings(max_examples=30, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_non_empty_input_appends_exactly_one_user_turn(self, make_orchestrator, text: str):
        """Property test: valid input adds one user turn even when the call fails."""

        class TimeoutLLM(LLMProvider):
            model = "timeout"

            async def chat_completion(self, messages, **kwargs):
                raise TimeoutError("slow")

            async def close(self):
                pass

        orchestrator = make_orchestrator(llm=TimeoutLLM())

        result = asyncio.run(orchestrator.submit(text))

        assert len(result.conversation) == 1
        assert result.conversation[0].speaker is Speaker.USER
        assert result.conversation[0].text == text


class TestClear:
    """Tests for clearing the conversation."""

    @pytest.mark.asyncio
    async def test_clear_declined_changes_nothing(self, make_orchestrator, confirm_no, store, supportive_persona):
        orchestrator = make_orchestrator(confirm=confirm_no)
        await orchestrator.submit("keep me")
        stored_before = await store.get(HISTORY_KEY)

        cleared = await orchestrator.clear()

        assert cleared is False
        assert len(orchestrator.conversation) == 2
        assert await store.get(HISTORY_KEY) == stored_before
        assert confirm_no.prompts == [supportive_persona.ui.clear_confirmation]

    @pytest.mark.asyncio
    async def test_clear_confirmed_empties_conversation_and_store(self, make_orchestrator, confirm_yes, store):
        orchestrator = make_orchestrator(confirm=confirm_yes)
        await orchestrator.submit("forget me")

        cleared = await orchestrator.clear()

        assert cleared is True
        assert orchestrator.conversation == ()
        assert await store.get(HISTORY_KEY) is None

    @pytest.mark.asyncio
    async def test_clear_drops_error(self, make_orchestrator, failing_llm, confirm_yes):
        orchestrator = make_orchestrator(llm=failing_llm, confirm=confirm_yes)
        await orchestrator.submit("oops")

        await orchestrator.clear()

        assert orchestrator.error_message is None

    @pytest.mark.asyncio
    async def test_clear_refused_while_awaiting(self, make_orchestrator, confirm_yes):
        """Test that clear during a pending call neither asks nor clears."""
        cleared = []

        class ClearingLLM(LLMProvider):
            model = "clearing"

            async def chat_completion(self, messages, **kwargs):
                cleared.append(await orchestrator.clear())
                return LLMResponse(content="done", model=self.model)

            async def close(self):
                pass

        orchestrator = make_orchestrator(llm=ClearingLLM(), confirm=confirm_yes)

        await orchestrator.submit("first")

        assert cleared == [False]
        assert confirm_yes.prompts == []
        assert [turn.text for turn in orchestrator.conversation] == ["first", "done"]


class TestDisplayMode:
    """Tests for the light/dark toggle."""

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_mode(self, make_orchestrator, persistence):
        orchestrator = make_orchestrator()
        await orchestrator.start()
        original = orchestrator.display_mode

        first = await orchestrator.toggle_display_mode()
        assert await persistence.load_display_mode() is first
        second = await orchestrator.toggle_display_mode()
        assert await persistence.load_display_mode() is second

        assert first is DisplayMode.DARK
        assert second is original is DisplayMode.LIGHT

    @pytest.mark.asyncio
    async def test_toggle_notifies_listeners(self, make_orchestrator):
        orchestrator = make_orchestrator()
        seen = []
        orchestrator.add_listener(seen.append)

        await orchestrator.toggle_display_mode()

        assert seen[-1].display_mode is DisplayMode.DARK


class TestStart:
    """Tests for restoring state at startup."""

    @pytest.mark.asyncio
    async def test_start_restores_saved_state(self, make_orchestrator, persistence):
        turns = [Turn(text="hi", speaker=Speaker.USER), Turn(text="hello", speaker=Speaker.ASSISTANT)]
        await persistence.save_conversation(turns)
        await persistence.save_display_mode(DisplayMode.DARK)

        orchestrator = make_orchestrator()
        snapshot = await orchestrator.start()

        assert list(snapshot.conversation) == turns
        assert snapshot.display_mode is DisplayMode.DARK

    @pytest.mark.asyncio
    async def test_start_with_corrupt_store_is_empty(self, make_orchestrator, store):
        await store.set(HISTORY_KEY, "{not json")

        orchestrator = make_orchestrator()
        snapshot = await orchestrator.start()

        assert snapshot.conversation == ()
        assert snapshot.display_mode is DisplayMode.LIGHT


class TestDismissError:

    @pytest.mark.asyncio
    async def test_dismiss_error(self, make_orchestrator, failing_llm):
        orchestrator = make_orchestrator(llm=failing_llm)
        await orchestrator.submit("x")

        orchestrator.dismiss_error()

        assert orchestrator.error_message is None
        assert len(orchestrator.conversation) == 1


class TestClassifyFailure:

    @pytest.mark.parametrize(
        "error",
        [ConnectionError("down"), TimeoutError(), EmptyResponseError("empty"), ValueError("bad json")],
    )
    def test_every_failure_is_unavailable(self, error):
        assert classify_failure(error) is FailureKind.UNAVAILABLE


class TestDebugCallback:

    @pytest.mark.asyncio
    async def test_failure_is_logged_with_exception_type(self, make_orchestrator, failing_llm):
        orchestrator = make_orchestrator(llm=failing_llm)
        entries = []
        orchestrator.set_debug_callback(lambda level, component, message: entries.append((level, component, message)))

        await orchestrator.submit("x")

        errors = [entry for entry in entries if entry[0] == "error"]
        assert errors
        assert errors[0][1] == "LLM"
        assert "ConnectionError" in errors[0][2]

    @pytest.mark.asyncio
    async def test_reply_is_logged_with_token_usage(self, make_orchestrator, fake_llm):
        fake_llm.usage = TokenUsage(prompt_tokens=120, completion_tokens=8, total_tokens=128)
        orchestrator = make_orchestrator(llm=fake_llm)
        entries = []
        orchestrator.set_debug_callback(lambda level, component, message: entries.append((level, component, message)))

        await orchestrator.submit("x")

        received = [entry[2] for entry in entries if entry[2].startswith("Received")]
        assert received == ["Received 27 characters (120 prompt + 8 completion tokens, finish: STOP)"]


class BrokenStore(InMemoryKeyValueStore):
    """Store whose writes always fail."""

    async def set(self, key: str, value: str) -> None:
        raise OSError("disk full")

    async def delete(self, key: str) -> None:
        raise OSError("disk full")


class TestStorageFailure:
    """Write failures are logged and never undo in-memory state."""

    @pytest.fixture
    def broken_orchestrator(self, supportive_persona, fake_llm, confirm_yes):
        orchestrator = ConversationOrchestrator(
            persona=supportive_persona,
            llm=fake_llm,
            persistence=ChatPersistence(BrokenStore()),
            confirm=confirm_yes,
        )
        entries = []
        orchestrator.set_debug_callback(lambda level, component, message: entries.append((level, component, message)))
        return orchestrator, entries

    @pytest.mark.asyncio
    async def test_submit_keeps_turns(self, broken_orchestrator):
        orchestrator, entries = broken_orchestrator

        result = await orchestrator.submit("hi")

        assert len(result.conversation) == 2
        assert result.error_message is None
        assert "Storage" in {entry[1] for entry in entries if entry[0] == "error"}

    @pytest.mark.asyncio
    async def test_toggle_and_clear_still_apply(self, broken_orchestrator):
        orchestrator, entries = broken_orchestrator
        await orchestrator.submit("hi")

        assert await orchestrator.toggle_display_mode() is DisplayMode.DARK
        assert await orchestrator.clear() is True
        assert orchestrator.conversation == ()
        assert any("OSError" in entry[2] for entry in entries if entry[1] == "Storage")
