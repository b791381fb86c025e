"""Integration tests for the conversation engine.

Runs the engine against a mocked webhook and checks the log, pending flag
and error state through complete submit cycles.
"""

import asyncio
import json

import httpx
import pytest
import pytest_check as check

from webhook_chat.engine.conversation import APOLOGY_PREFIX, ConversationEngine
from webhook_chat.models.schemas import RawResult, RequestEnvelope, Role
from webhook_chat.session.identity import SESSION_ID_PATTERN


class BlockingTransport:
    """Transport that holds every call until released."""

    def __init__(self, result: RawResult) -> None:
        self.calls: list[RequestEnvelope] = []
        self.release = asyncio.Event()
        self._result = result

    async def send(self, envelope: RequestEnvelope) -> RawResult:
        self.calls.append(envelope)
        await self.release.wait()
        return self._result


class ExplodingTransport:
    """Transport failing with an unexpected exception type."""

    async def send(self, envelope: RequestEnvelope) -> RawResult:
        raise RuntimeError("boom")


def _json_reply(payload: object):
    return lambda request: httpx.Response(200, json=payload)


class TestSubmitValidation:
    """Tests for rejected submits."""

    @pytest.mark.parametrize("text", ["", " ", "\n\t  "])
    async def test_whitespace_is_ignored(self, webhook, text: str) -> None:
        """Blank input leaves the log empty and sends nothing."""
        hook = webhook(_json_reply({"output": "never"}))
        engine = ConversationEngine(hook.client())

        await engine.submit(text)

        check.equal(engine.log, ())
        check.is_false(engine.pending)
        check.equal(hook.requests, [])

    async def test_empty_draft_is_ignored(self, webhook) -> None:
        """Submitting with no text and an empty draft is a no-op."""
        hook = webhook(_json_reply({"output": "never"}))
        engine = ConversationEngine(hook.client())

        await engine.submit()

        assert engine.log == ()

    async def test_second_submit_while_pending_is_ignored(self) -> None:
        """Only one call may be in flight; extra submits are dropped."""
        transport = BlockingTransport(RawResult(payload={"output": "done"}))
        engine = ConversationEngine(transport)

        first = asyncio.create_task(engine.submit("first"))
        await asyncio.sleep(0)

        check.is_true(engine.pending)
        await engine.submit("second")
        check.equal(len(engine.log), 1)
        check.equal(len(transport.calls), 1)

        transport.release.set()
        await first

        check.is_false(engine.pending)
        check.equal([m.content for m in engine.log], ["first", "done"])


class TestSubmitSuccess:
    """Tests for successful round trips."""

    async def test_end_to_end_reply(self, webhook) -> None:
        """The extracted reply is appended after the user message."""
        hook = webhook(_json_reply({"output": "I have 5 years..."}))
        engine = ConversationEngine(hook.client())

        await engine.submit("Tell me about your experience")

        body = json.loads(hook.requests[0].content)
        check.equal(body, {"session": engine.session_id, "message": "Tell me about your experience"})
        check.equal(len(engine.log), 2)
        check.equal(engine.log[0].role, Role.USER)
        check.equal(engine.log[-1].role, Role.ASSISTANT)
        check.equal(engine.log[-1].content, "I have 5 years...")
        check.is_false(engine.pending)
        check.is_none(engine.state.last_error)

    async def test_user_message_is_trimmed(self, webhook) -> None:
        """Surrounding whitespace is removed before sending and logging."""
        hook = webhook(_json_reply("ok"))
        engine = ConversationEngine(hook.client())

        await engine.submit("  hello  \n")

        check.equal(engine.log[0].content, "hello")
        check.equal(json.loads(hook.requests[0].content)["message"], "hello")

    async def test_uses_and_clears_draft(self, webhook) -> None:
        """Without explicit text the draft is sent and then cleared."""
        hook = webhook(_json_reply({"reply": "hi"}))
        engine = ConversationEngine(hook.client())
        engine.update_draft("from the input box")

        await engine.submit()

        check.equal(engine.log[0].content, "from the input box")
        check.equal(engine.state.draft_input, "")

    async def test_unmatched_json_is_dumped(self, webhook) -> None:
        """Payloads without a reply field are shown as JSON."""
        hook = webhook(_json_reply({"foo": "bar"}))
        engine = ConversationEngine(hook.client())

        await engine.submit("hi")

        assert engine.log[-1].content == '{"foo":"bar"}'

    async def test_unmatched_text_body_is_kept_verbatim(self, webhook) -> None:
        """JSON sent as text without a reply field is shown as received."""
        hook = webhook(lambda request: httpx.Response(200, text='{"foo": 1}'))
        engine = ConversationEngine(hook.client())

        await engine.submit("hi")

        assert engine.log[-1].content == '{"foo": 1}'

    async def test_plain_text_reply(self, webhook) -> None:
        """Bare text replies are used as-is."""
        hook = webhook(lambda request: httpx.Response(200, text="**Hello** there"))
        engine = ConversationEngine(hook.client())

        await engine.submit("hi")

        assert engine.log[-1].content == "**Hello** there"

    async def test_session_id_is_stable(self, webhook) -> None:
        """Every request in a session carries the same identifier."""
        hook = webhook(_json_reply({"output": "ok"}))
        engine = ConversationEngine(hook.client())

        await engine.submit("one")
        await engine.submit("two")

        sessions = {json.loads(r.content)["session"] for r in hook.requests}
        check.equal(sessions, {engine.session_id})
        check.is_true(SESSION_ID_PATTERN.match(engine.session_id))

    async def test_explicit_session_id(self, webhook, mock_session_id: str) -> None:
        """A provided session ID is used unchanged."""
        hook = webhook(_json_reply({"output": "ok"}))
        engine = ConversationEngine(hook.client(), session_id=mock_session_id)

        await engine.submit("hi")

        assert json.loads(hook.requests[0].content)["session"] == mock_session_id


class TestSubmitFailure:
    """Tests for failed round trips."""

    async def test_network_failure(self, webhook) -> None:
        """Connection errors become an apology message and last_error."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("network down", request=request)

        engine = ConversationEngine(webhook(handler).client())

        await engine.submit("hello")

        last = engine.log[-1]
        check.equal(last.role, Role.ASSISTANT)
        check.is_in("network down", last.content)
        check.is_true(last.content.startswith(APOLOGY_PREFIX))
        check.equal(engine.state.last_error, last.content)
        check.is_false(engine.pending)

    async def test_http_error_status(self, webhook) -> None:
        """Non-2xx responses include the status in the message."""
        engine = ConversationEngine(webhook(lambda request: httpx.Response(500)).client())

        await engine.submit("hello")

        assert engine.state.last_error == f"{APOLOGY_PREFIX} Request failed (500 Internal Server Error)"

    async def test_unexpected_exception(self) -> None:
        """Unexpected errors still produce exactly one assistant message."""
        engine = ConversationEngine(ExplodingTransport())

        await engine.submit("hello")

        check.equal(len(engine.log), 2)
        check.is_in("boom", engine.log[-1].content)
        check.is_false(engine.pending)

    async def test_error_cleared_on_next_send(self, webhook) -> None:
        """last_error is reset when a new send starts."""
        responses = iter([httpx.Response(502), httpx.Response(200, json={"output": "back"})])
        engine = ConversationEngine(webhook(lambda request: next(responses)).client())

        await engine.submit("first")
        check.is_not_none(engine.state.last_error)

        await engine.submit("second")
        check.is_none(engine.state.last_error)
        check.equal(engine.log[-1].content, "back")

    async def test_engine_recovers_after_failure(self, webhook) -> None:
        """Each accepted submit adds exactly two messages, success or not."""
        responses = iter([httpx.Response(500), httpx.Response(200, json={"output": "ok"})])
        engine = ConversationEngine(webhook(lambda request: next(responses)).client())

        await engine.submit("one")
        await engine.submit("two")

        roles = [m.role for m in engine.log]
        assert roles == [Role.USER, Role.ASSISTANT, Role.USER, Role.ASSISTANT]


class TestStateObservation:
    """Tests for subscribers and snapshots."""

    async def test_listeners_see_pending_then_idle(self) -> None:
        """Subscribers observe the pending and settled states."""
        transport = BlockingTransport(RawResult(payload="ok"))
        engine = ConversationEngine(transport)
        seen: list[tuple[int, bool]] = []
        engine.subscribe(lambda: seen.append((len(engine.log), engine.pending)))

        task = asyncio.create_task(engine.submit("hi"))
        await asyncio.sleep(0)
        transport.release.set()
        await task

        assert seen == [(1, True), (2, False)]

    async def test_unsubscribe_stops_notifications(self) -> None:
        """Removed listeners are no longer called."""
        engine = ConversationEngine(ExplodingTransport())
        calls: list[str] = []
        unsubscribe = engine.subscribe(lambda: calls.append("x"))

        unsubscribe()
        engine.update_draft("typing")

        assert calls == []

    async def test_failing_listener_does_not_break_submit(self) -> None:
        """A raising listener does not stop the engine."""
        engine = ConversationEngine(BlockingTransport(RawResult(payload="ok")))

        def broken() -> None:
            raise RuntimeError("listener bug")

        engine.subscribe(broken)
        engine.update_draft("still works")

        assert engine.state.draft_input == "still works"

    def test_state_is_a_snapshot(self) -> None:
        """Mutating a snapshot does not change the engine."""
        engine = ConversationEngine(ExplodingTransport())
        snapshot = engine.state

        snapshot.draft_input = "tampered"
        snapshot.log.clear()

        assert engine.state.draft_input == ""

    def test_update_draft(self) -> None:
        """update_draft replaces the draft and enables sending."""
        engine = ConversationEngine(ExplodingTransport())

        engine.update_draft("hello")

        check.equal(engine.state.draft_input, "hello")
        check.is_true(engine.state.can_send)
