"""Unit tests for ConversationController."""
import asyncio

import pytest

from asistente.conversation import ConversationCallback
from asistente.responses import (
    CONNECTION_ERROR_MESSAGE,
    FALLBACK_MESSAGE,
    REPORT_READY_MESSAGE,
    WELCOME_MESSAGE,
)


class RecordingCallback(ConversationCallback):
    """Collects every event in order."""

    def __init__(self):
        self.events = []

    def message_added(self, message):
        self.events.append(("message", message.sender, message.text))

    def busy_changed(self, busy):
        self.events.append(("busy", busy))

    def report_changed(self, report):
        self.events.append(("report", None if report is None else len(report.rows)))

    def conversation_cleared(self):
        self.events.append(("cleared",))


class TestSubmit:
    """Tests for a single exchange."""

    @pytest.mark.asyncio
    async def test_starts_with_welcome(self, make_controller):
        """Test that a new conversation holds only the welcome message."""
        controller, _ = make_controller()
        assert [m.text for m in controller.messages] == [WELCOME_MESSAGE]
        assert controller.report is None
        assert not controller.busy

    @pytest.mark.asyncio
    async def test_plain_answer(self, make_controller, speech_engine):
        """Test that a text answer is appended and spoken."""
        controller, client = make_controller("Vendiste $1.500.000")

        accepted = await controller.submit("  ¿cuánto vendí?  ")

        assert accepted
        assert client.questions == ["¿cuánto vendí?"]
        senders = [m.sender for m in controller.messages]
        assert senders == ["bot", "user", "bot"]
        assert controller.messages[1].text == "¿cuánto vendí?"
        assert controller.messages[-1].text == "Vendiste <strong>$1.500.000</strong>"
        assert speech_engine.texts[-1] == "Vendiste un millón quinientos mil pesos"
        assert not controller.busy

    @pytest.mark.asyncio
    async def test_answer_cancels_before_speaking(self, make_controller, speech_engine):
        """Test that each answer stops the previous utterance before starting."""
        controller, _ = make_controller("primera", "segunda")

        await controller.submit("a")
        await controller.submit("b")

        events = speech_engine.events
        assert events[events.index("speak primera") + 1:] == ["cancel", "cancel", "speak segunda"]

    @pytest.mark.asyncio
    async def test_blank_input_is_ignored(self, make_controller):
        """Test that whitespace-only input does nothing."""
        controller, client = make_controller()

        assert not await controller.submit("   ")
        assert client.questions == []
        assert len(controller.messages) == 1

    @pytest.mark.asyncio
    async def test_report_answer(self, make_controller, sales_rows):
        """Test that a report answer sets the report and the ready message."""
        controller, _ = make_controller({"report": True, "question": "ventas", "rows": sales_rows})

        await controller.submit("ventas")

        assert controller.report is not None
        assert len(controller.report.rows) == 3
        assert controller.messages[-1].text == REPORT_READY_MESSAGE

    @pytest.mark.asyncio
    async def test_text_answer_clears_previous_report(self, make_controller, sales_rows):
        """Test that a non-report answer removes the old report."""
        controller, _ = make_controller({"rows": sales_rows}, "ok")

        await controller.submit("informe")
        await controller.submit("gracias")

        assert controller.report is None

    @pytest.mark.asyncio
    async def test_webhook_error_becomes_message(self, make_controller, connection_error, speech_engine):
        """Test that transport failures are answered, not raised."""
        controller, _ = make_controller(connection_error)

        assert await controller.submit("hola")

        assert controller.messages[-1].text == CONNECTION_ERROR_MESSAGE
        assert speech_engine.texts[-1] == "⚠️ Error al conectar con el asistente"
        assert not controller.busy

    @pytest.mark.asyncio
    async def test_unrecognized_answer(self, make_controller):
        """Test that unknown payloads show the fallback text."""
        controller, _ = make_controller({"unexpected": 1})
        await controller.submit("hola")
        assert controller.messages[-1].text == FALLBACK_MESSAGE

    @pytest.mark.asyncio
    async def test_event_order(self, make_controller):
        """Test the callback sequence of one exchange."""
        controller, _ = make_controller("respuesta")
        callback = RecordingCallback()
        controller.set_callback(callback)

        await controller.submit("pregunta")

        assert callback.events == [
            ("message", "user", "pregunta"),
            ("busy", True),
            ("report", None),
            ("message", "bot", "respuesta"),
            ("busy", False),
        ]


class TestSingleFlight:
    """Tests for the one-request-at-a-time rule."""

    @pytest.mark.asyncio
    async def test_second_submit_is_rejected_while_busy(self, make_controller):
        """Test that a submission during a request is ignored."""
        controller, client = make_controller("primera", "segunda", hold=True)

        first = asyncio.create_task(controller.submit("uno"))
        await asyncio.sleep(0)
        assert controller.busy

        assert not await controller.submit("dos")
        client.release()
        assert await first

        assert client.questions == ["uno"]
        assert [m.text for m in controller.messages if m.sender == "user"] == ["uno"]

    @pytest.mark.asyncio
    async def test_clear_discards_in_flight_answer(self, make_controller):
        """Test that an answer arriving after clear() is dropped."""
        controller, client = make_controller("respuesta vieja", hold=True)

        pending = asyncio.create_task(controller.submit("pregunta"))
        await asyncio.sleep(0)
        controller.clear()
        client.release()
        await pending

        assert [m.text for m in controller.messages] == [WELCOME_MESSAGE]
        assert not controller.busy

    @pytest.mark.asyncio
    async def test_clear_discards_in_flight_error(self, make_controller, connection_error):
        """Test that a failure arriving after clear() is dropped too."""
        controller, client = make_controller(connection_error, hold=True)

        pending = asyncio.create_task(controller.submit("pregunta"))
        await asyncio.sleep(0)
        controller.clear()
        client.release()
        await pending

        assert [m.text for m in controller.messages] == [WELCOME_MESSAGE]


class TestClear:
    """Tests for clearing the conversation."""

    @pytest.mark.asyncio
    async def test_clear_resets_and_announces(self, make_controller, speech_engine, sales_rows):
        """Test that clear() leaves only the welcome and speaks it."""
        controller, _ = make_controller({"rows": sales_rows})
        await controller.submit("informe")
        callback = RecordingCallback()
        controller.set_callback(callback)

        controller.clear()

        assert [m.text for m in controller.messages] == [WELCOME_MESSAGE]
        assert controller.report is None
        assert speech_engine.texts[-1] == "👋 ¡Hola! Soy tu Asistente de Ventas. ¿En qué puedo ayudarte hoy?"
        assert speech_engine.events[-3:] == [
            "cancel",
            "cancel",
            "speak 👋 ¡Hola! Soy tu Asistente de Ventas. ¿En qué puedo ayudarte hoy?",
        ]
        assert callback.events == [
            ("cleared",),
            ("message", "bot", WELCOME_MESSAGE),
            ("report", None),
        ]

    @pytest.mark.asyncio
    async def test_muted_answers_wait_for_unmute(self, make_controller, speech_engine):
        """Test that the last answer received while muted is spoken on unmute."""
        controller, _ = make_controller("uno", "dos")
        controller.set_voice_enabled(False)

        await controller.submit("a")
        await controller.submit("b")
        assert speech_engine.spoken == []

        controller.set_voice_enabled(True)
        assert speech_engine.texts == ["dos"]
