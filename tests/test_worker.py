"""Tests for the worker (delivery) service."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import aiosmtplib
import pytest
from httpx import ASGITransport, AsyncClient

from mailer_common.models import to_wire
from mailer_worker.app import create_app
from mailer_worker.config import SmtpConfig, WorkerConfig
from mailer_worker.delivery import (
    MockMode,
    SmtpMode,
    deliver,
    is_email_configured,
    lookup_status,
    select_delivery_mode,
)
from mailer_worker.transport import SmtpTransport, text_to_html

from tests.conftest import make_decorated_mail


def _mock_transport(*, message_id: str = "<123.456@example.com>", error: Exception | None = None) -> MagicMock:
    transport = MagicMock(spec=SmtpTransport)
    transport.send = AsyncMock(return_value=message_id, side_effect=error)
    return transport


@pytest.fixture
async def mock_client(worker_config: WorkerConfig):
    app = create_app(worker_config)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class TestSelectDeliveryMode:
    def test_mock_without_credentials(self):
        mode = select_delivery_mode(SmtpConfig(user=None, password=None), mock_delay_seconds=0.5)
        assert mode == MockMode(delay_seconds=0.5)
        assert is_email_configured(mode) is False

    def test_smtp_with_credentials(self, smtp_config: SmtpConfig):
        mode = select_delivery_mode(smtp_config)
        assert isinstance(mode, SmtpMode)
        assert isinstance(mode.transport, SmtpTransport)
        assert is_email_configured(mode) is True


class TestMockDelivery:
    async def test_success_without_message_id(self):
        mail = make_decorated_mail()
        with patch("mailer_worker.delivery.asyncio.sleep", new_callable=AsyncMock) as sleep:
            outcome = await deliver(mail, MockMode(delay_seconds=1.0))

        sleep.assert_awaited_once_with(1.0)
        assert outcome.success is True
        assert outcome.id == mail.id
        assert outcome.message_id is None
        assert outcome.message == "Email sent successfully (mock mode)"
        assert outcome.timestamp is not None

    async def test_real_delay_is_nonzero(self):
        with patch("mailer_worker.delivery.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await deliver(make_decorated_mail(), select_delivery_mode(SmtpConfig(user=None, password=None)))
        assert sleep.await_args.args[0] > 0


class TestSmtpDelivery:
    async def test_success_carries_message_id(self):
        transport = _mock_transport(message_id="<abc@example.com>")
        mail = make_decorated_mail()

        outcome = await deliver(mail, SmtpMode(transport))

        transport.send.assert_awaited_once_with(mail)
        assert outcome.success is True
        assert outcome.message_id == "<abc@example.com>"
        assert outcome.message == "Email sent successfully"

    async def test_smtp_error_is_delivery_failed(self):
        error = aiosmtplib.SMTPAuthenticationError(535, "Authentication failed")
        mail = make_decorated_mail(mail_id="mail_1_failedxyz")

        outcome = await deliver(mail, SmtpMode(_mock_transport(error=error)))

        assert outcome.success is False
        assert outcome.error == "DeliveryFailed"
        assert outcome.id == "mail_1_failedxyz"
        assert "Authentication failed" in outcome.message

    async def test_connection_error_is_delivery_failed(self):
        outcome = await deliver(make_decorated_mail(), SmtpMode(_mock_transport(error=ConnectionRefusedError("refused"))))
        assert outcome.success is False
        assert outcome.error == "DeliveryFailed"


class TestSmtpTransport:
    def test_requires_credentials(self):
        with pytest.raises(ValueError):
            SmtpTransport(SmtpConfig(user=None, password=None))

    def test_build_message(self, smtp_config: SmtpConfig):
        transport = SmtpTransport(smtp_config)
        mail = make_decorated_mail(body="Hello\nWorld")

        message = transport.build_message(mail)

        assert message["From"] == "mailer@example.com"
        assert message["To"] == "a@b.com"
        assert message["Subject"] == "[SYSTEM-MAILER] Hi"
        assert message["X-Mail-Id"] == mail.id
        assert message["Message-ID"]
        assert message.is_multipart()
        plain = message.get_body(preferencelist=("plain",))
        html = message.get_body(preferencelist=("html",))
        assert plain.get_content().rstrip("\n") == "Hello\nWorld"
        assert "Hello<br>World" in html.get_content()

    def test_sender_override(self, smtp_config: SmtpConfig):
        smtp_config.sender = "noreply@example.com"
        assert SmtpTransport(smtp_config).sender == "noreply@example.com"

    async def test_send_uses_configured_server(self, smtp_config: SmtpConfig):
        transport = SmtpTransport(smtp_config)
        with patch("mailer_worker.transport.aiosmtplib.send", new_callable=AsyncMock) as send:
            message_id = await transport.send(make_decorated_mail())

        send.assert_awaited_once()
        kwargs = send.await_args.kwargs
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["port"] == 2525
        assert kwargs["username"] == "mailer@example.com"
        assert kwargs["password"] == "secret"
        assert message_id == send.await_args.args[0]["Message-ID"]

    def test_text_to_html(self):
        assert text_to_html("a\nb\n\nc") == "a<br>b<br><br>c"


class TestSendEndpoint:
    async def test_mock_mode_send(self, mock_client: AsyncClient):
        mail = make_decorated_mail()

        resp = await mock_client.post("/api/mail/send", json=to_wire(mail))

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["id"] == mail.id
        assert "messageId" not in data
        assert "timestamp" in data

    async def test_transport_failure_is_500_outcome(self, worker_config: WorkerConfig):
        mode = SmtpMode(_mock_transport(error=aiosmtplib.SMTPException("server said no")))
        app = create_app(worker_config, delivery_mode=mode)
        mail = make_decorated_mail(mail_id="mail_1_zzzzzzzzz")

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            resp = await ac.post("/api/mail/send", json=to_wire(mail))

        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "error": "DeliveryFailed",
            "message": "server said no",
            "id": "mail_1_zzzzzzzzz",
        }

    async def test_real_mode_send(self, worker_config: WorkerConfig):
        app = create_app(worker_config, delivery_mode=SmtpMode(_mock_transport(message_id="<m@x>")))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            resp = await ac.post("/api/mail/send", json=to_wire(make_decorated_mail()))

        assert resp.status_code == 200
        assert resp.json()["messageId"] == "<m@x>"

    async def test_malformed_mail_is_400(self, mock_client: AsyncClient):
        resp = await mock_client.post("/api/mail/send", json={"to": "a@b.com"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "ValidationError"


class TestStatusEndpoint:
    @pytest.mark.parametrize("mail_id", ["mail_1748779200000_abc123xyz", "never-submitted", "0"])
    async def test_always_sent(self, mock_client: AsyncClient, mail_id: str):
        resp = await mock_client.get(f"/api/mail/status/{mail_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == mail_id
        assert data["status"] == "sent"
        assert "timestamp" in data

    def test_lookup_is_input_independent(self):
        assert lookup_status("a").status == lookup_status("b").status


class TestHealth:
    async def test_mock_mode_health(self, mock_client: AsyncClient):
        resp = await mock_client.get("/health")
        data = resp.json()
        assert data["service"] == "worker"
        assert data["status"] == "OK"
        assert data["emailConfigured"] is False

    async def test_configured_health(self, worker_config: WorkerConfig, smtp_config: SmtpConfig):
        worker_config.smtp = smtp_config
        app = create_app(worker_config)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            resp = await ac.get("/health")
        assert resp.json()["emailConfigured"] is True
