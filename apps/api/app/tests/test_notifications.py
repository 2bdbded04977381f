import json

import httpx
import pytest

from app.core.config import settings
from app.modules.notifications import templates
from app.modules.notifications.sendgrid import EmailMessage, SendGridClient
from app.modules.notifications.service import build_action_links

MESSAGE = EmailMessage(to="ola@example.com", subject="Hi", html="<p>Hi</p>", text="Hi")


def _client(handler: httpx.MockTransport, *, api_key: str | None = "SG.test") -> SendGridClient:
    return SendGridClient(
        api_key=api_key,
        from_email="noreply@spottedgfc.pl",
        base_url="https://sendgrid.test/",
        transport=handler,
    )


def test_send_posts_mail_payload_without_link_tracking() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(202)

    assert _client(httpx.MockTransport(handler)).send(MESSAGE) is True

    request = captured[0]
    assert str(request.url) == "https://sendgrid.test/v3/mail/send"
    assert request.headers["Authorization"] == "Bearer SG.test"
    body = json.loads(request.content)
    assert body["personalizations"] == [{"to": [{"email": "ola@example.com"}]}]
    assert body["from"] == {"email": "noreply@spottedgfc.pl"}
    assert body["tracking_settings"]["click_tracking"]["enable"] is False
    assert [part["type"] for part in body["content"]] == ["text/plain", "text/html"]


def test_send_reports_provider_rejection() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"errors": []}))

    assert _client(transport).send(MESSAGE) is False


def test_send_reports_network_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    assert _client(httpx.MockTransport(handler)).send(MESSAGE) is False


def test_unconfigured_client_skips_delivery() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = _client(httpx.MockTransport(handler), api_key=None)

    assert client.configured is False
    assert client.send(MESSAGE) is False


def test_action_links_point_at_public_pages(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "public_base_url", "https://market.example/")

    links = build_action_links("abc_-123")

    assert links.verify_sale_url == "https://market.example/verify-sale?token=abc_-123"
    assert links.delete_request_url == "https://market.example/delete-request?token=abc_-123"


def test_templates_escape_user_content() -> None:
    html = templates.submission_rejected_email_html(
        product_title="<script>alert(1)</script>",
        reason="Bad & wrong",
        store_name="Spotted GFC",
        base_url="https://spottedgfc.pl",
    )

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Bad &amp; wrong" in html
