import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger("spotted.sendgrid")


@dataclass(frozen=True, slots=True)
class EmailMessage:
    to: str
    subject: str
    html: str
    text: str = ""


class SendGridClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        from_email: str | None,
        base_url: str = "https://api.sendgrid.com",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._from_email = from_email
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._from_email)

    def _payload(self, message: EmailMessage) -> dict[str, Any]:
        content = [{"type": "text/plain", "value": message.text or " "}]
        content.append({"type": "text/html", "value": message.html})
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self._from_email},
            "subject": message.subject,
            "content": content,
            # Tracking rewrites links, which would mangle the capability URLs.
            "tracking_settings": {
                "click_tracking": {"enable": False, "enable_text": False},
                "open_tracking": {"enable": False},
            },
        }

    def send(self, message: EmailMessage) -> bool:
        if not self.configured:
            logger.warning(
                "email_not_configured",
                extra={"event_name": "email_not_configured", "outcome": "skipped"},
            )
            return False

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(
                    f"{self._base_url}/v3/mail/send",
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    json=self._payload(message),
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "email_rejected_by_provider",
                extra={
                    "event_name": "email_rejected_by_provider",
                    "status": exc.response.status_code,
                    "outcome": "failed",
                },
            )
            return False
        except httpx.HTTPError:
            logger.error(
                "email_delivery_failed",
                extra={"event_name": "email_delivery_failed", "outcome": "failed"},
                exc_info=True,
            )
            return False

        logger.info(
            "email_sent",
            extra={"event_name": "email_sent", "status": response.status_code, "outcome": "sent"},
        )
        return True
