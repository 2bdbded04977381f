import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from app.core.config import settings
from app.modules.notifications import templates
from app.modules.notifications.sendgrid import EmailMessage, SendGridClient

logger = logging.getLogger("spotted.notifications")

sendgrid_client = SendGridClient(
    api_key=settings.sendgrid_api_key,
    from_email=settings.from_email,
    base_url=settings.sendgrid_base_url,
    timeout=settings.sendgrid_timeout_seconds,
)


@dataclass(frozen=True, slots=True)
class ActionLinks:
    verify_sale_url: str
    delete_request_url: str


def build_action_links(token: str) -> ActionLinks:
    base_url = settings.public_base_url.rstrip("/")
    query = urlencode({"token": token})
    return ActionLinks(
        verify_sale_url=f"{base_url}/verify-sale?{query}",
        delete_request_url=f"{base_url}/delete-request?{query}",
    )


def _deliver(message: EmailMessage, *, event_name: str) -> bool:
    sent = sendgrid_client.send(message)
    logger.info(
        event_name,
        extra={"event_name": event_name, "outcome": "sent" if sent else "not_sent"},
    )
    return sent


def send_approval_email(
    *, to: str, product_title: str, token: str, store_name: str | None = None
) -> bool:
    links = build_action_links(token)
    html = templates.approval_email_html(
        product_title=product_title,
        verify_sale_url=links.verify_sale_url,
        delete_request_url=links.delete_request_url,
        store_name=store_name or settings.store_name,
        base_url=settings.public_base_url,
    )
    text = (
        f'Your listing "{product_title}" has been approved.\n'
        f"Mark as sold: {links.verify_sale_url}\n"
        f"Request deletion: {links.delete_request_url}\n"
    )
    return _deliver(
        EmailMessage(to=to, subject="Your listing was approved", html=html, text=text),
        event_name="approval_email",
    )


def send_deletion_received_email(
    *, to: str, product_title: str, reason: str | None, store_name: str | None = None
) -> bool:
    html = templates.deletion_received_email_html(
        product_title=product_title,
        reason=reason,
        store_name=store_name or settings.store_name,
        base_url=settings.public_base_url,
    )
    return _deliver(
        EmailMessage(to=to, subject="Deletion request received", html=html),
        event_name="deletion_received_email",
    )


def send_deletion_decision_email(
    *,
    to: str,
    product_title: str,
    approved: bool,
    admin_notes: str | None,
    store_name: str | None = None,
) -> bool:
    html = templates.deletion_decision_email_html(
        product_title=product_title,
        approved=approved,
        admin_notes=admin_notes,
        store_name=store_name or settings.store_name,
        base_url=settings.public_base_url,
    )
    subject = "Listing deleted" if approved else "Deletion request declined"
    return _deliver(
        EmailMessage(to=to, subject=subject, html=html),
        event_name="deletion_decision_email",
    )


def send_submission_rejected_email(
    *, to: str, product_title: str, reason: str, store_name: str | None = None
) -> bool:
    html = templates.submission_rejected_email_html(
        product_title=product_title,
        reason=reason,
        store_name=store_name or settings.store_name,
        base_url=settings.public_base_url,
    )
    return _deliver(
        EmailMessage(to=to, subject="Submission rejected", html=html),
        event_name="submission_rejected_email",
    )
