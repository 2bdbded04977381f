from html import escape

_LAYOUT = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background-color: #f4f4f4; padding: 20px; text-align: center; }}
    .content {{ padding: 20px; }}
    .button {{ display: inline-block; padding: 12px 24px; color: white;
               text-decoration: none; border-radius: 4px; margin: 10px 0; }}
    .footer {{ font-size: 12px; color: #666; margin-top: 20px; padding-top: 20px;
               border-top: 1px solid #eee; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>{title}</h1></div>
    <div class="content">{body}</div>
    <div class="footer">
      <p>This message was sent automatically. Please do not reply.</p>
      <p>{store_name} - <a href="{base_url}">{base_url}</a></p>
    </div>
  </div>
</body>
</html>
"""


def _render(*, title: str, body: str, store_name: str, base_url: str) -> str:
    return _LAYOUT.format(
        title=escape(title),
        body=body,
        store_name=escape(store_name),
        base_url=escape(base_url, quote=True),
    )


def approval_email_html(
    *,
    product_title: str,
    verify_sale_url: str,
    delete_request_url: str,
    store_name: str,
    base_url: str,
) -> str:
    body = f"""
      <p>Hello!</p>
      <p>Your listing "<strong>{escape(product_title)}</strong>" has been approved and is now
      visible in the catalog.</p>
      <p>When the item is sold, confirm the sale. If you want the listing removed, ask for its
      deletion. Both links are personal and stay valid for 30 days.</p>
      <div style="text-align: center;">
        <a href="{escape(verify_sale_url, quote=True)}" class="button"
           style="background-color: #28a745;">Mark as sold</a>
        <a href="{escape(delete_request_url, quote=True)}" class="button"
           style="background-color: #dc3545; margin-left: 10px;">Request deletion</a>
      </div>
      <p><strong>Keep this email private:</strong> anyone holding these links can act on
      your listing.</p>
    """
    return _render(
        title="Your listing was approved", body=body, store_name=store_name, base_url=base_url
    )


def deletion_received_email_html(
    *, product_title: str, reason: str | None, store_name: str, base_url: str
) -> str:
    reason_html = f"<p><strong>Reason:</strong> {escape(reason)}</p>" if reason else ""
    body = f"""
      <p>Hello!</p>
      <p>We received your request to delete "<strong>{escape(product_title)}</strong>".</p>
      {reason_html}
      <p>An administrator will review it shortly and you will be informed of the decision at
      this address.</p>
    """
    return _render(
        title="Deletion request received", body=body, store_name=store_name, base_url=base_url
    )


def deletion_decision_email_html(
    *,
    product_title: str,
    approved: bool,
    admin_notes: str | None,
    store_name: str,
    base_url: str,
) -> str:
    outcome = (
        "has been removed from the catalog"
        if approved
        else "was not removed; the listing stays published"
    )
    notes_html = f"<p><strong>Notes:</strong> {escape(admin_notes)}</p>" if admin_notes else ""
    body = f"""
      <p>Hello!</p>
      <p>Your listing "<strong>{escape(product_title)}</strong>" {outcome}.</p>
      {notes_html}
    """
    title = "Listing deleted" if approved else "Deletion request declined"
    return _render(title=title, body=body, store_name=store_name, base_url=base_url)


def submission_rejected_email_html(
    *, product_title: str, reason: str, store_name: str, base_url: str
) -> str:
    body = f"""
      <p>Hello!</p>
      <p>Unfortunately your submission "<strong>{escape(product_title)}</strong>" was rejected
      by an administrator.</p>
      <div style="background-color: #fff3cd; border: 1px solid #ffeaa7; padding: 15px;">
        <h3>Reason</h3>
        <p>{escape(reason)}</p>
      </div>
      <p>You are welcome to submit it again after addressing the notes above.</p>
    """
    return _render(
        title="Submission rejected", body=body, store_name=store_name, base_url=base_url
    )
