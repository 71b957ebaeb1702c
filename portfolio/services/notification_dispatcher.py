import html
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from portfolio.errors import PartialRecordError

logger = logging.getLogger(__name__)

INSERT_EVENT = "INSERT"
DEFAULT_SUBJECT = "Contact Form Submission"
REQUIRED_FIELDS = ("name", "email", "message")


class EmailSender(Protocol):
    def send(
        self,
        sender: str,
        recipients: Sequence[str],
        subject: str,
        text: str,
        html: str,
    ) -> None: ...


@dataclass
class ContactNotification:
    id: Optional[str]
    name: str
    email: str
    subject: str
    message: str
    createdAt: Optional[str]


def process_records(
    records: Iterable[dict],
    *,
    sender: EmailSender,
    sender_address: str,
    recipients: Sequence[str],
) -> dict:
    """
    Send one notification email per inserted contact form record.

    Non-insert events and records missing required fields are skipped.
    A failure while sending propagates and stops the rest of the batch.
    """
    processed = 0
    for record in records:
        event_name = record.get("eventName")
        if event_name != INSERT_EVENT:
            logger.debug(f"Skipping non-INSERT event: {event_name}")
            continue

        try:
            notification = extract_notification(record)
        except PartialRecordError as e:
            logger.warning(str(e))
            continue

        logger.info(f"Sending email notification for submission {notification.id}")
        sender.send(
            sender_address,
            recipients,
            f"New Contact Form: {notification.subject}",
            render_text(notification),
            render_html(notification),
        )
        processed += 1
        logger.info(f"Successfully processed submission {notification.id}")

    return {"processedCount": processed}


def extract_notification(record: dict) -> ContactNotification:
    image = (record.get("dynamodb") or {}).get("NewImage")
    if not image:
        raise PartialRecordError(record.get("eventID"), list(REQUIRED_FIELDS))

    values = {key: _attribute_value(image.get(key)) for key in image}
    missing = [field for field in REQUIRED_FIELDS if not values.get(field)]
    if missing:
        raise PartialRecordError(values.get("id"), missing)

    return ContactNotification(
        id=values.get("id"),
        name=values["name"],
        email=values["email"],
        subject=values.get("subject") or DEFAULT_SUBJECT,
        message=values["message"],
        createdAt=values.get("createdAt"),
    )


def _attribute_value(attribute) -> Optional[str]:
    # Stream images wrap every value in a type descriptor, e.g. {"S": "text"}.
    if isinstance(attribute, dict):
        for type_key in ("S", "N"):
            if type_key in attribute:
                return attribute[type_key]
        return None
    return attribute


def render_text(notification: ContactNotification) -> str:
    return (
        "New contact form submission received:\n\n"
        f"From: {notification.name} ({notification.email})\n"
        f"Subject: {notification.subject}\n"
        f"Date: {notification.createdAt}\n"
        f"ID: {notification.id}\n\n"
        "Message:\n"
        f"{notification.message}\n\n"
        "---\n"
        "This is an automated notification from your website contact form."
    )


def render_html(notification: ContactNotification) -> str:
    name = html.escape(notification.name)
    email = html.escape(notification.email)
    subject = html.escape(notification.subject)
    created_at = html.escape(str(notification.createdAt))
    submission_id = html.escape(str(notification.id))
    message = html.escape(notification.message).replace("\n", "<br>")

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <style>
        body {{ font-family: Arial, sans-serif; line-height: 1.6; }}
        .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
        .header {{ background-color: #f5f5f5; padding: 15px; border-radius: 5px; }}
        .message {{ background-color: #f9f9f9; padding: 15px; border-left: 4px solid #007bff; margin: 10px 0; }}
        .footer {{ font-size: 12px; color: #777; border-top: 1px solid #eee; padding-top: 10px; margin-top: 20px; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h2>New Contact Form Submission</h2>
        </div>
        <div class="content">
            <p><strong>From:</strong> {name} &lt;{email}&gt;</p>
            <p><strong>Subject:</strong> {subject}</p>
            <p><strong>Date:</strong> {created_at}</p>
            <p><strong>ID:</strong> {submission_id}</p>
            <div class="message">
                <p><strong>Message:</strong></p>
                <p>{message}</p>
            </div>
        </div>
        <div class="footer">
            <p>This is an automated notification from your website contact form.</p>
        </div>
    </div>
</body>
</html>"""
