"""Stream handler that emails the site owner about new contact form submissions.

Deployed as a Lambda subscribed to the contact form table's change stream;
the handler name is ``portfolio.handlers.contact_form_processor.handler``.
"""

import logging
from typing import Callable, Optional

from portfolio.services.email_sender import SmtpEmailSender
from portfolio.services.notification_dispatcher import process_records
from portfolio.settings import Settings, settings

logger = logging.getLogger(__name__)
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))


def handler(
    event: dict,
    context=None,
    *,
    settings_obj: Settings = settings,
    sender_factory: Callable[[Settings], SmtpEmailSender] = SmtpEmailSender.from_settings,
    sender: Optional[SmtpEmailSender] = None,
) -> dict:
    records = event.get("Records") or []
    logger.info(f"Processing {len(records)} contact form stream records")

    try:
        result = process_records(
            records,
            sender=sender or sender_factory(settings_obj),
            sender_address=settings_obj.SENDER_EMAIL,
            recipients=settings_obj.recipient_list,
        )
    except Exception as e:
        # Re-raised so the platform retries the whole batch.
        logger.error(f"Error processing contact form submissions: {e}")
        raise

    logger.info(f"Sent {result['processedCount']} notification(s)")
    return {
        "statusCode": 200,
        "body": f"Successfully processed {len(records)} records",
    }
