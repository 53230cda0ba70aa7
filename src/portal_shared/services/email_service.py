"""Outgoing email via Amazon SES.

Sending is best effort: SES failures are logged and reported through
``EmailResult`` instead of being raised, so callers can treat delivery as a
fire-and-forget side effect.
"""

import os
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from portal_shared.models import ERROR_MESSAGES, EmailResult, ErrorCode
from portal_shared.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SENDER = "no-reply@hotel-portal.example"


class EmailService:
    """Sends HTML email through SES."""

    def __init__(
        self,
        sender: str | None = None,
        configuration_set: str | None = None,
        client: Any | None = None,
    ) -> None:
        """Initialize email service.

        Args:
            sender: From address. Defaults to SES_SENDER_EMAIL env var.
            configuration_set: Optional SES configuration set for tracking.
            client: Preconfigured SES client (tests inject a mock).
        """
        self.sender = sender or os.getenv("SES_SENDER_EMAIL", DEFAULT_SENDER)
        self.configuration_set = configuration_set or os.getenv("SES_CONFIGURATION_SET")
        self._client = client or boto3.client("ses")

    def send_email(self, to: str, subject: str, html: str) -> EmailResult:
        """Send one HTML email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Returns:
            EmailResult with success flag and SES message ID when sent
        """
        kwargs: dict[str, Any] = {
            "Source": self.sender,
            "Destination": {"ToAddresses": [to]},
            "Message": {
                "Subject": {"Data": subject, "Charset": "UTF-8"},
                "Body": {"Html": {"Data": html, "Charset": "UTF-8"}},
            },
        }
        if self.configuration_set:
            kwargs["ConfigurationSetName"] = self.configuration_set

        try:
            response = self._client.send_email(**kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to send email to %s: %s", to, e)
            return EmailResult(
                success=False,
                message=ERROR_MESSAGES[ErrorCode.EMAIL_DELIVERY],
                error_code=ErrorCode.EMAIL_DELIVERY,
            )

        message_id = response.get("MessageId")
        logger.info("Email sent to %s (message_id=%s)", to, message_id)
        return EmailResult(
            success=True, message="Email sent successfully.", message_id=message_id
        )
