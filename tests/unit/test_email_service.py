"""Unit tests for EmailService."""

from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

from portal_shared.models import ErrorCode
from portal_shared.services.email_service import EmailService


class TestSendEmail:
    """Tests for EmailService.send_email."""

    def test_sends_html_through_ses(self) -> None:
        client = MagicMock()
        client.send_email.return_value = {"MessageId": "abc-123"}
        service = EmailService(sender="hotel@example.com", client=client)

        result = service.send_email("alice@example.com", "Hello", "<p>Hi</p>")

        assert result.success is True
        assert result.message_id == "abc-123"
        kwargs = client.send_email.call_args.kwargs
        assert kwargs["Source"] == "hotel@example.com"
        assert kwargs["Destination"] == {"ToAddresses": ["alice@example.com"]}
        assert kwargs["Message"]["Subject"]["Data"] == "Hello"
        assert kwargs["Message"]["Body"]["Html"]["Data"] == "<p>Hi</p>"
        assert "ConfigurationSetName" not in kwargs

    def test_configuration_set_is_passed(self) -> None:
        client = MagicMock()
        client.send_email.return_value = {"MessageId": "abc-123"}
        service = EmailService(
            sender="hotel@example.com", configuration_set="tracking", client=client
        )

        service.send_email("alice@example.com", "Hello", "<p>Hi</p>")

        assert client.send_email.call_args.kwargs["ConfigurationSetName"] == "tracking"

    def test_ses_error_is_reported_not_raised(self) -> None:
        client = MagicMock()
        client.send_email.side_effect = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "Email address is not verified."}},
            "SendEmail",
        )
        service = EmailService(sender="hotel@example.com", client=client)

        result = service.send_email("alice@example.com", "Hello", "<p>Hi</p>")

        assert result.success is False
        assert result.message == "Failed to send email."
        assert result.error_code == ErrorCode.EMAIL_DELIVERY

    def test_sender_defaults_to_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SES_SENDER_EMAIL", "env@example.com")

        service = EmailService(client=MagicMock())

        assert service.sender == "env@example.com"


@mock_aws
def test_send_with_moto_ses() -> None:
    """Round trip against moto's SES with a verified sender."""
    client = boto3.client("ses", region_name="eu-west-1")
    client.verify_email_identity(EmailAddress="hotel@example.com")
    service = EmailService(sender="hotel@example.com", client=client)

    result = service.send_email("alice@example.com", "Hello", "<p>Hi</p>")

    assert result.success is True
    assert result.message_id
