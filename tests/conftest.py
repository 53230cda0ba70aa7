"""Pytest configuration and fixtures for the hotel portal tests.

This module provides reusable fixtures for testing:
- DynamoDB mocking with moto
- Service instances wired to mocked AWS
- Mocked content generation and email delivery
- Sample hotel and booking data
"""

import os
from collections.abc import Generator
from datetime import date
from typing import Any
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

# === Environment Setup ===

# Set before any service is imported so table names resolve to the test prefix
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("DYNAMODB_TABLE_PREFIX", "test-portal")
os.environ.setdefault("SES_SENDER_EMAIL", "bookings@hotel-portal.example")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

TABLE_PREFIX = os.environ["DYNAMODB_TABLE_PREFIX"]


# === Singleton Reset ===


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Reset cached services before and after each test.

    Tests using mock_aws must get fresh boto3 clients created inside the
    mock context rather than ones cached by an earlier test.
    """
    from portal_api.dependencies import reset_services

    reset_services()
    yield
    reset_services()


# === AWS Fixtures ===


@pytest.fixture
def aws_credentials() -> None:
    """Mocked AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "eu-west-1"


@pytest.fixture
def dynamodb_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Create a mocked DynamoDB client."""
    with mock_aws():
        yield boto3.client("dynamodb", region_name="eu-west-1")


@pytest.fixture
def create_tables(dynamodb_client: Any) -> None:
    """Create all portal tables in the mocked account."""
    tables = [
        {
            "TableName": f"{TABLE_PREFIX}-hotels",
            "KeySchema": [{"AttributeName": "hotel_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "hotel_id", "AttributeType": "S"},
                {"AttributeName": "hotelier_email", "AttributeType": "S"},
            ],
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "hotelier_email-index",
                    "KeySchema": [{"AttributeName": "hotelier_email", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-rooms",
            "KeySchema": [
                {"AttributeName": "hotel_id", "KeyType": "HASH"},
                {"AttributeName": "room_id", "KeyType": "RANGE"},
            ],
            "AttributeDefinitions": [
                {"AttributeName": "hotel_id", "AttributeType": "S"},
                {"AttributeName": "room_id", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-bookings",
            "KeySchema": [{"AttributeName": "booking_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "booking_id", "AttributeType": "S"},
                {"AttributeName": "hotel_id", "AttributeType": "S"},
                {"AttributeName": "created_at", "AttributeType": "S"},
            ],
            "GlobalSecondaryIndexes": [
                {
                    "IndexName": "hotel_id-index",
                    "KeySchema": [
                        {"AttributeName": "hotel_id", "KeyType": "HASH"},
                        {"AttributeName": "created_at", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
        {
            "TableName": f"{TABLE_PREFIX}-guest-links",
            "KeySchema": [{"AttributeName": "link_id", "KeyType": "HASH"}],
            "AttributeDefinitions": [
                {"AttributeName": "link_id", "AttributeType": "S"},
            ],
            "BillingMode": "PAY_PER_REQUEST",
        },
    ]

    for table_config in tables:
        dynamodb_client.create_table(**table_config)


@pytest.fixture
def db(create_tables: None) -> Any:
    """DynamoDBService bound to the mocked tables."""
    from portal_shared.services.dynamodb import DynamoDBService

    return DynamoDBService(environment="test")


# === Collaborator Mocks ===


@pytest.fixture
def mock_content_generator() -> MagicMock:
    """Content generator that returns canned HTML without calling Bedrock."""
    from portal_shared.models import ConfirmationEmailOutput, SecurityPolicyOutput

    generator = MagicMock()
    generator.generate_confirmation_email.return_value = ConfirmationEmailOutput(
        html_content="<p>Your booking is confirmed.</p>"
    )
    generator.generate_security_policy.return_value = SecurityPolicyOutput(
        policy_recommendations="1. Use key cards."
    )
    return generator


@pytest.fixture
def mock_email_service() -> MagicMock:
    """Email service that records sends instead of calling SES."""
    from portal_shared.models import EmailResult

    service = MagicMock()
    service.send_email.return_value = EmailResult(
        success=True, message="Email sent successfully.", message_id="msg-123"
    )
    return service


# === Service Fixtures ===


@pytest.fixture
def fast_hasher() -> Any:
    """bcrypt with the minimum cost factor to keep tests fast."""
    from portal_shared.services.password import PasswordHasher

    return PasswordHasher(rounds=4)


@pytest.fixture
def hotel_service(db: Any, fast_hasher: Any) -> Any:
    from portal_shared.services.hotel_service import HotelService

    return HotelService(db=db, hasher=fast_hasher)


@pytest.fixture
def booking_service(
    db: Any, mock_content_generator: MagicMock, mock_email_service: MagicMock
) -> Any:
    from portal_shared.services.booking_service import BookingService

    return BookingService(
        db=db, content=mock_content_generator, email=mock_email_service
    )


@pytest.fixture
def dashboard_service(db: Any) -> Any:
    from portal_shared.services.dashboard_service import DashboardService

    return DashboardService(db=db)


# === Sample Data ===


@pytest.fixture
def hotel_create_data() -> Any:
    """Valid onboarding form for a sample hotel."""
    from portal_shared.models import HotelCreate, RoomCategory

    return HotelCreate(
        hotel_name="Hotel Alpenblick",
        hotelier_email="Owner@Alpenblick.example",
        hotelier_password="s3cret-pass",
        contact_email="info@alpenblick.example",
        contact_phone="+43 512 000000",
        full_address="Dorfstrasse 1, 6020 Innsbruck, Austria",
        meals=["breakfast", "half_board"],
        room_categories=[RoomCategory(name="Double Room"), RoomCategory(name="Suite")],
        bank_account_holder="Alpenblick GmbH",
        iban="AT611904300234573201",
        bic="BKAUATWW",
        bank_name="Bank Austria",
        owner_id="agency",
    )


@pytest.fixture
def hotel_id(hotel_service: Any, hotel_create_data: Any) -> str:
    """ID of a hotel onboarded into the mocked tables."""
    result = hotel_service.create_hotel(hotel_create_data)
    assert result.success, result.message
    return result.hotel_id


@pytest.fixture
def booking_link_data() -> Any:
    """Link form from the hotelier for Alice's stay."""
    from portal_shared.models import BookingLinkCreate, Language

    return BookingLinkCreate(
        guest_name="Alice Doe",
        check_in=date(2025, 6, 1),
        check_out=date(2025, 6, 5),
        room_type="Suite",
        language=Language.EN,
    )


@pytest.fixture
def guest_submission() -> Any:
    """Alice's completed guest form."""
    from portal_shared.models import GuestSubmission

    return GuestSubmission(
        first_name="Alice",
        last_name="Doe",
        email="alice@example.com",
        phone="+1-555",
    )
