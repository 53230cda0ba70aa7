"""Integration tests for hotelier and agency login."""

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError

from portal_shared.services.auth_service import AuthService

pytestmark = pytest.mark.integration

INVALID = "Invalid credentials."


@pytest.fixture
def auth_service(db: Any, fast_hasher: Any) -> AuthService:
    return AuthService(db=db, hasher=fast_hasher)


@pytest.fixture
def clean_agency_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in ("AGENCY_EMAIL", "AGENCY_PASSWORD_HASH", "AGENCY_PASSWORD_HASH_PARAMETER"):
        monkeypatch.delenv(name, raising=False)
    yield


class TestHotelierLogin:
    """Tests for AuthService.login_hotelier."""

    def test_valid_credentials(self, auth_service: AuthService, hotel_id: str) -> None:
        result = auth_service.login_hotelier("owner@alpenblick.example", "s3cret-pass")

        assert result.success is True
        assert result.hotel_id == hotel_id

    def test_email_lookup_is_case_insensitive(
        self, auth_service: AuthService, hotel_id: str
    ) -> None:
        result = auth_service.login_hotelier("OWNER@alpenblick.example", "s3cret-pass")

        assert result.success is True

    def test_wrong_password(self, auth_service: AuthService, hotel_id: str) -> None:
        result = auth_service.login_hotelier("owner@alpenblick.example", "wrong-pass")

        assert result.success is False
        assert result.message == INVALID
        assert result.hotel_id is None

    def test_unknown_email(self, auth_service: AuthService, hotel_id: str) -> None:
        result = auth_service.login_hotelier("nobody@example.com", "s3cret-pass")

        assert result.success is False
        assert result.message == INVALID


class TestAgencyLogin:
    """Tests for AuthService.login_agency."""

    def test_hash_from_environment(
        self,
        auth_service: AuthService,
        fast_hasher: Any,
        clean_agency_env: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("AGENCY_EMAIL", "agency@example.com")
        monkeypatch.setenv("AGENCY_PASSWORD_HASH", fast_hasher.hash("agency-pass"))

        assert auth_service.login_agency("agency@example.com", "agency-pass").success
        wrong = auth_service.login_agency("agency@example.com", "nope")
        assert wrong.success is False
        assert wrong.message == INVALID
        other = auth_service.login_agency("hotel@example.com", "agency-pass")
        assert other.success is False

    def test_hash_from_ssm_parameter(
        self,
        auth_service: AuthService,
        fast_hasher: Any,
        clean_agency_env: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # db fixture keeps mock_aws active, so SSM is mocked too
        ssm = boto3.client("ssm", region_name="eu-west-1")
        ssm.put_parameter(
            Name="/hotel-portal/test/agency-password-hash",
            Value=fast_hasher.hash("agency-pass"),
            Type="SecureString",
        )
        monkeypatch.setenv("AGENCY_EMAIL", "agency@example.com")
        monkeypatch.setenv(
            "AGENCY_PASSWORD_HASH_PARAMETER", "/hotel-portal/test/agency-password-hash"
        )

        result = auth_service.login_agency("agency@example.com", "agency-pass")

        assert result.success is True

    def test_missing_configuration(
        self, auth_service: AuthService, clean_agency_env: None
    ) -> None:
        result = auth_service.login_agency("agency@example.com", "agency-pass")

        assert result.success is False
        assert result.message == "Server configuration error."

    def test_missing_ssm_parameter(
        self,
        auth_service: AuthService,
        clean_agency_env: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("AGENCY_EMAIL", "agency@example.com")
        monkeypatch.setenv("AGENCY_PASSWORD_HASH_PARAMETER", "/does/not/exist")

        result = auth_service.login_agency("agency@example.com", "agency-pass")

        assert result.success is False
        assert result.message == "Server configuration error."

    def test_unreachable_ssm_is_configuration_error(
        self,
        db: Any,
        fast_hasher: Any,
        clean_agency_env: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        ssm = MagicMock()
        ssm.get_parameter.side_effect = EndpointConnectionError(
            endpoint_url="https://ssm.eu-west-1.amazonaws.com"
        )
        monkeypatch.setenv("AGENCY_EMAIL", "agency@example.com")
        monkeypatch.setenv("AGENCY_PASSWORD_HASH_PARAMETER", "/hotel-portal/test/agency")
        service = AuthService(db=db, hasher=fast_hasher, ssm_client=ssm)

        result = service.login_agency("agency@example.com", "agency-pass")

        assert result.success is False
        assert result.message == "Server configuration error."
