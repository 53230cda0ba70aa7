"""Hotelier and agency login.

Logins are stateless checks: no session or token is issued here. Hotelier
passwords are stored as bcrypt hashes on the hotel record. The single agency
account is configured through the environment, its password hash either
inline (AGENCY_PASSWORD_HASH) or in SSM Parameter Store
(AGENCY_PASSWORD_HASH_PARAMETER).
"""

import os
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from portal_shared.models import ERROR_MESSAGES, ErrorCode, LoginResult
from portal_shared.services.password import PasswordHasher
from portal_shared.utils.logging import get_logger

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)

LOGIN_SUCCESS_MESSAGE = "Login successful!"


def _invalid_credentials() -> LoginResult:
    return LoginResult(
        success=False, message=ERROR_MESSAGES[ErrorCode.INVALID_CREDENTIALS]
    )


class AuthService:
    """Checks hotelier and agency credentials."""

    def __init__(
        self,
        db: "DynamoDBService",
        hasher: PasswordHasher | None = None,
        ssm_client: Any | None = None,
    ) -> None:
        """Initialize auth service.

        Args:
            db: DynamoDB service instance
            hasher: Password hasher (bcrypt by default)
            ssm_client: Preconfigured SSM client, created lazily when needed
        """
        self.db = db
        self.hasher = hasher or PasswordHasher()
        self._ssm_client = ssm_client
        self._agency_hash: str | None = None

    def login_hotelier(self, email: str, password: str) -> LoginResult:
        """Log a hotelier in to their hotel's dashboard.

        Returns:
            LoginResult carrying the hotel_id on success
        """
        logger.info("Attempting hotelier login for %s", email)
        try:
            item = self.db.get_hotel_by_hotelier_email(email)
        except (ClientError, BotoCoreError):
            logger.exception("Error looking up hotelier %s", email)
            return LoginResult(
                success=False, message=ERROR_MESSAGES[ErrorCode.PERSISTENCE]
            )

        if item is None:
            logger.info("Login failed: no hotel found for %s", email)
            return _invalid_credentials()

        if not self.hasher.verify(password, item.get("hotelier_password_hash", "")):
            logger.info("Login failed: password mismatch for hotel %s", item["hotel_id"])
            return _invalid_credentials()

        logger.info("Login successful for hotel %s", item["hotel_id"])
        return LoginResult(
            success=True, message=LOGIN_SUCCESS_MESSAGE, hotel_id=item["hotel_id"]
        )

    def login_agency(self, email: str, password: str) -> LoginResult:
        """Log the agency account in."""
        agency_email = os.getenv("AGENCY_EMAIL")
        password_hash = self._get_agency_password_hash()
        if not agency_email or not password_hash:
            logger.error("Agency credentials are not configured")
            return LoginResult(
                success=False, message=ERROR_MESSAGES[ErrorCode.AUTH_CONFIG]
            )

        if email.lower() != agency_email.lower() or not self.hasher.verify(
            password, password_hash
        ):
            logger.info("Agency login failed for %s", email)
            return _invalid_credentials()

        logger.info("Agency login successful")
        return LoginResult(success=True, message=LOGIN_SUCCESS_MESSAGE)

    def _get_agency_password_hash(self) -> str | None:
        """Resolve the agency password hash, caching SSM lookups."""
        inline = os.getenv("AGENCY_PASSWORD_HASH")
        if inline:
            return inline

        if self._agency_hash is not None:
            return self._agency_hash

        parameter = os.getenv("AGENCY_PASSWORD_HASH_PARAMETER")
        if not parameter:
            return None

        if self._ssm_client is None:
            self._ssm_client = boto3.client("ssm")
        try:
            response = self._ssm_client.get_parameter(
                Name=parameter, WithDecryption=True
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to read SSM parameter %s: %s", parameter, e)
            return None

        self._agency_hash = response["Parameter"]["Value"]
        return self._agency_hash
