"""Domain services for the hotel portal."""

from .auth_service import AuthService
from .booking_service import BookingService
from .content_generator import ContentGenerationError, ContentGenerator
from .dashboard_service import DashboardService
from .dynamodb import DynamoDBService, get_dynamodb_service, reset_dynamodb_service
from .email_service import EmailService
from .hotel_service import HotelService
from .password import PasswordHasher

__all__ = [
    "AuthService",
    "BookingService",
    "ContentGenerationError",
    "ContentGenerator",
    "DashboardService",
    "DynamoDBService",
    "EmailService",
    "HotelService",
    "PasswordHasher",
    "get_dynamodb_service",
    "reset_dynamodb_service",
]
