"""FastAPI dependency injection providers for shared services.

Services are lazily instantiated and cached with @lru_cache so a warm
process (or Lambda container) reuses its AWS clients.

Service Dependency Graph:
    DynamoDBService (singleton via get_dynamodb_service)
        ├── HotelService
        ├── DashboardService
        ├── AuthService
        └── BookingService
                ├── ContentGenerator
                └── EmailService

Testing:
    Override providers via app.dependency_overrides, or call
    reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from portal_shared.services.auth_service import AuthService
from portal_shared.services.booking_service import BookingService
from portal_shared.services.content_generator import ContentGenerator
from portal_shared.services.dashboard_service import DashboardService
from portal_shared.services.dynamodb import get_dynamodb_service
from portal_shared.services.email_service import EmailService
from portal_shared.services.hotel_service import HotelService


@lru_cache
def get_content_generator() -> ContentGenerator:
    return ContentGenerator()


@lru_cache
def get_email_service() -> EmailService:
    return EmailService()


@lru_cache
def get_booking_service() -> BookingService:
    """Get cached BookingService instance.

    Returns:
        BookingService configured with DynamoDB, content generation and email.
    """
    return BookingService(
        db=get_dynamodb_service(),
        content=get_content_generator(),
        email=get_email_service(),
    )


@lru_cache
def get_hotel_service() -> HotelService:
    return HotelService(db=get_dynamodb_service())


@lru_cache
def get_dashboard_service() -> DashboardService:
    return DashboardService(db=get_dynamodb_service())


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(db=get_dynamodb_service())


def reset_services() -> None:
    """Clear all cached service instances.

    Also resets the underlying DynamoDB singleton so the next call creates
    clients inside the current (possibly mocked) AWS context.
    """
    from portal_shared.services.dynamodb import reset_dynamodb_service

    get_content_generator.cache_clear()
    get_email_service.cache_clear()
    get_booking_service.cache_clear()
    get_hotel_service.cache_clear()
    get_dashboard_service.cache_clear()
    get_auth_service.cache_clear()

    reset_dynamodb_service()
