"""Hotel onboarding and lookup for the agency."""

import uuid
from typing import TYPE_CHECKING, Any

from botocore.exceptions import BotoCoreError, ClientError

from portal_shared.models import (
    ERROR_MESSAGES,
    BankDetails,
    ErrorCode,
    Hotel,
    HotelCreate,
    HotelCreateResult,
    HotelSettings,
    HotelStatus,
    HotelSummary,
    RoomCategory,
    WizardInput,
    WizardStep,
)
from portal_shared.services.dynamodb import serialize_item
from portal_shared.services.password import PasswordHasher
from portal_shared.utils.dates import parse_timestamp, utc_now
from portal_shared.utils.logging import get_logger

if TYPE_CHECKING:
    from .dynamodb import DynamoDBService

logger = get_logger(__name__)


DEFAULT_WIZARD_STEPS = [
    WizardStep(
        id="guest-info",
        title="Gäste Informationen",
        description="Name, Kontakt & Adresse",
        inputs=[
            WizardInput(key="first_name", label="Vorname", type="text", required=True),
            WizardInput(key="last_name", label="Nachname", type="text", required=True),
            WizardInput(key="email", label="E-Mail", type="email", required=True),
            WizardInput(key="phone", label="Telefon", type="tel"),
        ],
    ),
    WizardStep(
        id="documents",
        title="Dokumente",
        description="Lade Ausweis/Pass hoch (falls erforderlich)",
        inputs=[
            WizardInput(key="document_url", label="Ausweis / Reisepass", type="file"),
        ],
    ),
    WizardStep(
        id="confirm",
        title="Bestätigung",
        description="Einwilligungen & Check",
        inputs=[
            WizardInput(
                key="consent_gdpr",
                label="Einwilligung zur Datenverarbeitung",
                type="checkbox",
                required=True,
            ),
        ],
    ),
]

DEFAULT_BOOKING_TEMPLATE: dict[str, Any] = {
    "title": "Standard Buchungsvorlage",
    "description": "Vorlage für neue Buchungen",
    "template": {"allow_partial_payments": False},
}

# Seeded rooms need manual pricing by the hotelier
DEFAULT_ROOM_CAPACITY = 2


def item_to_hotel(item: dict[str, Any]) -> Hotel:
    """Convert DynamoDB item to Hotel model."""
    settings = item.get("settings") or {}
    return Hotel(
        hotel_id=item["hotel_id"],
        name=item.get("name", ""),
        domain=item.get("domain"),
        hotelier_email=item.get("hotelier_email", ""),
        hotelier_password_hash=item.get("hotelier_password_hash", ""),
        contact_email=item.get("contact_email", ""),
        contact_phone=item.get("contact_phone", ""),
        address=item.get("address", ""),
        meals=list(item.get("meals", [])),
        room_categories=[RoomCategory(**c) for c in item.get("room_categories", [])],
        bank_details=BankDetails(**(item.get("bank_details") or {})),
        owner_id=item.get("owner_id", ""),
        status=HotelStatus(item.get("status", HotelStatus.ACTIVE.value)),
        settings=HotelSettings(
            allow_guest_uploads=settings.get("allow_guest_uploads", True),
            max_upload_mb=int(settings.get("max_upload_mb", 10)),
            booking_link_expiry_hours=int(settings.get("booking_link_expiry_hours", 48)),
        ),
        wizard_config=[WizardStep(**step) for step in item.get("wizard_config", [])],
        booking_template=item.get("booking_template", {}),
        created_at=parse_timestamp(item["created_at"]),
        updated_at=parse_timestamp(item["updated_at"]),
    )


class HotelService:
    """Service for managing hotels (tenants)."""

    HOTELS_TABLE = "hotels"
    ROOMS_TABLE = "rooms"

    def __init__(
        self, db: "DynamoDBService", hasher: PasswordHasher | None = None
    ) -> None:
        self.db = db
        self.hasher = hasher or PasswordHasher()

    def _generate_id(self) -> str:
        return uuid.uuid4().hex

    def create_hotel(self, data: HotelCreate) -> HotelCreateResult:
        """Onboard a hotel with default settings and seeded rooms.

        The hotel record and one room per category are written in a single
        transaction.

        Args:
            data: Validated onboarding form

        Returns:
            HotelCreateResult with the new hotel_id on success
        """
        hotelier_email = str(data.hotelier_email).lower()
        if self.db.get_hotel_by_hotelier_email(hotelier_email) is not None:
            logger.warning("Hotelier email already registered: %s", hotelier_email)
            return HotelCreateResult(
                success=False, message=ERROR_MESSAGES[ErrorCode.DUPLICATE_HOTELIER]
            )

        hotel_id = self._generate_id()
        now = utc_now()

        hotel = Hotel(
            hotel_id=hotel_id,
            name=data.hotel_name,
            domain=data.domain or None,
            hotelier_email=hotelier_email,
            contact_email=str(data.contact_email),
            contact_phone=data.contact_phone,
            address=data.full_address,
            meals=data.meals,
            room_categories=data.room_categories,
            bank_details=BankDetails(
                account_holder=data.bank_account_holder,
                iban=data.iban,
                bic=data.bic,
                bank_name=data.bank_name,
            ),
            owner_id=data.owner_id,
            settings=HotelSettings(),
            wizard_config=DEFAULT_WIZARD_STEPS,
            booking_template=DEFAULT_BOOKING_TEMPLATE,
            created_at=now,
            updated_at=now,
        )
        hotel_item = hotel.model_dump(mode="json", exclude_none=True)
        # Excluded from dumps, stored explicitly
        hotel_item["hotelier_password_hash"] = self.hasher.hash(data.hotelier_password)

        transact_items: list[dict[str, Any]] = [
            {
                "Put": {
                    "TableName": self.db.table_name(self.HOTELS_TABLE),
                    "Item": serialize_item(hotel_item),
                    "ConditionExpression": "attribute_not_exists(hotel_id)",
                }
            }
        ]
        for category in data.room_categories:
            room = {
                "hotel_id": hotel_id,
                "room_id": self._generate_id(),
                "title": category.name,
                "description": f"Default room of category {category.name}",
                "capacity": DEFAULT_ROOM_CAPACITY,
                "price": 0,
                "created_at": now.isoformat(),
                "updated_at": now.isoformat(),
            }
            transact_items.append(
                {
                    "Put": {
                        "TableName": self.db.table_name(self.ROOMS_TABLE),
                        "Item": serialize_item(room),
                    }
                }
            )

        try:
            committed = self.db.transact_write(transact_items)
        except (ClientError, BotoCoreError):
            logger.exception("Failed to create hotel %s", data.hotel_name)
            committed = False

        if not committed:
            return HotelCreateResult(
                success=False, message=ERROR_MESSAGES[ErrorCode.PERSISTENCE]
            )

        logger.info(
            "Created hotel %s (%s) with %d rooms",
            hotel_id,
            hotel.name,
            len(data.room_categories),
        )
        return HotelCreateResult(
            success=True,
            message="Hotel created with default wizard and rooms.",
            hotel_id=hotel_id,
        )

    def get_hotel(self, hotel_id: str) -> Hotel | None:
        """Get a hotel by ID.

        Returns:
            Hotel or None if not found
        """
        item = self.db.get_item(self.HOTELS_TABLE, {"hotel_id": hotel_id})
        if not item:
            logger.warning("Hotel %s not found", hotel_id)
            return None
        return item_to_hotel(item)

    def list_hotels(self) -> list[HotelSummary]:
        """List all hotels, newest first, each with its booking count.

        Read failures are logged and yield an empty list.
        """
        try:
            items = self.db.scan(self.HOTELS_TABLE)
            summaries = [
                HotelSummary(
                    hotel_id=item["hotel_id"],
                    name=item.get("name", ""),
                    address=item.get("address", ""),
                    contact_email=item.get("contact_email", ""),
                    status=HotelStatus(item.get("status", HotelStatus.ACTIVE.value)),
                    bookings=self.db.count_bookings_for_hotel(item["hotel_id"]),
                    created_at=parse_timestamp(item["created_at"]),
                )
                for item in items
            ]
        except (ClientError, BotoCoreError):
            logger.exception("Error fetching hotels")
            return []

        summaries.sort(key=lambda h: h.created_at, reverse=True)
        logger.info("Found %d hotels", len(summaries))
        return summaries
