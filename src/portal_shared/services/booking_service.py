"""Booking service: booking links, direct bookings and guest completion.

A booking and its guest link are always written together in one DynamoDB
transaction. Guest completion flips ``is_completed`` on the link and confirms
the booking in a second transaction whose conditions make the link single
use even under concurrent submissions.
"""

import os
import uuid
from typing import TYPE_CHECKING, Any

from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from portal_shared.models import (
    ERROR_MESSAGES,
    ActionResult,
    Booking,
    BookingLinkCreate,
    BookingLinkResult,
    BookingStatus,
    BookingUpdate,
    ConfirmationEmailInput,
    DirectBookingCreate,
    DirectBookingResult,
    ErrorCode,
    GuestBookingData,
    GuestBookingDataResult,
    GuestDetails,
    GuestLink,
    GuestSubmission,
    Hotel,
    HotelPublic,
    Language,
    MealPlan,
    RoomSelection,
)
from portal_shared.services.dynamodb import serialize_item, to_dynamodb_value
from portal_shared.services.hotel_service import item_to_hotel
from portal_shared.utils.dates import format_long_date, parse_timestamp, utc_now
from portal_shared.utils.logging import get_logger, log_booking_operation

if TYPE_CHECKING:
    import datetime as dt

    from .content_generator import ContentGenerator
    from .dynamodb import DynamoDBService
    from .email_service import EmailService

logger = get_logger(__name__)

_serializer = TypeSerializer()

GUEST_LINK_PATH = "/guest/{link_id}"


def guest_link_path(link_id: str) -> str:
    """Relative URL a guest opens to complete a booking."""
    return GUEST_LINK_PATH.format(link_id=link_id)


def describe_booking(booking: Booking) -> str:
    """Human-readable room summary used in confirmation emails."""
    if booking.rooms:
        rooms = ", ".join(
            f"{room.room_type} ({room.adults} adult(s)"
            + (f", {room.children} child(ren)" if room.children else "")
            + (f", {room.toddlers} toddler(s)" if room.toddlers else "")
            + ")"
            for room in booking.rooms
        )
        summary = f"Booking for {len(booking.rooms)} room(s): {rooms}."
    else:
        summary = f"Booking for 1 room(s): {booking.room_type or 'Standard'}."

    if booking.meal_plan and booking.meal_plan != MealPlan.NONE:
        summary += f" Meal plan: {booking.meal_plan.value.replace('_', ' ')}."
    return summary


def item_to_booking(item: dict[str, Any]) -> Booking:
    """Convert DynamoDB item to Booking model."""
    guest_details = item.get("guest_details")
    return Booking(
        booking_id=item["booking_id"],
        hotel_id=item["hotel_id"],
        guest_name=item.get("guest_name", ""),
        check_in=item["check_in"],
        check_out=item["check_out"],
        room_type=item.get("room_type"),
        rooms=[
            RoomSelection(
                room_type=room["room_type"],
                adults=int(room.get("adults", 1)),
                children=int(room.get("children", 0)),
                toddlers=int(room.get("toddlers", 0)),
                child_ages=room.get("child_ages", ""),
            )
            for room in item.get("rooms", [])
        ],
        meal_plan=MealPlan(item["meal_plan"]) if item.get("meal_plan") else None,
        language=Language(item.get("language", Language.DE.value)),
        total_price=item.get("total_price", 0),
        internal_notes=item.get("internal_notes"),
        status=BookingStatus(item["status"]),
        guest_link_id=item["guest_link_id"],
        guest_details=GuestDetails(**guest_details) if guest_details else None,
        document_url=item.get("document_url"),
        payment_proof_url=item.get("payment_proof_url"),
        cancellation_reason=item.get("cancellation_reason"),
        cancelled_at=(
            parse_timestamp(item["cancelled_at"]) if item.get("cancelled_at") else None
        ),
        created_at=parse_timestamp(item["created_at"]),
        updated_at=parse_timestamp(item["updated_at"]),
    )


def item_to_guest_link(item: dict[str, Any]) -> GuestLink:
    """Convert DynamoDB item to GuestLink model."""
    return GuestLink(
        link_id=item["link_id"],
        booking_id=item["booking_id"],
        hotel_id=item["hotel_id"],
        is_completed=bool(item.get("is_completed", False)),
        created_at=parse_timestamp(item["created_at"]),
        completed_at=(
            parse_timestamp(item["completed_at"]) if item.get("completed_at") else None
        ),
        expires_at=(
            parse_timestamp(item["expires_at"]) if item.get("expires_at") else None
        ),
    )


def _booking_to_item(booking: Booking) -> dict[str, Any]:
    item = booking.model_dump(mode="json", exclude_none=True)
    # Keep the price numeric so it can be summed server-side
    item["total_price"] = booking.total_price
    return item


def _link_to_item(link: GuestLink) -> dict[str, Any]:
    return link.model_dump(mode="json", exclude_none=True)


def _failure(code: ErrorCode) -> ActionResult:
    return ActionResult(success=False, message=ERROR_MESSAGES[code])


class BookingService:
    """Service for the booking and guest-link lifecycle."""

    BOOKINGS_TABLE = "bookings"
    LINKS_TABLE = "guest-links"
    HOTELS_TABLE = "hotels"

    def __init__(
        self,
        db: "DynamoDBService",
        content: "ContentGenerator",
        email: "EmailService",
        direct_booking_status: BookingStatus | None = None,
    ) -> None:
        """Initialize booking service.

        Args:
            db: DynamoDB service instance
            content: Generates confirmation email bodies
            email: Sends confirmation emails
            direct_booking_status: Initial status of staff-created bookings.
                Defaults to DIRECT_BOOKING_INITIAL_STATUS env var, then pending_guest.
        """
        self.db = db
        self.content = content
        self.email = email
        status = direct_booking_status or BookingStatus(
            os.getenv("DIRECT_BOOKING_INITIAL_STATUS", BookingStatus.PENDING_GUEST.value)
        )
        if status == BookingStatus.CANCELLED:
            raise ValueError("Direct bookings cannot start out cancelled")
        self.direct_booking_status = status

    def _generate_id(self) -> str:
        """Generate a document identifier."""
        return uuid.uuid4().hex

    # =========================================================================
    # Issuing bookings
    # =========================================================================

    def create_booking_link(
        self, hotel_id: str, data: BookingLinkCreate
    ) -> BookingLinkResult:
        """Create a pending booking plus its single-use guest link.

        Args:
            hotel_id: Hotel the booking belongs to
            data: Validated link form

        Returns:
            BookingLinkResult with the relative link path on success
        """
        booking_id = self._generate_id()
        link_id = self._generate_id()
        now = utc_now()

        booking = Booking(
            booking_id=booking_id,
            hotel_id=hotel_id,
            guest_name=data.guest_name,
            check_in=data.check_in,
            check_out=data.check_out,
            room_type=data.room_type,
            language=data.language,
            status=BookingStatus.PENDING_GUEST,
            guest_link_id=link_id,
            created_at=now,
            updated_at=now,
        )

        if not self._write_booking_with_link(booking, self._new_link(booking, now)):
            log_booking_operation(
                logger,
                "create_booking_link",
                hotel_id=hotel_id,
                booking_id=booking_id,
                error="persistence failure",
            )
            return BookingLinkResult(
                success=False,
                message="Failed to create booking link due to a server error.",
            )

        log_booking_operation(
            logger,
            "create_booking_link",
            hotel_id=hotel_id,
            booking_id=booking_id,
            link_id=link_id,
            status=booking.status.value,
        )
        return BookingLinkResult(
            success=True,
            message="Booking link created successfully!",
            link=guest_link_path(link_id),
            booking_id=booking_id,
            link_id=link_id,
        )

    def create_direct_booking(
        self, hotel_id: str, data: DirectBookingCreate
    ) -> DirectBookingResult:
        """Create a full booking from the hotelier dashboard.

        A guest link is issued alongside so the guest can still add their
        contact details and documents.
        """
        booking_id = self._generate_id()
        link_id = self._generate_id()
        now = utc_now()

        booking = Booking(
            booking_id=booking_id,
            hotel_id=hotel_id,
            guest_name=f"{data.first_name} {data.last_name}",
            check_in=data.check_in,
            check_out=data.check_out,
            room_type=data.rooms[0].room_type,
            rooms=data.rooms,
            meal_plan=data.meal_plan,
            language=data.language,
            total_price=data.total_price,
            internal_notes=data.internal_notes or None,
            status=self.direct_booking_status,
            guest_link_id=link_id,
            created_at=now,
            updated_at=now,
        )

        if not self._write_booking_with_link(booking, self._new_link(booking, now)):
            log_booking_operation(
                logger,
                "create_direct_booking",
                hotel_id=hotel_id,
                booking_id=booking_id,
                error="persistence failure",
            )
            return DirectBookingResult(
                success=False,
                message="Failed to create booking due to a server error.",
            )

        log_booking_operation(
            logger,
            "create_direct_booking",
            hotel_id=hotel_id,
            booking_id=booking_id,
            link_id=link_id,
            status=booking.status.value,
        )
        return DirectBookingResult(
            success=True,
            message="Booking created successfully!",
            booking_id=booking_id,
            link=guest_link_path(link_id),
        )

    def _new_link(self, booking: Booking, now: "dt.datetime") -> GuestLink:
        return GuestLink(
            link_id=booking.guest_link_id,
            booking_id=booking.booking_id,
            hotel_id=booking.hotel_id,
            is_completed=False,
            created_at=now,
        )

    def _write_booking_with_link(self, booking: Booking, link: GuestLink) -> bool:
        """Atomically persist a booking and its guest link."""
        transact_items = [
            {
                "Put": {
                    "TableName": self.db.table_name(self.BOOKINGS_TABLE),
                    "Item": serialize_item(_booking_to_item(booking)),
                    "ConditionExpression": "attribute_not_exists(booking_id)",
                }
            },
            {
                "Put": {
                    "TableName": self.db.table_name(self.LINKS_TABLE),
                    "Item": serialize_item(_link_to_item(link)),
                    "ConditionExpression": "attribute_not_exists(link_id)",
                }
            },
        ]
        try:
            return self.db.transact_write(transact_items)
        except (ClientError, BotoCoreError):
            logger.exception("Failed to write booking %s", booking.booking_id)
            return False

    # =========================================================================
    # Reads and staff edits
    # =========================================================================

    def get_booking(self, booking_id: str) -> Booking | None:
        """Get a booking by ID.

        Returns:
            Booking or None if not found
        """
        item = self.db.get_item(self.BOOKINGS_TABLE, {"booking_id": booking_id})
        return item_to_booking(item) if item else None

    def list_bookings(self, hotel_id: str) -> list[Booking]:
        """Get a hotel's bookings, newest first.

        Read failures are logged and yield an empty list.
        """
        try:
            items = self.db.get_bookings_for_hotel(hotel_id)
        except (ClientError, BotoCoreError):
            logger.exception("Error fetching bookings for hotel %s", hotel_id)
            return []

        logger.info("Found %d bookings for hotel %s", len(items), hotel_id)
        return [item_to_booking(item) for item in items]

    def update_booking(
        self, booking_id: str, data: BookingUpdate
    ) -> tuple[Booking | None, ErrorCode | None]:
        """Change guest name, dates or room type of a booking.

        Returns:
            Tuple of (updated booking, None) or (None, error code)
        """
        booking = self.get_booking(booking_id)
        if booking is None:
            return None, ErrorCode.BOOKING_NOT_FOUND
        if booking.status == BookingStatus.CANCELLED:
            return None, ErrorCode.BOOKING_CANCELLED

        check_in = data.check_in or booking.check_in
        check_out = data.check_out or booking.check_out
        if check_in >= check_out:
            return None, ErrorCode.INVALID_DATE_RANGE

        now = utc_now()
        assignments = ["updated_at = :now"]
        values: dict[str, Any] = {
            ":now": now.isoformat(),
            ":cancelled": BookingStatus.CANCELLED.value,
        }
        for field, value in data.model_dump(mode="json", exclude_none=True).items():
            assignments.append(f"{field} = :{field}")
            values[f":{field}"] = value

        attrs = self.db.update_item(
            self.BOOKINGS_TABLE,
            {"booking_id": booking_id},
            "SET " + ", ".join(assignments),
            values,
            {"#s": "status"},
            condition_expression="attribute_exists(booking_id) AND #s <> :cancelled",
        )
        if attrs is None:
            # Cancelled between our read and the write
            return None, ErrorCode.BOOKING_CANCELLED

        log_booking_operation(
            logger, "update_booking", booking_id=booking_id, status=attrs.get("status")
        )
        return item_to_booking(attrs), None

    def cancel_booking(
        self, booking_id: str, reason: str | None = None
    ) -> tuple[Booking | None, ErrorCode | None]:
        """Cancel a booking. Cancelled is terminal.

        Returns:
            Tuple of (cancelled booking, None) or (None, error code)
        """
        now = utc_now().isoformat()
        attrs = self.db.update_item(
            self.BOOKINGS_TABLE,
            {"booking_id": booking_id},
            "SET #s = :cancelled, cancellation_reason = :reason, "
            "cancelled_at = :now, updated_at = :now",
            {
                ":cancelled": BookingStatus.CANCELLED.value,
                ":reason": reason or "Cancelled by hotel",
                ":now": now,
            },
            {"#s": "status"},
            condition_expression="attribute_exists(booking_id) AND #s <> :cancelled",
        )
        if attrs is None:
            if self.get_booking(booking_id) is None:
                return None, ErrorCode.BOOKING_NOT_FOUND
            return None, ErrorCode.BOOKING_CANCELLED

        log_booking_operation(
            logger,
            "cancel_booking",
            booking_id=booking_id,
            status=BookingStatus.CANCELLED.value,
        )
        return item_to_booking(attrs), None

    # =========================================================================
    # Guest-facing operations
    # =========================================================================

    def _get_link(self, link_id: str, consistent_read: bool = False) -> GuestLink | None:
        item = self.db.get_item(
            self.LINKS_TABLE, {"link_id": link_id}, consistent_read=consistent_read
        )
        return item_to_guest_link(item) if item else None

    def _get_hotel(self, hotel_id: str) -> Hotel | None:
        item = self.db.get_item(self.HOTELS_TABLE, {"hotel_id": hotel_id})
        return item_to_hotel(item) if item else None

    def _resolve_link(
        self, link_id: str
    ) -> tuple[GuestLink | None, Hotel | None, Booking | None, ErrorCode | None]:
        """Look up a link and the hotel/booking it points to.

        Hotel and booking are always taken from the stored link, never from
        client-supplied ids.
        """
        link = self._get_link(link_id)
        if link is None:
            logger.warning("Invalid link_id provided: %s", link_id)
            return None, None, None, ErrorCode.LINK_INVALID

        if link.is_completed:
            logger.warning("Booking already completed for link_id: %s", link_id)
            return link, None, None, ErrorCode.LINK_COMPLETED

        hotel = self._get_hotel(link.hotel_id)
        booking = self.get_booking(link.booking_id)
        if hotel is None or booking is None:
            logger.error(
                "Hotel or booking not found for link %s (hotel exists: %s, booking exists: %s)",
                link_id,
                hotel is not None,
                booking is not None,
            )
            return link, hotel, booking, ErrorCode.LINK_TARGET_MISSING

        if booking.status == BookingStatus.CANCELLED:
            return link, hotel, booking, ErrorCode.BOOKING_CANCELLED

        return link, hotel, booking, None

    def get_booking_data_for_guest(self, link_id: str) -> GuestBookingDataResult:
        """Load what the guest form needs to render. Performs no writes."""
        try:
            _, hotel, booking, error = self._resolve_link(link_id)
        except (ClientError, BotoCoreError):
            logger.exception("Failed to load booking data for link %s", link_id)
            return GuestBookingDataResult(
                success=False, message="An unexpected server error occurred."
            )

        if error is not None or hotel is None or booking is None:
            code = error or ErrorCode.LINK_TARGET_MISSING
            return GuestBookingDataResult(success=False, message=ERROR_MESSAGES[code])

        return GuestBookingDataResult(
            success=True,
            data=GuestBookingData(hotel=HotelPublic.from_hotel(hotel), booking=booking),
        )

    def submit_guest_booking(
        self, link_id: str, submission: GuestSubmission
    ) -> ActionResult:
        """Complete a booking with the guest's details.

        Confirms the booking and consumes the link in one conditional
        transaction, then sends a confirmation email on a best-effort basis.

        Args:
            link_id: Guest link identifier from the URL
            submission: Validated guest form

        Returns:
            ActionResult; at most one call per link ever succeeds
        """
        logger.info("Guest submission started for link %s", link_id)
        try:
            link, hotel, booking, error = self._resolve_link(link_id)
            if error is not None or link is None or hotel is None or booking is None:
                return _failure(error or ErrorCode.LINK_TARGET_MISSING)

            now = utc_now()
            committed = self.db.transact_write(
                self._completion_items(link, submission, now.isoformat())
            )
            if not committed:
                return self._explain_rejected_completion(link)
        except (ClientError, BotoCoreError) as e:
            logger.exception("Guest submission failed for link %s", link_id)
            log_booking_operation(
                logger, "submit_guest_booking", link_id=link_id, error=str(e)
            )
            return ActionResult(
                success=False,
                message="An unexpected error occurred while submitting your booking.",
            )

        log_booking_operation(
            logger,
            "submit_guest_booking",
            hotel_id=hotel.hotel_id,
            booking_id=booking.booking_id,
            link_id=link_id,
            status=BookingStatus.CONFIRMED.value,
        )

        self._send_confirmation(hotel, booking, submission)
        return ActionResult(success=True, message="Booking completed successfully!")

    def _completion_items(
        self, link: GuestLink, submission: GuestSubmission, now: str
    ) -> list[dict[str, Any]]:
        """Transaction confirming the booking and consuming the link.

        The link update only applies while ``is_completed`` is still false,
        and the booking update only while the booking is not cancelled. If
        either condition fails nothing is written.
        """
        guest_details = GuestDetails(
            first_name=submission.first_name,
            last_name=submission.last_name,
            email=str(submission.email),
            phone=submission.phone,
        )
        assignments = [
            "#s = :confirmed",
            "guest_details = :details",
            "guest_name = :name",
            "updated_at = :now",
        ]
        values: dict[str, Any] = {
            ":confirmed": BookingStatus.CONFIRMED.value,
            ":cancelled": BookingStatus.CANCELLED.value,
            ":details": guest_details.model_dump(),
            ":name": submission.full_name,
            ":now": now,
        }
        if submission.document_url is not None:
            assignments.append("document_url = :doc")
            values[":doc"] = str(submission.document_url)
        if submission.payment_proof_url is not None:
            assignments.append("payment_proof_url = :proof")
            values[":proof"] = str(submission.payment_proof_url)

        return [
            {
                "Update": {
                    "TableName": self.db.table_name(self.BOOKINGS_TABLE),
                    "Key": {"booking_id": {"S": link.booking_id}},
                    "UpdateExpression": "SET " + ", ".join(assignments),
                    "ConditionExpression": "attribute_exists(booking_id) AND #s <> :cancelled",
                    "ExpressionAttributeNames": {"#s": "status"},
                    "ExpressionAttributeValues": {
                        k: _serializer.serialize(to_dynamodb_value(v))
                        for k, v in values.items()
                    },
                }
            },
            {
                "Update": {
                    "TableName": self.db.table_name(self.LINKS_TABLE),
                    "Key": {"link_id": {"S": link.link_id}},
                    "UpdateExpression": "SET is_completed = :true, completed_at = :now",
                    "ConditionExpression": "attribute_exists(link_id) AND is_completed = :false",
                    "ExpressionAttributeValues": {
                        ":true": {"BOOL": True},
                        ":false": {"BOOL": False},
                        ":now": {"S": now},
                    },
                }
            },
        ]

    def _explain_rejected_completion(self, link: GuestLink) -> ActionResult:
        """Work out why the completion transaction was cancelled."""
        current = self._get_link(link.link_id, consistent_read=True)
        if current is None:
            code = ErrorCode.LINK_INVALID
        elif current.is_completed:
            code = ErrorCode.LINK_COMPLETED
        else:
            booking = self.get_booking(link.booking_id)
            if booking is not None and booking.status == BookingStatus.CANCELLED:
                code = ErrorCode.BOOKING_CANCELLED
            else:
                code = ErrorCode.PERSISTENCE

        log_booking_operation(
            logger,
            "submit_guest_booking",
            booking_id=link.booking_id,
            link_id=link.link_id,
            error=f"transaction rejected ({code.value})",
        )
        return _failure(code)

    def _send_confirmation(
        self, hotel: Hotel, booking: Booking, submission: GuestSubmission
    ) -> None:
        """Generate and send the confirmation email. Never raises."""
        hotel_name = hotel.name or "Your Hotel"
        try:
            email_input = ConfirmationEmailInput(
                guest_name=submission.full_name,
                hotel_name=hotel_name,
                check_in_date=format_long_date(booking.check_in),
                check_out_date=format_long_date(booking.check_out),
                booking_details=describe_booking(booking),
            )
            email = self.content.generate_confirmation_email(email_input)
            result = self.email.send_email(
                to=str(submission.email),
                subject=f"Your Booking at {hotel_name} is Confirmed!",
                html=email.html_content,
            )
        except Exception:
            # Booking stays confirmed; the email is a side effect only
            logger.exception(
                "Failed to generate or send confirmation email for booking %s",
                booking.booking_id,
            )
            return

        if result.success:
            logger.info("Confirmation email sent for booking %s", booking.booking_id)
        else:
            logger.warning(
                "Confirmation email not delivered for booking %s: %s",
                booking.booking_id,
                result.message,
            )
