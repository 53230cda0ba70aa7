"""Guest form endpoint models."""

from portal_shared.models import ActionResult


class GuestSubmitResponse(ActionResult):
    """Outcome of a guest submission.

    On success ``redirect_to`` points at the thank-you page of the link.
    """

    redirect_to: str | None = None
