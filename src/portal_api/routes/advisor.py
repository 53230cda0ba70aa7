"""AI security policy advisor."""

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends

from portal_api.dependencies import get_content_generator
from portal_shared.models import SecurityPolicyInput, SecurityPolicyOutput
from portal_shared.models.errors import ErrorCode, PortalError
from portal_shared.services.content_generator import (
    ContentGenerationError,
    ContentGenerator,
)
from portal_shared.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/advisor", tags=["advisor"])


@router.post(
    "/security-policy",
    summary="Recommend security policies",
    description="""
Generate security policy recommendations for a hotel from a description of
the property, its current measures and the threats it worries about.
""",
    response_model=SecurityPolicyOutput,
    responses={
        502: {"description": "Language model returned no usable text"},
    },
)
async def recommend_security_policy(
    body: SecurityPolicyInput,
    generator: ContentGenerator = Depends(get_content_generator),
) -> SecurityPolicyOutput:
    try:
        return generator.generate_security_policy(body)
    except (ContentGenerationError, ClientError, BotoCoreError) as e:
        logger.error("Security policy generation failed for %s: %s", body.hotel_name, e)
        raise PortalError(ErrorCode.CONTENT_GENERATION) from e
