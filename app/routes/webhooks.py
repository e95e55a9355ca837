import json
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from starlette.responses import JSONResponse
from svix.webhooks import Webhook, WebhookVerificationError

from app.config import settings
from app.exceptions.custom_exceptions import BadRequest
from app.schemas.user import WebhookUserData
from app.services.profile_service import ProfileService
from app.utils import constants
from app.utils.api_response import APIResponse

router = APIRouter()

logger = logging.getLogger(__name__)

PROFILE_EVENTS = ("user.created", "user.updated")


def get_webhook_verifier() -> Webhook:
    return Webhook(settings.CLERK_WEBHOOK_SECRET)


@router.post("", status_code=status.HTTP_200_OK, include_in_schema=False)
async def clerk_webhook_handler(
    request: Request,
    verifier: Annotated[Webhook, Depends(get_webhook_verifier)],
    service: Annotated[ProfileService, Depends(ProfileService.with_dependency)],
) -> JSONResponse:
    """
    Handle Clerk webhook events for profile management.

    Currently supports:
    - user.created / user.updated: creates or refreshes the user's profile row
    """
    payload = await request.body()

    try:
        verifier.verify(payload, request.headers)
    except WebhookVerificationError as e:
        raise BadRequest(
            reason=constants.INVALID_WEBHOOK_SIGNATURE,
            log_message=f"Webhook verification failed: {e}",
        ) from e

    try:
        msg = json.loads(payload)
    except ValueError as e:
        raise BadRequest(
            reason=constants.INVALID_WEBHOOK_PAYLOAD,
            log_message=f"Webhook body is not valid JSON: {e}",
        ) from e

    if not isinstance(msg, dict):
        raise BadRequest(
            reason=constants.INVALID_WEBHOOK_PAYLOAD,
            log_message="Webhook body is not a JSON object",
        )

    event_type = msg.get("type")
    logger.info(f"Processing webhook event: {event_type}")

    if event_type not in PROFILE_EVENTS:
        logger.info(f"Unhandled webhook event type: {event_type}")
        return APIResponse.success(message=constants.WEBHOOK_EVENT_IGNORED)

    await service.sync_from_webhook(WebhookUserData(**msg.get("data", {})))

    return APIResponse.success(message=constants.PROFILE_SYNCED_SUCCESSFULLY)
