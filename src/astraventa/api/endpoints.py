import traceback
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, BackgroundTasks, Header, Request
from fastapi.responses import Response

from astraventa.api.cors import json_response, preflight_response
from astraventa.api.models.endpoint_requests import (
    InvalidRequestError,
    parse_chat_request,
    parse_contact_request,
)
from astraventa.api.services.error_handling import ErrorResponseBuilder
from astraventa.core.logging import logger
from astraventa.core.router import RequestCancelledError

router = APIRouter()

# Registered for every method so that unsupported ones still get CORS headers
RELAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def _read_json(request: Request) -> Any:
    """Decode the request body; raises InvalidRequestError on malformed JSON."""
    try:
        return await request.json()
    except ValueError as e:
        raise InvalidRequestError("Invalid JSON") from e


@router.api_route("/chat-ai", methods=RELAY_METHODS)
async def chat_ai(
    request: Request,
    background_tasks: BackgroundTasks,
    x_client_id: Optional[str] = Header(None),
) -> Response:
    origin = request.app.state.config.cors_origin

    if request.method == "OPTIONS":
        return preflight_response(origin)
    if request.method != "POST":
        return ErrorResponseBuilder.method_not_allowed(origin)

    try:
        chat_request = parse_chat_request(await _read_json(request))
    except InvalidRequestError as e:
        logger.info(f"Rejected chat request: {e.message}")
        return ErrorResponseBuilder.bad_request(e.message, origin)

    try:
        result = await request.app.state.chat_service.handle(
            chat_request,
            client_id=x_client_id,
            is_disconnected=request.is_disconnected,
            background_tasks=background_tasks,
        )
    except RequestCancelledError:
        return ErrorResponseBuilder.client_closed_request(origin)
    except Exception as e:
        logger.error(f"Unexpected error processing chat request: {e}")
        logger.error(traceback.format_exc())
        return ErrorResponseBuilder.internal_error("Unexpected error", origin)

    return result.to_response(origin)


@router.api_route("/send-contact-email", methods=RELAY_METHODS)
async def send_contact_email(request: Request) -> Response:
    origin = request.app.state.config.cors_origin

    if request.method == "OPTIONS":
        return preflight_response(origin)
    if request.method != "POST":
        return ErrorResponseBuilder.method_not_allowed(origin)

    try:
        submission = parse_contact_request(await _read_json(request))
    except InvalidRequestError as e:
        return ErrorResponseBuilder.bad_request(e.message, origin)

    try:
        result = await request.app.state.contact_service.relay(submission)
    except Exception as e:
        logger.error(f"Unexpected error relaying contact email: {e}")
        logger.error(traceback.format_exc())
        return ErrorResponseBuilder.internal_error("Unexpected error", origin)

    return result.to_response(origin)


@router.get("/health")
async def health_check(request: Request) -> Response:
    """Health check endpoint"""
    state = request.app.state
    body: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "providers": [
            {
                "name": provider.name,
                "model_identifier": provider.model_identifier,
                "configured": provider.is_configured(),
            }
            for provider in state.chat_router.providers
        ],
        "email_configured": state.config.email_configured,
        "store_configured": state.config.store_configured,
    }
    return json_response(body, 200, origin=state.config.cors_origin)
