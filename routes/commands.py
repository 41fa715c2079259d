"""
Command API routes.

Form submission boundary: `command` (text) plus `products` (JSON-encoded
snapshot from page load). Responds with {updatedProduct} or
{error, code, stack} and a failure status.
"""

import json
import traceback
from fastapi import APIRouter, Depends, Form
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
import structlog

from config import settings
from models.command import CommandRequest, CommandErrorResponse
from models.product import UpdatedProductResponse
from services.command_service import CommandService
from routes.dependencies import get_command_service
from exceptions import AppError, ValidationError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """
    Convert exception to the command error format.

    Also used for errors raised by the route's dependencies, so the traceback
    comes from the exception itself. Diagnostics (`stack`) only cross the
    boundary in debug mode; the full detail always goes to the log.
    """
    stack = None
    if settings.debug:
        stack = "".join(traceback.format_exception(type(e), e, e.__traceback__))

    if isinstance(e, AppError):
        logger.warning(
            "command_failed",
            code=e.code,
            error=e.message,
            details=e.details
        )
        body = CommandErrorResponse(error=e.message, code=e.code, stack=stack)
        return JSONResponse(status_code=e.status_code, content=body.to_wire())

    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    body = CommandErrorResponse(
        error=str(e) if settings.debug else "An unexpected error occurred",
        code="INTERNAL_ERROR",
        stack=stack
    )
    return JSONResponse(status_code=500, content=body.to_wire())


def parse_command_form(command: str, products: str) -> CommandRequest:
    """
    Decode the submitted form into a CommandRequest.

    Raises:
        ValidationError: Products is not a JSON array or a field is invalid
    """
    try:
        snapshot = json.loads(products)
    except json.JSONDecodeError as e:
        raise ValidationError(
            "products must be a JSON-encoded array",
            code="INVALID_PRODUCTS",
            details={"error": str(e)}
        ) from e

    if not isinstance(snapshot, list):
        raise ValidationError("products must be a JSON-encoded array", code="INVALID_PRODUCTS")

    try:
        return CommandRequest(command=command, products=snapshot)
    except PydanticValidationError as e:
        raise ValidationError(
            "Invalid command submission",
            details={"errors": [
                {"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()
            ]}
        ) from e


# ===================
# ROUTES
# ===================

@router.post("", response_model=UpdatedProductResponse)
def run_command(
    command: str = Form(..., description="Free-text instruction"),
    products: str = Form("[]", description="JSON-encoded catalog snapshot"),
    service: CommandService = Depends(get_command_service)
):
    """
    Interpret a command and apply the title/description update.

    Raises:
        404: Model named a product not in the snapshot
        409: Matched product changed since page load
        422: Invalid form input, or Shopify rejected the update
        502: Model reply was not JSON or had the wrong shape
        503: Shopify or the model provider failed
    """
    try:
        request = parse_command_form(command, products)
        updated = service.execute(request.command, request.products)
        return UpdatedProductResponse(updated_product=updated)

    except Exception as e:
        return handle_error(e)
