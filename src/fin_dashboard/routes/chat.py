import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from fin_dashboard.chat.constants import CHAT_SETTINGS
from fin_dashboard.chat.dto import ChatValidationError
from fin_dashboard.routes.dto import ChatRequest, ChatResponse, ErrorResponse

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_chat_request(request: Request) -> ChatRequest:
    """
    Parse the chat request body.

    Raises:
        ChatValidationError: if the body is not JSON or ``message`` is not a string
    """
    try:
        payload = await request.json()
        return ChatRequest.model_validate(payload)
    except (ValueError, ValidationError) as e:
        logger.warning(f"Rejected chat request body: {str(e)}")
        raise ChatValidationError(CHAT_SETTINGS.EMPTY_MESSAGE_ERROR) from e


@router.get("")
def chat_status():
    return {"status": "ok"}


@router.post(
    "",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ChatRequest.model_json_schema()}},
        },
    },
)
async def chat(request: Request):
    """
    Relay one user message to the finance assistant.

    Flow:
    1. Reject an unusable body or empty message without contacting the model
    2. Send the message with the fixed system prompt
    3. Return the reply verbatim, or a fallback error message
    """
    chat_relay = request.app.state.chat_relay
    try:
        body = await _read_chat_request(request)
        result = await chat_relay.reply(body.message)
    except ChatValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    if not result.success:
        logger.error("Chat relay failed: %s", result.error_message)
        return JSONResponse(
            status_code=502,
            content={"error": result.response, "retryable": result.retryable},
        )

    return ChatResponse(response=result.response)


@router.api_route("", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
def chat_method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
