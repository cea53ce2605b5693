"""Chat relay endpoint.

Receives the widget's ChatRequest, forwards the message to the completion
API and answers with ``{content}``. Failures are turned into ``{error}``
bodies by the exception handlers registered in the app factory.
"""

import logging

from fastapi import APIRouter, Depends

from orian.models.schemas import RelayReply, RelayRequest
from orian.relay.service import RelayService, get_relay_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=RelayReply)
async def relay_chat(
    request: RelayRequest,
    service: RelayService = Depends(get_relay_service),
) -> RelayReply:
    """Relay one message to the completion API.

    Args:
        request: Incoming chat payload; only ``message`` is used.
        service: Relay service built for this invocation.

    Returns:
        RelayReply with the generated text.

    Raises:
        UpstreamError: Completion call failed (answered as 500).
    """
    logger.info(
        f"Relaying message for conversation {request.conversation_id or 'unknown'}"
    )
    content = await service.handle(request.message)
    return RelayReply(content=content)
