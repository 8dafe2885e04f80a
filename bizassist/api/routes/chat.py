"""
Chat endpoint

Runs one user message through the chat pipeline. The handler is a plain
function so FastAPI executes it in the threadpool; pipeline calls block.
"""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from bizassist.agents.pipeline import ChatPipeline
from bizassist.api.deps import get_pipeline
from bizassist.api.schemas.chat import ChatRequest, ChatResponse, ErrorResponse

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def chat(request: ChatRequest, pipeline: ChatPipeline = Depends(get_pipeline)) -> ChatResponse:
    """
    Send a message to the assistant

    An absent or unknown conversationId starts a new conversation; the id in
    the response is the one to send with follow-up messages.
    """
    try:
        result = pipeline.process(request.message, request.conversation_id)
    except Exception:
        logger.exception("Error processing chat message")
        raise HTTPException(status_code=500, detail="Error processing request")

    return ChatResponse(
        message=result.message,
        intent=result.intent,
        entities=result.entities,
        conversation_id=result.conversation_id,
    )
