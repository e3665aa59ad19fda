import asyncio
import json
import logging
import re
from typing import Any, Optional

from langchain_core.runnables import RunnableConfig
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bistro.core.config import settings
from bistro.application.ai_agent.context import build_context
from bistro.application.ai_agent.prompts import EXTRACTION_PROMPT
from bistro.application.ai_agent.state import TurnState
from bistro.domain.booking.value_objects import BookingIntent, BookingSnapshot

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json|JSON)?")

class ExtractionError(Exception):
    pass

class ExtractionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    booking_details: BookingSnapshot = Field(alias="bookingDetails")
    intent: BookingIntent = BookingIntent.BOOKING_REQUEST

    @field_validator("intent", mode="before")
    @classmethod
    def fail_safe_intent(cls, value: Any) -> BookingIntent:
        return BookingIntent.parse(value)

def strip_wrappers(raw: str) -> str:
    """Removes markdown fences and any prose around the outermost JSON object."""
    text = _CODE_FENCE.sub("", raw).strip()
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]

def parse_extraction(raw: str) -> ExtractionResult:
    text = strip_wrappers(raw)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Extraction reply is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ExtractionError(f"Extraction reply must be a JSON object, got {type(payload).__name__}")

    try:
        return ExtractionResult.model_validate(payload)
    except ValidationError as e:
        raise ExtractionError(f"Extraction reply violates the booking schema: {e}") from e

def _message_text(content: Any) -> str:
    # Some providers return a list of content blocks instead of a string
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    raise ExtractionError(f"Unsupported extraction reply content: {type(content).__name__}")

async def extract_booking(llm: Any, state: TurnState, timeout: Optional[float] = None) -> ExtractionResult:
    context = build_context(state.get("history", []), state["utterance"], state["today"])
    messages = EXTRACTION_PROMPT.format_messages(
        restaurant_name=settings.RESTAURANT_NAME,
        today=context.today.isoformat(),
        transcript=context.transcript or "(no previous messages)",
        utterance=context.utterance,
    )

    try:
        response = await asyncio.wait_for(
            llm.ainvoke(messages),
            timeout=timeout or settings.EXTRACTION_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as e:
        raise ExtractionError("Extraction timed out") from e
    except ExtractionError:
        raise
    except Exception as e:
        raise ExtractionError(f"Extraction call failed: {e}") from e

    return parse_extraction(_message_text(response.content))

async def extraction_node(state: TurnState, config: RunnableConfig) -> dict:
    llm = config["configurable"]["llm"]
    try:
        result = await extract_booking(llm, state)
    except ExtractionError as e:
        logger.error(f"Extraction failed: {e}")
        raise

    return {
        "reply": result.reply,
        "extracted_details": result.booking_details,
        "extracted_intent": result.intent,
    }
