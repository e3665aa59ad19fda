import logging
import re

from bistro.application.ai_agent.state import TurnState
from bistro.domain.booking.value_objects import BookingIntent, BookingSnapshot

logger = logging.getLogger(__name__)

AFFIRMATIONS = re.compile(
    r"\b(?:yes|yeah|yep|yup|confirm|confirmed|go ahead|book it|please do|do it"
    r"|sounds good|looks good|that['’]?s right)\b",
    re.IGNORECASE,
)

# Hedge-prone words count only as the whole reply ("Sure!", "ok, thanks")
SHORT_AFFIRMATIONS = re.compile(
    r"^\W*(?:sure|ok|okay|perfect|correct|alright|all right)\b"
    r"[\s,.!]*(?:please|thanks|thank you)?[\s.!]*$",
    re.IGNORECASE,
)

LEADING_NEGATIONS = re.compile(r"^\s*(?:no|nope|nah|wait|hold on)\b", re.IGNORECASE)

NEGATORS = re.compile(r"^(?:not|never|no)$|n['’]t$", re.IGNORECASE)

# "no problem, go ahead" is still a yes
NON_NEGATING = re.compile(r"\bno\s+(?:problem|worries)\b", re.IGNORECASE)

NEGATION_WINDOW = 3

def _is_negated(text: str, start: int) -> bool:
    preceding = re.findall(r"[\w'’]+", text[:start])[-NEGATION_WINDOW:]
    return any(NEGATORS.search(word) for word in preceding)

def contains_affirmation(utterance: str) -> bool:
    if not utterance:
        return False
    text = NON_NEGATING.sub(" ", utterance)
    if LEADING_NEGATIONS.search(text):
        return False
    if SHORT_AFFIRMATIONS.search(text):
        return True
    return any(not _is_negated(text, match.start()) for match in AFFIRMATIONS.finditer(text))

def resolve_intent(details: BookingSnapshot, utterance: str) -> BookingIntent:
    """
    Collecting -> AwaitingConfirmation -> Confirmed.

    Recomputed from scratch every turn: confirmed needs every required slot
    and an explicit affirmation in the current utterance.
    """
    if not details.is_complete():
        return BookingIntent.BOOKING_REQUEST
    if contains_affirmation(utterance):
        return BookingIntent.CONFIRMED
    return BookingIntent.CONFIRMATION_REQUEST

def intent_node(state: TurnState) -> dict:
    previous = state.get("previous_details") or BookingSnapshot()
    extracted = state.get("extracted_details") or BookingSnapshot()
    details = previous.merge(extracted)

    intent = resolve_intent(details, state["utterance"])
    extracted_intent = state.get("extracted_intent")
    if extracted_intent is not None and extracted_intent != intent:
        logger.info(
            f"Overriding extracted intent {extracted_intent.value} with {intent.value} "
            f"(missing={details.missing_slots()})"
        )

    return {"booking_details": details, "intent": intent}
