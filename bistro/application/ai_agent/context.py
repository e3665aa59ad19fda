from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from bistro.core.config import settings
from bistro.domain.conversation.value_objects import Message, MessageSender

ROLE_LABELS = {
    MessageSender.USER: "User",
    MessageSender.AGENT: "Agent",
}

@dataclass(frozen=True)
class ConversationContext:
    today: date
    transcript: str
    utterance: str

def restaurant_today(tz_name: Optional[str] = None) -> date:
    return datetime.now(ZoneInfo(tz_name or settings.RESTAURANT_TIMEZONE)).date()

def linearize(history: Sequence[Message]) -> str:
    return "\n".join(f"{ROLE_LABELS[msg.sender]}: {msg.text}" for msg in history)

def build_context(history: Sequence[Message], utterance: str, today: date) -> ConversationContext:
    """
    Turns the client-held history into a labelled transcript anchored on today.

    Clients usually append the utterance to their history before sending it,
    so a trailing identical user message is left out of the transcript.
    """
    prior: List[Message] = list(history)
    if prior and prior[-1].sender == MessageSender.USER and prior[-1].text.strip() == utterance.strip():
        prior = prior[:-1]

    return ConversationContext(
        today=today,
        transcript=linearize(prior),
        utterance=utterance.strip(),
    )
