from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, field_validator

class MessageSender(str, Enum):
    USER = "user"
    AGENT = "agent"

class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    sender: MessageSender
    text: str

    @field_validator("sender", mode="before")
    @classmethod
    def accept_bot_alias(cls, value: Any) -> Any:
        # The web client labels assistant messages "bot"
        if isinstance(value, str) and value.strip().lower() == "bot":
            return MessageSender.AGENT
        return value

    @property
    def is_agent(self) -> bool:
        return self.sender == MessageSender.AGENT
