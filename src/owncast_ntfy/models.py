from enum import Enum
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from owncast_ntfy.errors import UnrecognizedEventType


class EventType(str, Enum):
    CHAT = "CHAT"
    NAME_CHANGE = "NAME_CHANGE"
    USER_JOINED = "USER_JOINED"
    USER_PARTED = "USER_PARTED"
    STREAM_STARTED = "STREAM_STARTED"
    STREAM_STOPPED = "STREAM_STOPPED"
    STREAM_TITLE_UPDATED = "STREAM_TITLE_UPDATED"

    @classmethod
    def parse(cls, tag: str) -> "EventType":
        try:
            return cls(tag)
        except ValueError:
            raise UnrecognizedEventType(tag) from None


class OwncastModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info: ValidationInfo):
        # Owncast sends null for empty values; optional fields fall back to their default
        field = cls.model_fields[info.field_name]
        if value is None and not field.is_required():
            return field.get_default(call_default_factory=True)
        return value


class OwncastUser(OwncastModel):
    display_name: str = Field(default="", alias="displayName")
    previous_names: list[str] = Field(default_factory=list, alias="previousNames")


class EventData(OwncastModel):
    body: str = ""
    user: OwncastUser = Field(default_factory=OwncastUser)
    new_name: str = Field(default="", alias="newName")
    stream_title: str = Field(default="", alias="streamTitle")
    summary: str = ""


class OwncastEvent(OwncastModel):
    """Webhook payload as posted by Owncast."""

    type: str
    # Owncast sends "eventData"; older builds capitalised the key
    event_data: EventData = Field(
        default_factory=EventData,
        validation_alias=AliasChoices("eventData", "EventData", "event_data"),
    )


class NtfyNotification(BaseModel):
    """JSON body understood by ntfy's publish-as-JSON endpoint."""

    topic: str
    message: str
    title: str | None = None
    tags: list[str] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)
