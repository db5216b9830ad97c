"""Turn Owncast webhook events into ntfy notifications.

Each recognised :class:`EventType` has one renderer below. Renderers receive
the event data and the emphasis marker (``"**"`` in markdown mode, otherwise
empty) and return the message, optional title and icon tags.
"""

from typing import Callable, NamedTuple
import re
import html2text
from owncast_ntfy.config import Settings
from owncast_ntfy.errors import IncompleteEvent
from owncast_ntfy.models import EventData, EventType, NtfyNotification, OwncastEvent


# html2text escapes markdown-looking line starts ("1.", "-", "+") and the
# backslashes in front of them; chat text goes out verbatim
MD_ESCAPE_RE = re.compile(r"\\([\\.+\-])")


class Rendered(NamedTuple):
    message: str
    tags: list[str]
    title: str | None = None


def html_to_text(html: str) -> str:
    """Strip chat markup (bold, emoji images, links) down to plain text."""
    h = html2text.HTML2Text()
    h.ignore_emphasis = True
    h.ignore_images = True
    h.ignore_links = True
    h.body_width = 0
    return MD_ESCAPE_RE.sub(r"\1", h.handle(html or "")).strip()


def _chat(data: EventData, b: str) -> Rendered:
    return Rendered(
        message=html_to_text(data.body),
        title=f"{data.user.display_name} said",
        tags=["speech_balloon", "message"],
    )


def _name_change(data: EventData, b: str) -> Rendered:
    if not data.user.previous_names:
        raise IncompleteEvent("NAME_CHANGE event carries no previous names")
    old_name = data.user.previous_names[-1]
    return Rendered(
        message=f"{b}{old_name}{b} changed its name to {b}{data.new_name}{b}",
        tags=["label", "name_change"],
    )


def _user_joined(data: EventData, b: str) -> Rendered:
    return Rendered(
        message=f"{b}{data.user.display_name}{b} joined stream",
        tags=["sunglasses", "user_join"],
    )


def _user_parted(data: EventData, b: str) -> Rendered:
    return Rendered(
        message=f"{b}{data.user.display_name}{b} left stream",
        tags=["dash", "user_leave"],
    )


def _stream_started(data: EventData, b: str) -> Rendered:
    return Rendered(
        message=f"{b}{data.stream_title}{b} started streaming",
        tags=["green_circle", "stream_start"],
    )


def _stream_stopped(data: EventData, b: str) -> Rendered:
    return Rendered(
        message=f"{b}{data.stream_title}{b} stopped streaming",
        tags=["x", "stream_stop"],
    )


def _stream_title_updated(data: EventData, b: str) -> Rendered:
    return Rendered(
        message=f"Stream title updated to {b}{data.stream_title}{b}",
        tags=["new", "stream_title_update"],
    )


RENDERERS: dict[EventType, Callable[[EventData, str], Rendered]] = {
    EventType.CHAT: _chat,
    EventType.NAME_CHANGE: _name_change,
    EventType.USER_JOINED: _user_joined,
    EventType.USER_PARTED: _user_parted,
    EventType.STREAM_STARTED: _stream_started,
    EventType.STREAM_STOPPED: _stream_stopped,
    EventType.STREAM_TITLE_UPDATED: _stream_title_updated,
}


def build_notification(event: OwncastEvent, settings: Settings) -> NtfyNotification:
    """
    Translate one Owncast event.

    Raises UnrecognizedEventType for tags outside EventType and
    IncompleteEvent when the event lacks the data its message needs.
    """
    event_type = EventType.parse(event.type)
    bold = "**" if settings.markdown else ""
    rendered = RENDERERS[event_type](event.event_data, bold)
    return NtfyNotification(
        topic=settings.ntfy_topic,
        message=rendered.message,
        title=rendered.title,
        tags=rendered.tags,
    )
