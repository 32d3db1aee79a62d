"""Conversation state and its transitions.

The chat page owns one ``ConversationState`` and replaces it on every event
via ``transition``. States are immutable, so the machine can be exercised
without a browser.

Phases:
    IDLE -> STREAMING on Submitted (non-blank text only)
    STREAMING -> STREAMING on FragmentReceived (text appended to the draft)
    STREAMING -> FINALIZING on StreamEnded (clean end or transport error)
    FINALIZING -> IDLE on DraftCommitted (draft moved into history if non-empty)
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from streamchat.models.schemas import ChatMessage, Role


class ClientPhase(str, Enum):
    """Lifecycle phase of the chat client."""

    IDLE = "idle"
    STREAMING = "streaming"
    FINALIZING = "finalizing"


class ConversationState(BaseModel):
    """Snapshot of a chat session.

    Attributes:
        history: Committed messages, oldest first.
        draft: Assistant text received so far for the request in flight.
        phase: Current lifecycle phase.
    """

    model_config = ConfigDict(frozen=True)

    history: tuple[ChatMessage, ...] = ()
    draft: str = ""
    phase: ClientPhase = ClientPhase.IDLE

    @property
    def is_busy(self) -> bool:
        """Whether a request is in flight and submits are ignored."""
        return self.phase is not ClientPhase.IDLE


class Submitted(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class FragmentReceived(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class StreamEnded(BaseModel):
    model_config = ConfigDict(frozen=True)


class DraftCommitted(BaseModel):
    model_config = ConfigDict(frozen=True)


class ConversationReset(BaseModel):
    model_config = ConfigDict(frozen=True)


Event = Submitted | FragmentReceived | StreamEnded | DraftCommitted | ConversationReset


def can_submit(state: ConversationState, text: str) -> bool:
    """Check whether a submit of ``text`` would be accepted."""
    return not state.is_busy and bool(text.strip())


def transition(state: ConversationState, event: Event) -> ConversationState:
    """Apply one event to a conversation state.

    Events that are not valid in the current phase return ``state`` unchanged.

    Args:
        state: Current state.
        event: The event to apply.

    Returns:
        The resulting state.
    """
    if isinstance(event, Submitted) and can_submit(state, event.text):
        message = ChatMessage(role=Role.USER, content=event.text)
        return state.model_copy(
            update={
                "history": (*state.history, message),
                "draft": "",
                "phase": ClientPhase.STREAMING,
            }
        )
    if isinstance(event, FragmentReceived) and state.phase is ClientPhase.STREAMING:
        return state.model_copy(update={"draft": state.draft + event.text})
    if isinstance(event, StreamEnded) and state.phase is ClientPhase.STREAMING:
        return state.model_copy(update={"phase": ClientPhase.FINALIZING})
    if isinstance(event, DraftCommitted) and state.phase is ClientPhase.FINALIZING:
        history = state.history
        if state.draft:
            history = (*history, ChatMessage(role=Role.ASSISTANT, content=state.draft))
        return state.model_copy(
            update={"history": history, "draft": "", "phase": ClientPhase.IDLE}
        )
    if isinstance(event, ConversationReset) and not state.is_busy:
        return ConversationState()
    return state


def visible_messages(state: ConversationState) -> list[ChatMessage]:
    """Messages to render: history plus the live draft while a request runs."""
    messages = list(state.history)
    if state.draft and state.is_busy:
        messages.append(ChatMessage(role=Role.ASSISTANT, content=state.draft))
    return messages
