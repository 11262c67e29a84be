"""Chat transcript and the single in-flight query to the reasoning endpoint."""

import logging

from src.client.backend import BackendClient, BackendError
from src.models.schemas import Message, Role

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome! Load a project to begin."


class ChatSession:
    """Manages the chat transcript for a user session.

    Attributes:
        messages: Append-only transcript, in insertion order.
        draft: Current text of the input field.
        pending: True while a query is awaiting its reply.
    """

    def __init__(self, backend: BackendClient, greeting: str | None = WELCOME_MESSAGE) -> None:
        self._backend = backend
        self.messages: list[Message] = []
        self.draft: str = ""
        self.pending: bool = False
        if greeting:
            self.messages.append(Message(role=Role.AGENT, content=greeting))

    @property
    def can_send(self) -> bool:
        """Whether the send control is enabled."""
        return not self.pending and bool(self.draft.strip())

    async def send_message(self, text: str | None = None) -> bool:
        """Send a query and append the exchange to the transcript.

        The input draft is cleared as soon as the user message is appended,
        whatever the outcome of the request. Failures are rendered as an
        agent message and never raised.

        Args:
            text: Query text. Defaults to the current draft.

        Returns:
            True if a request was issued, False if the call was a no-op
            (blank text, or a query already pending).
        """
        query = self.draft if text is None else text
        trimmed = query.strip()
        if not trimmed:
            return False
        if self.pending:
            logger.warning("Ignoring send while a query is still pending")
            return False

        self.messages.append(Message(role=Role.USER, content=trimmed))
        self.draft = ""
        self.pending = True
        logger.info(f"Sending chat query ({len(query)} chars)")

        try:
            reply = await self._backend.send_query(query)
        except BackendError as e:
            logger.warning(f"Chat query failed: {e.description}")
            self.messages.append(Message(role=Role.AGENT, content=f"Error: {e.description}"))
        else:
            self.messages.append(Message(role=Role.AGENT, content=reply))
        finally:
            self.pending = False
        return True
