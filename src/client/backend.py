"""HTTP client for the code-intelligence backend.

Wraps the three endpoints the session talks to:

    - POST /api/chat: plain-text question in, plain-text answer out
    - GET /api/vectors/content: JSON dump of the vector store
    - POST /api/ingest/upload: multipart folder upload, plain-text status out

Every transport or server failure is converted to ``BackendError`` so the
session components only ever catch one exception type.
"""

import logging
from collections.abc import Sequence
from types import TracebackType

import httpx
from pydantic import ValidationError

from src.models.schemas import RecordSet, SelectedFile

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"
RECORDS_PATH = "/api/vectors/content"
UPLOAD_PATH = "/api/ingest/upload"
UPLOAD_FIELD = "files"


class BackendError(Exception):
    """Raised when a backend call fails.

    Attributes:
        description: Human-readable failure description shown to the user.
    """

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description


def _describe_status_error(error: httpx.HTTPStatusError) -> str:
    body = error.response.text.strip()
    if body:
        return body
    return f"Request failed with status code {error.response.status_code}"


class BackendClient:
    """Async client for the backend endpoints.

    Args:
        base_url: Backend root URL.
        timeout: Timeout in seconds applied to every request.
        transport: Optional httpx transport (used by tests to route
            requests to an in-process app).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{method} {path} returned HTTP {e.response.status_code}")
            raise BackendError(_describe_status_error(e)) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise BackendError(f"Connection failed: {e}") from e
        return response

    async def send_query(self, text: str) -> str:
        """Ask the reasoning endpoint a question.

        Args:
            text: The raw query, sent as the plain-text request body.

        Returns:
            The agent's reply, verbatim.

        Raises:
            BackendError: If the request fails.
        """
        response = await self._request(
            "POST",
            CHAT_PATH,
            content=text.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )
        return response.text

    async def fetch_records(self) -> RecordSet:
        """Fetch the current vector store contents.

        Returns:
            RecordSet snapshot; empty when the store holds no data.

        Raises:
            BackendError: If the request fails or the arrays are misaligned.
        """
        response = await self._request("GET", RECORDS_PATH)
        try:
            payload = response.json()
        except ValueError:
            # Plain-text body such as "No collections found."
            logger.info(f"Inspection endpoint returned text: {response.text[:80]!r}")
            return RecordSet()

        try:
            return RecordSet.from_payload(payload)
        except ValidationError as e:
            raise BackendError(f"Malformed inspection payload: {e.errors()[0]['msg']}") from e

    async def upload_batch(self, files: Sequence[SelectedFile]) -> str:
        """Upload a folder selection for ingestion.

        Args:
            files: Selected files; each becomes one repeated ``files`` entry
                whose filename is the nested relative path.

        Returns:
            The backend status message, verbatim.

        Raises:
            BackendError: If the request fails.
        """
        multipart = [
            (UPLOAD_FIELD, (f.relative_path, f.content, f.content_type)) for f in files
        ]
        response = await self._request("POST", UPLOAD_PATH, files=multipart)
        return response.text
