"""Backend access for the session client.

Responsibilities:
    - Environment-driven configuration (base URL, timeouts, UI binding)
    - Async HTTP calls to the chat, inspection and ingestion endpoints
    - Mapping transport and server failures to a single BackendError

Contains no session state. The session components own what to do with
replies and failures.
"""

from src.client.backend import BackendClient, BackendError
from src.client.config import ClientConfig, get_client_config

__all__ = ["BackendClient", "BackendError", "ClientConfig", "get_client_config"]
