"""CodeIntel session client - front end for a code-intelligence assistant.

Talks to a backend that answers questions about an ingested codebase,
exposes its vector store for inspection, and ingests uploaded projects.

Components:
    - client: Configuration and async HTTP access to the backend
    - session: Tab, chat, inspection and ingestion state orchestration
    - ui: NiceGUI session window
    - models: Pydantic data models
"""

__version__ = "0.1.0"
