"""NiceGUI interface - thin visualization layer for the session window.

Responsibilities:
    - Sidebar with the chat, inspect and ingest tabs
    - Chat transcript with typing indicator and send control
    - Vector store table (ID, content, metadata) or placeholder
    - Folder chooser with the upload status banner

Contains no orchestration logic. Reads and drives a SessionController.
"""
