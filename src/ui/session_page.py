"""NiceGUI session window: chat, vector store inspection and ingestion."""

import json
import logging

from nicegui import Client, ui

from src.client.config import get_client_config
from src.models.schemas import IngestPhase, Message, Role, Tab
from src.session.controller import SessionController
from src.session.ingest import FolderSelectionError

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<style>
    body { background: #0f172a; color: #e2e8f0; }

    .sidebar { background: #1e293b; border-right: 1px solid #334155; }
    .tab-btn { justify-content: flex-start; }
    .tab-active { background: rgba(59, 130, 246, 0.1) !important; color: #3b82f6 !important; }

    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-agent {
        background: #1e293b;
        border: 1px solid #334155;
        color: #e2e8f0;
        border-radius: 18px 18px 18px 4px;
        white-space: pre-wrap;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #64748b;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.1s; }
    .typing-dot:nth-child(3) { animation-delay: 0.2s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .banner-ok { background: rgba(16, 185, 129, 0.1); color: #34d399; }
    .banner-error { background: rgba(239, 68, 68, 0.1); color: #f87171; }
    .record-pre { white-space: pre-wrap; font-family: monospace; font-size: 12px; }
</style>
"""

TAB_LABELS = {
    Tab.CHAT: ("Chat", "send"),
    Tab.INSPECT: ("Inspect DB", "storage"),
    Tab.INGEST: ("Ingest", "folder_open"),
}

SIDEBAR_STATUS = "Online"

RECORD_COLUMNS = [
    {"name": "id", "label": "ID", "field": "id", "align": "left"},
    {"name": "document", "label": "Content", "field": "document", "align": "left"},
    {"name": "metadata", "label": "Metadata", "field": "metadata", "align": "left"},
]


def _state_signature(controller: SessionController) -> tuple:
    """Cheap fingerprint of everything the page renders."""
    inspection = controller.inspection
    return (
        controller.active_tab,
        len(controller.chat.messages),
        controller.chat.pending,
        id(inspection.records),
        inspection.loading,
        inspection.error,
        controller.ingest.status,
    )


@ui.page("/")
def session_page(client: Client) -> None:
    """Main session page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    controller = SessionController.from_config(config)

    tab_buttons: dict[Tab, ui.button] = {}
    content: ui.column
    messages_container: ui.column
    send_btn: ui.button
    last_signature: tuple = ()

    def render_message(msg: Message) -> None:
        is_user = msg.role is Role.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-agent"
        with ui.row().classes(f"w-full {align}"):
            ui.label(msg.content).classes(f"max-w-[75%] px-4 py-3 text-sm {bubble}")

    def render_chat() -> None:
        nonlocal messages_container, send_btn
        with ui.scroll_area().classes("flex-grow w-full"):
            messages_container = ui.column().classes("w-full gap-4 p-6")
        with ui.row().classes("w-full p-4 gap-3 items-center border-t border-slate-700"):
            (
                ui.input(placeholder="Ask a question about your code...")
                .bind_value(controller.chat, "draft")
                .props("outlined dense dark")
                .classes("flex-grow")
                .on("keydown.enter", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("unelevated")
        refresh_messages()

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for msg in controller.chat.messages:
                render_message(msg)
            if controller.chat.pending:
                with ui.row().classes("gap-1 ml-4"):
                    for _ in range(3):
                        ui.element("div").classes("typing-dot")
        send_btn.set_enabled(controller.chat.can_send)

    def render_inspection() -> None:
        inspection = controller.inspection
        with ui.row().classes("w-full items-center justify-between p-6"):
            ui.label("Inspection").classes("text-2xl font-bold")
            if inspection.loading:
                ui.label("Fetching...").classes("text-sm text-slate-400")

        if inspection.show_table:
            rows = [
                {
                    "id": row.id,
                    "document": row.document or "",
                    "metadata": json.dumps(row.metadata, indent=2),
                }
                for row in inspection.rows()
            ]
            ui.table(columns=RECORD_COLUMNS, rows=rows, row_key="id").props(
                "dark flat wrap-cells"
            ).classes("w-full record-pre")
        else:
            with ui.column().classes("w-full items-center p-8 text-slate-500"):
                ui.label(inspection.placeholder)
                if inspection.error:
                    ui.label(inspection.error).classes("text-red-400 mt-2")

    def render_ingest() -> None:
        ingest = controller.ingest
        with ui.column().classes("w-full h-full items-center justify-center p-8"):
            with ui.card().classes("max-w-md w-full items-center bg-slate-800"):
                ui.icon("folder_open").classes("text-5xl text-blue-500")
                ui.label("Upload Project").classes("text-2xl font-bold")
                ui.label("Select a local folder to ingest code into the Knowledge Graph.").classes(
                    "text-sm text-slate-400"
                )
                folder_input = ui.input(placeholder="/path/to/project").props("outlined dense dark").classes("w-full")
                uploading = ingest.status.phase is IngestPhase.UPLOADING
                choose_btn = ui.button(
                    "Uploading..." if uploading else "Choose Folder",
                    on_click=lambda: choose_folder(folder_input.value),
                ).classes("w-full")
                choose_btn.set_enabled(ingest.can_choose)

                if ingest.status.phase is not IngestPhase.IDLE and not uploading:
                    css = "banner-error" if ingest.status.phase is IngestPhase.FAILED else "banner-ok"
                    ui.label(ingest.status.message).classes(f"w-full mt-4 p-3 rounded-lg text-sm {css}")

    def render_content() -> None:
        content.clear()
        for tab, button in tab_buttons.items():
            if tab is controller.active_tab:
                button.classes(add="tab-active")
            else:
                button.classes(remove="tab-active")
        with content:
            if controller.active_tab is Tab.CHAT:
                render_chat()
            elif controller.active_tab is Tab.INSPECT:
                render_inspection()
            else:
                render_ingest()

    def sync() -> None:
        nonlocal last_signature
        signature = _state_signature(controller)
        if signature == last_signature:
            if controller.active_tab is Tab.CHAT:
                send_btn.set_enabled(controller.chat.can_send)
            return
        tab_changed = not last_signature or signature[0] != last_signature[0]
        last_signature = signature
        if controller.active_tab is Tab.CHAT and not tab_changed:
            refresh_messages()
        else:
            render_content()

    def switch_tab(tab: Tab) -> None:
        nonlocal last_signature
        controller.switch_tab(tab)
        render_content()
        last_signature = _state_signature(controller)

    async def send_message() -> None:
        if not controller.chat.can_send:
            return
        await controller.send_message()
        sync()

    async def choose_folder(path: str | None) -> None:
        if not path:
            return
        try:
            await controller.select_folder(path)
        except FolderSelectionError as e:
            ui.notify(str(e), type="negative")
        sync()

    async def close_session() -> None:
        await controller.close()

    # === UI Layout ===
    with ui.row().classes("w-full h-screen gap-0 no-wrap"):
        with ui.column().classes("w-64 h-full sidebar p-4 gap-2"):
            with ui.row().classes("items-center gap-2 mb-4"):
                ui.icon("terminal").classes("text-2xl text-blue-500")
                ui.label("CodeIntel").classes("text-xl font-bold text-blue-500")
            for tab, (label, icon) in TAB_LABELS.items():
                tab_buttons[tab] = (
                    ui.button(label, icon=icon, on_click=lambda t=tab: switch_tab(t))
                    .props("flat no-caps align=left")
                    .classes("w-full tab-btn text-slate-400")
                )
            ui.space()
            with ui.row().classes("w-full gap-1 pt-4 border-t border-slate-700 text-xs text-slate-500"):
                ui.label("Status:")
                ui.label(SIDEBAR_STATUS).classes("text-emerald-400")
        content = ui.column().classes("flex-1 h-full gap-0 overflow-hidden")

    render_content()
    last_signature = _state_signature(controller)
    ui.timer(0.1, sync)
    client.on_disconnect(close_session)

