"""
Live Voice Agent panel.

Conversational turns go to Gemini with two function declarations. The
model may call ``navigate`` to open a tool (optionally handing it a query)
and ``log_note`` to add a note to the job sheet; both are dispatched to
callbacks supplied by the application.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from ...domain.models.app_view import AGENT_VIEW_KEYS, AppView, VoiceCommand
from ...infrastructure.ai.ai_service import AIRequest
from ...infrastructure.ai.api_client import (
    FunctionCall,
    extract_function_calls,
    extract_text,
    model_turn,
    user_turn,
)
from .ai_panel import AIPanel

logger = logging.getLogger("maxco.panels.live")

NavigateCallback = Callable[[str, Optional[str]], Any]
LogNoteCallback = Callable[[str], Any]

NAVIGATE_DECLARATION = {
    "name": "navigate",
    "description": "Open one of the technician's tools, optionally passing it a search query.",
    "parameters": {
        "type": "OBJECT",
        "properties": {
            "view": {
                "type": "STRING",
                "enum": sorted(AGENT_VIEW_KEYS),
                "description": "Tool to open.",
            },
            "query": {
                "type": "STRING",
                "description": "Query for the tool, e.g. a model number or IC name.",
            },
        },
        "required": ["view"],
    },
}

LOG_NOTE_DECLARATION = {
    "name": "log_note",
    "description": "Add a note to the current job sheet.",
    "parameters": {
        "type": "OBJECT",
        "properties": {
            "note": {"type": "STRING", "description": "The note to record."},
        },
        "required": ["note"],
    },
}

AGENT_TOOLS = [{"functionDeclarations": [NAVIGATE_DECLARATION, LOG_NOTE_DECLARATION]}]


class LiveAssistantPanel(AIPanel):
    view = AppView.LIVE_ASSISTANT
    description = "Hands-free assistance while you work. Ask the agent to open tools or note findings."
    placeholder = "Talk to the agent..."
    system_instruction = (
        "You are MAXCO, a hands-free repair assistant talking to a technician who is "
        "soldering. Keep replies short. When the technician asks for a tool, call "
        "navigate. When they report a finding, measurement or part used, call log_note "
        "with a concise note."
    )

    def __init__(self, context, on_navigate: Optional[NavigateCallback] = None,
                 on_log_note: Optional[LogNoteCallback] = None, parent=None):
        super().__init__(context, parent)
        self.on_navigate = on_navigate or context.router.navigate_from_agent
        self.on_log_note = on_log_note or context.router.log_note
        self.history: List[Dict[str, Any]] = []

    def on_navigation_command(self, command: VoiceCommand) -> None:
        self.set_status("Agent ready. Type or speak a request.")

    def ask(self, query: str) -> None:
        logger.info(f"Live agent turn: '{query[:60]}'")
        self.pending = True
        self._pending_query = query
        self.set_status("Agent thinking...")
        self.ask_button.setEnabled(False)

        request = AIRequest(
            model=self.model,
            contents=self.history + [user_turn(query)],
            system_instruction=self.system_instruction,
            tools=AGENT_TOOLS,
        )
        self.context.ai_service.submit(request, self.on_response, self.on_error)

    def on_response(self, data: dict) -> None:
        self.pending = False
        self.ask_button.setEnabled(True)
        text = extract_text(data)
        calls = extract_function_calls(data)

        if self._pending_query is not None:
            self.history.append(user_turn(self._pending_query))
            self._pending_query = None
        if text:
            self.history.append(model_turn(text))
            self.last_answer = text
            self.show_answer(text)
        self.set_status("Done." if not calls else f"{len(calls)} action(s) requested.")

        # Dispatch last: navigate unmounts this panel and drops any queued turns
        for call in calls:
            self.dispatch_function_call(call)
        self._ask_next()

    def dispatch_function_call(self, call: FunctionCall) -> bool:
        """
        Route a model function call to the application callbacks.

        Returns:
            True if the function name was recognised
        """
        if call.name == "navigate":
            view_key = str(call.args.get("view", ""))
            query = call.args.get("query") or None
            logger.info(f"Agent navigate: {view_key} (query={query!r})")
            self.on_navigate(view_key, query)
            return True
        if call.name == "log_note":
            note = str(call.args.get("note", ""))
            logger.info("Agent logged a job note")
            self.on_log_note(note)
            return True

        logger.debug(f"Ignoring unknown function call from agent: {call.name}")
        return False
