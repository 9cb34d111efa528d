from __future__ import annotations

import uuid
from collections import OrderedDict
from typing import Optional

from recipe_form.core.models import FormState


class FormSessionStore:
    """In-memory FormState per browser session. Lives on the app instance; gone on restart.

    Bounded LRU: once `max_sessions` states are held, saving a new session evicts the
    one touched longest ago. Handlers read, apply a pure transition and write back
    with no await in between, so updates from one event loop never interleave.
    """

    def __init__(self, max_sessions: int = 1000) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._states: "OrderedDict[str, FormState]" = OrderedDict()

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    def get(self, session_id: str) -> FormState:
        state: Optional[FormState] = self._states.get(session_id)
        if state is None:
            return FormState()
        self._states.move_to_end(session_id)
        return state

    def save(self, session_id: str, state: FormState) -> FormState:
        self._states[session_id] = state
        self._states.move_to_end(session_id)
        while len(self._states) > self.max_sessions:
            self._states.popitem(last=False)
        return state

    def __len__(self) -> int:
        return len(self._states)
