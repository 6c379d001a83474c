import logging
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Session(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    laundry_id: Optional[str] = None


class ContextState(BaseModel):
    model_config = ConfigDict(frozen=True)

    session: Optional[Session] = None
    dark_mode: bool = False


class AppContext:
    """Session and display preferences shared by every view.

    Views hold a reference to one context; ``update`` is the only way to change
    it and every subscriber receives the new state.
    """

    def __init__(self, session: Optional[Session] = None, dark_mode: bool = False):
        self._state = ContextState(session=session, dark_mode=dark_mode)
        self._subscribers: List[Callable[[ContextState], None]] = []

    @property
    def state(self) -> ContextState:
        return self._state

    @property
    def session(self) -> Optional[Session]:
        return self._state.session

    @property
    def dark_mode(self) -> bool:
        return self._state.dark_mode

    @property
    def laundry_id(self) -> Optional[str]:
        return self._state.session.laundry_id if self._state.session else None

    def update(self, **changes) -> ContextState:
        unknown = set(changes) - set(ContextState.model_fields)
        if unknown:
            raise ValueError(f"Unknown context fields: {sorted(unknown)}")

        self._state = ContextState(**{**self._state.model_dump(), **changes})
        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception as e:
                logger.error(f"Context subscriber {callback!r} failed: {e}", exc_info=True)
        return self._state

    def subscribe(self, callback: Callable[[ContextState], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
