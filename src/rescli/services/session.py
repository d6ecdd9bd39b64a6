"""SessionManager: the persisted identity of the current user."""

from __future__ import annotations

import logging

from rescli.domain.identity import display_name
from rescli.infrastructure.config_store import ConfigStore

logger = logging.getLogger(__name__)

USER_SECTION = "User"
CURRENT_USER_KEY = "Current_User"


class SessionManager:
    """Reads and writes the logged-in identity through a ConfigStore.

    The only component allowed to touch ``[User] Current_User``.  The CLI
    is a one-shot process, so no locking is done.
    """

    def __init__(
        self,
        store: ConfigStore,
        *,
        section: str = USER_SECTION,
        key: str = CURRENT_USER_KEY,
    ) -> None:
        self._store = store
        self._section = section
        self._key = key

    def current_identity(self) -> str | None:
        """The raw stored identity, or None when nobody is logged in."""
        value = self._store.get(self._section, self._key)
        return value or None

    def display_name(self) -> str:
        """Identity up to its first ``@``; empty string when logged out."""
        return display_name(self.current_identity())

    @property
    def is_logged_in(self) -> bool:
        return self.current_identity() is not None

    def set_identity(self, value: str) -> None:
        """Persist *value*, replacing any previous identity."""
        self._store.set(self._section, self._key, value)
        logger.debug("Session identity set to %s", value)

    def clear_identity(self) -> None:
        self._store.set(self._section, self._key, None)
        logger.debug("Session identity cleared")
