"""Debounced autocomplete suggestions."""

import asyncio
import logging
from typing import Callable, Optional

from .service import SearchService

logger = logging.getLogger(__name__)


class SuggestionDebouncer:
    """Fetch suggestions only after typing pauses.

    Each push() cancels the pending timer and starts a new one, so a rapid
    burst of keystrokes produces one request for the final text.
    """

    def __init__(
        self,
        service: SearchService,
        delay: float = 0.3,
        on_suggestions: Optional[Callable[[list[str]], None]] = None,
    ):
        self.service = service
        self.delay = delay
        self.on_suggestions = on_suggestions
        self.suggestions: list[str] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def push(self, text: str) -> asyncio.Task:
        """Register a keystroke. Must be called from a running event loop."""
        self.cancel()
        self._task = asyncio.create_task(self._fetch_after_delay(text))
        return self._task

    def cancel(self) -> None:
        """Drop the pending timer, if any."""
        if self.pending:
            self._task.cancel()
        self._task = None

    async def wait(self) -> list[str]:
        """Wait for the live timer to fire and return the latest suggestions."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        return self.suggestions

    async def _fetch_after_delay(self, text: str) -> list[str]:
        await asyncio.sleep(self.delay)
        suggestions = await self.service.get_suggestions(text)
        logger.debug("Suggestions for %r: %s", text, suggestions)

        self.suggestions = suggestions
        if self.on_suggestions:
            self.on_suggestions(suggestions)
        return suggestions
