"""
Google Places script loader

The autocomplete widget needs the Maps JavaScript API in the page head. The
loader injects that script at most once, however many callers ask for it
concurrently, and tracks when the widget reports its global constructor as
available.
"""

import asyncio
import html
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional

logger = logging.getLogger(__name__)


PLACES_SCRIPT_MARKER = "maps.googleapis.com/maps/api/js"


class LoaderState(str, Enum):
    """Lifecycle of the Places script"""
    NOT_STARTED = "not_started"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class ScriptTag:
    src: str
    is_async: bool = True
    defer: bool = True

    def render(self) -> str:
        attrs = [f'src="{html.escape(self.src, quote=True)}"']
        if self.is_async:
            attrs.append("async")
        if self.defer:
            attrs.append("defer")
        return f"<script {' '.join(attrs)}></script>"


class PageHead:
    """Script tags rendered into the storefront page head"""

    def __init__(self):
        self.scripts: List[ScriptTag] = []

    def has_script(self, marker: str) -> bool:
        return any(marker in tag.src for tag in self.scripts)

    def append(self, tag: ScriptTag) -> None:
        self.scripts.append(tag)

    def render(self) -> str:
        return "\n".join(tag.render() for tag in self.scripts)


Injector = Callable[[ScriptTag], Awaitable[None]]


class PlacesScriptLoader:
    """
    Single shared loader for the Places script

    State moves NOT_STARTED -> LOADING -> READY. The first load() starts the
    injection and caches the in-flight task; later callers await that same
    task, and once READY load() returns immediately. A failed injection
    resets the loader to NOT_STARTED so a later call can try again.
    """

    def __init__(
        self,
        script_url: str,
        head: Optional[PageHead] = None,
        injector: Optional[Injector] = None,
        country: str = "ES"
    ):
        self.script_url = script_url
        self.head = head if head is not None else PageHead()
        self.country = country
        self.state = LoaderState.NOT_STARTED
        self._injector = injector or self._append_to_head
        self._task: Optional[asyncio.Future] = None
        self._ready = asyncio.Event()

    async def _append_to_head(self, tag: ScriptTag) -> None:
        self.head.append(tag)

    async def _inject(self) -> None:
        try:
            if self.head.has_script(PLACES_SCRIPT_MARKER):
                logger.info("Places script already present in page head")
            else:
                await self._injector(ScriptTag(src=self.script_url))
                logger.info("Places script injected")
        except Exception:
            logger.exception("Places script failed to load")
            self.state = LoaderState.NOT_STARTED
            self._task = None
            raise
        self.state = LoaderState.READY

    async def load(self) -> None:
        """Ensure the script has been injected exactly once"""
        if self.state is LoaderState.READY:
            return
        if self._task is None:
            self.state = LoaderState.LOADING
            self._task = asyncio.ensure_future(self._inject())
        # shield keeps one cancelled caller from cancelling the shared load
        await asyncio.shield(self._task)

    def mark_ready(self) -> None:
        """Record that the widget's global constructor is available"""
        if not self._ready.is_set():
            logger.info("Places widget ready")
        self._ready.set()

    @property
    def is_widget_ready(self) -> bool:
        return self._ready.is_set()

    async def wait_until_ready(self, timeout: Optional[float] = 10.0) -> bool:
        """
        Wait for the widget to report ready

        Returns False on timeout instead of raising; without the widget the
        form simply gets no suggestions.
        """
        try:
            await asyncio.wait_for(self._ready.wait(), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Places widget not ready after {timeout}s, continuing without suggestions")
            return False
        return True

    def widget_options(self) -> dict:
        """Options for the Autocomplete constructor"""
        return {
            "types": ["address"],
            "componentRestrictions": {"country": self.country},
        }
