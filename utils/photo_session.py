# utils/photo_session.py
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional
import logging
import time
import uuid

from utils.catalog import DEFAULT_COSTUME, DEFAULT_LOCATION, is_known_costume, is_known_location
from utils.gemini_client import generate_photo

logger = logging.getLogger(__name__)

NO_IMAGES_ERROR = "Please upload at least one photo."
GENERATION_FAILED_ERROR = "Failed to generate photo. Please try again."

Generator = Callable[[List[str], str, str], Awaitable[str]]


@dataclass
class PhotoState:
    images: List[str] = field(default_factory=list)
    selected_location: str = DEFAULT_LOCATION
    custom_location: str = ""
    selected_costume: str = DEFAULT_COSTUME
    is_generating: bool = False
    result_image: Optional[str] = None
    error: Optional[str] = None

    @property
    def effective_location(self) -> str:
        return self.custom_location or self.selected_location


@dataclass
class GenerationResult:
    success: bool
    image: Optional[str] = None
    error: Optional[str] = None


class PhotoSession:
    """Form state of one browser session; every transition goes through here."""

    def __init__(self, session_id: Optional[str] = None, generator: Generator = generate_photo):
        self.session_id = session_id or str(uuid.uuid4())
        self.state = PhotoState()
        self._generator = generator

    # -------------------------
    # Upload
    # -------------------------
    def set_images(self, images: List[str]):
        # A new selection replaces the previous one, even an empty one
        self.state.images = list(images)
        logger.info(f"[SESSION] {self.session_id} uploaded {len(images)} image(s)")

    def remove_image(self, index: int):
        if 0 <= index < len(self.state.images):
            self.state.images = [img for i, img in enumerate(self.state.images) if i != index]
        else:
            logger.warning(f"[SESSION] {self.session_id} remove_image: index {index} out of range")

    # -------------------------
    # Selections
    # -------------------------
    def select_location(self, name: str):
        if is_known_location(name):
            self.state.selected_location = name
        else:
            logger.warning(f"[SESSION] {self.session_id} unknown location '{name}' ignored")

    def set_custom_location(self, text: str):
        self.state.custom_location = text

    def select_costume(self, name: str):
        if is_known_costume(name):
            self.state.selected_costume = name
        else:
            logger.warning(f"[SESSION] {self.session_id} unknown costume '{name}' ignored")

    # -------------------------
    # Generation
    # -------------------------
    async def generate(self) -> GenerationResult:
        state = self.state

        if state.is_generating:
            logger.warning(f"[SESSION] {self.session_id} generate ignored: already generating")
            return GenerationResult(success=False, error=None)

        if not state.images:
            state.error = NO_IMAGES_ERROR
            return GenerationResult(success=False, error=NO_IMAGES_ERROR)

        location = state.effective_location
        costume = state.selected_costume

        state.is_generating = True
        state.error = None
        state.result_image = None
        logger.info(f"[GENERATE-PHOTO] {self.session_id} started: location='{location}', costume='{costume}'")

        try:
            image = await self._generator(state.images, location, costume)
        except Exception:
            logger.exception(f"[GENERATE-PHOTO] {self.session_id} FAILED")
            state.is_generating = False
            state.error = GENERATION_FAILED_ERROR
            return GenerationResult(success=False, error=GENERATION_FAILED_ERROR)

        state.result_image = image
        state.is_generating = False
        logger.info(f"[GENERATE-PHOTO] {self.session_id} SUCCESS")
        return GenerationResult(success=True, image=image)

    # -------------------------
    # Start over
    # -------------------------
    def reset(self):
        self.state = PhotoState()
        logger.info(f"[SESSION] {self.session_id} reset")


class SessionStore:
    """
    In-memory sessions keyed by cookie value. Nothing survives a restart.

    Holds at most `max_sessions`, dropping the least recently used first, and
    forgets sessions idle for longer than `idle_timeout` seconds.
    """

    def __init__(
        self,
        generator: Generator = generate_photo,
        max_sessions: int = 500,
        idle_timeout: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._sessions: "OrderedDict[str, PhotoSession]" = OrderedDict()
        self._last_seen = {}
        self._generator = generator
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self._clock = clock

    def get_or_create(self, session_id: Optional[str]) -> PhotoSession:
        now = self._clock()
        self._expire_idle(now)

        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            self._last_seen[session_id] = now
            return self._sessions[session_id]

        session = PhotoSession(generator=self._generator)
        self._sessions[session.session_id] = session
        self._last_seen[session.session_id] = now

        while len(self._sessions) > self.max_sessions:
            oldest, _ = self._sessions.popitem(last=False)
            self._last_seen.pop(oldest, None)
            logger.info(f"[SESSION] {oldest} evicted (store full)")
        return session

    def discard(self, session_id: str):
        self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def _expire_idle(self, now: float):
        # Ordered by last use, so the idle ones sit at the front
        while self._sessions:
            oldest = next(iter(self._sessions))
            if now - self._last_seen[oldest] <= self.idle_timeout:
                break
            if self._sessions[oldest].state.is_generating:
                break
            self.discard(oldest)
            logger.info(f"[SESSION] {oldest} expired")

    def __contains__(self, session_id):
        return session_id in self._sessions

    def __len__(self):
        return len(self._sessions)
