"""Per-browser generation state and the live preview.

A ``GenerationSession`` is the explicit replacement for UI state hooks: it is
created when a page opens, its output fields are reset on every submission,
and it is discarded when the page goes away. ``SessionStore`` keeps them for
one app instance only; nothing is persisted.

Submissions on the same session are not serialised. Two overlapping
generations interleave their resets and appends in whatever order the
upstream streams deliver.
"""
from __future__ import annotations

import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional

from .errors import EmptyPromptError, GenerationError, InvalidOptionError
from .types import DEFAULT_PROMPT, DataFormat, GenerationOptions, find_example

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to generate data. Please check your API key and try again."
PREVIEW_MAX_LINES = 50
SESSION_MAX = 1000
SESSION_IDLE_SECONDS = 3600.0


@dataclass
class Preview:
    """What the display shows: at most ``max_lines`` lines of the stored text."""
    text: str
    total_lines: int
    remaining_lines: int

    @property
    def truncated(self) -> bool:
        return self.remaining_lines > 0

    @property
    def notice(self) -> Optional[str]:
        if not self.truncated:
            return None
        n = self.remaining_lines
        return (
            f"Displaying first {self.total_lines - n} lines. "
            f"{n} more line{'s' if n > 1 else ''} available in the full file."
        )


def render_preview(text: str, max_lines: int = PREVIEW_MAX_LINES) -> Preview:
    if not text:
        return Preview(text="", total_lines=0, remaining_lines=0)
    lines = text.split("\n")
    if len(lines) <= max_lines:
        return Preview(text=text, total_lines=len(lines), remaining_lines=0)
    return Preview(
        text="\n".join(lines[:max_lines]),
        total_lines=len(lines),
        remaining_lines=len(lines) - max_lines,
    )


@dataclass
class GenerationSession:
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    prompt: str = DEFAULT_PROMPT
    format: DataFormat = DataFormat.JSON
    options: GenerationOptions = field(default_factory=GenerationOptions)
    generated_text: str = ""
    is_loading: bool = False
    error: Optional[str] = None

    # -------------------------
    # Form
    # -------------------------
    def apply_example(self, label: str) -> str:
        example = find_example(label)
        if example is None:
            raise InvalidOptionError(f"Unknown example: {label!r}")
        self.prompt = example.text
        return self.prompt

    # -------------------------
    # Lifecycle of one submission
    # -------------------------
    def begin(self, prompt: Optional[str] = None, fmt: Optional[DataFormat] = None,
              options: Optional[GenerationOptions] = None) -> None:
        """Validate and reset output state. Raises EmptyPromptError without touching the output."""
        if prompt is not None:
            self.prompt = prompt
        if fmt is not None:
            self.format = fmt
        if options is not None:
            self.options = options

        if not self.prompt or not self.prompt.strip():
            self.error = str(EmptyPromptError())
            raise EmptyPromptError()

        self.is_loading = True
        self.error = None
        self.generated_text = ""

    def append(self, chunk: str) -> None:
        self.generated_text += chunk

    def fail(self) -> None:
        self.error = GENERIC_FAILURE

    def finish(self) -> None:
        self.is_loading = False

    def run(self, generator, prompt: Optional[str] = None, fmt: Optional[DataFormat] = None,
            options: Optional[GenerationOptions] = None,
            on_chunk: Optional[Callable[[str], None]] = None) -> str:
        """Run one full submission; upstream failures end up in ``error``, not raised.

        ``on_chunk`` sees every fragment right after it is appended.
        """
        self.begin(prompt, fmt, options)

        def receive(chunk: str) -> None:
            self.append(chunk)
            if on_chunk is not None:
                on_chunk(chunk)

        try:
            generator.generate(self.prompt, self.format, self.options, on_chunk=receive)
        except GenerationError:
            logger.warning("session %s: generation failed", self.id)
            self.fail()
        finally:
            self.finish()
        return self.generated_text

    def stream(self, generator) -> Iterator[str]:
        """Iterator form of ``run`` for streaming responses; call ``begin`` first.

        Re-raises GenerationError after recording it so the caller can decide
        whether anything was already sent.
        """
        try:
            for chunk in generator.iter_chunks(self.prompt, self.format, self.options):
                self.append(chunk)
                yield chunk
        except GenerationError:
            logger.warning("session %s: generation failed after %d chars", self.id, len(self.generated_text))
            self.fail()
            raise
        finally:
            self.finish()

    # -------------------------
    # Read side
    # -------------------------
    @property
    def can_export(self) -> bool:
        return bool(self.generated_text) and not self.is_loading

    def preview(self, max_lines: int = PREVIEW_MAX_LINES) -> Preview:
        return render_preview(self.generated_text, max_lines)

    def snapshot(self, max_lines: int = PREVIEW_MAX_LINES) -> dict:
        p = self.preview(max_lines)
        return {
            "id": self.id,
            "prompt": self.prompt,
            "format": self.format.value,
            "date_format": self.options.date_format.value,
            "decimal_places": self.options.decimal_places,
            "generated_text": self.generated_text,
            "is_loading": self.is_loading,
            "error": self.error,
            "can_export": self.can_export,
            "preview": {
                "text": p.text,
                "total_lines": p.total_lines,
                "remaining_lines": p.remaining_lines,
                "truncated": p.truncated,
                "notice": p.notice,
            },
        }


class SessionStore:
    """In-memory sessions for one app instance.

    Sessions idle longer than ``idle_seconds`` are dropped, and the store never
    holds more than ``max_sessions``: creating one past the limit evicts the
    least recently used. A page whose session was evicted gets a 404 and
    opens a new one.
    """

    def __init__(self, max_sessions: int = SESSION_MAX, idle_seconds: float = SESSION_IDLE_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.max_sessions = max(1, int(max_sessions))
        self.idle_seconds = idle_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, GenerationSession]" = OrderedDict()
        self._last_seen: Dict[str, float] = {}

    def _touch(self, session_id: str) -> None:
        self._sessions.move_to_end(session_id)
        self._last_seen[session_id] = self._clock()

    def _drop(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def evict(self) -> int:
        """Drop idle sessions, then the oldest ones above the size limit. Returns how many went."""
        now = self._clock()
        dropped = 0
        # oldest first: stop at the first session that is still fresh
        for sid in list(self._sessions):
            if now - self._last_seen[sid] <= self.idle_seconds:
                break
            self._drop(sid)
            dropped += 1
        while len(self._sessions) > self.max_sessions:
            sid = next(iter(self._sessions))
            self._drop(sid)
            dropped += 1
        if dropped:
            logger.info("evicted %d session(s), %d left", dropped, len(self._sessions))
        return dropped

    def create(self) -> GenerationSession:
        s = GenerationSession()
        self._sessions[s.id] = s
        self._touch(s.id)
        self.evict()
        return s

    def get(self, session_id: str) -> Optional[GenerationSession]:
        s = self._sessions.get(session_id)
        if s is None:
            return None
        if self._clock() - self._last_seen[session_id] > self.idle_seconds:
            self._drop(session_id)
            return None
        self._touch(session_id)
        return s

    def discard(self, session_id: str) -> bool:
        found = session_id in self._sessions
        self._drop(session_id)
        return found

    def __len__(self) -> int:
        return len(self._sessions)
