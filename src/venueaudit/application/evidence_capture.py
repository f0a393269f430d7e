"""
Evidence capture.

Reads an image file off the event loop and attaches it to a draft row as
a data URL. Each capture ends in exactly one ``set_evidence`` call.

Captures are ticketed per row in the order they are issued: a capture
that finishes after a later-issued capture for the same row is dropped,
so the most recently requested photo always wins. Rows are independent.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path

from venueaudit.application.draft_service import DraftSession
from venueaudit.domain.errors import InputError

logger = logging.getLogger(__name__)


def encode_image(path: Path | str) -> str:
    """
    Read a file into a ``data:<mime>;base64,...`` string.

    Raises:
        InputError: If the file cannot be read
    """
    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as e:
        raise InputError(f"Cannot read evidence file {source}: {e}") from e
    mime, _ = mimetypes.guess_type(source.name)
    encoded = base64.b64encode(raw).decode("ascii")
    return f"data:{mime or 'image/jpeg'};base64,{encoded}"


class EvidenceCapture:
    """Asynchronous producer of evidence payloads for a draft session."""

    def __init__(self, session: DraftSession) -> None:
        self.session = session
        self._issued: dict[int, int] = {}
        self._applied: dict[int, int] = {}

    def issue(self, index: int) -> int:
        """Reserve the next ticket for a row."""
        ticket = self._issued.get(index, 0) + 1
        self._issued[index] = ticket
        return ticket

    def apply(self, index: int, ticket: int, payload: str) -> bool:
        """
        Apply a finished capture unless a later one already landed.

        Returns:
            True if the row was updated
        """
        if ticket < self._applied.get(index, 0):
            logger.info("Dropping stale evidence for row %d (ticket %d)", index, ticket)
            return False
        self.session.set_evidence(index, payload)
        self._applied[index] = ticket
        return True

    async def capture(self, index: int, path: Path | str) -> bool:
        """Read ``path`` and attach it to row ``index``."""
        ticket = self.issue(index)
        payload = await asyncio.to_thread(encode_image, path)
        applied = self.apply(index, ticket, payload)
        if applied:
            logger.info("Attached evidence %s to row %d", Path(path).name, index)
        return applied
