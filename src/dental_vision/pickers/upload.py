"""Picker fed by an upload (web front ends).

``pick_image()`` suspends until the front end delivers the chosen file with
``submit()`` or reports dismissal with ``cancel()``. Both must be called on
the event loop that is waiting.
"""

from __future__ import annotations

import asyncio
import logging

from .base import (
    FilePickerResult,
    PickCancelled,
    PickError,
    PickSuccess,
    guarded_pick,
    mime_type_for,
)

log = logging.getLogger(__name__)


class UploadFilePicker:
    def __init__(self) -> None:
        self._pending: asyncio.Future[FilePickerResult] | None = None

    @property
    def waiting(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def pick_image(self) -> FilePickerResult:
        return await guarded_pick(self._pick, "UploadFilePicker")

    async def _pick(self) -> FilePickerResult:
        if self.waiting:
            return PickError("A file selection is already in progress")

        self._pending = asyncio.get_running_loop().create_future()
        try:
            return await self._pending
        finally:
            self._pending = None

    def _resolve(self, result: FilePickerResult) -> bool:
        if not self.waiting:
            log.debug("No pick in progress; ignoring %s", type(result).__name__)
            return False
        self._pending.set_result(result)
        return True

    def submit(
        self,
        name: str,
        data: bytes | bytearray | memoryview,
        content_type: str | None = None,
    ) -> bool:
        """Deliver the uploaded file. Returns False if no pick is waiting.

        ``data`` is copied into ``bytes``, so the caller may reuse its buffer.
        """
        data = bytes(data)
        if not data:
            return self._resolve(PickError("Uploaded file is empty"))
        return self._resolve(
            PickSuccess(data=data, name=name, mime_type=content_type or mime_type_for(name))
        )

    def cancel(self) -> bool:
        """Report that the user dismissed the upload dialog."""
        return self._resolve(PickCancelled())
