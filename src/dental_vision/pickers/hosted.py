"""Picker for embedded hosts that own the native selection surface.

A host (a mobile activity, an embedding application window) exposes a
``HostBridge`` and registers it with a ``HostContextHolder`` before any pick.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import time
from typing import Protocol, runtime_checkable

from .base import (
    FilePickerResult,
    PickCancelled,
    PickError,
    PickSuccess,
    guarded_pick,
    mime_type_for,
)

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class HostDocument:
    """A document handed back by the host. Name and type may be unknown."""

    data: bytes
    name: str | None = None
    mime_type: str | None = None

    def __repr__(self) -> str:
        return f"HostDocument(name={self.name!r}, size={len(self.data)})"


@runtime_checkable
class HostBridge(Protocol):
    async def request_image(self) -> HostDocument | None:
        """Show the host's picker; ``None`` when the user cancels."""
        ...


class HostContextHolder:
    """Holds the host a ``HostedFilePicker`` launches its picker from."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._host: HostBridge | None = None

    def register(self, host: HostBridge) -> None:
        with self._lock:
            if self._host is not None and self._host is not host:
                log.warning("Replacing registered picker host")
            self._host = host

    def clear(self) -> None:
        with self._lock:
            self._host = None

    def current(self) -> HostBridge | None:
        with self._lock:
            return self._host


default_host_context = HostContextHolder()


class HostedFilePicker:
    def __init__(self, context: HostContextHolder | None = None) -> None:
        self._context = context or default_host_context

    async def pick_image(self) -> FilePickerResult:
        return await guarded_pick(self._pick, "HostedFilePicker")

    async def _pick(self) -> FilePickerResult:
        host = self._context.current()
        if host is None:
            return PickError(
                "File picker is not initialized: register a host with "
                "HostContextHolder.register() before picking"
            )

        document = await host.request_image()
        if document is None:
            log.debug("File selection cancelled by user")
            return PickCancelled()
        if not document.data:
            return PickError("Could not open file")

        name = document.name or f"dental_image_{int(time.time() * 1000)}.jpg"
        result = PickSuccess(
            data=document.data,
            name=name,
            mime_type=document.mime_type or mime_type_for(name),
        )
        log.info("Image selected: %s (%d bytes, %s)", name, len(result.data), result.mime_type)
        return result
