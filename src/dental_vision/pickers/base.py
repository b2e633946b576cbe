"""File picking contract shared by every platform implementation.

A picker returns exactly one ``FilePickerResult`` variant and never raises:
user dismissal is ``PickCancelled``, every failure is ``PickError``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import dataclasses
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from dental_vision import constants
from dental_vision.core.types import _require

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class PickSuccess:
    """Raw image bytes with their file name and MIME type.

    Equality and hashing are structural over all three fields.
    """

    data: bytes
    name: str
    mime_type: str

    def __post_init__(self) -> None:
        _require(
            condition=isinstance(self.data, bytes),
            message="must be bytes",
            field_name="data",
            exc=TypeError,
        )
        _require(condition=len(self.data) > 0, message="cannot be empty", field_name="data")
        _require(
            condition=isinstance(self.mime_type, str) and self.mime_type.strip() != "",
            message="must be a non-empty str",
            field_name="mime_type",
        )

    def __repr__(self) -> str:
        return (
            f"PickSuccess(name={self.name!r}, mime_type={self.mime_type!r}, "
            f"size={len(self.data)})"
        )


@dataclasses.dataclass(frozen=True, slots=True)
class PickCancelled:
    """The user dismissed the picker. Not an error."""


@dataclasses.dataclass(frozen=True, slots=True)
class PickError:
    """Picking failed; ``message`` is suitable for display."""

    message: str


FilePickerResult = PickSuccess | PickCancelled | PickError


@runtime_checkable
class FilePicker(Protocol):
    """Presents a file-selection surface and returns the chosen image."""

    async def pick_image(self) -> FilePickerResult: ...


def mime_type_for(name: str) -> str:
    """MIME type from the file extension; unknown extensions map to JPEG."""
    extension = Path(name).suffix.lower().lstrip(".")
    return constants.EXTENSION_TO_MIME.get(extension, constants.DEFAULT_IMAGE_MIME)


def read_image_file(path: str | Path) -> FilePickerResult:
    """Read a local image verbatim.

    Only ``.png``/``.jpg``/``.jpeg`` files are accepted. Missing, unreadable,
    unsupported or empty files produce ``PickError``.
    """
    path = Path(path)
    if not path.exists():
        return PickError(f"Selected file does not exist: {path.name}")
    if not path.is_file():
        return PickError(f"Selected path is not a file: {path.name}")
    if path.suffix.lower() not in constants.IMAGE_EXTENSIONS:
        return PickError(f"Unsupported image type: {path.suffix or path.name}")

    try:
        data = path.read_bytes()
    except OSError as e:
        log.warning("Cannot read selected file %s: %s", path, e)
        return PickError(f"Failed to read file: {e.strerror or e}")

    if not data:
        return PickError(f"Selected file is empty: {path.name}")

    result = PickSuccess(data=data, name=path.name, mime_type=mime_type_for(path.name))
    log.info("Selected %s (%d bytes, %s)", result.name, len(data), result.mime_type)
    return result


async def guarded_pick(
    pick: Callable[[], Awaitable[FilePickerResult]], label: str
) -> FilePickerResult:
    """Run a pick so that nothing escapes but a ``FilePickerResult``.

    Cancelling the waiting task yields ``PickCancelled``; the cancellation
    request is acknowledged with ``Task.uncancel()``.
    """
    try:
        return await pick()
    except asyncio.CancelledError:
        task = asyncio.current_task()
        if task is not None:
            task.uncancel()
        log.debug("%s: file selection cancelled", label)
        return PickCancelled()
    except Exception as e:
        log.exception("%s: error picking image", label)
        return PickError(str(e) or "Unknown error during file selection")
