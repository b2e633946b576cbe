"""Pickers that read from the local filesystem (desktop and headless)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging
from pathlib import Path
import sys
import threading

from dental_vision import constants

from .base import FilePickerResult, PickCancelled, guarded_pick, read_image_file

log = logging.getLogger(__name__)

PathSupplier = Callable[[], str | Path | None]


def tk_choose_image() -> str | None:
    """Show the native open-file dialog filtered to images.

    Starts in ``~/Pictures`` when that folder exists. Returns ``None`` if the
    dialog is dismissed.
    """
    import tkinter
    from tkinter import filedialog

    root = tkinter.Tk()
    root.withdraw()
    try:
        pictures = Path.home() / "Pictures"
        selected = filedialog.askopenfilename(
            parent=root,
            title=constants.DIALOG_TITLE,
            filetypes=[("Images", " ".join(f"*{e}" for e in constants.IMAGE_EXTENSIONS))],
            initialdir=str(pictures) if pictures.is_dir() else None,
        )
    finally:
        root.destroy()
    # askopenfilename returns '' (or an empty tuple on some platforms) on cancel
    return selected or None


class PathFilePicker:
    """Picks the file named by ``path_supplier``.

    By default the supplier runs in a worker thread, so it may block (a
    dialog, a prompt). With ``supplier_in_thread=False`` it runs on the event
    loop's thread instead, blocking the loop until it returns. Returning
    ``None`` means the user cancelled.
    """

    def __init__(
        self, path_supplier: PathSupplier, *, supplier_in_thread: bool = True
    ) -> None:
        self._path_supplier = path_supplier
        self.supplier_in_thread = supplier_in_thread

    async def pick_image(self) -> FilePickerResult:
        return await guarded_pick(self._pick, type(self).__name__)

    async def _select(self) -> str | Path | None:
        if self.supplier_in_thread:
            return await asyncio.to_thread(self._path_supplier)
        return self._path_supplier()

    async def _pick(self) -> FilePickerResult:
        selected = await self._select()
        if not selected:
            log.debug("File selection cancelled by user")
            return PickCancelled()
        return await asyncio.to_thread(read_image_file, selected)


class DialogFilePicker(PathFilePicker):
    """Desktop picker backed by the OS-native file dialog.

    Tk is not usable off the main thread on macOS, so there the dialog runs
    on the event loop's thread (which must be the main thread) and the loop
    is blocked while it is open. Elsewhere it runs in a worker thread.
    """

    def __init__(
        self,
        chooser: PathSupplier = tk_choose_image,
        *,
        main_thread_only: bool | None = None,
    ) -> None:
        if main_thread_only is None:
            main_thread_only = sys.platform == "darwin"
        super().__init__(chooser, supplier_in_thread=not main_thread_only)
        self.main_thread_only = main_thread_only

    async def _select(self) -> str | Path | None:
        on_main_thread = threading.current_thread() is threading.main_thread()
        if self.main_thread_only and not on_main_thread:
            raise RuntimeError(
                "The file dialog can only be opened from the main thread on this platform"
            )
        return await super()._select()
