"""File picking across platforms.

Every implementation satisfies ``FilePicker``; which one an application uses
is chosen by name (configuration ``file_picker``) or injected directly.
"""

from typing import Any

from dental_vision.config import resolve_config
from dental_vision.exceptions import ConfigurationError

from .base import (
    FilePicker,
    FilePickerResult,
    PickCancelled,
    PickError,
    PickSuccess,
    mime_type_for,
    read_image_file,
)
from .hosted import (
    HostBridge,
    HostContextHolder,
    HostDocument,
    HostedFilePicker,
    default_host_context,
)
from .local import DialogFilePicker, PathFilePicker, tk_choose_image
from .upload import UploadFilePicker

PICKERS: dict[str, type] = {
    "path": PathFilePicker,
    "dialog": DialogFilePicker,
    "hosted": HostedFilePicker,
    "upload": UploadFilePicker,
}


def create_file_picker(kind: str | None = None, **kwargs: Any) -> FilePicker:
    """Build the picker registered under ``kind``.

    ``kind`` defaults to the configured ``file_picker``; ``kwargs`` go to the
    picker's constructor.

    Raises:
        ConfigurationError: For an unknown kind.
    """
    kind = kind or resolve_config().file_picker
    try:
        picker_cls = PICKERS[kind]
    except KeyError:
        raise ConfigurationError(
            f"Unknown file picker {kind!r}. Choose one of: {', '.join(PICKERS)}"
        ) from None
    return picker_cls(**kwargs)


__all__ = [
    "PICKERS",
    "DialogFilePicker",
    "FilePicker",
    "FilePickerResult",
    "HostBridge",
    "HostContextHolder",
    "HostDocument",
    "HostedFilePicker",
    "PathFilePicker",
    "PickCancelled",
    "PickError",
    "PickSuccess",
    "UploadFilePicker",
    "create_file_picker",
    "default_host_context",
    "mime_type_for",
    "read_image_file",
    "tk_choose_image",
]
