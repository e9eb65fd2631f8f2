"""File inspector that detects content types with libmagic."""

from pathlib import Path

import magic

from core.files import PathFileInspector


class MagicFileInspector(PathFileInspector):
    """Probes the file's content rather than trusting its extension."""

    def __init__(self) -> None:
        self._magic = magic.Magic(mime=True)

    def probe_content_type(self, path: Path) -> str | None:
        """Detected MIME type.

        Raises:
            OSError: If libmagic cannot read or identify the file.
        """
        try:
            mime_type = self._magic.from_file(str(path))
        except magic.MagicException as e:
            raise OSError(f"Content type detection failed: {e}") from e
        return mime_type or None
