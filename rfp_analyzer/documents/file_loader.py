from pathlib import Path

from rfp_analyzer.documents.exceptions import DocumentReadError

_BYTES_PER_MB = 1024 * 1024


class FileLoader:
    """Resolves a stored document path and reads its bytes under a size ceiling."""

    def __init__(self, max_size_bytes: int, files_root: Path | None = None) -> None:
        self._max_size_bytes = max_size_bytes
        self._files_root = files_root

    @property
    def max_size_bytes(self) -> int:
        return self._max_size_bytes

    def resolve(self, file_path: str | Path) -> Path:
        """Relative paths are taken from the files root when one is set."""
        path = Path(file_path)
        if self._files_root is not None and not path.is_absolute():
            return self._files_root / path
        return path

    def check_size(self, path: Path) -> int:
        """Return the file size in bytes.

        Raises:
            DocumentReadError: if the file is missing or above the ceiling.
        """
        try:
            size = path.stat().st_size
        except OSError as exc:
            raise DocumentReadError(f"Failed to read document {path.name}: {exc}") from exc
        if not path.is_file():
            raise DocumentReadError(f"Failed to read document {path.name}: not a file")
        if size > self._max_size_bytes:
            raise DocumentReadError(
                f"Document size ({size / _BYTES_PER_MB:.2f}MB) exceeds maximum "
                f"allowed size ({self._max_size_bytes / _BYTES_PER_MB:.0f}MB)"
            )
        return size

    def load(self, file_path: str | Path) -> bytes:
        """Read document bytes from disk after the size check.

        Raises:
            DocumentReadError: if the file is missing, unreadable or too large.
        """
        path = self.resolve(file_path)
        self.check_size(path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise DocumentReadError(f"Failed to read document {path.name}: {exc}") from exc
