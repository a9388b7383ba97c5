import glob
from pathlib import Path

from keyaudio.exceptions import AssetNotFoundError


class DirectoryResolver:
    """Resolves asset names to files in one or more directories, searched in order."""

    def __init__(self, *roots: str | Path) -> None:
        if not roots:
            msg = "At least one directory must be provided"
            raise ValueError(msg)

        self._roots = tuple(Path(root) for root in roots)

    @property
    def roots(self) -> tuple[Path, ...]:
        return self._roots

    def resolve(self, name: str, extension: str | None = None) -> Path:
        for root in self._roots:
            if (path := self._resolve_in(root, name, extension)) is not None:
                return path

        raise AssetNotFoundError(name, extension)

    @staticmethod
    def _resolve_in(root: Path, name: str, extension: str | None) -> Path | None:
        if extension := (extension or "").lstrip("."):
            candidate = root / f"{name}.{extension}"
            return candidate if candidate.is_file() else None

        if (candidate := root / name).is_file():
            return candidate

        # sorted, so that the choice between e.g. "click.mp3" and "click.wav" doesn't depend on the file system
        return next((path for path in sorted(root.glob(f"{glob.escape(name)}.*")) if path.is_file()), None)

