from pathlib import Path
from typing import Protocol


class ResourceResolver(Protocol):
    def resolve(self, name: str, extension: str | None = None) -> Path:
        """Locate the resource with the given name, raising `AssetNotFoundError` if there is none.

        An empty or missing extension matches the first resource whose name is exactly `name`.
        """
