class BaseKeyAudioError(Exception):
    pass


class AssetNotFoundError(BaseKeyAudioError):
    """The resource backing an asset could not be located."""

    def __init__(self, name: str, extension: str | None = None) -> None:
        self.name = name
        self.extension = extension

        description = f"{name}.{extension}" if extension else name
        super().__init__(f"No audio file found for '{description}'")


class AssetUnreadableError(BaseKeyAudioError):
    """The resource backing an asset was found but could not be decoded."""
