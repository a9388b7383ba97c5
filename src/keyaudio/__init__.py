from keyaudio.exceptions import AssetNotFoundError, AssetUnreadableError, BaseKeyAudioError
from keyaudio.orchestrator import Orchestrator
from keyaudio.registry import AudioInformation
from keyaudio.resources import DirectoryResolver
from keyaudio.timers import ThreadingTimer

__all__ = [
    "AssetNotFoundError",
    "AssetUnreadableError",
    "AudioInformation",
    "BaseKeyAudioError",
    "DirectoryResolver",
    "Orchestrator",
    "ThreadingTimer",
]
