from keyaudio.interfaces.playable import Playable, PlaybackEngine
from keyaudio.interfaces.resolver import ResourceResolver
from keyaudio.interfaces.timer import Timer

__all__ = ["Playable", "PlaybackEngine", "ResourceResolver", "Timer"]
