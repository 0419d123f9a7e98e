"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters.
"""

from discord_music_queue.application.interfaces.audio_resolver import AudioResolver
from discord_music_queue.application.interfaces.voice_adapter import TrackEndCallback, VoiceAdapter

__all__ = [
    "AudioResolver",
    "TrackEndCallback",
    "VoiceAdapter",
]
