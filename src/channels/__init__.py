"""Channel-managed version overrides."""

from .loader import load_channel, load_channels
from .model import Channel, Stream
from .resolver import ChannelArtifactResolver

__all__ = [
    "Channel",
    "Stream",
    "ChannelArtifactResolver",
    "load_channel",
    "load_channels",
]
