"""PCM sample format description and its mapping to a device data format."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import IntEnum, IntFlag

__all__ = [
    "PcmRepresentation",
    "DataFormat",
    "Speaker",
    "ByteOrder",
    "SampleFormat",
    "PcmFormat",
    "to_pcm_format",
    "get_system_ticks",
    "PCM_FIXED_8",
    "PCM_FIXED_16",
    "PCM_FIXED_32",
    "AUDIO_SAMPLE_CHANNELS",
    "RECORD_DEVICE_KICKSTART_BUF_COUNT",
    "PLAY_KICKSTART_BUFFER_COUNT",
    "DEVICE_SHADOW_BUFFER_QUEUE_LEN",
    "BUF_COUNT",
    "ENGINE_SERVICE_MSG_KICKSTART_PLAYER",
    "ENGINE_SERVICE_MSG_RETRIEVE_DUMP_BUFS",
]

PCM_FIXED_8 = 8
PCM_FIXED_16 = 16
PCM_FIXED_32 = 32

AUDIO_SAMPLE_CHANNELS = 1
RECORD_DEVICE_KICKSTART_BUF_COUNT = 2
PLAY_KICKSTART_BUFFER_COUNT = 3
DEVICE_SHADOW_BUFFER_QUEUE_LEN = 4
BUF_COUNT = 16

ENGINE_SERVICE_MSG_KICKSTART_PLAYER = 1
ENGINE_SERVICE_MSG_RETRIEVE_DUMP_BUFS = 2


class PcmRepresentation(IntEnum):
    """Extended sample representation; NONE keeps the plain PCM format."""

    NONE = 0
    SIGNED_INT = 1
    UNSIGNED_INT = 2
    FLOAT = 3


class DataFormat(IntEnum):
    PCM = 2
    PCM_EX = 4


class Speaker(IntFlag):
    FRONT_LEFT = 0x1
    FRONT_RIGHT = 0x2
    FRONT_CENTER = 0x4


class ByteOrder(IntEnum):
    BIG_ENDIAN = 1
    LITTLE_ENDIAN = 2


@dataclass(frozen=True)
class SampleFormat:
    """What the application asks for: rate, buffer length, channels and sample width."""

    sample_rate: int
    frames_per_buf: int = 0
    channels: int = AUDIO_SAMPLE_CHANNELS
    pcm_format: int = PCM_FIXED_16
    representation: PcmRepresentation | int = PcmRepresentation.NONE


@dataclass(frozen=True)
class PcmFormat:
    """The data format handed to the audio device."""

    format_type: DataFormat
    num_channels: int
    channel_mask: Speaker
    sample_rate: int
    endianness: ByteOrder
    bits_per_sample: int
    container_size: int
    representation: PcmRepresentation

    @property
    def bytes_per_frame(self) -> int:
        """Bytes taken by one frame of all channels."""
        return (self.container_size >> 3) * self.num_channels


_EXTENDED_WIDTHS = {
    PcmRepresentation.UNSIGNED_INT: PCM_FIXED_8,
    PcmRepresentation.SIGNED_INT: PCM_FIXED_16,
    PcmRepresentation.FLOAT: PCM_FIXED_32,
}


def to_pcm_format(sample_format: SampleFormat) -> PcmFormat:
    """Build the device format for ``sample_format``.

    One channel or fewer is mono on the centre speaker, more is stereo.  An
    extended representation fixes the sample width and selects the extended
    data format; an unknown representation raises ValueError.
    """
    representation = PcmRepresentation(sample_format.representation)
    if sample_format.channels <= 1:
        num_channels, mask = 1, Speaker.FRONT_CENTER
    else:
        num_channels, mask = 2, Speaker.FRONT_LEFT | Speaker.FRONT_RIGHT

    format_type = DataFormat.PCM
    bits = sample_format.pcm_format
    width = _EXTENDED_WIDTHS.get(representation)
    if width is not None:
        bits = width
        format_type = DataFormat.PCM_EX

    return PcmFormat(
        format_type=format_type,
        num_channels=num_channels,
        channel_mask=mask,
        sample_rate=sample_format.sample_rate,
        endianness=ByteOrder.LITTLE_ENDIAN,
        bits_per_sample=bits,
        container_size=bits,
        representation=representation,
    )


def get_system_ticks() -> int:
    """Wall-clock time in microseconds."""
    return time.time_ns() // 1000