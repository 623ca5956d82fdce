from pngpong.kernel.buffer import FormatError, Truncated
from pngpong.kernel.chunk import Chunk, CrcMismatch, InvalidUtf8
from pngpong.kernel.chunk_type import ChunkType, InvalidTypeBytes
from pngpong.kernel.container import NotFound, Png, SignatureMismatch
from pngpong.kernel.preset import png

__all__ = [
    'Chunk',
    'ChunkType',
    'CrcMismatch',
    'FormatError',
    'InvalidTypeBytes',
    'InvalidUtf8',
    'NotFound',
    'Png',
    'SignatureMismatch',
    'Truncated',
    'png',
]
