import zlib
from dataclasses import dataclass, field
from struct import Struct
from typing import NamedTuple, Protocol

import deal

from .buffer import BufferLike, FormatError, splice
from .chunk_type import ChunkType, TypeLike
from .structured import Structured, StructuredTuple

CRC_STRUCT = Struct('>I')


class ChunkHeader(NamedTuple):
    size: int
    etag: bytes


PNG_CHUNK_HEADER = StructuredTuple(('size', 'etag'), Struct('>I4s'), ChunkHeader)


class CrcMismatch(FormatError):
    def __init__(self, ctype: bytes, expected: int, actual: int) -> None:
        super().__init__(
            f'chunk {ctype!r} checksum failed: stored {expected:#010x}, computed {actual:#010x}'
        )
        self.ctype = ctype
        self.expected = expected
        self.actual = actual


class InvalidUtf8(ValueError):
    def __init__(self, ctype: ChunkType, reason: str) -> None:
        super().__init__(f'chunk {ctype} data is not valid UTF-8: {reason}')
        self.ctype = ctype


@deal.chain(
    deal.ensure(lambda _: 0 <= _.result <= 0xFFFFFFFF),
    deal.pure,
)
def calc_crc(etag: bytes, data: BufferLike) -> int:
    """CRC-32 of type bytes followed by data, as stored in a chunk trailer."""
    return zlib.crc32(data, zlib.crc32(etag)) & 0xFFFFFFFF


@dataclass(frozen=True)
class Chunk(object):
    """Single PNG chunk

    ctype: chunk type code

    data: chunk payload

    crc: CRC-32 over type bytes and payload
    """

    ctype: ChunkType
    data: bytes
    crc: int = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f'chunk data must be bytes-like, not {type(self.data).__name__}'
            )
        ctype = ChunkType.parse(self.ctype)
        data = bytes(self.data)
        object.__setattr__(self, 'ctype', ctype)
        object.__setattr__(self, 'data', data)
        object.__setattr__(self, 'crc', calc_crc(bytes(ctype), data))

    @classmethod
    def new(cls, ctype: TypeLike, data: BufferLike) -> 'Chunk':
        return cls(ctype, data)  # type: ignore

    @classmethod
    def parse(cls, buffer: BufferLike, offset: int = 0) -> 'Chunk':
        return PNG_CHUNK.untag(buffer, offset)

    @property
    def tag(self) -> str:
        return str(self.ctype)

    @property
    def length(self) -> int:
        return len(self.data)

    def data_as_text(self) -> str:
        try:
            return self.data.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(self.ctype, exc.reason) from exc

    def serialize(self) -> bytes:
        return PNG_CHUNK.mktag(self)

    def __bytes__(self) -> bytes:
        return self.serialize()

    def __len__(self) -> int:
        return PNG_CHUNK.size + self.length + CRC_STRUCT.size

    def __repr__(self) -> str:
        return 'Chunk<{tag}>[{size}]'.format(tag=self.tag, size=self.length)


class ChunkFactory(Protocol):
    def untag(self, buffer: BufferLike, offset: int = 0) -> Chunk:
        ...

    def mktag(self, chunk: Chunk) -> bytes:
        ...


@dataclass(frozen=True)
class StructuredChunk(ChunkFactory):
    """Chunk codec: length-prefixed header, payload, CRC trailer."""

    _header: Structured[ChunkHeader]
    _trailer: Struct = CRC_STRUCT

    @property
    def size(self) -> int:
        return self._header.size

    def untag(self, buffer: BufferLike, offset: int = 0) -> Chunk:
        header = self._header.unpack_from(buffer, offset)
        data = bytes(splice(buffer, offset + self.size, header.size))
        (crc,) = self._trailer.unpack(
            splice(buffer, offset + self.size + header.size, self._trailer.size)
        )
        # corrupted type bytes should surface as a checksum failure
        actual = calc_crc(header.etag, data)
        if crc != actual:
            raise CrcMismatch(header.etag, crc, actual)
        return Chunk(ChunkType(header.etag), data)

    def mktag(self, chunk: Chunk) -> bytes:
        header = self._header.pack(ChunkHeader(chunk.length, bytes(chunk.ctype)))
        return header + chunk.data + self._trailer.pack(chunk.crc)


PNG_CHUNK = StructuredChunk(PNG_CHUNK_HEADER)
