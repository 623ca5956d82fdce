from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .buffer import BufferLike, FormatError
from .chunk import Chunk
from .chunk_type import ChunkType, TypeLike
from .helpers import drop_offsets
from .resource import read_chunks, write_chunks
from .settings import PNG_SIGNATURE, _PngSetting

DEFAULT_SETTING = _PngSetting()


class SignatureMismatch(FormatError):
    def __init__(self, expected: bytes, given: bytes) -> None:
        super().__init__(f'not a PNG file: expected signature {expected!r} but got {given!r}')
        self.expected = expected
        self.given = given


class NotFound(LookupError):
    def __init__(self, ctype: ChunkType) -> None:
        super().__init__(f'no chunk of type {ctype} found')
        self.ctype = ctype


@dataclass
class Png(object):
    """PNG file as signature and ordered chunk sequence

    chunks: contained chunks, in file order
    """

    chunks: List[Chunk] = field(default_factory=list)

    @property
    def signature(self) -> bytes:
        return PNG_SIGNATURE

    @classmethod
    def parse(cls, buffer: BufferLike, cfg: Optional[_PngSetting] = None) -> 'Png':
        return read_png(cfg or DEFAULT_SETTING, buffer)

    def serialize(self, cfg: Optional[_PngSetting] = None) -> bytes:
        return write_png(cfg or DEFAULT_SETTING, self)

    def __bytes__(self) -> bytes:
        return self.serialize()

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)

    def _index_of(self, code: TypeLike) -> Optional[int]:
        ctype = ChunkType.parse(code)
        return next(
            (idx for idx, chunk in enumerate(self.chunks) if chunk.ctype == ctype),
            None,
        )

    def find_by_type(self, code: TypeLike) -> Optional[Chunk]:
        """Return first chunk of given type, or None."""
        idx = self._index_of(code)
        return None if idx is None else self.chunks[idx]

    def append(self, chunk: Chunk) -> None:
        self.chunks.append(chunk)

    def remove_by_type(self, code: TypeLike) -> Chunk:
        """Remove and return first chunk of given type.

        Later chunks of the same type are kept.
        """
        idx = self._index_of(code)
        if idx is None:
            raise NotFound(ChunkType.parse(code))
        return self.chunks.pop(idx)

    def __repr__(self) -> str:
        tags = ','.join(chunk.tag for chunk in self.chunks)
        return f'Png<{tags}>'


def check_signature(cfg: _PngSetting, buffer: BufferLike) -> int:
    """Verify PNG magic, return offset of the first chunk."""
    size = len(PNG_SIGNATURE)
    signature = bytes(buffer[:size])
    if signature != PNG_SIGNATURE:
        raise SignatureMismatch(PNG_SIGNATURE, signature)
    return size


def read_png(cfg: _PngSetting, buffer: BufferLike) -> Png:
    """Parse whole PNG file from given bytes."""
    offset = check_signature(cfg, buffer)
    return Png(list(drop_offsets(read_chunks(cfg, buffer, offset=offset))))


def write_png(cfg: _PngSetting, png: Png) -> bytes:
    """Write signature and chunks of given PNG to bytes."""
    return png.signature + write_chunks(cfg, png.chunks)
