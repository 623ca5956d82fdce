import logging
from dataclasses import dataclass
from operator import attrgetter

from .buffer import BufferLike
from .chunk import PNG_CHUNK, Chunk, ChunkFactory
from .chunk_type import InvalidTypeBytes

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


@dataclass(frozen=True)
class _PngSetting(ChunkFactory):
    """Setting for PNG chunk streams

    chunk: stream <-> Chunk (default PNG_CHUNK) -
        factory to read/write chunk header and trailer

    strict: if set to True, throws error on chunk types with invalid
        reserved bit, otherwise log warning

    logger: destination for parse diagnostics
    """

    chunk: ChunkFactory = PNG_CHUNK
    strict: bool = False
    logger: logging.Logger = logging.root

    def untag(self, buffer: BufferLike, offset: int = 0) -> Chunk:
        """Read chunk from given buffer."""
        chunk = self.chunk.untag(buffer, offset=offset)
        if not chunk.ctype.valid:
            if self.strict:
                raise InvalidTypeBytes(bytes(chunk.ctype), reason='reserved bit is set')
            self.logger.warning(
                'chunk %s at offset %d has reserved bit set', chunk.tag, offset
            )
        return chunk

    def mktag(self, chunk: Chunk) -> bytes:
        """Create chunk bytes from given chunk."""
        buffer = self.chunk.mktag(chunk)
        assert attrgetter('ctype', 'data')(self.chunk.untag(buffer)) == (
            chunk.ctype,
            chunk.data,
        )
        return buffer
