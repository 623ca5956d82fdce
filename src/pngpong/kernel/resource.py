from contextlib import contextmanager
from typing import Iterable, Iterator, Tuple

from .buffer import BufferLike, FormatError
from .chunk import Chunk
from .settings import _PngSetting


@contextmanager
def exception_offset_context(offset: int) -> Iterator[None]:
    try:
        yield
    except FormatError as exc:
        if exc.offset is None:
            exc.offset = offset
        raise


def read_chunks(
    cfg: _PngSetting, buffer: BufferLike, offset: int = 0
) -> Iterator[Tuple[int, Chunk]]:
    """Read all chunks from given bytes."""
    data = memoryview(buffer)
    max_size = len(data)
    while offset < max_size:
        with exception_offset_context(offset):
            chunk = cfg.untag(data, offset)
        cfg.logger.debug('read chunk %s at offset %d', chunk.tag, offset)
        yield offset, chunk
        offset += len(chunk)
    assert offset == max_size


def write_chunks(cfg: _PngSetting, chunks: Iterable[Chunk]) -> bytes:
    """Write chunks sequence to bytes."""
    stream = bytearray()
    for chunk in chunks:
        stream += cfg.mktag(chunk)
    return bytes(stream)
