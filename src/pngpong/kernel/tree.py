import io
import sys
from typing import IO, Any, Dict, Iterable, Iterator, Optional, Tuple

from parse import parse

from .chunk import Chunk


def match(tag: str, chunk: Chunk) -> bool:
    """Check chunk type against given `parse` pattern, e.g. '{}Xt'."""
    return bool(parse(tag, chunk.tag, evaluate_result=False, case_sensitive=True))


def findall(tag: str, chunks: Iterable[Chunk]) -> Iterator[Chunk]:
    for c in chunks:
        if match(tag, c):
            yield c


def find(tag: str, chunks: Iterable[Chunk]) -> Optional[Chunk]:
    return next(findall(tag, chunks), None)


def describe(offset: int, chunk: Chunk) -> Dict[str, Any]:
    ctype = chunk.ctype
    return {
        'offset': offset,
        'type': chunk.tag,
        'length': chunk.length,
        'crc': f'{chunk.crc:08x}',
        'critical': ctype.critical,
        'public': ctype.public,
        'valid': ctype.valid,
        'safe_to_copy': ctype.safe_to_copy,
    }


def render(
    chunks: Iterable[Tuple[int, Chunk]], stream: IO[str] = sys.stdout
) -> None:
    for offset, chunk in chunks:
        attribs = describe(offset, chunk)
        flags = ''.join(
            letter if attribs[key] else '-'
            for letter, key in (
                ('C', 'critical'),
                ('P', 'public'),
                ('R', 'valid'),
                ('S', 'safe_to_copy'),
            )
        )
        print(
            f'{offset:>10} {chunk.tag} {flags} {chunk.length:>10} {attribs["crc"]}',
            file=stream,
        )


def renders(chunks: Iterable[Tuple[int, Chunk]]) -> str:
    with io.StringIO() as stream:
        render(chunks, stream=stream)
        return stream.getvalue()
