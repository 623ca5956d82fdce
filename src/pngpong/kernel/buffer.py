from typing import Optional, Union

import deal

BufferLike = Union[bytes, bytearray, memoryview]


class FormatError(ValueError):
    """Base error for malformed PNG data.

    offset: position of the failing chunk in the file, attached by the
    container reader (None when raised outside of a container read).
    """

    offset: Optional[int] = None


class Truncated(FormatError, EOFError):
    def __init__(self, expected: int, given: int) -> None:
        super().__init__(f'Expected buffer of size {expected} but got size {given}')
        self.expected = expected
        self.given = given


@deal.chain(
    deal.pre(lambda _: _.size >= 0),
    deal.pre(lambda _: _.offset >= 0),
    deal.ensure(lambda _: len(_.result) == _.size),
    deal.raises(Truncated),
    deal.reason(Truncated, lambda _: _.offset + _.size > len(_.buffer)),
    deal.has(),
)
def splice(buffer: BufferLike, offset: int, size: int) -> BufferLike:
    """Slice exactly `size` bytes from `offset`, or fail."""
    chunk = buffer[offset : offset + size]
    if len(chunk) != size:
        raise Truncated(size, len(chunk))
    return chunk
