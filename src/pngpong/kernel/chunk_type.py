from dataclasses import dataclass, field
from typing import NamedTuple, Union

import deal

from .buffer import BufferLike, FormatError

TYPE_SIZE = 4

TypeLike = Union[str, BufferLike, 'ChunkType']


class InvalidTypeBytes(FormatError):
    def __init__(self, value: object, reason: str = 'expected 4 ASCII letters') -> None:
        super().__init__(f'invalid chunk type {value!r}: {reason}')
        self.value = value


class TypeFlags(NamedTuple):
    critical: bool
    public: bool
    reserved_bit_valid: bool
    safe_to_copy: bool


def _is_upper(byte: int) -> bool:
    return ord('A') <= byte <= ord('Z')


@deal.chain(
    deal.pre(lambda _: len(_.raw) == TYPE_SIZE),
    deal.pure,
)
def derive_flags(raw: bytes) -> TypeFlags:
    """Read the property bits (bit 5, letter case) of each type byte."""
    return TypeFlags(
        critical=_is_upper(raw[0]),
        public=_is_upper(raw[1]),
        reserved_bit_valid=_is_upper(raw[2]),
        safe_to_copy=not _is_upper(raw[3]),
    )


def to_type_bytes(value: Union[str, BufferLike]) -> bytes:
    """Normalize a type code given as text or bytes, or fail."""
    if isinstance(value, str):
        if not value.isascii():
            raise InvalidTypeBytes(value)
        raw = value.encode('ascii')
    elif isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
    else:
        raise InvalidTypeBytes(value, reason=f'unsupported type {type(value).__name__}')
    if len(raw) != TYPE_SIZE:
        raise InvalidTypeBytes(value, reason=f'expected {TYPE_SIZE} units, got {len(raw)}')
    # bytes.isalpha only accepts ASCII letters
    if not raw.isalpha():
        raise InvalidTypeBytes(value)
    return raw


@dataclass(frozen=True)
class ChunkType(object):
    """PNG chunk type code

    raw: the 4 type bytes (str input is accepted and encoded as ASCII)

    critical, public, reserved_bit_valid, safe_to_copy: property flags,
    derived once from the letter case of each byte
    """

    raw: bytes
    critical: bool = field(init=False, compare=False)
    public: bool = field(init=False, compare=False)
    reserved_bit_valid: bool = field(init=False, compare=False)
    safe_to_copy: bool = field(init=False, compare=False)

    def __post_init__(self) -> None:
        raw = to_type_bytes(self.raw)
        object.__setattr__(self, 'raw', raw)
        for name, value in derive_flags(raw)._asdict().items():
            object.__setattr__(self, name, value)

    @classmethod
    def parse(cls, value: TypeLike) -> 'ChunkType':
        if isinstance(value, ChunkType):
            return value
        return cls(value)  # type: ignore

    @property
    def valid(self) -> bool:
        return self.reserved_bit_valid

    @property
    def ancillary(self) -> bool:
        return not self.critical

    def to_bytes(self) -> bytes:
        return self.raw

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.raw.decode('ascii')

    def __repr__(self) -> str:
        return f'ChunkType<{self}>'
