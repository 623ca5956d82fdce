import copy

import pytest

from pngpong.kernel.buffer import FormatError, Truncated
from pngpong.kernel.chunk import Chunk, CrcMismatch
from pngpong.kernel.chunk_type import ChunkType
from pngpong.kernel.container import NotFound, Png, SignatureMismatch
from pngpong.kernel.settings import PNG_SIGNATURE


def test_parse_minimal_png(minimal_png):
    image = Png.parse(minimal_png)
    assert [chunk.tag for chunk in image] == ['IHDR', 'IEND']
    assert image.signature == PNG_SIGNATURE
    assert len(image) == 2


def test_round_trip_minimal(minimal_png):
    assert Png.parse(minimal_png).serialize() == minimal_png


def test_round_trip_real_image(pillow_png):
    image = Png.parse(pillow_png)
    assert image.chunks[0].tag == 'IHDR'
    assert image.chunks[-1].tag == 'IEND'
    assert any(chunk.tag == 'IDAT' for chunk in image)
    assert bytes(image) == pillow_png


def test_parse_of_serialized_container_is_equal():
    image = Png([Chunk.new('IHDR', bytes(13)), Chunk.new('ruSt', b'x'), Chunk.new('IEND', b'')])
    assert Png.parse(image.serialize()) == image


def test_signature_only_has_no_chunks():
    assert Png.parse(PNG_SIGNATURE).chunks == []


@pytest.mark.parametrize(
    'buffer',
    [b'', b'\x89PNG', b'GIF89a\x00\x00', b'\x89PNG\r\n\x1a\x0b' + bytes(12)],
)
def test_signature_mismatch(buffer):
    with pytest.raises(SignatureMismatch):
        Png.parse(buffer)


def test_truncated_trailing_bytes_carry_offset(minimal_png):
    with pytest.raises(Truncated) as exc_info:
        Png.parse(minimal_png + b'\x00\x00')
    assert exc_info.value.offset == len(minimal_png)


def test_corrupted_chunk_carries_offset(minimal_png):
    corrupted = bytearray(minimal_png)
    # first byte of IHDR data
    corrupted[16] ^= 0xFF
    with pytest.raises(CrcMismatch) as exc_info:
        Png.parse(bytes(corrupted))
    assert exc_info.value.offset == len(PNG_SIGNATURE)
    assert isinstance(exc_info.value, FormatError)


def test_find_by_type(minimal_png):
    image = Png.parse(minimal_png)
    assert image.find_by_type('IHDR') is image.chunks[0]
    assert image.find_by_type(ChunkType.parse('IEND')) is image.chunks[1]
    assert image.find_by_type('ruSt') is None


def test_find_by_type_is_case_sensitive(minimal_png):
    assert Png.parse(minimal_png).find_by_type('ihdr') is None


def test_append_then_remove_is_inverse(minimal_png):
    image = Png.parse(minimal_png)
    original = copy.deepcopy(image)
    chunk = Chunk.new('ruSt', b'hello')
    image.append(chunk)
    assert image.chunks[-1] == chunk
    assert image.remove_by_type('ruSt') == chunk
    assert image == original


def test_remove_missing_type_leaves_sequence(minimal_png):
    image = Png.parse(minimal_png)
    before = list(image.chunks)
    with pytest.raises(NotFound) as exc_info:
        image.remove_by_type('ruSt')
    assert exc_info.value.ctype == ChunkType.parse('ruSt')
    assert image.chunks == before


def test_remove_only_first_duplicate(minimal_png):
    image = Png.parse(minimal_png)
    first = Chunk.new('ruSt', b'first')
    second = Chunk.new('ruSt', b'second')
    image.append(first)
    image.append(second)
    assert image.remove_by_type('ruSt') == first
    assert image.find_by_type('ruSt') == second
    assert [chunk.tag for chunk in image] == ['IHDR', 'IEND', 'ruSt']


def test_end_to_end_hidden_message(minimal_png):
    image = Png.parse(minimal_png)
    image.append(Chunk.new(ChunkType.parse('ruSt'), 'hello'.encode('utf-8')))
    reparsed = Png.parse(image.serialize())
    assert reparsed.find_by_type(ChunkType.parse('ruSt')).data_as_text() == 'hello'
    assert reparsed.serialize()[: len(minimal_png)] == minimal_png


def test_png_repr(minimal_png):
    assert repr(Png.parse(minimal_png)) == 'Png<IHDR,IEND>'


def test_signature_is_fixed():
    with pytest.raises(TypeError):
        Png(signature=b'x')
    image = Png()
    with pytest.raises(AttributeError):
        image.signature = b'x'
    assert image.serialize() == PNG_SIGNATURE


def test_built_container_parses_back():
    image = Png([Chunk(ChunkType.parse('IHDR'), bytes(13)), Chunk.new('IEND', b'')])
    assert Png.parse(image.serialize()) == image
