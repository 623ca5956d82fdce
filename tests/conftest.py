import io
import struct
import zlib

import pytest
from PIL import Image

SIGNATURE = b'\x89PNG\r\n\x1a\n'


def raw_chunk(etag: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(etag + data) & 0xFFFFFFFF
    return struct.pack('>I4s', len(data), etag) + data + struct.pack('>I', crc)


@pytest.fixture
def minimal_png() -> bytes:
    """Signature, IHDR of 1x1 grayscale image and IEND."""
    ihdr = struct.pack('>IIBBBBB', 1, 1, 8, 0, 0, 0, 0)
    return SIGNATURE + raw_chunk(b'IHDR', ihdr) + raw_chunk(b'IEND', b'')


@pytest.fixture
def pillow_png() -> bytes:
    stream = io.BytesIO()
    Image.new('RGB', (8, 4), color=(200, 30, 90)).save(stream, format='PNG')
    return stream.getvalue()


@pytest.fixture
def png_file(tmp_path, minimal_png):
    path = tmp_path / 'image.png'
    path.write_bytes(minimal_png)
    return path
