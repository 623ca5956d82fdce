import os
from typing import Union

PathLike = Union[str, 'os.PathLike[str]']


def read_file(path: PathLike) -> bytes:
    with open(path, 'rb') as res:
        return res.read()


def write_file(path: PathLike, data: bytes) -> int:
    with open(path, 'wb') as res:
        return res.write(data)
