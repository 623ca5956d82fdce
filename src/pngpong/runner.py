import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
import yaml

from pngpong.kernel.buffer import FormatError
from pngpong.kernel.chunk import Chunk, InvalidUtf8
from pngpong.kernel.chunk_type import ChunkType
from pngpong.kernel.container import NotFound, Png
from pngpong.kernel.preset import png
from pngpong.kernel.tree import describe
from pngpong.utils.fileio import read_file, write_file

app = typer.Typer()


@contextmanager
def report_errors() -> Iterator[None]:
    try:
        yield
    except FormatError as exc:
        where = f' (at offset {exc.offset})' if exc.offset is not None else ''
        typer.echo(f'Error: {exc}{where}', err=True)
        raise typer.Exit(code=1)
    except (NotFound, InvalidUtf8, OSError) as exc:
        typer.echo(f'Error: {exc}', err=True)
        raise typer.Exit(code=1)


def open_png(filename: Path) -> Png:
    return png.read_png(read_file(filename))


def save_png(filename: Path, image: Png) -> None:
    write_file(filename, png.write_png(image))


@app.callback()
def main(
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Enable debug logs'),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )


@app.command()
def encode(
    filename: Path = typer.Argument(..., help='PNG file to hide message in'),
    chunk_type: str = typer.Argument(..., help='4 letter chunk type code'),
    message: str = typer.Argument(..., help='Message to hide'),
    output: Optional[Path] = typer.Option(
        None, '--output', '-o', help='Write to this file instead of overwriting'
    ),
) -> None:
    with report_errors():
        ctype = ChunkType.parse(chunk_type)
        if ctype.critical or not ctype.valid:
            png.logger.warning(
                'chunk type %s is not ancillary with valid reserved bit, '
                'decoders may reject the file',
                ctype,
            )
        image = open_png(filename)
        image.append(Chunk.new(ctype, message.encode('utf-8')))
        save_png(output or filename, image)


@app.command()
def decode(
    filename: Path = typer.Argument(..., help='PNG file with hidden message'),
    chunk_type: str = typer.Argument(..., help='4 letter chunk type code'),
) -> None:
    with report_errors():
        image = open_png(filename)
        chunk = image.find_by_type(chunk_type)
        if chunk is None:
            raise NotFound(ChunkType.parse(chunk_type))
        typer.echo(chunk.data_as_text())


@app.command()
def remove(
    filename: Path = typer.Argument(..., help='PNG file with hidden message'),
    chunk_type: str = typer.Argument(..., help='4 letter chunk type code'),
    output: Optional[Path] = typer.Option(
        None, '--output', '-o', help='Write to this file instead of overwriting'
    ),
    force: bool = typer.Option(False, '--force', help='Allow removing critical chunks'),
) -> None:
    with report_errors():
        ctype = ChunkType.parse(chunk_type)
        if ctype.critical and not force:
            typer.echo(
                f'Error: refusing to remove critical chunk {ctype}, use --force',
                err=True,
            )
            raise typer.Exit(code=1)
        image = open_png(filename)
        chunk = image.remove_by_type(ctype)
        png.logger.debug('removed %r', chunk)
        save_png(output or filename, image)


@app.command('print')
def print_messages(
    filename: Path = typer.Argument(..., help='PNG file to print messages from'),
) -> None:
    with report_errors():
        for chunk in open_png(filename):
            try:
                typer.echo(chunk.data_as_text())
            except InvalidUtf8 as exc:
                png.logger.debug('skipping %s', exc)


@app.command('map')
def map_chunks(
    filename: Path = typer.Argument(..., help='PNG file to read from'),
    pattern: Optional[str] = typer.Option(
        None, '--type', '-t', help='Chunk type pattern, e.g. {}Xt'
    ),
    dump: Optional[Path] = typer.Option(
        None, '--dump', '-d', help='Save chunk listing to YAML file'
    ),
) -> None:
    with report_errors():
        data = read_file(filename)
        chunks = [
            (offset, chunk)
            for offset, chunk in png.read_chunks(data, offset=png.check_signature(data))
            if not pattern or png.match(pattern, chunk)
        ]
        typer.echo(png.renders(chunks), nl=False)
        if dump:
            with open(dump, 'w') as listing:
                yaml.safe_dump(
                    [describe(offset, chunk) for offset, chunk in chunks],
                    listing,
                    sort_keys=False,
                )


if __name__ == '__main__':
    app()
