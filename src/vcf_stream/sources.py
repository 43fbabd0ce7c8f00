"""Line sources for the VCF readers."""

import gzip
import logging
from collections.abc import AsyncIterator, Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx

from .config import ParserConfig
from .parser import VCFReader

logger = logging.getLogger(__name__)

GZIP_SUFFIXES = {".gz", ".bgz"}


def iter_lines(path: Path | str) -> Iterator[str]:
    """Yield the lines of a plain or gzip-compressed text file.

    Newlines are stripped; the file is closed when the generator is
    exhausted or closed.
    """
    path = Path(path)
    if path.suffix in GZIP_SUFFIXES:
        handle = gzip.open(path, "rt", encoding="utf-8")
    else:
        handle = open(path, encoding="utf-8")

    with handle:
        for line in handle:
            yield line.rstrip("\r\n")


@contextmanager
def open_vcf(path: Path | str, config: ParserConfig | None = None) -> Iterator[VCFReader]:
    """Open a VCF file and yield a reader over it.

    Example:
        with open_vcf("calls.vcf.gz") as reader:
            for record in reader:
                print(record.chrom, record.pos)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"VCF file not found: {path}")

    lines = iter_lines(path)
    try:
        yield VCFReader(lines, source_name=str(path), config=config)
    finally:
        lines.close()


async def stream_url_lines(
    url: str, client: httpx.AsyncClient | None = None
) -> AsyncIterator[str]:
    """Yield the lines of a plain-text VCF served over HTTP.

    Args:
        url: Address of the VCF.
        client: Client to issue the request with; a temporary one is created
            (and closed afterwards) when omitted.
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(follow_redirects=True, timeout=300.0)

    logger.info("Streaming VCF from: %s", url)
    try:
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            async for line in response.aiter_lines():
                yield line
    finally:
        if owns_client:
            await client.aclose()
