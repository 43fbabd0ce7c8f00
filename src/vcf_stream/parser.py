"""Streaming VCF readers.

``ParserCore`` does all of the parsing and owns the line counter; it never
touches the line source. ``VCFReader`` and ``AsyncVCFReader`` only differ in
how they pull the next line from it.

Example:
    reader = VCFReader(path.read_text().splitlines(), source_name=str(path))
    schema = reader.meta()
    for record in reader:
        ...
"""

import logging
from collections.abc import AsyncIterable, Iterable, Iterator
from contextlib import contextmanager
from typing import NoReturn

from .config import ParserConfig
from .errors import UnexpectedEndOfInputError, VCFError
from .header import MetaSchemaBuilder
from .models import VCFRecord, VCFSchema
from .records import DataLineDecoder
from .vep import VEPParser, build_vep_parser

logger = logging.getLogger(__name__)


class ParserCore:
    """Line-at-a-time VCF parsing state shared by both readers."""

    def __init__(self, source_name: str, config: ParserConfig | None = None):
        self.source_name = source_name
        self.config = config or ParserConfig()
        self.line_num = 0
        self.schema: VCFSchema | None = None
        self.header_error: VCFError | None = None
        self.exhausted = False
        self._builder = MetaSchemaBuilder()
        self._decoder: DataLineDecoder | None = None

    @contextmanager
    def _located(self) -> Iterator[None]:
        try:
            yield
        except VCFError as exc:
            exc.locate(self.source_name, self.line_num)
            raise

    def check_header(self) -> None:
        """Re-raise the error that stopped header parsing, if any."""
        if self.header_error is not None:
            raise self.header_error

    def feed_header(self, line: str) -> bool:
        """Consume one header line; True once the schema is complete."""
        self.line_num += 1
        try:
            with self._located():
                finished = self._builder.consume_line(line)
        except VCFError as exc:
            self.header_error = exc
            raise

        if finished:
            self.schema = self._builder.build()
            self._decoder = DataLineDecoder(self.schema, self.config)
            logger.info(
                "Parsed header of %s: %d INFO, %d FILTER, %d FORMAT declarations, %d samples",
                self.source_name,
                len(self.schema.info),
                len(self.schema.filters),
                len(self.schema.formats),
                len(self.schema.sample_ids),
            )
        return finished

    def end_of_header(self) -> NoReturn:
        self.exhausted = True
        exc = UnexpectedEndOfInputError("unexpected end of input.", self.source_name, self.line_num)
        self.header_error = exc
        raise exc

    def decode(self, line: str) -> VCFRecord | None:
        """Decode one data line; None for a blank line."""
        if self._decoder is None:
            raise RuntimeError("header has not been parsed")
        self.line_num += 1
        if not line.strip():
            logger.debug("Skipping blank line %s:%d", self.source_name, self.line_num)
            return None
        with self._located():
            return self._decoder.decode(line)

    def vep_parser(self, field: str | None = None, strict: bool | None = None) -> VEPParser:
        if self.schema is None:
            raise RuntimeError("header has not been parsed")
        return build_vep_parser(
            self.schema,
            field or self.config.vep_field,
            self.config.strict_vep if strict is None else strict,
        )


class VCFReader:
    """Reads a VCF from a synchronous source of lines."""

    def __init__(
        self,
        lines: Iterable[str],
        source_name: str = "<lines>",
        config: ParserConfig | None = None,
    ):
        self._lines = iter(lines)
        self._core = ParserCore(source_name, config)

    @property
    def source_name(self) -> str:
        return self._core.source_name

    @property
    def line_num(self) -> int:
        """Number of lines consumed so far, header lines included."""
        return self._core.line_num

    @property
    def config(self) -> ParserConfig:
        return self._core.config

    def meta(self) -> VCFSchema:
        """Parse the header on first call; later calls return the same schema."""
        if self._core.schema is None:
            self._core.check_header()
            while True:
                line = next(self._lines, None)
                if line is None:
                    self._core.end_of_header()
                if self._core.feed_header(line):
                    break
        return self._core.schema

    def next(self) -> VCFRecord | None:
        """Return the next record, or None when the source is exhausted."""
        self.meta()
        if self._core.exhausted:
            return None
        while True:
            line = next(self._lines, None)
            if line is None:
                self._core.exhausted = True
                return None
            record = self._core.decode(line)
            if record is not None:
                return record

    def vep_parser(self, field: str | None = None, strict: bool | None = None) -> VEPParser:
        """Build a VEP annotation parser for this source's schema.

        ``field`` and ``strict`` default to the reader's configuration.
        """
        self.meta()
        return self._core.vep_parser(field, strict)

    def __iter__(self) -> "VCFReader":
        return self

    def __next__(self) -> VCFRecord:
        record = self.next()
        if record is None:
            raise StopIteration
        return record


class AsyncVCFReader:
    """Reads a VCF from an asynchronous source of lines.

    Only pulling a line suspends; each line is parsed synchronously.
    """

    def __init__(
        self,
        lines: AsyncIterable[str],
        source_name: str = "<lines>",
        config: ParserConfig | None = None,
    ):
        self._lines = aiter(lines)
        self._core = ParserCore(source_name, config)

    @property
    def source_name(self) -> str:
        return self._core.source_name

    @property
    def line_num(self) -> int:
        return self._core.line_num

    @property
    def config(self) -> ParserConfig:
        return self._core.config

    async def meta(self) -> VCFSchema:
        if self._core.schema is None:
            self._core.check_header()
            while True:
                line = await anext(self._lines, None)
                if line is None:
                    self._core.end_of_header()
                if self._core.feed_header(line):
                    break
        return self._core.schema

    async def next(self) -> VCFRecord | None:
        await self.meta()
        if self._core.exhausted:
            return None
        while True:
            line = await anext(self._lines, None)
            if line is None:
                self._core.exhausted = True
                return None
            record = self._core.decode(line)
            if record is not None:
                return record

    async def vep_parser(
        self, field: str | None = None, strict: bool | None = None
    ) -> VEPParser:
        await self.meta()
        return self._core.vep_parser(field, strict)

    def __aiter__(self) -> "AsyncVCFReader":
        return self

    async def __anext__(self) -> VCFRecord:
        record = await self.next()
        if record is None:
            raise StopAsyncIteration
        return record
