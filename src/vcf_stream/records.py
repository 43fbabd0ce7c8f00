"""Decoding of VCF data lines."""

import re

from .attributes import parse_attributes
from .config import ParserConfig
from .errors import FieldCountMismatchError, GenotypeArityMismatchError, InvalidPositionError
from .models import VCFRecord, VCFSchema

POSITION_PATTERN = re.compile(r"[0-9]+")


def parse_position(text: str) -> int:
    """Parse the POS column, which must be a non-negative integer."""
    if not POSITION_PATTERN.fullmatch(text):
        raise InvalidPositionError(f"invalid position '{text}'.")
    return int(text)


class DataLineDecoder:
    """Decodes tab-delimited data lines against a finished schema."""

    def __init__(self, schema: VCFSchema, config: ParserConfig | None = None):
        self.schema = schema
        self.config = config or ParserConfig()
        self.sample_ids = schema.sample_ids
        self.expected_columns = schema.data_column_count

    def decode(self, line: str) -> VCFRecord:
        parts = line.strip().split("\t")
        if len(parts) != self.expected_columns:
            raise FieldCountMismatchError(self.expected_columns, len(parts))

        info_text = parts[7]
        # An INFO column of "." means no attributes, not a "." flag.
        info = {} if info_text == "." else parse_attributes(info_text, ";")

        record = VCFRecord(
            chrom=parts[0],
            pos=parse_position(parts[1]),
            variant_id=parts[2],
            ref=parts[3],
            alt=parts[4],
            qual=parts[5],
            filter=parts[6],
            info=info,
        )
        if not self.schema.has_genotypes:
            return record

        record.format = parts[8]
        record.genotypes = self._decode_genotypes(parts[8].split(":"), parts[9:])
        return record

    def _decode_genotypes(
        self, keys: list[str], columns: list[str]
    ) -> dict[str, dict[str, str | None]]:
        genotypes = {}
        for sample_id, column in zip(self.sample_ids, columns, strict=True):
            values = column.split(":")
            if len(values) > len(keys) and self.config.strict_genotypes:
                raise GenotypeArityMismatchError(
                    f"sample '{sample_id}' has {len(values)} values "
                    f"for {len(keys)} FORMAT keys."
                )
            genotypes[sample_id] = {
                key: values[j] if j < len(values) else None for j, key in enumerate(keys)
            }
        return genotypes
