"""Unit tests for VEP/ANN annotation parsing."""

import logging

import pytest

from vcf_stream.errors import (
    AnnotationArityMismatchError,
    MissingFormatSpecError,
    TypeMismatchError,
    UnknownFieldError,
)
from vcf_stream.header import MetaSchemaBuilder
from vcf_stream.models import VCFRecord
from vcf_stream.vep import annotation_fields, build_vep_parser

SITES_HEADER = "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO"

ANN_DECLARATION = (
    '##INFO=<ID=ANN,Number=.,Type=String,Description="Functional annotations. '
    'Format: Allele|Gene">'
)
CSQ_DECLARATION = (
    '##INFO=<ID=CSQ,Number=.,Type=String,Description="Consequence annotations from '
    'Ensembl VEP. Format: Allele|Consequence|IMPACT|SYMBOL|DISTANCE">'
)


def make_schema(*declarations: str):
    builder = MetaSchemaBuilder()
    for line in declarations:
        builder.consume_line(line)
    builder.consume_line(SITES_HEADER)
    return builder.build()


def make_record(info: dict) -> VCFRecord:
    return VCFRecord(
        chrom="chr1", pos=100, variant_id=".", ref="C", alt="G", qual=".", filter=".", info=info
    )


class TestAnnotationFields:
    """Test extraction of the component names from the declaration."""

    def test_fields_from_description(self):
        schema = make_schema(CSQ_DECLARATION)
        assert annotation_fields(schema, "CSQ") == (
            "Allele",
            "Consequence",
            "IMPACT",
            "SYMBOL",
            "DISTANCE",
        )

    def test_unknown_field(self):
        schema = make_schema(CSQ_DECLARATION)
        with pytest.raises(UnknownFieldError) as exc_info:
            build_vep_parser(schema, "ANN")
        assert exc_info.value.field == "ANN"

    def test_description_without_format(self):
        schema = make_schema(
            '##INFO=<ID=ANN,Number=.,Type=String,Description="SnpEff annotations">'
        )
        with pytest.raises(MissingFormatSpecError):
            build_vep_parser(schema)

    def test_default_field_is_ann(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION))
        assert parse(make_record({"ANN": "A|GENE1"})) == [{"Allele": "A", "Gene": "GENE1"}]


class TestAnnotationValues:
    """Test decoding of annotation values on records."""

    def test_multiple_annotations(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION), "ANN")

        result = parse(make_record({"ANN": "A|GENE1,B|GENE2"}))

        assert result == [
            {"Allele": "A", "Gene": "GENE1"},
            {"Allele": "B", "Gene": "GENE2"},
        ]

    def test_record_without_field(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION))
        assert parse(make_record({"DP": 10})) is None

    def test_numeric_components_coerced(self):
        parse = build_vep_parser(make_schema(CSQ_DECLARATION), "CSQ")

        result = parse(make_record({"CSQ": "G|upstream_gene_variant|MODIFIER|TP53|1200"}))

        assert result[0]["DISTANCE"] == 1200
        assert result[0]["SYMBOL"] == "TP53"

    def test_empty_components_kept(self):
        parse = build_vep_parser(make_schema(CSQ_DECLARATION), "CSQ")
        result = parse(make_record({"CSQ": "G|missense_variant|MODERATE||"}))
        assert result[0]["SYMBOL"] == ""
        assert result[0]["DISTANCE"] == ""

    def test_parser_reused_across_records(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION))

        first = parse(make_record({"ANN": "A|GENE1"}))
        second = parse(make_record({"ANN": "T|GENE9"}))

        assert first == [{"Allele": "A", "Gene": "GENE1"}]
        assert second == [{"Allele": "T", "Gene": "GENE9"}]


class TestStrictness:
    """Test strict and lenient handling of malformed annotations."""

    def test_too_few_components_strict(self):
        parse = build_vep_parser(make_schema(CSQ_DECLARATION), "CSQ")

        with pytest.raises(AnnotationArityMismatchError) as exc_info:
            parse(make_record({"CSQ": "G|missense_variant|MODERATE"}))

        assert exc_info.value.expected == 5
        assert exc_info.value.actual == 3

    def test_too_few_components_lenient(self, caplog):
        parse = build_vep_parser(make_schema(CSQ_DECLARATION), "CSQ", strict=False)

        with caplog.at_level(logging.WARNING):
            result = parse(make_record({"CSQ": "G|missense_variant|MODERATE"}))

        assert result == [{"Allele": "G", "Consequence": "missense_variant", "IMPACT": "MODERATE"}]
        assert "expects 5 components" in caplog.text

    def test_too_many_components_lenient(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION), strict=False)
        result = parse(make_record({"ANN": "A|GENE1|extra"}))
        assert result == [{"Allele": "A", "Gene": "GENE1"}]

    def test_numeric_value_strict(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION))
        with pytest.raises(TypeMismatchError):
            parse(make_record({"ANN": 5}))

    def test_numeric_value_lenient(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION), strict=False)
        assert parse(make_record({"ANN": 5})) == [{"Allele": 5}]

    def test_flag_value_lenient(self):
        parse = build_vep_parser(make_schema(ANN_DECLARATION), strict=False)
        assert parse(make_record({"ANN": None})) == [{"Allele": ""}]
