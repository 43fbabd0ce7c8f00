"""Pytest configuration and fixtures for vcf-stream tests."""

import gzip
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.vcf_generator import (  # noqa: E402
    SyntheticVariant,
    VCFGenerator,
    make_sites_only_vcf,
    make_trio_vcf,
    make_vep_csq_vcf,
)


async def async_lines(lines):
    """Wrap a list of lines as an asynchronous source."""
    for line in lines:
        yield line


class CountingLines:
    """Iterator over lines that records how many were pulled."""

    def __init__(self, lines):
        self._lines = iter(lines)
        self.pulled = 0

    def __iter__(self):
        return self

    def __next__(self):
        line = next(self._lines)
        self.pulled += 1
        return line


class StrictLines(CountingLines):
    """Line iterator that fails if pulled again after signalling exhaustion."""

    def __init__(self, lines):
        super().__init__(lines)
        self.exhausted = False

    def __next__(self):
        assert not self.exhausted, "pulled past exhaustion"
        try:
            return super().__next__()
        except StopIteration:
            self.exhausted = True
            raise


class StrictAsyncLines:
    """Async line source that fails if pulled again after signalling exhaustion."""

    def __init__(self, lines):
        self._lines = iter(lines)
        self.exhausted = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        assert not self.exhausted, "pulled past exhaustion"
        try:
            return next(self._lines)
        except StopIteration:
            self.exhausted = True
            raise StopAsyncIteration from None


@pytest.fixture
def vcf_generator():
    """Provide VCFGenerator class for tests."""
    return VCFGenerator


@pytest.fixture
def synthetic_variant_factory():
    """Factory for creating SyntheticVariant instances."""

    def _factory(**kwargs):
        defaults = {
            "chrom": "chr1",
            "pos": 100,
            "ref": "A",
            "alt": ["G"],
        }
        defaults.update(kwargs)
        return SyntheticVariant(**defaults)

    return _factory


@pytest.fixture
def trio_lines() -> list[str]:
    return make_trio_vcf().splitlines()


@pytest.fixture
def sites_only_lines() -> list[str]:
    return make_sites_only_vcf().splitlines()


@pytest.fixture
def vep_csq_lines() -> list[str]:
    return make_vep_csq_vcf().splitlines()


@pytest.fixture
def trio_vcf_file(tmp_path) -> Path:
    """Write the trio VCF to a plain text file."""
    path = tmp_path / "trio.vcf"
    path.write_text(make_trio_vcf())
    return path


@pytest.fixture
def trio_vcf_gz_file(tmp_path) -> Path:
    """Write the trio VCF to a gzip-compressed file."""
    path = tmp_path / "trio.vcf.gz"
    with gzip.open(path, "wt") as f:
        f.write(make_trio_vcf())
    return path


@pytest.fixture
def vep_csq_vcf_file(tmp_path) -> Path:
    path = tmp_path / "vep.vcf"
    path.write_text(make_vep_csq_vcf())
    return path
