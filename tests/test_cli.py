"""Tests for Typer CLI interface."""

from fixtures.vcf_generator import make_sites_only_vcf
from typer.testing import CliRunner

from vcf_stream import __version__
from vcf_stream.cli import app

runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb", "COLUMNS": "200"})


class TestCLIHelp:
    """Tests for CLI help and basic structure."""

    def test_help_command(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Variant Call Format" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestMetaCommand:
    def test_shows_declarations_and_samples(self, trio_vcf_file):
        result = runner.invoke(app, ["meta", str(trio_vcf_file)])

        assert result.exit_code == 0
        assert "Total Depth" in result.stdout
        assert "LowQual" in result.stdout
        assert "PROBAND, FATHER, MOTHER" in result.stdout

    def test_sites_only(self, tmp_path):
        path = tmp_path / "sites.vcf"
        path.write_text(make_sites_only_vcf())

        result = runner.invoke(app, ["meta", str(path)])

        assert result.exit_code == 0
        assert "Samples: none (sites-only)" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["meta", str(tmp_path / "missing.vcf")])
        assert result.exit_code == 1
        assert "not found" in result.stdout


class TestCheckCommand:
    def test_counts_records(self, trio_vcf_gz_file):
        result = runner.invoke(app, ["check", str(trio_vcf_gz_file)])

        assert result.exit_code == 0
        assert "2 records" in result.stdout

    def test_counts_vep_annotations(self, vep_csq_vcf_file):
        result = runner.invoke(app, ["check", str(vep_csq_vcf_file), "--vep", "CSQ"])

        assert result.exit_code == 0
        assert "CSQ annotations: 2" in result.stdout

    def test_reports_parse_error(self, tmp_path):
        path = tmp_path / "bad.vcf"
        path.write_text(
            "##fileformat=VCFv4.3\n"
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
            "chr1\t100\t.\tA\n"
        )

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert "expected 8 fields, got 4" in result.stdout
        assert "bad.vcf:3" in result.stdout

    def test_uses_config_file(self, tmp_path, trio_vcf_file):
        config_path = tmp_path / "vcf_stream.toml"
        config_path.write_text("[vcf_stream]\nstrict_genotypes = true\n")

        result = runner.invoke(app, ["check", str(trio_vcf_file), "--config", str(config_path)])

        assert result.exit_code == 0

    def test_invalid_config_file(self, tmp_path, trio_vcf_file):
        config_path = tmp_path / "vcf_stream.toml"
        config_path.write_text('[vcf_stream]\nstrict_vep = "yes"\n')

        result = runner.invoke(app, ["check", str(trio_vcf_file), "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Configuration Error" in result.stdout
