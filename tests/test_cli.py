"""Tests for the command-line interface and configuration."""

import argparse

import pandas as pd
import pytest

from pbdbtax.cli import create_parser, main
from pbdbtax.core.utils import taxa_list_url
from pbdbtax.models.config import ConfigError, PbdbConfig
from pbdbtax.models.taxonomic import LINEAGE_COLUMNS


class TestFormatCommand:
    """Test formatting a taxa table end to end."""

    def test_format_and_audit(self, tmp_path, taxa_csv):
        output = tmp_path / "PBDBformatted.csv"
        report = tmp_path / "multiGenera.txt"

        exit_code = main([
            "format", str(taxa_csv),
            "--output", str(output),
            "--workers", "1",
            "--audit",
            "--report", str(report),
            "--report-subgenera",
        ])

        assert exit_code == 0
        df_lineage = pd.read_csv(output, keep_default_na=False)
        assert list(df_lineage.columns) == LINEAGE_COLUMNS
        assert sorted(df_lineage["Genus"]) == ["Acanthopyge"] * 3 + ["Nautilus", "Orphanus"]
        lines = report.read_text(encoding="utf8").splitlines()
        assert lines[1:] == ["OK: Genus Acanthopyge has 2 subgenera."]

    def test_audit_command(self, tmp_path, taxa_csv):
        output = tmp_path / "PBDBformatted.csv"
        report = tmp_path / "report.txt"
        assert main(["format", str(taxa_csv), "-o", str(output), "--workers", "1"]) == 0

        assert main(["audit", str(output), "--report", str(report)]) == 0
        assert report.read_text(encoding="utf8").startswith("The presence of subgenera")

    def test_missing_input_fails(self, tmp_path):
        assert main(["format", str(tmp_path / "missing.csv"), "--workers", "1"]) == 1

    def test_audit_missing_columns_fails(self, tmp_path):
        path = tmp_path / "bad.csv"
        pd.DataFrame({"Genus": ["Foo", "Foo"]}).to_csv(path, index=False)
        assert main(["audit", str(path), "--report", str(tmp_path / "r.txt")]) == 1


class TestPbdbConfig:
    """Test configuration from arguments and environment."""

    def test_workers_from_environment(self, monkeypatch):
        monkeypatch.setenv("PBDBTAX_WORKERS", "3")
        args = create_parser().parse_args(["format", "pbdb_data.csv"])
        assert PbdbConfig(args).workers == 3

    def test_invalid_workers(self):
        args = create_parser().parse_args(["format", "pbdb_data.csv", "--workers", "0"])
        with pytest.raises(ConfigError):
            PbdbConfig(args)

    def test_zero_workers_from_environment(self, monkeypatch):
        monkeypatch.setenv("PBDBTAX_WORKERS", "0")
        args = create_parser().parse_args(["format", "pbdb_data.csv"])
        with pytest.raises(ConfigError, match="at least 1"):
            PbdbConfig(args)

    def test_invalid_environment_value(self, monkeypatch):
        monkeypatch.setenv("PBDBTAX_BATCH_SIZE", "many")
        args = create_parser().parse_args(["format", "pbdb_data.csv"])
        with pytest.raises(ConfigError):
            PbdbConfig(args)

    def test_base_name_builds_url(self):
        args = create_parser().parse_args(["format", "--base-name", "Metazoa", "Retaria"])
        config = PbdbConfig(args)
        assert config.input_path == taxa_list_url(["Metazoa", "Retaria"])

    def test_input_required(self):
        with pytest.raises(ConfigError):
            PbdbConfig(argparse.Namespace(command="format"))


class TestTaxaListUrl:
    """Test PBDB download URLs."""

    def test_default(self):
        assert taxa_list_url() == (
            "https://paleobiodb.org/data1.2/taxa/list.csv?base_name=Metazoa&show=app&vocab=pbdb"
        )

    def test_several_base_names(self):
        assert "base_name=Metazoa,Retaria,Plantae&" in taxa_list_url("Metazoa,Retaria,Plantae")
