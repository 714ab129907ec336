"""
CLI tests: prompts, exit codes and the report file.
"""
import json
import os
import subprocess
import sys

import pytest
from click.testing import CliRunner

from gcpfootprint import cli as cli_module
from gcpfootprint.cli import cli
from gcpfootprint.models.scope import ScopeKind

from fakes import FakeProvider

CREDS = {"GOOGLE_APPLICATION_CREDENTIALS": "/tmp/key.json"}


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "gcpfootprint.yaml").write_text("regions: [us-central1]\nzone_suffixes: [a, b]\n")
    return tmp_path


@pytest.fixture
def fake_catalog(monkeypatch):
    providers = [
        FakeProvider("Storage Bucket", [ScopeKind.GLOBAL], records=2),
        FakeProvider("Compute Instance", [ScopeKind.ZONE], records=1, fail_at={"us-central1-b"}),
    ]
    monkeypatch.setattr(cli_module, "select_providers", lambda disabled=(): providers)
    return providers


def test_module_execution():
    """Test that 'python -m gcpfootprint' works."""
    result = subprocess.run(
        [sys.executable, "-m", "gcpfootprint", "--help"],
        capture_output=True,
        text=True
    )
    assert result.returncode == 0
    assert "gcp_footprint_" in result.stdout


def test_run_writes_report(workdir, fake_catalog):
    runner = CliRunner()
    result = runner.invoke(cli, ["--project", "acme-prod"], env=CREDS)
    assert result.exit_code == 0, result.output

    report = workdir / "gcp_footprint_acme-prod.txt"
    content = report.read_bytes()
    assert b"\r\n" not in content
    text = content.decode("utf-8")
    assert "Project ID: acme-prod" in text
    assert text.count("[Storage Bucket]") == 2
    assert text.count("[Compute Instance]") == 1
    assert "REGION: us-central1\n===================\n" in text


def test_provider_failures_do_not_change_exit_code(workdir, fake_catalog):
    result = CliRunner().invoke(cli, ["--project", "acme-prod"], env=CREDS)
    assert result.exit_code == 0
    assert "failed" in result.output


def test_project_prompt(workdir, fake_catalog):
    result = CliRunner().invoke(cli, [], input="acme-dev\n", env=CREDS)
    assert result.exit_code == 0, result.output
    assert (workdir / "gcp_footprint_acme-dev.txt").exists()


def test_credentials_prompt_sets_env(workdir, fake_catalog, monkeypatch):
    monkeypatch.setenv("GOOGLE_APPLICATION_CREDENTIALS", "unused")
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS")
    seen = {}

    def select(disabled=()):
        seen["creds"] = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
        return fake_catalog

    monkeypatch.setattr(cli_module, "select_providers", select)
    result = CliRunner().invoke(cli, ["--project", "acme-prod"], input="/secrets/sa.json\n")
    assert result.exit_code == 0, result.output
    assert seen["creds"] == "/secrets/sa.json"


def test_missing_project_is_fatal(workdir, fake_catalog):
    result = CliRunner().invoke(cli, [], input="\n", env=CREDS)
    assert result.exit_code == 2
    assert list(workdir.glob("gcp_footprint_*.txt")) == []


def test_bad_config_is_fatal(workdir, fake_catalog):
    (workdir / "gcpfootprint.yaml").write_text("max_workers: -3\n")
    result = CliRunner().invoke(cli, ["--project", "acme-prod"], env=CREDS)
    assert result.exit_code == 2
    assert list(workdir.glob("gcp_footprint_*.txt")) == []


def test_unwritable_output_is_fatal(workdir, fake_catalog):
    blocker = workdir / "blocker"
    blocker.write_text("not a directory")
    result = CliRunner().invoke(
        cli, ["--project", "acme-prod", "--output-dir", str(blocker / "out")], env=CREDS
    )
    assert result.exit_code == 2


def test_summary_json(workdir, fake_catalog):
    out = workdir / "summary.json"
    result = CliRunner().invoke(
        cli, ["--project", "acme-prod", "--workers", "2", "--summary-json", str(out)], env=CREDS
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text())
    assert data["totals"]["failures"] == 1
    assert data["counts"] == {"Storage Bucket": 2, "Compute Instance": 1}


def test_unwritable_summary_json_is_reported(workdir, fake_catalog):
    out = workdir / "missing" / "summary.json"
    result = CliRunner().invoke(cli, ["--project", "acme-prod", "--summary-json", str(out)], env=CREDS)
    assert result.exit_code == 0, result.output
    assert "cannot write summary" in result.output
    assert (workdir / "gcp_footprint_acme-prod.txt").exists()


def test_timeout_cancels_run(workdir, monkeypatch):
    (workdir / "gcpfootprint.yaml").write_text("regions: [us-central1]\ngrace_period: 0.1\n")
    providers = [
        FakeProvider("Storage Bucket", [ScopeKind.GLOBAL], records=1),
        FakeProvider("Subnet", [ScopeKind.REGION], records=1, delay=lambda scope: 3.0),
    ]
    monkeypatch.setattr(cli_module, "select_providers", lambda disabled=(): providers)

    result = CliRunner().invoke(cli, ["--project", "acme-prod", "--timeout", "0.3"], env=CREDS)

    assert result.exit_code == 130, result.output
    assert "deadline reached" in result.output
    assert "abandoned" in result.output
    text = (workdir / "gcp_footprint_acme-prod.txt").read_text()
    assert text.count("[Storage Bucket]") == 1
    assert "REGION:" not in text
