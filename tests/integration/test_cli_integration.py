"""
Integration tests for the sqlmap-config command line.
"""

import pytest

from sqlmap_config.cli import main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv("SQLMAP_CONFIG_PATH", raising=False)
    monkeypatch.delenv("SQLMAP_CONFIG_ENVIRONMENT", raising=False)


def test_valid_document(sample_config_path, caplog):
    with caplog.at_level("INFO"):
        assert main([str(sample_config_path)]) == 0
    assert "Environment: development" in caplog.text
    assert "Mapped Statements: 4" in caplog.text


def test_environment_and_properties(sample_config_path):
    assert main([str(sample_config_path), "--environment", "production",
                 "--property", "username=cli", "-p", "password=secret"]) == 0


def test_environment_variables(sample_config_path, monkeypatch):
    monkeypatch.setenv("SQLMAP_CONFIG_PATH", str(sample_config_path))
    monkeypatch.setenv("SQLMAP_CONFIG_ENVIRONMENT", "production")
    assert main([]) == 0


def test_undeclared_environment(sample_config_path):
    assert main([str(sample_config_path), "-e", "qa"]) == 1


def test_environment_requested_but_none_declared(tmp_path):
    path = tmp_path / "bare.xml"
    path.write_text("<configuration/>")
    assert main([str(path), "--environment", "qa"]) == 1
    assert main([str(path)]) == 0


def test_invalid_document(tmp_path):
    path = tmp_path / "bad.xml"
    path.write_text('<configuration><settings><setting name="nope" value="1"/></settings></configuration>')
    assert main([str(path)]) == 1


def test_missing_document(tmp_path):
    assert main([str(tmp_path / "missing.xml")]) == 1


def test_no_document_given():
    assert main([]) == 2


def test_malformed_property_argument(sample_config_path):
    with pytest.raises(SystemExit):
        main([str(sample_config_path), "--property", "novalue"])
