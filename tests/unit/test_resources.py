"""
Unit tests for resource and URL loading and property file parsing.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from sqlmap_config.exceptions import ResourceLoadError
from sqlmap_config.io import resources


class TestGetResource:
    """Test resource lookup order."""

    def test_relative_to_base_path(self, tmp_path):
        (tmp_path / "conf").mkdir()
        (tmp_path / "conf" / "app.properties").write_text("a=1\n")
        assert resources.get_resource_as_bytes("conf/app.properties", tmp_path) == b"a=1\n"

    def test_absolute_path(self, tmp_path):
        path = tmp_path / "abs.properties"
        path.write_text("b=2")
        assert resources.get_resource_as_bytes(str(path)) == b"b=2"

    def test_package_data(self):
        content = resources.get_resource_as_bytes("sqlmap_config/__init__.py")
        assert b"__version__" in content

    def test_package_data_below_a_plain_directory(self, tmp_path, monkeypatch):
        package_dir = tmp_path / "nested_resource_pkg"
        (package_dir / "data" / "sub").mkdir(parents=True)
        (package_dir / "__init__.py").write_text("")
        (package_dir / "data" / "sub" / "app.properties").write_text("c=3")
        monkeypatch.syspath_prepend(str(tmp_path))
        content = resources.get_resource_as_bytes("nested_resource_pkg/data/sub/app.properties")
        assert content == b"c=3"

    def test_missing_resource(self, tmp_path):
        with pytest.raises(ResourceLoadError) as exc_info:
            resources.get_resource_as_bytes("nope/missing.properties", tmp_path)
        assert exc_info.value.resource == "nope/missing.properties"


class TestGetUrl:
    """Test URL fetching."""

    def test_file_url(self, tmp_path):
        path = tmp_path / "db.properties"
        path.write_text("user=scott")
        assert resources.get_url_as_properties(path.as_uri()) == {"user": "scott"}

    def test_missing_file_url(self, tmp_path):
        with pytest.raises(ResourceLoadError):
            resources.get_url_as_bytes((tmp_path / "missing.properties").as_uri())

    def test_http_url_uses_requests(self):
        response = MagicMock()
        response.content = b"host=remote"
        with patch.object(resources.requests, "get", return_value=response) as mock_get:
            assert resources.get_url_as_properties("http://config.example/app.properties") == {"host": "remote"}
        mock_get.assert_called_once_with("http://config.example/app.properties",
                                         timeout=resources.URL_TIMEOUT_SECONDS)
        response.raise_for_status.assert_called_once()

    def test_http_failure_is_wrapped(self):
        with patch.object(resources.requests, "get", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(ResourceLoadError) as exc_info:
                resources.get_url_as_bytes("http://config.example/app.properties")
        assert "refused" in str(exc_info.value)


class TestLoadProperties:
    """Test property file formats."""

    def test_properties_format(self, fixtures_dir):
        props = resources.load_properties((fixtures_dir / "db.properties").read_bytes(), "db.properties")
        assert props == {
            "driver": "ODBC Driver 17 for SQL Server",
            "username": "scott",
            "password": "tiger",
            "schema.name": "app",
            "long.value": "first second",
        }

    def test_yaml_values_are_stringified(self, fixtures_dir):
        props = resources.load_properties((fixtures_dir / "db.yaml").read_bytes(), "db.yaml")
        assert props == {"server": "yaml-host", "database": "yamldb", "pool": "5", "trusted": "true"}

    def test_json_format(self):
        assert resources.load_properties(b'{"a": 1, "b": null}', "x.json") == {"a": "1", "b": ""}

    def test_non_mapping_rejected(self):
        with pytest.raises(ResourceLoadError):
            resources.load_properties(b"- a\n- b\n", "list.yml")

    def test_invalid_yaml_rejected(self):
        with pytest.raises(ResourceLoadError):
            resources.load_properties(b"a: [unclosed", "bad.yaml")

    def test_escaped_separators(self):
        assert resources.parse_properties("url=odbc\\:host\\=1\nempty\n") == {"url": "odbc:host=1", "empty": ""}


class TestClassForName:
    """Test dotted path imports."""

    def test_module_attribute(self):
        from sqlmap_config.session.configuration import Configuration
        assert resources.class_for_name("sqlmap_config.session.configuration.Configuration") is Configuration

    def test_nested_class(self):
        from sqlmap_config.models import JdbcType
        assert resources.class_for_name("sqlmap_config.models.JdbcType.VARCHAR") is JdbcType.VARCHAR

    @pytest.mark.parametrize("name", ["Configuration", "sqlmap_config.nope.Thing", "sqlmap_config.models.Missing"])
    def test_unresolvable_names_raise_import_error(self, name):
        with pytest.raises(ImportError):
            resources.class_for_name(name)
