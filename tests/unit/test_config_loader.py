"""
Unit tests for HubSpot Backup configuration loading.
"""

from pathlib import Path

import pytest
import yaml
from hubspot_backup.config.config_loader import (
    BackupConfigLoader,
    ConfigurationError,
    describe_endpoints,
    select_endpoints,
)
from hubspot_backup.config.endpoints import DEFAULT_ENDPOINTS, default_config
from hubspot_backup.models.backup_config import PaginationStyle


@pytest.fixture
def config_file(temp_output_dir):
    """Write a YAML configuration and return its path."""

    def _write(data, name="backup.yaml"):
        path = Path(temp_output_dir) / name
        with open(path, "w") as f:
            if isinstance(data, str):
                f.write(data)
            else:
                yaml.dump(data, f)
        return str(path)

    return _write


class TestDefaultEndpoints:
    """Test the built-in endpoint catalogue."""

    def test_sixteen_endpoints_in_order(self):
        config = default_config()
        assert [endpoint.name for endpoint in config.endpoints] == [
            "lists",
            "blogs",
            "blog-posts",
            "blog-authors",
            "blog-topics",
            "blog-comments",
            "layouts",
            "pages",
            "hubdb-tables",
            "templates",
            "url-mappings",
            "deals",
            "marketing-emails",
            "workflows",
            "companies",
            "contacts",
        ]

    def test_style_counts(self):
        styles = [style for _, _, style in DEFAULT_ENDPOINTS]
        assert styles.count(PaginationStyle.HAS_MORE) == 3
        assert styles.count(PaginationStyle.ONCE) == 3
        assert styles.count(PaginationStyle.LIMIT) == 9
        assert styles.count(PaginationStyle.VID_OFFSET) == 1

    def test_contacts_defaults(self):
        config = default_config()
        contacts = config.endpoints[-1]
        assert config.resolve_url(contacts) == (
            "https://api.hubapi.com/contacts/v1/lists/all/contacts/all"
        )
        assert contacts.page_size == 100
        assert contacts.offset_param == "vidOffset"
        assert contacts.cursor_key == "vid-offset"
        assert contacts.continuation_delay == 1.0


class TestBackupConfigLoader:
    """Test BackupConfigLoader."""

    def test_load_without_file(self):
        config = BackupConfigLoader(base_url="https://proxy.test").load()
        assert len(config.endpoints) == 16
        assert config.base_url == "https://proxy.test"

    def test_load_replaces_endpoints(self, config_file):
        path = config_file(
            {
                "base_url": "https://api.hubapi.com",
                "endpoints": [
                    {"name": "forms", "url": "/forms/v2/forms", "pagination": "once"},
                    {"name": "tickets", "url": "/crm-objects/v1/objects/tickets/paged",
                     "pagination": "has_more", "max_pages": 10},
                ],
            }
        )

        config = BackupConfigLoader(path).load()

        assert [endpoint.name for endpoint in config.endpoints] == ["forms", "tickets"]
        assert config.endpoints[1].max_pages == 10

    def test_load_disabled(self, config_file):
        path = config_file({"disabled": ["contacts", "workflows"]})

        config = BackupConfigLoader(path).load()

        names = [endpoint.name for endpoint in config.endpoints]
        assert len(names) == 14
        assert "contacts" not in names
        assert "workflows" not in names

    def test_load_disabled_unknown(self, config_file):
        path = config_file({"disabled": ["tickets"]})
        with pytest.raises(ConfigurationError, match="Unknown endpoints disabled: tickets"):
            BackupConfigLoader(path).load()

    def test_load_not_found(self):
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            BackupConfigLoader("/nonexistent/backup.yaml").load()

    def test_load_invalid_yaml(self, config_file):
        path = config_file("endpoints: [", name="invalid.yaml")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            BackupConfigLoader(path).load()

    def test_load_not_a_mapping(self, config_file):
        path = config_file("- just\n- a list\n", name="list.yaml")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            BackupConfigLoader(path).load()

    def test_load_validation_error(self, config_file):
        path = config_file({"endpoints": [{"name": "forms", "pagination": "cursor"}]})
        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            BackupConfigLoader(path).load()

    def test_load_duplicate_names(self, config_file):
        path = config_file(
            {"endpoints": [{"name": "forms", "url": "/a"}, {"name": "forms", "url": "/b"}]}
        )
        with pytest.raises(ConfigurationError, match="Duplicate endpoint names: forms"):
            BackupConfigLoader(path).load()


class TestSelectEndpoints:
    """Test select_endpoints and describe_endpoints."""

    def test_select_subset_keeps_order(self):
        config = select_endpoints(default_config(), ["contacts", "lists"])
        assert [endpoint.name for endpoint in config.endpoints] == ["lists", "contacts"]

    def test_select_none_returns_all(self):
        config = default_config()
        assert select_endpoints(config, None) is config

    def test_select_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown endpoints: forms"):
            select_endpoints(default_config(), ["forms"])

    def test_describe(self):
        info = describe_endpoints(select_endpoints(default_config(), ["deals"]))
        assert info == [
            {
                "name": "deals",
                "url": "https://api.hubapi.com/deals/v1/deal/paged",
                "pagination": "has_more",
                "page_size": 250,
            }
        ]
