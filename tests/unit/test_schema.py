import pytest

from faultline.common.errors import ConfigError
from faultline.common.schema import validate_catalog_config, validate_error_entry


BASE_CATALOG = {
    "version": 1,
    "errors": {
        "OrderRejected": {
            "kind": "domain",
            "default_message": "invalid order",
            "default_reason": "out_of_stock",
        },
        "LedgerUnavailable": {"kind": "infrastructure"},
    },
}


def test_validate_catalog_config_accepts_valid_shape():
    validated = validate_catalog_config(dict(BASE_CATALOG))
    assert validated["errors"]["OrderRejected"]["kind"] == "domain"


def test_validate_catalog_config_rejects_missing_errors():
    with pytest.raises(ConfigError):
        validate_catalog_config({"version": 1})


def test_validate_catalog_config_rejects_non_mapping():
    with pytest.raises(ConfigError):
        validate_catalog_config(["not", "a", "mapping"])


def test_validate_catalog_config_rejects_unknown_key_by_default():
    bad = dict(BASE_CATALOG)
    bad["unexpected"] = True
    with pytest.raises(ConfigError):
        validate_catalog_config(bad)


def test_validate_catalog_config_allows_unknown_when_enabled():
    okay = dict(BASE_CATALOG)
    okay["extra"] = 1
    validate_catalog_config(okay, allow_unknown=True)


def test_validate_catalog_config_rejects_unsupported_version():
    bad = dict(BASE_CATALOG)
    bad["version"] = 2
    with pytest.raises(ConfigError):
        validate_catalog_config(bad)


def test_validate_catalog_config_rejects_empty_errors():
    with pytest.raises(ConfigError):
        validate_catalog_config({"version": 1, "errors": {}})


@pytest.mark.parametrize(
    "name,entry",
    [
        ("Broken", {"kind": "fatal"}),
        ("Broken", {"default_message": "no kind"}),
        ("Broken", {"kind": "domain", "default_reason": 42}),
        ("Broken", {"kind": "domain", "retry": True}),
        ("not valid", {"kind": "domain"}),
        ("Broken", "domain"),
    ],
)
def test_validate_error_entry_rejects_bad_entries(name, entry):
    with pytest.raises(ConfigError):
        validate_error_entry(name, entry)
