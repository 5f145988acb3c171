# tests/core/pipeline/test_catalog.py
"""
Testes da resolução do catálogo de runtime por restrição de versão.
"""

import pytest

try:
    from kitflow.core.config.settings import CatalogSettings
    from kitflow.core.pipeline.catalog import RuntimeCatalog, matches_constraint, resolve_catalog
except Exception as e:  # noqa: BLE001
    resolve_catalog = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing catalog module. Implement:\n"
            "- src/kitflow/core/pipeline/catalog.py (resolve_catalog)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.mark.parametrize(
    "version, constraint, expected",
    [
        ("2.23.1", "2.23.1", True),
        ("2.23.1", "2.23.x", True),
        ("2.23.1", "2.23.*", True),
        ("2.23.1", "2.23", True),
        ("2.23.1", "", True),
        ("2.24.0", "2.23.x", False),
        ("2.23", "2.23.1", False),
    ],
)
def test_matches_constraint(version, constraint, expected):
    _require_imports()
    assert matches_constraint(version, constraint) is expected


def test_highest_matching_catalog_wins():
    _require_imports()
    catalogs = [
        CatalogSettings("2.23.10", "0.3.4"),
        CatalogSettings("2.23.9", "0.3.3"),
        CatalogSettings("3.0.0", "1.0.0"),
    ]
    assert resolve_catalog("2.23.x", catalogs) == RuntimeCatalog("2.23.10", "0.3.4")
    assert resolve_catalog("", catalogs) == RuntimeCatalog("3.0.0", "1.0.0")


def test_no_matching_catalog_returns_none():
    _require_imports()
    assert resolve_catalog("9.x", [CatalogSettings("2.23.1", "0.3.3")]) is None
    assert resolve_catalog("", []) is None
