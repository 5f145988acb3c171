# src/kitflow/core/config/settings.py
"""
Settings tipados do operador Kitflow.

Materializa as seções da configuração efetiva consumidas pelo core:

    builder:
      build_dir: /tmp/kitflow/builder      # base dos diretórios de build
      runtime_dependency: runtime:jvm      # dependência injetada em todo Kit
      incremental: false                   # packager incremental vs standard
    platform:
      catalog_version: "2.23.x"            # restrição padrão de catálogo
    catalogs:
      - version: "2.23.1"
        runtime_version: "0.3.3"

Seções ausentes assumem os valores de `DEFAULT_CONFIG`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from .errors import InvalidSettingsError
from .merge import deep_merge


DEFAULT_CONFIG: Dict[str, Any] = {
    "builder": {
        "build_dir": "/tmp/kitflow/builder",
        "runtime_dependency": "runtime:jvm",
        "incremental": False,
    },
    "platform": {
        "catalog_version": "",
    },
    "catalogs": [],
}


@dataclass(frozen=True)
class CatalogSettings:
    version: str
    runtime_version: str


@dataclass(frozen=True)
class OperatorSettings:
    build_dir: str
    runtime_dependency: str
    incremental: bool
    catalog_version: str
    catalogs: Tuple[CatalogSettings, ...]

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "OperatorSettings":
        if not isinstance(config, Mapping):
            raise InvalidSettingsError(
                f"Config deve ser um mapa, recebido: {type(config).__name__}"
            )

        effective = deep_merge(DEFAULT_CONFIG, dict(config))
        builder = effective.get("builder") or {}
        platform = effective.get("platform") or {}

        build_dir = builder.get("build_dir")
        if not isinstance(build_dir, str) or not build_dir.strip():
            raise InvalidSettingsError("builder.build_dir must be a non-empty string")

        runtime_dependency = builder.get("runtime_dependency") or ""
        if not isinstance(runtime_dependency, str):
            raise InvalidSettingsError("builder.runtime_dependency must be a string")

        catalogs = []
        for i, entry in enumerate(effective.get("catalogs") or []):
            if not isinstance(entry, Mapping):
                raise InvalidSettingsError(f"catalogs[{i}] must be a mapping")
            version = entry.get("version")
            runtime_version = entry.get("runtime_version")
            if not isinstance(version, str) or not version.strip():
                raise InvalidSettingsError(f"catalogs[{i}].version is required")
            if not isinstance(runtime_version, str) or not runtime_version.strip():
                raise InvalidSettingsError(f"catalogs[{i}].runtime_version is required")
            catalogs.append(CatalogSettings(version=version, runtime_version=runtime_version))

        return cls(
            build_dir=build_dir,
            runtime_dependency=runtime_dependency,
            incremental=bool(builder.get("incremental", False)),
            catalog_version=str(platform.get("catalog_version") or ""),
            catalogs=tuple(catalogs),
        )
