"""Shared test fixtures for the modorder test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest


@pytest.fixture
def write_descriptor(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a JSON descriptor into tmp_path and returning its path."""

    def factory(
        name: str,
        module_id: str,
        version: str = "1.0",
        dependencies: dict[str, dict[str, Any]] | None = None,
        definition_version: Any = 1,
    ) -> Path:
        doc: dict[str, Any] = {
            "definitionVersion": definition_version,
            "id": module_id,
            "version": version,
        }
        if dependencies is not None:
            doc["dependencies"] = dependencies
        path = tmp_path / f"{name}.json"
        path.write_text(json.dumps(doc))
        return path

    return factory
