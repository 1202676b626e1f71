"""Module descriptor parsing.

A descriptor is a JSON or YAML mapping::

    definitionVersion: 1
    id: core.audio
    version: 2.4.1
    dependencies:
      core.io:
        version: "2+"
        optional: false
        order: after
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modorder.config import Config
from modorder.errors import DescriptorInvalidError, UnsupportedDescriptorError
from modorder.loader.scanner import scan_descriptors
from modorder.types import DependencyOrder, DependencySpec, ModuleRecord

logger = logging.getLogger(__name__)

__all__ = [
    "SUPPORTED_DEFINITION_VERSION",
    "DependencyEntry",
    "ModuleDescriptor",
    "load_descriptor",
    "load_records",
    "parse_descriptor",
]

SUPPORTED_DEFINITION_VERSION = 1

_YAML_SUFFIXES = {".yaml", ".yml"}


class DependencyEntry(BaseModel):
    """One entry of a descriptor's ``dependencies`` mapping."""

    version: str
    optional: bool = False
    order: DependencyOrder = DependencyOrder.AFTER


class ModuleDescriptor(BaseModel):
    """Validated descriptor document."""

    model_config = ConfigDict(populate_by_name=True)

    definition_version: int = Field(alias="definitionVersion")
    module_id: str = Field(alias="id", min_length=1)
    version: str = Field(min_length=1)
    dependencies: dict[str, DependencyEntry] | None = None

    def to_record(self, source_label: str) -> ModuleRecord:
        specs = tuple(
            DependencySpec(
                target_id=target_id,
                version_constraint=entry.version,
                optional=entry.optional,
                order=entry.order,
            )
            for target_id, entry in (self.dependencies or {}).items()
        )
        return ModuleRecord(
            module_id=self.module_id,
            version=self.version,
            source_label=source_label,
            dependencies=specs,
        )


def _read_document(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptorInvalidError(file_path=str(path), reason=str(e), cause=e) from e

    if path.suffix.lower() in _YAML_SUFFIXES:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DescriptorInvalidError(file_path=str(path), reason="invalid YAML", cause=e) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise DescriptorInvalidError(file_path=str(path), reason=f"invalid JSON: {e}", cause=e) from e


def parse_descriptor(data: Any, file_path: str, source_label: str) -> ModuleRecord:
    """Validate an already-decoded descriptor document and convert it to a record.

    Raises:
        UnsupportedDescriptorError: If ``definitionVersion`` is not supported.
        DescriptorInvalidError: If the document is not a valid descriptor.
    """
    if not isinstance(data, dict):
        raise DescriptorInvalidError(file_path=file_path, reason="descriptor must be a mapping")

    definition_version = data.get("definitionVersion")
    if isinstance(definition_version, bool) or definition_version != SUPPORTED_DEFINITION_VERSION:
        raise UnsupportedDescriptorError(
            file_path=file_path, definition_version=definition_version
        )

    try:
        descriptor = ModuleDescriptor.model_validate(data)
    except ValidationError as e:
        raise DescriptorInvalidError(file_path=file_path, reason=str(e), cause=e) from e

    return descriptor.to_record(source_label)


def load_descriptor(path: str | Path, source_label: str | None = None) -> ModuleRecord:
    """Load one descriptor file. ``source_label`` defaults to the file stem."""
    path = Path(path)
    data = _read_document(path)
    return parse_descriptor(data, str(path), source_label if source_label is not None else path.stem)


def load_records(root: str | Path, config: Config | None = None) -> list[ModuleRecord]:
    """Load every descriptor found under ``root``.

    Scanning honors ``loader.extensions``, ``loader.recursive``,
    ``loader.max_depth`` and ``loader.follow_symlinks`` from ``config``.
    """
    config = config or Config()
    discovered = scan_descriptors(
        root,
        extensions=config.get("loader.extensions", [".json"]),
        recursive=config.get("loader.recursive", False),
        max_depth=config.get("loader.max_depth", 8),
        follow_symlinks=config.get("loader.follow_symlinks", False),
    )
    records = [load_descriptor(d.file_path, d.source_label) for d in discovered]
    logger.info("Loaded %d module descriptors from %s", len(records), root)
    return records
