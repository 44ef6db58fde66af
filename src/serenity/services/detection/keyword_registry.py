"""
Keyword Registry

Immutable, versioned table of clinically-sourced crisis keywords.

The registry is loaded and validated once at process start. Any
malformed entry (missing field, out-of-range rate or confidence,
unknown enum value, duplicate id) is fatal at load time and raises
ConfigurationError. Nothing in this module can fail mid-request.

CLINICAL_REVIEW_REQUIRED: The packaged data file is the clinically
reviewable artifact. Edit the JSON, not this module.
"""

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from serenity.config import get_settings
from serenity.config.logging_config import get_logger
from serenity.domain.exceptions import ConfigurationError
from serenity.domain.models.keyword_entry import KeywordEntry

logger = get_logger(__name__)

DEFAULT_REGISTRY_RESOURCE = "data/crisis_keywords.json"


class RegistryDocument(BaseModel):
    """On-disk registry document schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(min_length=1)
    sources: tuple[str, ...] = ()
    entries: tuple[KeywordEntry, ...] = Field(min_length=1)

    @field_validator("entries")
    @classmethod
    def unique_ids(cls, entries: tuple[KeywordEntry, ...]) -> tuple[KeywordEntry, ...]:
        seen: set[str] = set()
        for entry in entries:
            if entry.id in seen:
                raise ValueError(f"Duplicate keyword id: {entry.id}")
            seen.add(entry.id)
        return entries


class KeywordRegistry:
    """
    Read-only collection of KeywordEntry values.

    Supports iteration, len() and lookup by id. There is no
    mutation API; entries themselves are frozen.

    Usage:
        registry = get_default_registry()
        for entry in registry:
            ...
    """

    def __init__(
        self,
        version: str,
        entries: Union[tuple[KeywordEntry, ...], list[KeywordEntry]],
    ) -> None:
        self._version = version
        self._entries: tuple[KeywordEntry, ...] = tuple(entries)
        self._by_id: dict[str, KeywordEntry] = {e.id: e for e in self._entries}

    @property
    def version(self) -> str:
        return self._version

    @property
    def entries(self) -> tuple[KeywordEntry, ...]:
        return self._entries

    def get(self, entry_id: str) -> Optional[KeywordEntry]:
        """Look up an entry by id."""
        return self._by_id.get(entry_id)

    def __iter__(self) -> Iterator[KeywordEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._by_id

    def __repr__(self) -> str:
        return f"KeywordRegistry(version={self._version!r}, entries={len(self._entries)})"

    @classmethod
    def from_document(cls, data: dict, source: str = "<memory>") -> "KeywordRegistry":
        """
        Validate a registry document and build a registry.

        Args:
            data: Parsed registry document
            source: Where the document came from (for error messages)

        Raises:
            ConfigurationError: If the document fails validation
        """
        try:
            document = RegistryDocument.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid keyword registry in {source}: {e.error_count()} error(s)\n{e}",
                source=source,
                original_error=e,
            ) from e

        return cls(version=document.version, entries=document.entries)


def _read_registry_text(path: Optional[Path]) -> tuple[str, str]:
    """Read registry JSON from a path or the packaged default."""
    if path is not None:
        return Path(path).read_text(encoding="utf-8"), str(path)

    resource = resources.files("serenity.services.detection").joinpath(
        DEFAULT_REGISTRY_RESOURCE
    )
    return resource.read_text(encoding="utf-8"), f"package:{DEFAULT_REGISTRY_RESOURCE}"


def load_registry(path: Optional[Union[str, Path]] = None) -> KeywordRegistry:
    """
    Load and validate a keyword registry.

    Args:
        path: Registry JSON file. Defaults to the packaged registry.

    Returns:
        Validated, immutable KeywordRegistry

    Raises:
        ConfigurationError: On missing file, invalid JSON or invalid entries
    """
    try:
        raw, source = _read_registry_text(Path(path) if path is not None else None)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read keyword registry: {e}",
            source=str(path),
            original_error=e,
        ) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Keyword registry {source} is not valid JSON: {e}",
            source=source,
            original_error=e,
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Keyword registry {source} must be a JSON object",
            source=source,
        )

    registry = KeywordRegistry.from_document(data, source=source)

    logger.info(
        "Keyword registry loaded",
        source=source,
        registry_version=registry.version,
        entry_count=len(registry),
    )

    return registry


@lru_cache()
def get_default_registry() -> KeywordRegistry:
    """
    Get the process-wide keyword registry.

    Loaded once, from SERENITY_DETECTION_REGISTRY_PATH when set,
    otherwise from the packaged data file.
    """
    return load_registry(get_settings().detection.registry_path)
