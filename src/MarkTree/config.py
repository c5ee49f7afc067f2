from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import yaml

from .blocks import BLOCK_TRANSFORMERS, BUILDERS, BUILTIN_TRANSFORMERS, BlockTransformer
from .formats import TEXT_TRANSFORMERS, TextTransformer
from .inline import DEFAULT_MAX_DEPTH


class ConfigError(ValueError):
    """Raised when a converter configuration cannot be used."""


@dataclass(frozen=True)
class ConverterConfig:
    block_transformers: tuple[BlockTransformer, ...] = BLOCK_TRANSFORMERS
    text_transformers: tuple[TextTransformer, ...] = TEXT_TRANSFORMERS
    max_depth: int = DEFAULT_MAX_DEPTH


def load_config(path: str | Path) -> ConverterConfig:
    return parse_config(Path(path).read_text(encoding="utf-8"))


def parse_config(text: str) -> ConverterConfig:
    """Parse a YAML converter configuration; missing keys keep their defaults."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML configuration: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("YAML root must be a mapping with defined fields.")

    unknown = set(data) - {"block_transformers", "text_transformers", "max_depth"}
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(map(str, unknown)))}")

    options: dict[str, Any] = {}
    if data.get("block_transformers") is not None:
        options["block_transformers"] = tuple(_build_block_transformers(data["block_transformers"]))
    if data.get("text_transformers") is not None:
        options["text_transformers"] = tuple(_build_text_transformers(data["text_transformers"]))
    if data.get("max_depth") is not None:
        options["max_depth"] = _parse_max_depth(data["max_depth"])
    return ConverterConfig(**options)


def _normalize_list(value, key: str) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ConfigError(f"'{key}' must be a list.")


def _build_text_transformers(value) -> Iterable[TextTransformer]:
    for entry in _normalize_list(value, "text_transformers"):
        if not isinstance(entry, dict) or "tag" not in entry:
            raise ConfigError("Each text transformer needs a 'tag' and a 'formats' list.")
        formats = entry.get("formats") or []
        if isinstance(formats, str):
            formats = [formats]
        try:
            yield TextTransformer.of(str(entry["tag"]), formats)
        except ValueError as exc:
            raise ConfigError(f"text_transformers[{entry['tag']!r}]: {exc}") from exc


def _build_block_transformers(value) -> Iterable[BlockTransformer]:
    for entry in _normalize_list(value, "block_transformers"):
        if isinstance(entry, str):
            if entry not in BUILTIN_TRANSFORMERS:
                raise ConfigError(f"Unknown block transformer: {entry}")
            yield BUILTIN_TRANSFORMERS[entry]
            continue
        if not isinstance(entry, dict):
            raise ConfigError("Block transformers must be names or mappings.")
        pattern = entry.get("pattern")
        builder_name = entry.get("builder")
        name = str(entry.get("name") or builder_name)
        if not pattern or not builder_name:
            raise ConfigError(f"block_transformers[{name}]: 'pattern' and 'builder' are required.")
        if builder_name not in BUILDERS:
            raise ConfigError(f"block_transformers[{name}]: unknown builder {builder_name}")
        pattern = str(pattern)
        if not pattern.startswith("^"):
            pattern = "^" + pattern
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"block_transformers[{name}]: invalid pattern: {exc}") from exc
        yield BlockTransformer(name=name, pattern=compiled, builder=BUILDERS[builder_name])


def _parse_max_depth(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError("'max_depth' must be a positive integer.")
    return value
