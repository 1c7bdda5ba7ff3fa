"""Lazy registry of source parsers, one instance per source."""

from services.sources.base import BaseSourceParser

SOURCE_NAMES = ("url", "text", "file")

_registry: dict[str, BaseSourceParser] = {}


def _create_parser(name: str) -> BaseSourceParser:
    """Factory: create a parser by name with deferred imports."""
    if name == "url":
        from services.sources.url_source import UrlSourceParser
        return UrlSourceParser()
    elif name == "text":
        from services.sources.text_source import TextSourceParser
        return TextSourceParser()
    elif name == "file":
        from services.sources.file_source import FileSourceParser
        return FileSourceParser()
    else:
        raise ValueError(f"Unknown source: {name}")


def get_parser(name: str) -> BaseSourceParser:
    if name not in _registry:
        _registry[name] = _create_parser(name)
    return _registry[name]


def clear() -> None:
    """Drop cached parsers. Useful for testing."""
    _registry.clear()
