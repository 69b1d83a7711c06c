from __future__ import annotations

import pytest

from intelliconvert.core.exceptions import UnsupportedFormatError
from intelliconvert.formats import FORMATS, readable_formats, registry, resolve_format, writable_formats
from intelliconvert.formats.registry import FormatRegistry


@pytest.mark.parametrize(
    ("name", "key"),
    [("yml", "yaml"), (".YAML", "yaml"), ("htm", "html"), ("markdown", "md"), ("text", "txt"), ("csv", "csv")],
)
def test_resolve_aliases(name: str, key: str) -> None:
    assert resolve_format(name).key == key


def test_resolve_unknown_format() -> None:
    with pytest.raises(UnsupportedFormatError) as excinfo:
        resolve_format("bmp", operation="read")

    assert excinfo.value.operation == "read"


def test_read_and_write_capabilities() -> None:
    readable = {spec.key for spec in readable_formats()}
    writable = {spec.key for spec in writable_formats()}

    assert writable == set(FORMATS)
    assert readable == set(FORMATS) - {"md", "pdf"}


def test_every_format_has_its_plugins() -> None:
    assert set(registry.readers()) == {spec.key for spec in readable_formats()}
    assert set(registry.writers()) == {spec.key for spec in writable_formats()}


def test_yaml_extension_is_canonical() -> None:
    assert resolve_format("yml").extension == "yaml"


def test_duplicate_registration_is_rejected() -> None:
    local = FormatRegistry()
    local.register_reader("csv", lambda content: None)

    with pytest.raises(ValueError):
        local.register_reader("csv", lambda content: None)
