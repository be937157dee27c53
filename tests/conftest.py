import random
import pytest

from typetag.registry.registry import TagRegistry


@pytest.fixture
def rng():
    return random.Random(20240917)


@pytest.fixture
def make_previous():
    def _make(pairs: dict[str, int]) -> TagRegistry:
        reg = TagRegistry()
        for name, tag_id in pairs.items():
            reg.insert(name, tag_id)
        return reg
    return _make


@pytest.fixture
def types_txt(tmp_path):
    return tmp_path / "types.txt"


@pytest.fixture
def types_proto(tmp_path):
    p = tmp_path / "types.proto"
    p.write_text(
        'syntax = "proto3";\n'
        "\n"
        "package test;\n"
        "\n"
        "enum MessageType {\n"
        "}\n"
        "\n"
        "// other comment\n"
    )
    return p
