import codecs
import pytest

from typetag.errors import AllocatorStateError, FormatError
from typetag.registry.registry import TagRegistry
from typetag.stores import EnumBlockStore, SidecarStore

ARTIFACT = (
    'syntax = "proto3";\n'
    "\n"
    "package test;\n"
    "\n"
    "enum MessageType {\n"
    "\tLoginType  = 3,\n"
    "\t// retired\n"
    "\tLogoutType = 17;\n"
    "\tPingType = 9\n"
    "}\n"
    "\n"
    "// other comment\n"
)


def test_enum_block_store_is_a_sidecar_store():
    assert isinstance(EnumBlockStore(), SidecarStore)


def test_load_block_entries():
    loaded = EnumBlockStore().load(ARTIFACT.encode())
    assert loaded.registry.to_dict() == {"LoginType": 3, "LogoutType": 17, "PingType": 9}
    assert loaded.layout.enum_name == "MessageType"
    assert loaded.layout.leading.endswith("package test;\n\n")
    assert loaded.layout.trailing == "\n\n// other comment\n"


def test_load_named_block():
    text = "enum Other {\n\tA = 1,\n}\nenum Wanted {\n\tB = 2,\n}\n"
    loaded = EnumBlockStore("Wanted").load(text.encode())
    assert loaded.registry.to_dict() == {"B": 2}


def test_missing_block():
    with pytest.raises(FormatError):
        EnumBlockStore().load(b'syntax = "proto3";\n')
    with pytest.raises(FormatError):
        EnumBlockStore("Nope").load(ARTIFACT.encode())


def test_malformed_line_reports_artifact_line_number():
    text = ARTIFACT.replace("\tPingType = 9\n", "\tPingType\n")
    with pytest.raises(FormatError) as exc:
        EnumBlockStore().load(text.encode(), source="types.proto")
    assert exc.value.lineno == 9


def test_render_rewrites_only_the_block():
    store = EnumBlockStore()
    loaded = store.load(ARTIFACT.encode())
    reg = TagRegistry()
    reg.insert("A", 1)
    reg.insert("LongName", 20)
    out = store.render(reg, loaded.layout).decode()
    assert out == (
        'syntax = "proto3";\n'
        "\n"
        "package test;\n"
        "\n"
        "enum MessageType {\n"
        "\tA        = 1,\n"
        "\tLongName = 20,\n"
        "}\n"
        "\n"
        "// other comment\n"
    )
    assert EnumBlockStore().load(out.encode()).registry.to_dict() == reg.to_dict()


def test_render_empty_registry():
    store = EnumBlockStore()
    loaded = store.load(b"enum T {\n\tA = 1,\n}")
    assert store.render(TagRegistry(), loaded.layout) == b"enum T {\n}"


def test_render_requires_layout():
    with pytest.raises(AllocatorStateError):
        EnumBlockStore().render(TagRegistry())


def test_one_store_serves_several_artifacts():
    store = EnumBlockStore()
    a = store.load(b"// a\nenum AType {\n\tA = 1,\n}\n")
    b = store.load(b"// b\nenum BType {\n\tB = 2,\n}\n")
    assert store == EnumBlockStore()
    assert store.render(a.registry, a.layout) == b"// a\nenum AType {\n\tA = 1,\n}\n"
    assert store.render(b.registry, b.layout) == b"// b\nenum BType {\n\tB = 2,\n}\n"


def test_render_keeps_bom_and_encoding_outside_the_block():
    store = EnumBlockStore()
    bommed = codecs.BOM_UTF8 + b"// hdr\nenum T {\n\tA = 1,\n}\n"
    loaded = store.load(bommed)
    assert store.render(loaded.registry, loaded.layout) == bommed

    legacy = "// types générés, édités à la main\nenum T {\n\tA = 1,\n}\n// fin été\n".encode("latin-1")
    loaded = store.load(legacy)
    assert loaded.layout.encoding != "utf-8"
    assert store.render(loaded.registry, loaded.layout) == legacy
