"""Tests for template storage and memoisation."""

import pytest

from manifest_compiler.args import fungible_bucket
from manifest_compiler.config import CompilerConfig
from manifest_compiler.errors import MalformedTemplate
from manifest_compiler.scheduler import compile_call
from manifest_compiler.targets import MethodTarget
from manifest_compiler.template_cache import (
    FileTemplateStore,
    InMemoryTemplateStore,
    TemplateCache,
    validate_template,
)

VALID = 'CALL_METHOD\n\tComponentAddress("${caller_address}")\n\t"ping";\n'


class CountingGenerator:
    def __init__(self, text: str = VALID):
        self.text = text
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return self.text


class TestValidateTemplate:
    def test_valid_template(self):
        assert validate_template(VALID, "x") == VALID

    def test_empty_template(self):
        with pytest.raises(MalformedTemplate) as excinfo:
            validate_template("  \n", "x")
        assert excinfo.value.reason == "empty template"

    def test_unterminated_block(self):
        with pytest.raises(MalformedTemplate) as excinfo:
            validate_template(VALID + "\nCALL_METHOD\n\t\"broken\"\n", "somewhere")
        assert excinfo.value.location == "somewhere"

    def test_compiled_manifest_is_valid(self):
        target = MethodTarget(component="c", method="m", args=[fungible_bucket("usd", 1)])
        text = compile_call(target).build()
        assert validate_template(text, "x") == text


class TestTemplateCacheInMemory:
    def test_miss_generates_and_stores(self):
        store = InMemoryTemplateStore()
        generator = CountingGenerator()
        assert TemplateCache(store).get_or_create("ping", generator) == VALID
        assert generator.calls == 1
        assert store.templates["ping"] == VALID

    def test_hit_skips_generator(self):
        store = InMemoryTemplateStore()
        cache = TemplateCache(store)
        generator = CountingGenerator()
        first = cache.get_or_create("ping", generator)
        second = cache.get_or_create("ping", generator)
        assert first == second
        assert generator.calls == 1

    def test_hand_written_template_wins(self):
        store = InMemoryTemplateStore()
        custom = 'CALL_METHOD\n\tComponentAddress("${caller_address}")\n\t"custom";\n'
        store.write("ping", custom)
        assert TemplateCache(store).get_or_create("ping", CountingGenerator()) == custom

    def test_malformed_cached_template(self):
        store = InMemoryTemplateStore()
        store.write("ping", "CALL_METHOD\n")
        with pytest.raises(MalformedTemplate):
            TemplateCache(store).get_or_create("ping", CountingGenerator())

    def test_location(self):
        assert TemplateCache(InMemoryTemplateStore()).location("a") == "memory:a"


class TestFileTemplateStore:
    def test_path_layout(self, tmp_path):
        store = FileTemplateStore(tmp_path)
        assert store.path_for("buy_gumball") == tmp_path / "rtm" / "buy_gumball.rtm"

    def test_custom_layout_from_config(self, tmp_path):
        config = CompilerConfig(template_dir_name="manifests", template_suffix=".txt")
        store = FileTemplateStore(tmp_path, config)
        assert store.path_for("x") == tmp_path / "manifests" / "x.txt"

    def test_miss_then_hit_is_identical(self, tmp_path):
        cache = TemplateCache(FileTemplateStore(tmp_path))
        generator = CountingGenerator()
        first = cache.get_or_create("ping", generator)
        assert (tmp_path / "rtm" / "ping.rtm").read_text(encoding="utf-8") == VALID

        second = TemplateCache(FileTemplateStore(tmp_path)).get_or_create(
            "ping", generator
        )
        assert first == second
        assert generator.calls == 1

    def test_malformed_file(self, tmp_path):
        (tmp_path / "rtm").mkdir()
        (tmp_path / "rtm" / "ping.rtm").write_text("", encoding="utf-8")
        with pytest.raises(MalformedTemplate) as excinfo:
            TemplateCache(FileTemplateStore(tmp_path)).get_or_create(
                "ping", CountingGenerator()
            )
        assert excinfo.value.location.endswith("ping.rtm")

    def test_undecodable_file(self, tmp_path):
        (tmp_path / "rtm").mkdir()
        (tmp_path / "rtm" / "ping.rtm").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(MalformedTemplate):
            FileTemplateStore(tmp_path).read("ping")

    def test_exists(self, tmp_path):
        store = FileTemplateStore(tmp_path)
        assert not store.exists("ping")
        store.write("ping", VALID)
        assert store.exists("ping")
