"""Tests for the command registry: completion provider and command buffer."""

from pathlib import Path

import pytest

from console_field.commands import CommandRegistry, complete_from, complete_paths
from console_field.types import Candidate


@pytest.fixture
def messages():
    return []


@pytest.fixture
def registry(messages):
    reg = CommandRegistry(emit=messages.append)
    reg.calls = []
    reg.register("status", reg.calls.append, "show server status")
    reg.register("say", reg.calls.append, "talk to everyone")
    reg.register(
        "set",
        reg.calls.append,
        "set a variable",
        completer=complete_from([("cg.fov", "field of view"), "cg.thirdperson", "name"]),
    )
    return reg


class TestRegistration:
    def test_names_sorted(self, registry):
        assert registry.names() == ["say", "set", "status"]

    def test_lookup_ignores_case(self, registry):
        assert registry.get("STATUS").name == "status"

    def test_duplicate_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register("Status", print)

    def test_invalid_name_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register("two words", print)
        with pytest.raises(ValueError):
            registry.register("", print)

    def test_unregister(self, registry):
        registry.unregister("SAY")
        assert registry.get("say") is None
        registry.unregister("missing")


class TestCompleteArgument:
    def test_command_names_by_prefix(self, registry):
        result = registry.complete_argument(["s"], 0)
        assert sorted(c.text for c in result) == ["say", "set", "status"]

    def test_command_names_ignore_case(self, registry):
        result = registry.complete_argument(["STA"], 0)
        assert result == [Candidate("status", "show server status")]
        assert result[0].description == "show server status"

    def test_all_command_names_for_new_argument(self, registry):
        assert len(registry.complete_argument([], 0)) == 3

    def test_argument_completer(self, registry):
        result = registry.complete_argument(["set", "cg"], 1)
        assert [c.text for c in result] == ["cg.fov", "cg.thirdperson"]
        assert result[0].description == "field of view"

    def test_argument_completer_new_argument(self, registry):
        result = registry.complete_argument(["set"], 1)
        assert len(result) == 3

    def test_command_without_completer(self, registry):
        assert registry.complete_argument(["status", ""], 1) == []

    def test_unknown_command(self, registry):
        assert registry.complete_argument(["nope"], 1) == []

    def test_completer_receives_index_and_args(self, registry):
        seen = []

        def completer(arg_num, args, prefix):
            seen.append((arg_num, list(args), prefix))
            return []

        registry.register("bind", print, completer=completer)
        registry.complete_argument(["bind", "k", "cg"], 2)
        assert seen == [(2, ["bind", "k", "cg"], "cg")]


class TestCommandBuffer:
    def test_execute_single(self, registry):
        registry.buffer_command_text("status")
        assert registry.execute_buffered() == 1
        assert registry.calls == [["status"]]
        assert registry.pending == []

    def test_execute_multiple_statements(self, registry):
        registry.buffer_command_text('say "hi there"; status')
        assert registry.execute_buffered() == 2
        assert registry.calls == [["say", "hi there"], ["status"]]

    def test_empty_statements_skipped(self, registry):
        registry.buffer_command_text(";; status ;")
        assert registry.execute_buffered() == 1

    def test_unknown_command_reported(self, registry, messages):
        registry.buffer_command_text("nope 1")
        assert registry.execute_buffered() == 0
        assert messages == ["Unknown command 'nope'"]

    def test_order(self, registry):
        registry.buffer_command_text("say one")
        registry.buffer_command_text("say two")
        registry.buffer_command_text("say zero", append=False)
        assert registry.pending == ["say zero", "say one", "say two"]
        registry.execute_buffered()
        assert [c[1] for c in registry.calls] == ["zero", "one", "two"]

    def test_handler_errors_propagate(self, registry):
        def boom(args):
            raise RuntimeError("boom")

        registry.register("boom", boom)
        registry.buffer_command_text("boom")
        with pytest.raises(RuntimeError):
            registry.execute_buffered()


class TestCompleters:
    def test_complete_from_plain_names(self):
        completer = complete_from(["alpha", "Beta", "bravo"])
        assert [c.text for c in completer(1, ["x", "b"], "b")] == ["Beta", "bravo"]

    def test_complete_paths(self, tmp_path):
        (tmp_path / "scripts").mkdir()
        (tmp_path / "scripts" / "boot.cfg").write_text("")
        (tmp_path / "server.cfg").write_text("")
        (tmp_path / "other.txt").write_text("")
        completer = complete_paths(tmp_path)
        result = sorted(completer(1, ["exec", "s"], "s"))
        assert [c.text for c in result] == ["scripts/", "server.cfg"]
        assert result[0].description == "dir"

    def test_complete_paths_in_subdirectory(self, tmp_path):
        (tmp_path / "scripts").mkdir()
        (tmp_path / "scripts" / "boot.cfg").write_text("")
        completer = complete_paths(tmp_path)
        result = completer(1, ["exec", "scripts/b"], "scripts/b")
        assert [c.text for c in result] == ["scripts/boot.cfg"]

    def test_complete_paths_absolute(self, tmp_path):
        (tmp_path / "scripts").mkdir()
        completer = complete_paths(tmp_path / "scripts")
        prefix = f"{tmp_path}/sc"
        result = completer(1, ["exec", prefix], prefix)
        assert [c.text for c in result] == [f"{tmp_path}/scripts/"]

    def test_complete_paths_under_filesystem_root(self, tmp_path):
        completer = complete_paths(tmp_path)
        result = completer(1, ["exec", "/"], "/")
        assert result
        assert all(c.text.startswith("/") for c in result)
        root_names = {p.name for p in Path("/").iterdir()}
        assert {c.text.strip("/") for c in result} == root_names

    def test_complete_paths_missing_directory(self, tmp_path):
        completer = complete_paths(tmp_path)
        assert completer(1, ["exec", "nope/x"], "nope/x") == []
