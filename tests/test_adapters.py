"""
Tests for the source-transform port, the shell runner, the Go toolchain
transform and the textual double.
"""

import sys
from pathlib import Path

import pytest

from mglgen.adapters import gotools
from mglgen.adapters.base import ToolError
from mglgen.adapters.gotools import GoToolchainTransform
from mglgen.adapters.mock import TextualTransform
from mglgen.adapters.shell.command import is_tool_available, run_tool
from mglgen.core.models.rewrite import MGL64_REWRITE_RULES, RewriteRule

# ── Shell runner ─────────────────────────────────────────────────────


class TestRunTool:
    def test_success(self):
        result = run_tool([sys.executable, "-c", "print('hello')"])
        assert result.return_code == 0
        assert result.output.strip() == "hello"

    def test_stderr_merged(self):
        result = run_tool([sys.executable, "-c", "import sys; sys.stderr.write('warn\\n')"])
        assert "warn" in result.output

    def test_nonzero_exit(self):
        with pytest.raises(ToolError) as exc:
            run_tool([sys.executable, "-c", "import sys; print('bad input'); sys.exit(3)"])
        assert exc.value.return_code == 3
        assert "bad input" in exc.value.output
        assert exc.value.command.startswith(sys.executable)
        assert "exited with code 3" in str(exc.value)

    def test_missing_executable(self):
        with pytest.raises(ToolError) as exc:
            run_tool(["mglgen-no-such-tool-xyz", "-w", "a.go"])
        assert exc.value.return_code is None
        assert "could not be started" in str(exc.value)

    def test_debug_log_has_duration(self, caplog):
        with caplog.at_level("DEBUG", logger="mglgen.adapters.shell.command"):
            result = run_tool([sys.executable, "-c", "pass"])
        assert f"({result.duration_ms}ms)" in caplog.text

    def test_is_tool_available(self):
        assert not is_tool_available("mglgen-no-such-tool-xyz")


# ── Go toolchain transform ───────────────────────────────────────────


class TestGoToolchainTransform:
    @pytest.fixture
    def calls(self, monkeypatch) -> list[list[str]]:
        recorded: list[list[str]] = []
        monkeypatch.setattr(gotools, "run_tool", lambda args: recorded.append(list(args)))
        return recorded

    def test_format_only(self, calls, tmp_path: Path):
        GoToolchainTransform().apply(tmp_path / "a.go")
        assert calls == [["gofmt", "-w", str(tmp_path / "a.go")]]

    def test_full_sequence(self, calls, tmp_path: Path):
        path = tmp_path / "a.go"
        GoToolchainTransform().apply(path, MGL64_REWRITE_RULES, fix_imports=True)

        assert calls[0] == ["gofmt", "-w", str(path)]
        assert calls[1] == ["gofmt", "-w", "-r", "mgl32 -> mgl64", str(path)]
        assert [c[3] for c in calls[1:-1]] == [str(r) for r in MGL64_REWRITE_RULES]
        assert calls[-1] == ["goimports", "-w", str(path)]

    def test_custom_executables(self, calls, tmp_path: Path):
        t = GoToolchainTransform(formatter="/opt/go/bin/gofmt", import_fixer="gci")
        t.apply(tmp_path / "a.go", fix_imports=True)
        assert [c[0] for c in calls] == ["/opt/go/bin/gofmt", "gci"]

    def test_stops_at_first_failure(self, monkeypatch, tmp_path: Path):
        recorded: list[list[str]] = []

        def fake_run(args):
            recorded.append(list(args))
            if "-r" in args:
                raise ToolError(args, output="rewrite failed", return_code=2)

        monkeypatch.setattr(gotools, "run_tool", fake_run)
        with pytest.raises(ToolError):
            GoToolchainTransform().apply(tmp_path / "a.go", MGL64_REWRITE_RULES, fix_imports=True)

        # format + first rule, nothing after
        assert len(recorded) == 2
        assert all(args[0] != "goimports" for args in recorded)

    def test_missing_tools(self):
        t = GoToolchainTransform(formatter=sys.executable, import_fixer="mglgen-no-such-goimports")
        assert t.missing_tools() == []
        assert t.missing_tools(fix_imports=True) == ["mglgen-no-such-goimports"]

    def test_textual_needs_nothing(self):
        assert TextualTransform().missing_tools(fix_imports=True) == []

    def test_repr(self):
        assert repr(GoToolchainTransform()) == "<GoToolchainTransform name='gotools'>"


# ── Textual double ───────────────────────────────────────────────────


class TestTextualTransform:
    def test_rules_in_order(self, tmp_path: Path):
        path = tmp_path / "a.go"
        path.write_text("var v mgl32.Vec3\nvar f float32\n")
        t = TextualTransform()
        t.apply(path, MGL64_REWRITE_RULES, fix_imports=True)
        assert path.read_text() == "var v mgl64.Vec3\nvar f float64\n"
        assert t.call_count == len(MGL64_REWRITE_RULES) + 2

    def test_comments_untouched(self, tmp_path: Path):
        path = tmp_path / "a.go"
        path.write_text("// from mgl32\nx := mgl32.Ident4()\n")
        TextualTransform().apply(path, [RewriteRule.parse("mgl32 -> mgl64")])
        assert path.read_text() == "// from mgl32\nx := mgl64.Ident4()\n"

    def test_set_failure(self, tmp_path: Path):
        path = tmp_path / "b.go"
        path.write_text("package b\n")
        t = TextualTransform()
        t.set_failure("b.go")
        with pytest.raises(ToolError) as exc:
            t.apply(path)
        assert exc.value.output == "mock tool failure"
