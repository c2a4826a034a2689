"""
Tests for the ``finn`` command line entry point.
"""
import finn


def test_runs_script(tmp_path, capsys):
    script = tmp_path / "hello.finn"
    script.write_text('let name = "world";\nwoof("hello " + name);\n', encoding="utf-8")

    assert finn.main(["finn", str(script)]) == 0
    captured = capsys.readouterr()
    assert captured.out == "hello world\n"
    assert captured.err == ""


def test_failing_script_reports_to_stderr(tmp_path, capsys):
    script = tmp_path / "broken.finn"
    script.write_text('woof("partial");\nwoof(missing);\n', encoding="utf-8")

    assert finn.main(["finn", str(script)]) == 1
    captured = capsys.readouterr()
    assert captured.out == "partial\n"
    assert captured.err.strip() == (
        f"UndefinedVariableException: Undefined variable 'missing' on line 2 in {script}"
    )


def test_missing_script(tmp_path, capsys):
    assert finn.main(["finn", str(tmp_path / "nope.finn")]) == 2
    assert "Cannot read" in capsys.readouterr().err


def test_help_and_bad_usage(capsys):
    assert finn.main(["finn", "--help"]) == 0
    assert "Usage:" in capsys.readouterr().out
    assert finn.main(["finn", "a.finn", "b.finn"]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_debug_dump(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("FINNDEBUG", "1")
    script = tmp_path / "debug.finn"
    script.write_text("woof(1);\n", encoding="utf-8")

    assert finn.main(["finn", str(script)]) == 0
    out = capsys.readouterr().out
    assert "Tokens:" in out
    assert "AST:" in out
    assert out.endswith("1\n")


def test_repl_keeps_state_and_buffers_incomplete_input(monkeypatch, capsys):
    lines = iter([
        "let x = 4;",
        "funct double(n: int): int {",
        "    return n * 2;",
        "}",
        "woof(double(x));",
        "woof(y);",
        "exit",
    ])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

    assert finn.main(["finn"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "8" in out
    assert any(line.startswith("UndefinedVariableException: Undefined variable 'y'") for line in out)


def test_repl_stops_at_end_of_input(monkeypatch, capsys):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    assert finn.main(["finn"]) == 0
    assert "REPL" in capsys.readouterr().out
