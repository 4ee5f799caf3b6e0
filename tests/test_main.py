"""
Tests for the command line entry point

Argument handling and exit codes.
"""

import pytest

from copynotice.main import build_parser, main


def run_args(source_tree, out, *extra):
    return ["--dir", str(source_tree), str(out), "--ext", "h", "--note", "Notice", *extra]


def test_no_arguments_prints_help(console):
    assert main([], console=console) == 1
    output = console.output.getvalue()
    assert "No arguments specified." in output
    assert "--dir SRC DST" in output


def test_successful_run(source_tree, tmp_path, console):
    out = tmp_path / "out"

    assert main(run_args(source_tree, out, "--recurse"), console=console) == 0
    assert (out / "B" / "D" / "d.h").read_bytes() == b"// Notice\r\nint d;\r\n"
    assert "Done. Created 4 file(s)" in console.output.getvalue()


def test_verbose_echoes_arguments(source_tree, tmp_path, console):
    args = run_args(source_tree, tmp_path / "out", "--verbose")
    main(args, console=console)

    assert f"Argument 0: \"{args[0]}\"" in console.output.getvalue()


def test_syntax_and_replace(source_tree, tmp_path, console):
    (source_tree / "a.h").write_bytes(b"; old\r\n; older\r\nint a;\r\n")
    out = tmp_path / "out"

    assert main(run_args(source_tree, out, "--syntax", "; ", "--replace"), console=console) == 0
    assert (out / "a.h").read_bytes() == b"; Notice\r\nint a;\r\n"


def test_config_error_exit_code(source_tree, tmp_path, console):
    args = ["--dir", str(source_tree) + "/", str(tmp_path / "out"), "--ext", "h", "--note", "x"]

    assert main(args, console=console) == 1
    assert "trailing slash" in console.output.getvalue()


def test_traversal_error_exit_code(tmp_path, console):
    args = ["--dir", str(tmp_path / "missing"), str(tmp_path / "out"), "--ext", "h", "--note", "x"]

    assert main(args, console=console) == 1
    assert "Could not search" in console.output.getvalue()


def test_closed_input_exit_code(source_tree, tmp_path, console):
    """A prompt with no input left aborts the run"""
    out = tmp_path / "out"
    out.mkdir()
    (out / "a.h").write_bytes(b"previous")

    assert main(run_args(source_tree, out), console=console) == 1
    assert (out / "a.h").read_bytes() == b"previous"


def test_config_file(source_tree, tmp_path, console):
    out = tmp_path / "out"
    config = tmp_path / "copynotice.yaml"
    config.write_text(
        f"directories:\n  - source: {source_tree}\n    destination: {out}\n"
        "extensions: [h]\nnotice: From file\n"
    )

    assert main(["--config", str(config)], console=console) == 0
    assert (out / "a.h").read_bytes() == b"// From file\r\nint a;\r\n"


def test_note_and_notef_are_exclusive(capsys):
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--note", "a", "--notef", "b"])
    assert excinfo.value.code == 2


def test_dir_takes_two_values():
    args = build_parser().parse_args(["--dir", "a", "b", "--dir", "", "c"])
    assert args.directories == [["a", "b"], ["", "c"]]
