from __future__ import annotations

from augment_builder.renderer import indent_lines, render_run_file, render_script
from augment_builder.settings import BuildSettings


def test_indent_lines_prefixes_every_line() -> None:
    assert indent_lines("a\nb\nc", "    ") == "    a\n    b\n    c"


def test_indent_lines_keeps_trailing_empty_line() -> None:
    assert indent_lines("a\n", "  ") == "  a\n  "


def test_run_file_with_error_handler() -> None:
    out = render_run_file("a\nb", BuildSettings())
    assert out == (
        "# Generated by Augment\n"
        "\n"
        'ARGV.insert(0, "augment")\n'
        "\n"
        "begin\n"
        "  Augment::RootCommand.new.run do\n"
        "    a\n"
        "    b\n"
        "  end\n"
        "rescue exception : Augment::Exception\n"
        '  STDERR.puts "Error: #{exception}"\n'
        "end\n"
    )


def test_run_file_without_error_handler() -> None:
    out = render_run_file("a\nb\nc", BuildSettings(with_error_handler=False))
    assert out == (
        "# Generated by Augment\n"
        "\n"
        "Augment::RootCommand.new.run do\n"
        "    a\n"
        "    b\n"
        "    c\n"
        "end\n"
    )
    assert "ARGV" not in out
    assert "rescue" not in out


def test_run_file_passes_template_syntax_through() -> None:
    out = render_run_file("puts \"{{ x }}\"", BuildSettings(with_error_handler=False))
    assert '    puts "{{ x }}"\n' in out


def test_script() -> None:
    assert render_script("hello", BuildSettings()) == '#! /bin/sh\n\nexec augment hello "$@"\n'


def test_script_uses_binary_name() -> None:
    assert render_script("go", BuildSettings(binary_name="tool")) == '#! /bin/sh\n\nexec tool go "$@"\n'
