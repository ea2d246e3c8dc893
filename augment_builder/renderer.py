"""
renderer.py

Responsibility: Produce the text of every generated file.

- The run entrypoint wraps the indented `config` lines in a fixed template.
- Dispatch scripts re-invoke the binary with a command name prepended.

Rendering is pure: this module never touches the filesystem.
"""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined

from augment_builder.settings import BuildSettings

RUN_TEMPLATE = """\
# Generated by {{ generator }}

{% if with_error_handler %}
ARGV.insert(0, "{{ binary_name }}")

begin
  {{ root_command }}.run do
{{ body }}
  end
rescue exception : {{ exception_class }}
  STDERR.puts "Error: #{exception}"
end
{% else %}
{{ root_command }}.run do
{{ body }}
end
{% endif %}
"""

SCRIPT_TEMPLATE = """\
#! /bin/sh

exec {{ binary_name }} {{ command }} "$@"
"""

_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
)


def indent_lines(content: str, indent: str) -> str:
    """
    Prefix every `\\n`-separated line of `content` with `indent`.

    A trailing newline yields a final line holding only the indent.
    """
    return "\n".join(f"{indent}{line}" for line in content.split("\n"))


def render_run_file(config: str, settings: BuildSettings) -> str:
    return _env.from_string(RUN_TEMPLATE).render(
        generator=settings.generator,
        binary_name=settings.binary_name,
        root_command=settings.root_command,
        exception_class=settings.exception_class,
        with_error_handler=settings.with_error_handler,
        body=indent_lines(config, settings.indent),
    )


def render_script(command: str, settings: BuildSettings) -> str:
    return _env.from_string(SCRIPT_TEMPLATE).render(
        binary_name=settings.binary_name,
        command=command,
    )
