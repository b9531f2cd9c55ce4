"""Main CLI entry point.

    htmx-todo serve
    htmx-todo --debug serve --port 3000
"""

import click

from htmx_todo import __version__
from htmx_todo.foundation.logging import configure_logging
from htmx_todo.interface.cli.serve_cmd import serve


@click.group()
@click.option("--debug", is_flag=True, help="Verbose logging with timestamps")
@click.version_option(__version__, prog_name="htmx-todo")
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """Server-rendered TodoMVC over htmx fragments."""
    configure_logging(debug=debug)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


main.add_command(serve)
