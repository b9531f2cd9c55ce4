"""HTTP server command.

Usage:
    htmx-todo serve              # Start on localhost:8888
    htmx-todo serve --open       # Start and open browser
    htmx-todo serve --port 3000  # Custom port
"""

import webbrowser

import click
from rich.console import Console

from htmx_todo.foundation.config import load_config
from htmx_todo.foundation.errors import TodoError
from htmx_todo.foundation.logging import configure_logging

console = Console()


@click.command()
@click.option("--port", type=int, default=None, help="Port to listen on (default from config: 8888)")
@click.option("--host", default=None, help="Host to bind to (127.0.0.1 for local only)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to a config.yaml")
@click.option("--open", "open_browser", is_flag=True, help="Open browser automatically")
@click.pass_context
def serve(
    ctx: click.Context,
    port: int | None,
    host: str | None,
    config_path: str | None,
    open_browser: bool,
) -> None:
    """Start the htmx-todo HTTP server.

    Tasks live in memory only. A page load without a live session cookie
    starts a fresh, empty list.

    \b
    Examples:
        htmx-todo serve              # Start on localhost:8888
        htmx-todo serve --open       # Start and open browser
        htmx-todo serve --port 3000  # Custom port
    """
    import uvicorn

    from htmx_todo.interface.server import create_app

    try:
        config = load_config(config_path)
    except TodoError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1) from None

    if host is not None:
        config.server.host = host
    if port is not None:
        config.server.port = port
    config.debug = config.debug or bool((ctx.obj or {}).get("debug"))

    level = configure_logging(config.logging, debug=config.debug)

    app = create_app(config=config)

    url = f"http://{config.server.host}:{config.server.port}"

    console.print()
    console.print("[bold green]htmx-todo[/bold green]")
    console.print(f"   URL: {url}")
    console.print(f"   Session lifetime: {config.session.max_age}s (expiry clears all tasks)")
    if config.logging.file:
        console.print(f"   Log file: {config.logging.file}")
    if config.debug:
        console.print("   Mode: [yellow]Debug[/yellow]")
    console.print()
    console.print("[dim]Press Ctrl+C to stop[/dim]")
    console.print()

    if open_browser:
        webbrowser.open(url)

    # log_config=None: uvicorn's loggers propagate to the handlers set up above
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_config=None,
        log_level=level,
    )
