"""CLI commands for wsinvoker.

``wsinvoker call`` opens a websocket, invokes one remote method and prints the reply.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from pathlib import Path
from typing import Any, Callable

import typer
import websockets
from websockets.exceptions import WebSocketException
from rich.console import Console

from wsinvoker import __version__
from wsinvoker.cli.shared.logging_utils import configure_stderr, ensure_rotating_log_file
from wsinvoker.config.loader import load_options
from wsinvoker.config.schema import InvokerOptions
from wsinvoker.rpc.invoker import Invoker
from wsinvoker.transport.websocket import WebSocketTransport

app = typer.Typer(
    name="wsinvoker",
    help="wsinvoker - symmetric RPC over a websocket",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

EXIT_ERROR_REPLY = 1
EXIT_TIMEOUT = 2


async def call_remote(
    url: str,
    method: str,
    payload: Any = None,
    *,
    timeout_s: float = 10.0,
    suppress_error_reply: bool = False,
    options: InvokerOptions | None = None,
    connect: Callable[[str], Any] | None = None,
) -> tuple[str, Any]:
    """Invoke ``method`` once over a fresh connection.

    Returns ("done", payload), ("error", payload) or ("timeout", None).
    """
    connect = connect or websockets.connect
    async with connect(url) as connection:
        transport = WebSocketTransport(connection)
        invoker = Invoker(transport, options)
        outcome: asyncio.Future[tuple[str, Any]] = asyncio.get_running_loop().create_future()

        def _settle(kind: str) -> Callable[[Any], None]:
            def _cb(value: Any) -> None:
                if not outcome.done():
                    outcome.set_result((kind, value))
            return _cb

        pump = asyncio.create_task(transport.run())
        try:
            await invoker.invoke(
                method,
                payload,
                _settle("done"),
                _settle("error"),
                suppress_error_reply=suppress_error_reply,
            )
            return await asyncio.wait_for(outcome, timeout=max(0.1, timeout_s))
        except asyncio.TimeoutError:
            return "timeout", None
        finally:
            invoker.detach()
            pump.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await pump


@app.command("call")
def call_command(
    url: str = typer.Argument(..., help="WebSocket URL, e.g. ws://127.0.0.1:3030/ws"),
    method: str = typer.Argument(..., help="Remote method name"),
    payload: str = typer.Option(None, "--payload", "-p", help="JSON payload"),
    timeout: float = typer.Option(10.0, "--timeout", "-t", help="Seconds to wait for the reply"),
    suppress_error_reply: bool = typer.Option(False, "--suppress-error-reply", help="Ask the peer not to answer unknown methods"),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config.json"),
    log_file: bool = typer.Option(False, "--log-file", help="Also log to ~/.wsinvoker/logs/call.log"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log protocol events to stderr"),
) -> None:
    """Invoke a remote method and print its reply."""
    configure_stderr("DEBUG" if verbose else "WARNING")
    if log_file:
        ensure_rotating_log_file("call")
    try:
        options = load_options(config)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(EXIT_ERROR_REPLY)
    try:
        value = json.loads(payload) if payload is not None else None
    except json.JSONDecodeError as e:
        err_console.print(f"[red]Invalid --payload JSON: {e}[/red]")
        raise typer.Exit(EXIT_ERROR_REPLY)

    try:
        kind, result = asyncio.run(
            call_remote(
                url,
                method,
                value,
                timeout_s=timeout,
                suppress_error_reply=suppress_error_reply,
                options=options,
            )
        )
    except (OSError, WebSocketException) as e:
        err_console.print(f"[red]Connection failed: {e}[/red]")
        raise typer.Exit(EXIT_ERROR_REPLY)

    if kind == "done":
        console.print_json(json.dumps(result))
        return
    if kind == "error":
        err_console.print("[red]Remote error[/red]")
        console.print_json(json.dumps(result))
        raise typer.Exit(EXIT_ERROR_REPLY)
    err_console.print(f"[yellow]No reply for '{method}' within {timeout}s[/yellow]")
    raise typer.Exit(EXIT_TIMEOUT)


@app.command("version")
def version_command() -> None:
    """Show the installed version."""
    console.print(f"wsinvoker v{__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
