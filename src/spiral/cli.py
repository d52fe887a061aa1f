"""CLI implementation for spiral."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Union

import typer

from .core.model import OptionError, Response
from .core.util import error_asdict, parse_header, response_asdict
from .options import OptionSet
from .stream import StringStream
from .transport import HTTPAsyncTransport, HTTPTransport

app = typer.Typer(add_completion=False, help="Send HTTP requests and report the responses as JSON.")

Outcome = Union[Response, Exception]


def iter_sources(urls: list[str]) -> list[str]:
    """Get list of URLs from the urls argument or stdin."""
    if "-" in urls:
        # stdin mode
        return [ln.strip() for ln in sys.stdin if ln.strip()]
    elif urls:
        return list(urls)
    return []


def _read_data(data: Optional[str]) -> Optional[bytes]:
    """Request body from -d; ``@PATH`` reads the file."""
    if data is None:
        return None
    if data.startswith("@"):
        path = Path(data[1:])
        try:
            return path.read_bytes()
        except OSError as e:
            raise typer.BadParameter(f"cannot read {path}: {e}", param_hint="'-d'")
    return data.encode()


async def _batch_request(sources: list[str], method: str, headers: dict, data: Optional[bytes],
                         options: OptionSet) -> list[Outcome]:
    """Asynchronously send one request per source over a shared transport."""
    async with HTTPAsyncTransport(options) as transport:
        # each request gets its own stream over the same bytes
        tasks = [
            transport.request(method, src, headers=headers, body=None if data is None else StringStream(data))
            for src in sources
        ]
        return await asyncio.gather(*tasks, return_exceptions=True)


def _sync_request(sources: list[str], method: str, headers: dict, data: Optional[bytes],
                  options: OptionSet) -> list[Outcome]:
    results: list[Outcome] = []
    with HTTPTransport(options) as transport:
        for src in sources:
            try:
                res = transport.request(method, src, headers=headers,
                                        body=None if data is None else StringStream(data))
            except OptionError:
                raise
            except Exception as e:
                res = e
            results.append(res)
    return results


def _asdict(source: str, outcome: Outcome, fields: Optional[set[str]]) -> dict:
    if isinstance(outcome, Exception):
        return error_asdict(source, outcome)
    return response_asdict(outcome, fields=fields)


@app.command()
def main(
    urls: list[str] = typer.Argument(None, help="URLs to request, or '-' for stdin"),
    method: str = typer.Option("GET", "-X", "--request", help="HTTP method"),
    header: Optional[list[str]] = typer.Option(None, "-H", "--header", help="Extra header 'Name: value'"),
    data: Optional[str] = typer.Option(None, "-d", "--data", help="Request body, or @PATH to send a file"),
    option: Optional[list[str]] = typer.Option(None, "-O", "--option", help="Transport option name=value"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Force JSON-lines output"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    sync: bool = typer.Option(False, "--sync", help="Force synchronous I/O"),
    body: bool = typer.Option(False, "--body", help="Write the raw response body of a single URL"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log requests to stderr"),
):
    """Send a request to one or many URLs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(levelname)s %(name)s: %(message)s")

    sel_fields = set(fields.split(",")) if fields else None
    sources = iter_sources(urls or [])

    if not sources:
        typer.echo("No URLs given.", err=True)
        raise typer.Exit(code=1)
    if body and len(sources) != 1:
        raise typer.BadParameter("--body needs exactly one URL", param_hint="'--body'")

    try:
        options = OptionSet.from_pairs(option or [])
    except OptionError as e:
        raise typer.BadParameter(str(e), param_hint="'-O'")
    try:
        headers = dict(parse_header(line) for line in header or [])
    except OptionError as e:
        raise typer.BadParameter(str(e), param_hint="'-H'")
    payload = _read_data(data)

    try:
        if sync:
            results = _sync_request(sources, method, headers, payload, options)
        else:
            results = asyncio.run(_batch_request(sources, method, headers, payload, options))
    except OptionError as e:
        # cookie file contents are only checked when a request is built
        raise typer.BadParameter(str(e), param_hint="'-O'")

    if body:
        outcome = results[0]
        if isinstance(outcome, Exception):
            typer.echo(str(outcome), err=True)
            raise typer.Exit(code=1)
        raw = bytes(outcome.body)
        if output:
            output.write_bytes(raw)
        else:
            typer.echo(raw, nl=False)
        if not outcome.ok:
            raise typer.Exit(code=1)
        return

    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        # choose output style
        if len(sources) == 1 and not jsonl:
            json.dump(_asdict(sources[0], results[0], sel_fields), sink, indent=2)
            sink.write("\n")
        else:
            for src, res in zip(sources, results):
                sink.write(json.dumps(_asdict(src, res, sel_fields)))
                sink.write("\n")
    finally:
        if output:
            sink.close()

    # exit code
    if any(isinstance(r, Exception) or not r.ok for r in results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
