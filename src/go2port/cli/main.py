"""CLI de go2port (Typer).

Por qué una CLI delgada:
- Toda la resolución vive en `core.services.port_pipeline`; aquí solo se
  parsean argumentos, se imprime y se escriben archivos.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from go2port import __version__
from go2port.adapters.http_client import build_async_client
from go2port.adapters.json_exporter import export_bundles_json
from go2port.adapters.portfile_exporter import export_portfile, load_template, render_portfile
from go2port.adapters.portfile_updater import (
    locate_portfile,
    package_from_portfile,
    template_from_portfile,
)
from go2port.cli import doctor
from go2port.cli.ui_components import build_bundle_table, configure_logging, print_warning
from go2port.core.config import AppSettings
from go2port.core.domain.models import PortBundle
from go2port.core.errors import Go2PortError, PortfileFormatError
from go2port.core.services.port_pipeline import (
    PipelineHooks,
    PipelineResult,
    PortRequest,
    pair_requests,
    resolve_batch,
    resolve_port,
)

app = typer.Typer(
    no_args_is_help=True,
    help="Generate a MacPorts portfile from a Go project.",
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"go2port {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Print debug information."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    settings = AppSettings()
    if debug:
        settings = settings.model_copy(update={"debug": True})
    configure_logging(_err_console, debug=settings.debug)
    ctx.obj = settings


def _requests_or_exit(args: list[str], *, subdirectory: str | None) -> list[PortRequest]:
    try:
        requests = pair_requests(args, subdirectory=subdirectory)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not requests:
        raise typer.BadParameter("Please specify a package and version (tag or SHA1)")
    return requests


def _batch_output(output: Optional[str], requests: list[PortRequest]) -> Optional[str]:
    if len(requests) > 1 and output not in (None, "-", ""):
        print_warning(_err_console, "Output file ignored in batch mode")
        return None
    return output


def _write(bundle: PortBundle, output: str, *, template_source: Optional[str] = None) -> None:
    if output == "-":
        typer.echo(render_portfile(bundle=bundle, template_source=template_source), nl=False)
    else:
        export_portfile(bundle=bundle, output_path=Path(output), template_source=template_source)


def _read_portfile(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PortfileFormatError(
            f"Could not read portfile {path}",
            context={"path": str(path), "error": str(exc)},
        ) from exc


@app.command()
def get(
    ctx: typer.Context,
    args: List[str] = typer.Argument(..., metavar="<package> <version> ..."),
    output: str = typer.Option("-", "--output", "-o", help='Output FILE ("-" for stdout).'),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Also export the resolved bundles as JSON."),
    subdirectory: Optional[str] = typer.Option(None, "--subdir", help="Directory holding the lock files."),
    summary: bool = typer.Option(False, "--summary", help="Print a checksum table to stderr."),
) -> None:
    """Generate a MacPorts portfile and output it to stdout."""

    settings: AppSettings = ctx.obj
    requests = _requests_or_exit(args, subdirectory=subdirectory)
    target = _batch_output(output, requests) or "-"

    def _emit(result: PipelineResult) -> None:
        _write(result.bundle, target)
        if summary:
            _err_console.print(build_bundle_table(result.bundle))

    hooks = PipelineHooks(
        warning=lambda message: print_warning(_err_console, message),
        package_done=_emit,
    )
    try:
        results = asyncio.run(resolve_batch(requests, settings=settings, hooks=hooks))
    except Go2PortError as exc:
        _err_console.print(str(exc), style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc

    if json_path is not None:
        export_bundles_json(bundles=[r.bundle for r in results], output_path=json_path)


async def _update_all(
    requests: list[PortRequest],
    *,
    settings: AppSettings,
    output: Optional[str],
    portfile: Optional[Path],
) -> None:
    hooks = PipelineHooks(warning=lambda message: print_warning(_err_console, message))
    async with build_async_client(settings) as client:
        for request in requests:
            # `package` holds the port name until the Portfile is read.
            path = portfile or locate_portfile(request.package)
            text = _read_portfile(path)
            package = package_from_portfile(text)
            template = template_from_portfile(package, text)
            # Fail before any network request.
            load_template(template)
            if settings.debug:
                _err_console.print(f"Generated template from existing portfile:\n{template}", markup=False)

            result = await resolve_port(
                PortRequest(package=package, version=request.version, subdirectory=request.subdirectory),
                settings=settings,
                client=client,
                hooks=hooks,
            )
            if output == "-":
                _write(result.bundle, "-", template_source=template)
                continue
            destination = Path(output) if output else path
            _err_console.print(f"Updating existing portfile: {destination}", markup=False)
            _write(result.bundle, str(destination), template_source=template)


@app.command()
def update(
    ctx: typer.Context,
    args: List[str] = typer.Argument(..., metavar="<portname> <version> ..."),
    output: Optional[str] = typer.Option(None, "--output", "-o", help='Output FILE ("-" for stdout).'),
    portfile: Optional[Path] = typer.Option(
        None,
        "--portfile",
        exists=True,
        dir_okay=False,
        help="Existing Portfile to update instead of asking `port file`.",
    ),
    subdirectory: Optional[str] = typer.Option(None, "--subdir", help="Directory holding the lock files."),
) -> None:
    """Overwrite an existing MacPorts portfile."""

    settings: AppSettings = ctx.obj
    requests = _requests_or_exit(args, subdirectory=subdirectory)
    if portfile is not None and len(requests) > 1:
        raise typer.BadParameter("--portfile cannot be combined with batch mode")
    output = _batch_output(output, requests)

    try:
        asyncio.run(_update_all(requests, settings=settings, output=output, portfile=portfile))
    except Go2PortError as exc:
        _err_console.print(str(exc), style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from exc


def run() -> None:
    app()
