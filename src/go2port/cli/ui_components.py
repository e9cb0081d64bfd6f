"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/handlers en múltiples comandos.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from go2port.core.domain.models import ChecksumRecord, PortBundle


def configure_logging(console: Console, *, debug: bool) -> None:
    """Enruta `logging` a stderr vía Rich.

    Sin `--debug` solo se ven warnings; con `--debug` se ve cada URL probada.
    """

    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    root = logging.getLogger("go2port")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    root.propagate = False


def print_warning(console: Console, message: str) -> None:
    console.print(f"[yellow]WARNING:[/yellow] {escape(message)}", highlight=False, soft_wrap=True)


def build_bundle_table(bundle: PortBundle) -> Table:
    """Tabla Rich con checksums del paquete y sus dependencias."""

    table = Table(title=f"{bundle.package_id} {bundle.version}")
    table.add_column("Coordinate", style="cyan", no_wrap=True)
    table.add_column("Lock", style="white")
    table.add_column("Size", style="green", justify="right")
    table.add_column("SHA-256", style="magenta")

    def _row(name: str, lock: str, csums: ChecksumRecord) -> None:
        size = "[red]unavailable[/red]" if csums.is_sentinel else csums.size
        table.add_row(name, lock, size, csums.sha256)

    _row(bundle.package_id, bundle.version, bundle.main_checksums)
    for dep in bundle.dependencies:
        _row(dep.name, dep.version, bundle.checksums.get(dep.name, ChecksumRecord.sentinel()))
    return table
