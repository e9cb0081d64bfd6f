"""Render del Portfile.

Por qué está en adapters:
- El texto Tcl del Portfile es un detalle de presentación (Jinja2).
- El Core solo conoce el agregado `PortBundle`.

Los bloques `checksums` y `go.vendors` se preformatean aquí y entran a la
plantilla como texto, así la misma plantilla sirve para Portfiles existentes
(ver `portfile_updater.template_from_portfile`).
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape

from go2port.core.domain.models import ChecksumRecord, PortBundle
from go2port.core.errors import PortfileFormatError


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE = "Portfile.j2"

# Columna de valores en los Portfiles de MacPorts.
_VALUE_COLUMN = 20
_NESTED_COLUMN = 24


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"], default_for_string=False),
        keep_trailing_newline=True,
    )


def checksum_values(csums: ChecksumRecord, indent: int) -> str:
    pad = " " * indent
    return (
        f"{pad}rmd160  {csums.rmd160} \\\n"
        f"{pad}sha256  {csums.sha256} \\\n"
        f"{pad}size    {csums.size}"
    )


def checksums_block(bundle: PortBundle) -> str:
    """Bloque `checksums` del paquete principal.

    Con dependencias, el archivo principal se nombra explícitamente
    (`${distname}${extract.suffix}`) porque hay más de un distfile.
    """

    csums = bundle.main_checksums
    if bundle.dependencies:
        return (
            "checksums".ljust(_VALUE_COLUMN)
            + "${distname}${extract.suffix} \\\n"
            + checksum_values(csums, _NESTED_COLUMN)
        )
    return "checksums".ljust(_VALUE_COLUMN) + checksum_values(csums, _VALUE_COLUMN).strip()


def go_vendors_block(bundle: PortBundle) -> str:
    """Bloque `go.vendors`: una entrada `lock` + checksums por dependencia."""

    if not bundle.dependencies:
        return ""

    entries: list[str] = []
    for dep in bundle.dependencies:
        csums = bundle.checksums.get(dep.name, ChecksumRecord.sentinel())
        entries.append(
            f"{dep.name} \\\n"
            + " " * _NESTED_COLUMN
            + f"lock    {dep.version} \\\n"
            + checksum_values(csums, _NESTED_COLUMN)
        )
    separator = " \\\n" + " " * _VALUE_COLUMN
    return "go.vendors".ljust(_VALUE_COLUMN) + separator.join(entries)


def load_template(template_source: str | None = None) -> Template:
    """Compila la plantilla; un Portfile con `{{`/`{%` propios no es plantilla válida."""

    env = _get_env()
    if template_source is None:
        return env.get_template(DEFAULT_TEMPLATE)
    try:
        return env.from_string(template_source)
    except TemplateError as exc:
        raise PortfileFormatError(
            "Existing portfile cannot be used as a template",
            hint="Remove Jinja delimiters ({{, {%, {#) from the portfile or write it from scratch with `get`.",
            context={"error": str(exc)},
        ) from exc


def render_portfile(*, bundle: PortBundle, template_source: str | None = None) -> str:
    """Renderiza el Portfile; `template_source` reemplaza la plantilla por defecto."""

    template = load_template(template_source)
    try:
        return template.render(
            package_id=bundle.package_id,
            alias=bundle.alias,
            version=bundle.version,
            checksums=checksums_block(bundle),
            go_vendors=go_vendors_block(bundle),
        )
    except TemplateError as exc:
        raise PortfileFormatError(
            "Could not render portfile",
            context={"package": bundle.package_id, "error": str(exc)},
        ) from exc


def export_portfile(
    *,
    bundle: PortBundle,
    output_path: Path,
    template_source: str | None = None,
) -> Path:
    """Escribe el Portfile en `output_path`."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    text = render_portfile(bundle=bundle, template_source=template_source)
    output_path.write_text(text, encoding="utf-8")
    return output_path
