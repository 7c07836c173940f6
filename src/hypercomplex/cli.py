"""
Command-line interface for Hypercomplex.

Usage:
    hypercomplex info                       Show algebras and scalar formats
    hypercomplex multiply "0 1 0 0" "0 0 1 0"
    hypercomplex exp "0 3.14159" --precision mpfr --bits 256
    hypercomplex power "1 1" 8

Numbers are given as space- or comma-separated component lists, real part
first. The component count must be a power of two.
"""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from hypercomplex import __version__
from hypercomplex.algorithms import exp as hexp
from hypercomplex.data import (
    DEFAULT_MPFR_PRECISION,
    PrecisionFormat,
    get_spec,
    list_algebras,
    list_available_formats,
    parse_format,
)
from hypercomplex.errors import HypercomplexError
from hypercomplex.number import Hypercomplex
from hypercomplex.scalars import ScalarField, make_field

app = typer.Typer(
    name="hypercomplex",
    help="Arithmetic in Cayley–Dickson algebras (complex, quaternion, octonion, ...)",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)

PrecisionOption = Annotated[
    str,
    typer.Option(
        "--precision",
        "-p",
        help="Scalar format: fp64, fp32, fp16, fp8_e4m3, fp8_e5m2 or mpfr",
    ),
]
BitsOption = Annotated[
    int,
    typer.Option("--bits", "-b", help="Bits of precision for the mpfr format"),
]
NumberArgument = Annotated[
    str,
    typer.Argument(help='Components, real part first (e.g. "1 0 0 0")'),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"hypercomplex version {__version__}")
        raise typer.Exit()


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Hypercomplex - Cayley–Dickson number arithmetic."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# =============================================================================
# HELPERS
# =============================================================================


def parse_components(text: str) -> list[str]:
    """Split a component list on commas and whitespace."""
    return text.replace(",", " ").split()


def _make_field(precision: str, bits: int) -> ScalarField:
    fmt = parse_format(precision)
    if fmt is PrecisionFormat.MPFR:
        return make_field(fmt, bits=bits)
    return make_field(fmt)


@contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except (HypercomplexError, ValueError, ImportError) as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _run_unary(
    op: Callable[[Hypercomplex], Hypercomplex],
    number: str,
    precision: str,
    bits: int,
) -> None:
    with _reported_errors():
        field = _make_field(precision, bits)
        with Hypercomplex(parse_components(number), field) as h, op(h) as result:
            console.print(str(result), soft_wrap=True)


def _run_binary(
    op: Callable[[Hypercomplex, Hypercomplex], Hypercomplex],
    left: str,
    right: str,
    precision: str,
    bits: int,
) -> None:
    with _reported_errors():
        field = _make_field(precision, bits)
        with (
            Hypercomplex(parse_components(left), field) as a,
            Hypercomplex(parse_components(right), field) as b,
            op(a, b) as result,
        ):
            console.print(str(result), soft_wrap=True)


# =============================================================================
# COMMANDS
# =============================================================================


@app.command()  # type: ignore[misc]
def info() -> None:
    """Display the Cayley–Dickson tower and the available scalar formats."""
    algebras = Table(title="Cayley–Dickson Algebras")

    algebras.add_column("Dim", justify="right", style="cyan")
    algebras.add_column("Name", no_wrap=True)
    algebras.add_column("Commutative", justify="center")
    algebras.add_column("Associative", justify="center")
    algebras.add_column("Normed", justify="center")

    def mark(flag: bool) -> str:
        return "✓" if flag else "✗"

    for algebra in list_algebras(256):
        algebras.add_row(
            str(algebra.dim),
            algebra.name,
            mark(algebra.commutative),
            mark(algebra.associative),
            mark(algebra.composition),
        )

    console.print(algebras)

    formats = Table(title="Scalar Formats")

    formats.add_column("Format", style="cyan", no_wrap=True)
    formats.add_column("Bits", justify="right")
    formats.add_column("Mantissa", justify="right")
    formats.add_column("Machine ε", justify="right")
    formats.add_column("Storage", justify="center")
    formats.add_column("Available", justify="center")

    available = set(list_available_formats())

    for fmt in PrecisionFormat:
        spec = get_spec(fmt)
        is_available = fmt in available
        style = "" if is_available else "dim"

        formats.add_row(
            fmt.value.upper(),
            str(spec.bits) if spec.is_value_type else f"{spec.bits}*",
            str(spec.mantissa_bits),
            f"{spec.machine_epsilon:.2e}",
            "value" if spec.is_value_type else "managed",
            mark(is_available),
            style=style,
        )

    console.print(formats)
    console.print(
        f"\n[dim]* MPFR precision is chosen per run with --bits "
        f"(default {DEFAULT_MPFR_PRECISION}).[/]"
    )

    if PrecisionFormat.FP8_E4M3 not in available:
        console.print(
            "\n[yellow]Note:[/] FP8 formats require ml-dtypes package. "
            "Install with: [bold]pip install ml-dtypes[/]"
        )


@app.command()  # type: ignore[misc]
def add(
    left: NumberArgument,
    right: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Component-wise sum LEFT + RIGHT."""
    _run_binary(lambda a, b: a + b, left, right, precision, bits)


@app.command()  # type: ignore[misc]
def subtract(
    left: NumberArgument,
    right: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Component-wise difference LEFT - RIGHT."""
    _run_binary(lambda a, b: a - b, left, right, precision, bits)


@app.command()  # type: ignore[misc]
def multiply(
    left: NumberArgument,
    right: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Cayley–Dickson product LEFT * RIGHT (order matters)."""
    _run_binary(lambda a, b: a * b, left, right, precision, bits)


@app.command()  # type: ignore[misc]
def divide(
    left: NumberArgument,
    right: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Quotient LEFT * inverse(RIGHT)."""
    _run_binary(lambda a, b: a / b, left, right, precision, bits)


@app.command()  # type: ignore[misc]
def conjugate(
    number: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Negate every imaginary component."""
    _run_unary(lambda h: h.conjugate(), number, precision, bits)


@app.command()  # type: ignore[misc]
def inverse(
    number: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Multiplicative inverse."""
    _run_unary(lambda h: h.inverse(), number, precision, bits)


@app.command()  # type: ignore[misc]
def exp(
    number: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Exponential e^NUMBER."""
    _run_unary(hexp, number, precision, bits)


@app.command()  # type: ignore[misc]
def power(
    number: NumberArgument,
    exponent: Annotated[int, typer.Argument(help="Positive integer exponent")],
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """NUMBER raised to a positive integer power."""
    _run_unary(lambda h: h**exponent, number, precision, bits)


@app.command()  # type: ignore[misc]
def norm(
    number: NumberArgument,
    precision: PrecisionOption = "fp64",
    bits: BitsOption = DEFAULT_MPFR_PRECISION,
) -> None:
    """Euclidean norm."""
    with _reported_errors():
        field = _make_field(precision, bits)
        with Hypercomplex(parse_components(number), field) as h:
            value = h.norm()
            try:
                console.print(field.render(value), soft_wrap=True)
            finally:
                field.release(value)


if __name__ == "__main__":
    app()
