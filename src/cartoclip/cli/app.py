"""CLI application entry point for cartoclip.

This module provides the main CLI interface using Typer.
"""

import time
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError

from cartoclip import __version__
from cartoclip.cli.output import (
    console,
    print_bounds,
    print_error,
    print_header,
    print_path,
    print_path_info,
    print_side,
    print_step,
    print_success,
)
from cartoclip.config import (
    CartoclipSettings,
    ClipConfig,
    LoggingConfig,
    ProjectionConfig,
)
from cartoclip.domain import Location, PathSegment, Plane, Sphere
from cartoclip.exceptions import CartoclipError, PathFormatError, PathLoadError, PathSaveError
from cartoclip.io import PathReader, PathWriter, path_to_string

# Create the Typer app
app = typer.Typer(
    name="cartoclip",
    help="Clip vector paths against closed boundaries on the plane or the sphere.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Cartoclip[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Clip vector paths against closed boundaries on the plane or the sphere."""


def _load_path(path_file: Path) -> list[PathSegment]:
    """Load a path file, rejecting missing files up front."""
    if not path_file.exists():
        raise PathLoadError(str(path_file), "file not found")
    if not path_file.is_file():
        raise PathLoadError(str(path_file), "not a file")
    with PathReader(path_file) as reader:
        return reader.path


def _positive(value: float) -> float:
    if value <= 0:
        raise typer.BadParameter("must be greater than 0")
    return value


def _run_count(path: list[PathSegment]) -> int:
    return sum(1 for segment in path if segment.code == "M")


def _exit_with_error(error: Exception) -> NoReturn:
    """Translate library errors into a message and exit code 1."""
    if isinstance(error, ValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in problem['loc'])}: {problem['msg']}"
            for problem in error.errors()
        )
        print_error("Invalid option", details=problems)
    elif isinstance(error, PathLoadError):
        print_error(f"Could not load path: {error.reason}", details=error.path)
    elif isinstance(error, PathSaveError):
        print_error(f"Could not save path: {error.reason}", details=error.path)
    elif isinstance(error, PathFormatError):
        print_error("Could not parse path", details=error.details)
    else:
        print_error(str(error))
    raise typer.Exit(code=1)


@app.command()
def clip(
    path_file: Annotated[
        Path,
        typer.Argument(help="Path file to clip (.json or path text)", show_default=False),
    ],
    boundary_file: Annotated[
        Path,
        typer.Argument(help="Closed boundary to clip against", show_default=False),
    ],
    periodic: Annotated[
        bool,
        typer.Option(
            "--periodic",
            help="Treat coordinates as latitude/longitude radians on a sphere",
        ),
    ] = False,
    close_path: Annotated[
        bool,
        typer.Option(
            "--close-path",
            help="Treat the path as a filled shape and keep the result closed",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the result to this file instead of printing it",
        ),
    ] = None,
    max_iterations: Annotated[
        int,
        typer.Option(
            "--max-iterations",
            help="Iteration budget before giving up",
            min=1,
        ),
    ] = 100_000,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Clip a path to the inside of a boundary.

    The boundary's left side is inside (walking along it on a y-down screen).

    Example:
        cartoclip clip coast.json frame.txt --close-path -o coast-clipped.json
    """
    from cartoclip.core import PathClipper
    from cartoclip.utils import ClippingLogger, configure_logging

    try:
        settings = CartoclipSettings(
            clip=ClipConfig(max_iterations=max_iterations, close_path=close_path),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValidationError as e:
        _exit_with_error(e)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    clipping_logger = ClippingLogger(logger)

    try:
        if output is not None and not quiet:
            print_header(__version__)
            print_step("Loading paths")

        path = _load_path(path_file)
        boundary = _load_path(boundary_file)
        domain = Sphere() if periodic else Plane(boundary)

        if output is not None and not quiet:
            print_path_info(str(path_file), len(path), _run_count(path))
            print_path_info(str(boundary_file), len(boundary), _run_count(boundary))
            print_step("Clipping")

        clipping_logger.log_path_start(str(path_file), len(path))
        start_time = time.time()
        try:
            result = PathClipper(settings.clip).clip(path, boundary, domain)
        except CartoclipError as e:
            clipping_logger.log_path_error(str(path_file), e)
            raise
        duration = time.time() - start_time
        clipping_logger.log_path_complete(
            str(path_file), len(path), len(result), duration * 1000
        )

        if output is None:
            print_path(path_to_string(result))
        else:
            PathWriter(output).save(result)
            if not quiet:
                print_success(str(output), duration, len(path), len(result))

    except CartoclipError as e:
        _exit_with_error(e)


@app.command()
def contains(
    polygon_file: Annotated[
        Path,
        typer.Argument(help="Closed polygon file", show_default=False),
    ],
    s: Annotated[float, typer.Argument(help="First coordinate of the point", show_default=False)],
    t: Annotated[float, typer.Argument(help="Second coordinate of the point", show_default=False)],
    periodic: Annotated[
        bool,
        typer.Option(
            "--periodic",
            help="Treat coordinates as latitude/longitude radians on a sphere",
        ),
    ] = False,
) -> None:
    """Tell whether a polygon contains a point (IN, OUT or BORDERLINE)."""
    from cartoclip.core import contains as contains_point

    try:
        polygon = _load_path(polygon_file)
        side = contains_point(polygon, Location(s, t), periodic)
    except CartoclipError as e:
        _exit_with_error(e)
    else:
        print_side(side.name)


@app.command()
def bounds(
    path_file: Annotated[
        Path,
        typer.Argument(help="Path file", show_default=False),
    ],
) -> None:
    """Print the bounding box of a path, arcs included."""
    from cartoclip.core import calculate_bounds

    try:
        box = calculate_bounds(_load_path(path_file))
    except CartoclipError as e:
        _exit_with_error(e)
    else:
        print_bounds(box.s_min, box.s_max, box.t_min, box.t_max)


@app.command()
def project(
    path_file: Annotated[
        Path,
        typer.Argument(help="Path in latitude/longitude radians", show_default=False),
    ],
    precision: Annotated[
        float,
        typer.Option(
            "--precision",
            "-p",
            help="Longest projected chord before a line is subdivided",
            callback=_positive,
        ),
    ] = 0.01,
    central_meridian: Annotated[
        float,
        typer.Option(
            "--central-meridian",
            "-c",
            help="Central meridian in radians",
            min=-4.0,
            max=4.0,
        ),
    ] = 0.0,
    auto_center: Annotated[
        bool,
        typer.Option(
            "--auto-center",
            help="Choose the central meridian that keeps the path in one piece",
        ),
    ] = False,
    south_up: Annotated[
        bool,
        typer.Option(
            "--south-up",
            help="Rotate the map so that south is at the top",
        ),
    ] = False,
    radius: Annotated[
        float,
        typer.Option(
            "--radius",
            help="Scale of the equirectangular reference projection",
            callback=_positive,
        ),
    ] = 1.0,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the result to this file instead of printing it",
        ),
    ] = None,
) -> None:
    """Project a geographic path with the equirectangular reference projection.

    Lines are subdivided until every projected chord is shorter than the
    precision. The path must already be clipped so that no line crosses the
    antimeridian.
    """
    from cartoclip.core import Equirectangular, PathProjector, choose_central_meridian

    try:
        path = _load_path(path_file)
        if auto_center:
            central_meridian = choose_central_meridian(path)
        config = ProjectionConfig(
            precision=precision,
            central_meridian=central_meridian,
            north_up=not south_up,
        )
        start_time = time.time()
        result = PathProjector(Equirectangular(radius), config).project(path)
        duration = time.time() - start_time

        if output is None:
            print_path(path_to_string(result))
        else:
            PathWriter(output).save(result)
            print_success(str(output), duration, len(path), len(result))
    except (CartoclipError, ValidationError) as e:
        _exit_with_error(e)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
