"""Rich console output for the cartoclip commands.

Path text goes through print_path() unwrapped, so piping a command's output
into a file gives one path per line; everything else is decoration.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

SYM_STEP = "▸"
SYM_OK = "✓"
SYM_ERR = "✗"
SYM_DOT = "·"

SIDE_STYLES = {"IN": "green", "OUT": "red", "BORDERLINE": "yellow"}


def print_header(version: str) -> None:
    console.rule(f"[bold]cartoclip[/bold] {version}", align="left")


def print_step(message: str) -> None:
    console.print(f"{SYM_STEP} {message}")


def print_path_info(path_file: str, segment_count: int, run_count: int) -> None:
    """Print where a path was read from and how big it is.

    Args:
        path_file: File the path was loaded from
        segment_count: Number of segments, MoveTos included
        run_count: Number of MoveTo-initiated runs
    """
    line = Text(f"  {SYM_DOT} ", style="dim")
    line.append(path_file, style="bold")
    line.append(f"  {segment_count:,} segments in {run_count:,} runs")
    console.print(line)


def print_path(path_text: str) -> None:
    console.print(Text(path_text), soft_wrap=True)


def print_side(side: str) -> None:
    style = SIDE_STYLES.get(side, "bold")
    console.print(Text(side, style=f"bold {style}"))


def print_bounds(s_min: float, s_max: float, t_min: float, t_max: float) -> None:
    """Print a bounding box, one row per coordinate."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("axis")
    table.add_column("min", justify="right")
    table.add_column("max", justify="right")
    table.add_row("s", f"{s_min:g}", f"{s_max:g}")
    table.add_row("t", f"{t_min:g}", f"{t_max:g}")
    console.print(table)


def _elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    minutes, seconds = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m {seconds:.1f}s"
    return f"{seconds:.1f}s"


def print_success(output_path: str, total_time_s: float, segments_in: int, segments_out: int) -> None:
    """Report a saved result.

    Args:
        output_path: File the result was written to
        total_time_s: Wall time of the whole command
        segments_in: Segments in the input path
        segments_out: Segments in the written path
    """
    line = Text(f"{SYM_OK} ", style="bold green")
    line.append(output_path, style="bold")
    line.append(
        f"  {segments_in:,} {SYM_DOT} {segments_out:,} segments in {_elapsed(total_time_s)}",
        style="default",
    )
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print an error and, on a second line, what it was about."""
    console.print(f"[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(Text(f"  {details}", style="dim"))
