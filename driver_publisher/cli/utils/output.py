# driver_publisher/cli/utils/output.py
"""Output formatting utilities"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ...constants import (
    EMOJI_ERROR,
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    MSG_PUBLISH_FAILED,
    MSG_PUBLISH_SUCCESS,
    MSG_PUBLISH_TITLE,
    MSG_UNKNOWN_HOST,
)
from ...models.manifest import ArchiveHandle
from ...models.result import ErrorKind, PublishResult
from ...utils.file_utils import format_size

console = Console()


def print_error(message: str) -> None:
    console.print(f"[red]{EMOJI_ERROR}[/red] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{EMOJI_WARNING}[/yellow] {message}")


def publish_failure_message(result: PublishResult) -> str:
    """User-facing failure text; an unknown host gets its own message"""
    if result.error_kind == ErrorKind.UNKNOWN_HOST:
        return MSG_UNKNOWN_HOST
    return MSG_PUBLISH_FAILED.format(error=result.error.message if result.error else "unknown error")


def format_publish_result(result: PublishResult) -> None:
    """Format and display publish operation result"""
    if result.is_success:
        lines = [
            f"[green]{EMOJI_SUCCESS}[/green] {MSG_PUBLISH_SUCCESS}",
            "",
            f"[bold]Server:[/bold] {result.target}",
            f"[bold]Updater:[/bold] {result.updater_kind.value}",
        ]

        if result.archive:
            lines.append(f"[bold]Archive:[/bold] {result.archive.path}")
            lines.append(f"[bold]Size:[/bold] {format_size(result.archive.size)}")

        if result.applied_entries:
            lines.append("")
            lines.append("[bold]Published:[/bold]")
            for name in result.applied_entries:
                lines.append(f"  • {name}")

        if result.duration is not None:
            lines.append("")
            lines.append(f"[dim]Completed in {result.duration:.2f}s[/dim]")

        console.print(Panel("\n".join(lines), title=MSG_PUBLISH_TITLE, border_style="green"))
        return

    lines = [f"[red]{EMOJI_ERROR}[/red] {escape(publish_failure_message(result))}"]

    if result.error and result.error.code:
        lines.append(f"[dim]Error code: {result.error.code}[/dim]")

    if result.applied_entries:
        lines.append("")
        lines.append(f"[yellow]{EMOJI_WARNING} Already applied on the server:[/yellow]")
        for name in result.applied_entries:
            lines.append(f"  • {name}")

    border = "yellow" if result.error_kind == ErrorKind.CANCELLED else "red"
    console.print(Panel("\n".join(lines), title=MSG_PUBLISH_TITLE, border_style=border))


def format_pack_result(handle: ArchiveHandle) -> None:
    """Format and display a built archive"""
    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] Archive created successfully!",
        "",
        f"[bold]Archive:[/bold] {handle.path}",
        f"[bold]Entries:[/bold] {handle.entry_count}",
        f"[bold]Size:[/bold] {format_size(handle.size)}",
        f"[bold]Checksum:[/bold] {handle.checksum[:16]}...",
    ]

    console.print(Panel("\n".join(lines), title="Pack Result", border_style="green"))
