"""Rich console utilities for repology-install."""

from typing import List, Sequence, Tuple

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from .operating_system import OperatingSystem
from .package_managers import PackageManager
from .repology import Project

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "command": "bold magenta",
        "highlight": "magenta",
    }
)

# Shared console instances; diagnostics go to stderr
console = Console(theme=custom_theme, color_system="auto")
err_console = Console(theme=custom_theme, color_system="auto", stderr=True)

STATUS_STYLES = {
    "newest": "green",
    "unique": "green",
    "devel": "cyan",
    "outdated": "red",
    "legacy": "yellow",
}


def print_environment(os: OperatingSystem, package_managers: Sequence[PackageManager]) -> None:
    """Print the detected operating system and its package managers."""
    managers = ", ".join(pm.value for pm in package_managers)
    console.print(f"[info]Operating system:[/info] {os.value} [dim]({managers})[/dim]")


def print_projects_table(package_name: str, projects: Sequence[Project]) -> None:
    """
    Print a table of Repology records.

    Args:
        package_name: Project name that was looked up
        projects: Records to show, in order
    """
    table = Table(title=f"Repology: {package_name}", show_header=True, header_style="bold")
    table.add_column("Repository", style="cyan")
    table.add_column("Package")
    table.add_column("Version", justify="right")
    table.add_column("Status")

    for project in projects:
        style = STATUS_STYLES.get(project.status, "")
        status = f"[{style}]{project.status}[/{style}]" if style else project.status
        if project.vulnerable:
            status += " [error](vulnerable)[/error]"
        table.add_row(project.repo, project.package_name, project.version, status)

    console.print(table)


def print_install_commands(commands: List[Tuple[Project, str]]) -> None:
    """Print one install command per distinct command string."""
    seen = set()
    for _, command in commands:
        if command in seen:
            continue
        seen.add(command)
        console.print(f"[command]{command}[/command]", highlight=False)


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/warning] {message}")


def print_failure(message: str) -> None:
    err_console.print(f"[error]Error:[/error] {message}")
