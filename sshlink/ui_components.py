"""
sshlink - UI Components
Standardized headers and colors
"""

from rich.console import Console

LOGO = "sshlink"

BRAND_COLOR = "cyan"


def show_header(
    title: str,
    subtitle: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized sshlink command header.

    Args:
        title: Main title (e.g., "Provision SSH Access")
        subtitle: Optional subtitle line
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)

    Example:
        show_header(
            title="Provision SSH Access",
            details={"Host": "db1", "Target": "admin@10.1.2.3"}
        )
    """
    if console is None:
        console = Console()

    prefix = f" [bold color(214)]{LOGO}[/bold color(214)] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{title}[/bold white]", highlight=False)

    if subtitle:
        console.print(f"{prefix} [dim]{subtitle}[/dim]", highlight=False)

    if details:
        for key, value in details.items():
            console.print(
                f"{prefix} {key}: [{BRAND_COLOR}]{value}[/{BRAND_COLOR}]",
                highlight=False,
            )

    # Single blank line after header
    console.print()
