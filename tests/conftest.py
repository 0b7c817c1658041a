from collections import defaultdict

from rich.console import Console
from rich.table import Table

# Markers declared in pyproject.toml, one per package under test.
KNOWN_MARKERS = ("unit_common", "unit_table", "unit_app", "unit_ui", "unit_gui")


def _counted(report) -> bool:
    # The call phase, or a skip raised during setup.
    return report.when == "call" or (report.when == "setup" and report.outcome == "skipped")


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print pass/fail/skip counts per package marker at the end of the session."""
    _ = (exitstatus, config)
    stats = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )

    for outcome in ("passed", "failed", "skipped"):
        for report in terminalreporter.stats.get(outcome, []):
            if not _counted(report):
                continue
            for marker in KNOWN_MARKERS:
                if marker in report.keywords:
                    entry = stats[marker]
                    entry[outcome] += 1
                    entry["total"] += 1
                    entry["duration"] += getattr(report, "duration", 0.0)

    if not stats:
        return

    table = Table(title="Tests by package", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    for label in ("Total", "Passed", "Failed", "Skipped"):
        table.add_column(label, justify="right")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(stats):
        entry = stats[marker]
        table.add_row(
            marker,
            str(entry["total"]),
            f"[green]{entry['passed']}[/green]",
            f"[red]{entry['failed']}[/red]",
            f"[yellow]{entry['skipped']}[/yellow]",
            f"{entry['duration']:.2f}",
        )

    console = Console()
    console.print()
    console.print(table)
