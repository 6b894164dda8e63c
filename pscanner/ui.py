from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn, TimeRemainingColumn

console = Console()
err_console = Console(stderr=True)


class ScannerUI:
    def __init__(self, console=console, err_console=err_console):
        self.console = console
        self.err_console = err_console

    def display_start(self, host, port_count, workers):
        self.console.print(Panel.fit(
            f"[bold green]Scanning {escape(host)}[/bold green] [dim]({port_count} ports, {workers} workers)[/dim]",
            border_style="blue"
        ))

    def create_progress(self):
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=self.console,
            transient=True
        )

    def display_results(self, report):
        """
        Prints the scan summary followed by the open ports, ascending.
        """
        self.console.print(f"Host: {escape(report.host)}", highlight=False)
        self.console.print(f"Scanned ports: {report.ports_scanned}", highlight=False)
        self.console.print(f"Workers used: {report.workers_used}", highlight=False)
        self.console.print(f"Timeout: {report.timeout_ms}ms", highlight=False)

        self.console.print("[bold]Open ports:[/bold]")
        if not report.open_ports:
            self.console.print("  [dim](none found)[/dim]")
        else:
            for port in report.open_ports:
                self.console.print(f"  [green]{port}[/green]")

        self.console.print(f"[dim]Scan completed in {report.duration:.2f} seconds.[/dim]")

    def show_notice(self, msg):
        self.err_console.print(f"[yellow]{escape(msg)}[/yellow]")

    def show_error(self, msg):
        self.err_console.print(f"[bold red]error:[/bold red] {escape(msg)}", highlight=False)
