"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log

console = Console()


class RequestInfo:
    """Info about a single forwarded request."""

    def __init__(self, method: str, path: str, target_url: str, timestamp: datetime):
        self.method = method
        self.path = path
        self.target_url = target_url
        self.status: int | None = None
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing forwarded requests and their outcomes."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 10
        self._status_count = {"2xx": 0, "3xx": 0, "4xx": 0, "5xx": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    @property
    def status_count(self) -> dict[str, int]:
        with self._lock:
            return dict(self._status_count)

    @property
    def errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def log_forward(self, method: str, path: str, target_url: str) -> None:
        """Log a request about to be sent upstream."""
        with self._lock:
            info = RequestInfo(method, path, target_url, datetime.now())
            self._recent.insert(0, info)
            self._recent = self._recent[: self._max_recent]
            self._refresh()
            write_cli_log("FORWARD", f"{method} {path}", target=target_url)

    def log_response(self, method: str, path: str, status: int) -> None:
        """Record the upstream status for the latest matching request."""
        with self._lock:
            bucket = f"{status // 100}xx"
            if bucket in self._status_count:
                self._status_count[bucket] += 1
            for info in self._recent:
                if info.status is None and info.method == method and info.path == path:
                    info.status = status
                    break
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            self._status_count["5xx"] += 1
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=4),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Agent Chat Proxy", style="bold cyan")
        for bucket, style in (("2xx", "green"), ("3xx", "blue"), ("4xx", "yellow"), ("5xx", "red")):
            stats.append("  |  ")
            stats.append(f"{bucket}: {self._status_count[bucket]}", style=style)
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=7)
            table.add_column("Path", ratio=1)
            table.add_column("Status", width=6)
            table.add_column("Target", ratio=2, style="dim")

            for info in self._recent:
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    info.path[:60] + "..." if len(info.path) > 60 else info.path,
                    str(info.status) if info.status is not None else "...",
                    info.target_url,
                )
            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Recent requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and help."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            upstream = self.config.upstream.base_url or "[not configured]"
            content = Text(
                f"Forwarding http://{self.config.proxy.host}:{self.config.proxy.port}"
                f"{self.config.proxy.route_marker} -> {upstream}",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
