import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from rich.console import Console

from gcpfootprint.errors import ConfigurationError

if TYPE_CHECKING:
    from gcpfootprint.clients import ClientFactory


@dataclass
class RunContext:
    """
    Everything a run needs, passed explicitly to every component: the
    project identifier, the progress console, the client factory and the
    cancellation signal.
    """
    project_id: str
    console: Console = field(default_factory=lambda: Console(stderr=True))
    clients: Optional["ClientFactory"] = None
    clock: Callable[[], datetime] = datetime.now
    cancel_event: threading.Event = field(default_factory=threading.Event)
    _deadline: Optional[threading.Timer] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.project_id = (self.project_id or "").strip()
        if not self.project_id:
            raise ConfigurationError("a GCP project ID is required")

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()

    def start_deadline(self, seconds: float) -> None:
        """Cancel the run automatically after *seconds*."""
        self.stop_deadline()
        timer = threading.Timer(seconds, self._deadline_reached)
        timer.daemon = True
        timer.start()
        self._deadline = timer

    def stop_deadline(self) -> None:
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

    def _deadline_reached(self) -> None:
        self.console.print("[yellow]Warning:[/yellow] run deadline reached, stopping.")
        self.cancel()
