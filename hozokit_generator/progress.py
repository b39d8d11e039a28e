"""Progress reporting for a fixed set of named tasks.

A ``ProgressReporter`` is created with every label it will ever track and
shows one Rich spinner per label while it is entered as a context manager.
Each task settles exactly once, either as a success (optionally with a
warning) or as an error. The aggregate outcome settles once as well:

* it fails as soon as the first task errors; tasks that never started
  (e.g. an archive download after a failed release lookup) stay pending;
* it succeeds only when every task has succeeded.

Typical usage::

    async with ProgressReporter(["Looking up release", "Downloading"]) as progress:
        release = await progress.track("Looking up release", resolver.resolve_latest(url))
        await progress.track("Downloading", downloader.fetch(release.zipball_url, dest))
    await progress.wait()
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, TaskID

from hozokit_generator.errors import GeneratorError, TaskAlreadySettledError
from hozokit_generator.utils import create_progress

T = TypeVar("T")

SuccessCallback = Callable[[], Any]
FailureCallback = Callable[[BaseException], Any]


class TaskState(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class TaskStatus:
    """Current state of one tracked task."""

    label: str
    state: TaskState = TaskState.PENDING
    error: Optional[BaseException] = None
    warning: Optional[str] = None


class ProgressReporter:
    """Tracks named tasks and settles a single aggregate outcome."""

    def __init__(
        self,
        labels: Iterable[str],
        out: Console | None = None,
        show: bool = True,
    ) -> None:
        labels = list(labels)
        if not labels:
            raise ValueError("ProgressReporter needs at least one task label.")
        if len(set(labels)) != len(labels):
            raise ValueError(f"Task labels must be unique: {labels}")

        self._tasks: dict[str, TaskStatus] = {label: TaskStatus(label) for label in labels}
        self._out = out
        self._show = show
        self._progress: Progress | None = None
        self._task_ids: dict[str, TaskID] = {}

        self._settled = False
        self._first_error: BaseException | None = None
        self._on_success: list[SuccessCallback] = []
        self._on_failure: list[FailureCallback] = []
        self._waiters: list[asyncio.Future[None]] = []

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __enter__(self) -> "ProgressReporter":
        if self._show:
            self._progress = create_progress(self._out)
            self._progress.start()
            for label, status in self._tasks.items():
                self._task_ids[label] = self._progress.add_task(escape(label), total=None)
                if status.state is not TaskState.PENDING:
                    self._render(status)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task_ids.clear()

    async def __aenter__(self) -> "ProgressReporter":
        return self.__enter__()

    async def __aexit__(self, *exc_info: Any) -> None:
        self.__exit__(*exc_info)

    def _render(self, status: TaskStatus) -> None:
        if self._progress is None or status.label not in self._task_ids:
            return
        label = escape(status.label)
        if status.state is TaskState.ERROR:
            description = f"[red]✖ {label}[/red]"
        elif status.warning:
            description = f"[yellow]! {label}[/yellow]"
        else:
            description = f"[green]✔ {label}[/green]"
        task_id = self._task_ids[status.label]
        self._progress.update(task_id, description=description, total=1, completed=1)
        self._progress.stop_task(task_id)

    # ------------------------------------------------------------------
    # Task transitions
    # ------------------------------------------------------------------

    def _pending(self, label: str) -> TaskStatus:
        status = self._tasks[label]
        if status.state is not TaskState.PENDING:
            raise TaskAlreadySettledError(label, status.state.value)
        return status

    def mark_success(self, label: str) -> None:
        """Settle *label* as a success.

        Raises:
            KeyError: If *label* is not tracked.
            TaskAlreadySettledError: If *label* already settled.
        """
        status = self._pending(label)
        status.state = TaskState.SUCCESS
        self._render(status)
        if all(task.state is TaskState.SUCCESS for task in self._tasks.values()):
            self._settle(None)

    def mark_warning(self, label: str, message: str) -> None:
        """Settle *label* as a success that carries a warning (yellow spinner).

        Raises:
            KeyError: If *label* is not tracked.
            TaskAlreadySettledError: If *label* already settled.
        """
        self._pending(label).warning = message
        self.mark_success(label)

    def mark_error(self, label: str, error: BaseException | str) -> None:
        """Settle *label* as failed; the first error fails the aggregate.

        Raises:
            KeyError: If *label* is not tracked.
            TaskAlreadySettledError: If *label* already settled.
        """
        status = self._pending(label)
        if isinstance(error, str):
            error = GeneratorError(error)
        status.state = TaskState.ERROR
        status.error = error
        self._render(status)
        self._settle(error)

    async def track(self, label: str, awaitable: Awaitable[T]) -> T:
        """Await *awaitable* and settle *label* with its outcome.

        The original exception is re-raised after the task is marked.
        """
        try:
            result = await awaitable
        except Exception as exc:
            self.mark_error(label, exc)
            raise
        self.mark_success(label)
        return result

    # ------------------------------------------------------------------
    # Aggregate outcome
    # ------------------------------------------------------------------

    def _settle(self, error: BaseException | None) -> None:
        if self._settled:
            return
        self._settled = True
        self._first_error = error

        if error is None:
            for success_cb in self._on_success:
                success_cb()
        else:
            for failure_cb in self._on_failure:
                failure_cb(error)

        for waiter in self._waiters:
            if not waiter.done():
                if error is None:
                    waiter.set_result(None)
                else:
                    waiter.set_exception(error)
        self._waiters.clear()

    def on_success(self, callback: SuccessCallback) -> None:
        """Call *callback* once every task succeeded (immediately if already so)."""
        if self._settled:
            if self._first_error is None:
                callback()
            return
        self._on_success.append(callback)

    def on_failure(self, callback: FailureCallback) -> None:
        """Call *callback* with the first task error (immediately if already failed)."""
        if self._settled:
            if self._first_error is not None:
                callback(self._first_error)
            return
        self._on_failure.append(callback)

    async def wait(self) -> None:
        """Block until the aggregate settles; raise the first error on failure."""
        if not self._settled:
            waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            await waiter
            return
        if self._first_error is not None:
            raise self._first_error

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def labels(self) -> list[str]:
        return list(self._tasks)

    @property
    def settled(self) -> bool:
        """True once the aggregate outcome has fired."""
        return self._settled

    @property
    def succeeded(self) -> bool:
        return self._settled and self._first_error is None

    @property
    def error(self) -> BaseException | None:
        return self._first_error

    def state(self, label: str) -> TaskState:
        return self._tasks[label].state

    def status(self, label: str) -> TaskStatus:
        return self._tasks[label]

    @property
    def warnings(self) -> list[str]:
        return [task.warning for task in self._tasks.values() if task.warning]
