"""Presentation layer.

Renders the active and completed task lists with rich. Only reads from
the store; every change goes through TaskStore operations.
"""

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tasklist.due import DueStatus, format_due_date
from tasklist.logging import Loggers
from tasklist.models import Task
from tasklist.store import TaskStore

logger = Loggers.view()

EMPTY_ACTIVE_MESSAGE = "No active tasks. Add something to get started!"
UNDO_MESSAGE = "Task deleted"

BADGE_STYLES: dict[DueStatus, str] = {
    DueStatus.OVERDUE: "bold white on red",
    DueStatus.DUE_SOON: "black on yellow",
    DueStatus.SCHEDULED: "white on blue",
}


class TaskListView:
    """Builds rich renderables for a TaskStore.

    Example:
        >>> view = TaskListView(store)
        >>> view.render(Console())
    """

    def __init__(self, store: TaskStore) -> None:
        self.store = store

    def due_badge(self, task: Task) -> Text | None:
        """Due date badge styled by how close the date is."""
        status = self.store.due_status(task)
        if status is DueStatus.NONE:
            return None
        return Text(f" {format_due_date(task.due_date)} ", style=BADGE_STYLES[status])

    def _task_table(self, tasks: tuple[Task, ...], completed: bool) -> Table:
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("State", no_wrap=True)
        table.add_column("Task")
        table.add_column("Due", no_wrap=True, justify="right")

        for task in tasks:
            marker = Text("✔", style="green") if completed else Text("○", style="cyan")
            text = Text(task.text, style="dim strike" if completed else "")
            if task.id == self.store.editing_id:
                text.append("  (editing)", style="italic yellow")
            table.add_row(marker, text, self.due_badge(task) or "")
        return table

    def active_panel(self) -> Panel:
        tasks = self.store.active_tasks()
        body: RenderableType = (
            self._task_table(tasks, completed=False)
            if tasks
            else Text(EMPTY_ACTIVE_MESSAGE, style="dim")
        )
        return Panel(body, title="[bold]Active Tasks[/bold]", border_style="blue")

    def completed_panel(self) -> Panel | None:
        """Completed section; left out entirely while nothing is completed."""
        tasks = self.store.completed_tasks()
        if not tasks:
            return None
        return Panel(
            self._task_table(tasks, completed=True),
            title="[bold]Completed Tasks[/bold]",
            border_style="green",
        )

    def undo_notice(self) -> Text | None:
        """Undo prompt, shown while a deleted task can still be restored."""
        deleted = self.store.last_deleted
        if deleted is None:
            return None
        notice = Text(f"{UNDO_MESSAGE}: ", style="bold")
        notice.append(deleted.text)
        notice.append("  [undo]", style="bold cyan")
        return notice

    def renderable(self) -> Group:
        parts: list[RenderableType] = [self.active_panel()]
        for part in (self.completed_panel(), self.undo_notice()):
            if part is not None:
                parts.append(part)
        return Group(*parts)

    def render(self, console: Console) -> None:
        logger.debug(
            "task_list_rendered",
            active=len(self.store.active_tasks()),
            completed=len(self.store.completed_tasks()),
        )
        console.print(self.renderable())
