"""HTML fragments for the htmx front end.

Every handler renders through one Renderer while it still holds the lock
covering the state it read, so the Renderer must stay synchronous and must
not do I/O. Templates are loaded once at construction.
"""

from collections.abc import Sequence
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from htmx_todo.state.filters import Filter
from htmx_todo.state.tasks import Task, View

TEMPLATES_DIR = Path(__file__).parent / "templates"


def hidden_in(task: Task, selected: str) -> bool:
    """Whether a task starts hidden under the selected filter."""
    if selected == View.ACTIVE:
        return task.done
    if selected == View.COMPLETED:
        return not task.done
    return False


class Renderer:
    """Turns state snapshots into markup."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR) -> None:
        self._env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.globals["hidden_in"] = hidden_in

    def _render(self, name: str, **context: object) -> str:
        return self._env.get_template(name).render(**context)

    def page(
        self,
        title: str,
        tasks: Sequence[Task],
        filters: Sequence[Filter],
        checked: bool,
        has_completed: bool,
        selected: str,
    ) -> str:
        active_count = sum(1 for t in tasks if not t.done)
        return self._render(
            "page.html",
            title=title,
            tasks=tasks,
            filters=filters,
            checked=checked,
            has_completed=has_completed,
            selected=selected,
            active_count=active_count,
        )

    def todo_list(self, tasks: Sequence[Task], selected: str) -> str:
        return self._render("todo_list.html", tasks=tasks, selected=selected)

    def todo_item(self, task: Task, selected: str) -> str:
        return self._render("todo_item.html", task=task, selected=selected)

    def edit_todo(self, task: Task) -> str:
        """Edit input; prefilled only for an editing copy."""
        return self._render("edit_todo.html", task=task)

    def filter_bar(self, filters: Sequence[Filter]) -> str:
        return self._render("filter_bar.html", filters=filters)

    def clear_completed(self, has_completed: bool) -> str:
        if not has_completed:
            return ""
        return self._render("clear_completed.html")

    def item_count(self, count: int) -> str:
        """'<strong>N items left</strong>', singular for exactly one."""
        return self._render("item_count.html", count=count)

    def footer(
        self,
        active_count: int,
        filters: Sequence[Filter],
        has_completed: bool,
    ) -> str:
        return self._render(
            "footer.html",
            active_count=active_count,
            filters=filters,
            has_completed=has_completed,
        )

    def toggle_main(self, checked: bool) -> str:
        return self._render("toggle_main.html", checked=checked)
