"""Tests for HTML fragment rendering."""

import pytest

from htmx_todo.interface.server.render import Renderer, hidden_in
from htmx_todo.state.filters import DEFAULT_FILTERS, FilterState
from htmx_todo.state.tasks import Task


@pytest.fixture(scope="module")
def renderer() -> Renderer:
    return Renderer()


class TestHiddenIn:
    @pytest.mark.parametrize(
        ("done", "selected", "hidden"),
        [
            (False, "All", False),
            (True, "All", False),
            (False, "Active", False),
            (True, "Active", True),
            (False, "Completed", True),
            (True, "Completed", False),
        ],
    )
    def test_visibility(self, done: bool, selected: str, hidden: bool) -> None:
        assert hidden_in(Task(id=0, text="x", done=done), selected) is hidden


class TestItemCount:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, "<strong>0 items left</strong>"),
            (1, "<strong>1 item left</strong>"),
            (2, "<strong>2 items left</strong>"),
        ],
    )
    def test_pluralisation(self, renderer: Renderer, count: int, expected: str) -> None:
        assert renderer.item_count(count) == expected


class TestTodoItem:
    def test_active_item(self, renderer: Renderer) -> None:
        html = renderer.todo_item(Task(id=3, text="buy milk"), "All")
        assert 'id="todo-3"' in html
        assert 'class="todo"' in html
        assert 'hx-patch="/toggle-todo?id=3"' in html
        assert 'hx-delete="/remove-todo?id=3"' in html
        assert ">buy milk</label>" in html
        assert "checked" not in html.split('class="toggle"')[1].split("hx-patch")[0]
        assert "display:none" not in html

    def test_completed_item(self, renderer: Renderer) -> None:
        html = renderer.todo_item(Task(id=1, text="x", done=True), "All")
        assert 'class="todo completed"' in html

    def test_hidden_under_filter(self, renderer: Renderer) -> None:
        html = renderer.todo_item(Task(id=1, text="x", done=True), "Active")
        assert 'style="display:none"' in html

    def test_editing_item(self, renderer: Renderer) -> None:
        html = renderer.todo_item(Task(id=1, text="x", editing=True), "All")
        assert 'class="todo editing"' in html
        assert 'value="x"' in html

    def test_text_is_escaped(self, renderer: Renderer) -> None:
        html = renderer.todo_item(Task(id=0, text="<script>alert(1)</script>"), "All")
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html


class TestEditTodo:
    def test_prefilled_when_editing(self, renderer: Renderer) -> None:
        html = renderer.edit_todo(Task(id=2, text="draft", editing=True))
        assert 'value="draft"' in html
        assert 'hx-get="/update-todo?id=2"' in html

    def test_empty_when_not_editing(self, renderer: Renderer) -> None:
        assert 'value=""' in renderer.edit_todo(Task(id=2, text="draft"))


class TestFilterBar:
    def test_selected_marked(self, renderer: Renderer) -> None:
        state = FilterState()
        state.select("Completed")
        html = renderer.filter_bar(state.list())
        assert html.count('class="selected"') == 1
        assert 'class="selected" href="#/completed"' in html
        assert 'hx-get="/get-hash?name=Active"' in html

    def test_order(self, renderer: Renderer) -> None:
        html = renderer.filter_bar(DEFAULT_FILTERS)
        assert html.index("#/active") < html.index("#/completed")


class TestFooter:
    def test_clear_completed_only_with_completed(self, renderer: Renderer) -> None:
        assert renderer.clear_completed(False) == ""
        assert "Clear completed" in renderer.clear_completed(True)

    def test_footer_contents(self, renderer: Renderer) -> None:
        html = renderer.footer(1, DEFAULT_FILTERS, has_completed=True)
        assert "<strong>1 item left</strong>" in html
        assert 'class="filters"' in html
        assert "Clear completed" in html
        assert "display:none" not in html

    def test_footer_hidden_when_nothing_to_show(self, renderer: Renderer) -> None:
        html = renderer.footer(0, DEFAULT_FILTERS, has_completed=False)
        assert 'style="display:none"' in html
        assert "Clear completed" not in html


class TestPage:
    def test_full_page(self, renderer: Renderer) -> None:
        tasks = [Task(id=0, text="a", done=True), Task(id=1, text="b")]
        html = renderer.page(
            title="HTMX • TodoMVC",
            tasks=tasks,
            filters=DEFAULT_FILTERS,
            checked=False,
            has_completed=True,
            selected="All",
        )
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>HTMX • TodoMVC</title>" in html
        assert 'id="todo-0"' in html and 'id="todo-1"' in html
        assert "<strong>1 item left</strong>" in html
        assert "htmx.org" in html

    def test_toggle_main_checked(self, renderer: Renderer) -> None:
        assert "checked" in renderer.toggle_main(True).split("_=")[0]
        assert "checked" not in renderer.toggle_main(False).split("_=")[0]
