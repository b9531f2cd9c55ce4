"""Integration tests for the session gate on the full page."""

from fastapi.testclient import TestClient

from htmx_todo.state.app_state import AppState


def _ids_in_json(client: TestClient) -> list[int]:
    return [t["id"] for t in client.get("/todo-json").json()]


class TestSessionCookies:
    def test_first_visit_sets_cookies(self, client: TestClient) -> None:
        response = client.get("/")
        assert len(response.cookies["sessionId"]) == 128
        assert response.cookies["sessionExpires"] == "2026-01-01T12:10:00"

        set_cookie = response.headers.get_list("set-cookie")
        assert len(set_cookie) == 2
        assert all("Max-Age=600" in header for header in set_cookie)
        assert all("HttpOnly" in header for header in set_cookie)

    def test_active_session_sets_nothing(self, client: TestClient) -> None:
        client.get("/")
        response = client.get("/")
        assert "set-cookie" not in response.headers

    def test_first_visit_purges_existing_tasks(self, client: TestClient, state: AppState) -> None:
        """A page load without cookies starts from an empty store at id 0."""
        client.get("/add-todo", params={"task": "left over"})
        client.get("/add-todo", params={"task": "also left over"})

        client.get("/")

        assert state.tasks.is_empty()
        assert 'id="todo-0"' in client.get("/add-todo", params={"task": "fresh"}).text


class TestSessionExpiry:
    def test_tasks_survive_within_session(self, client: TestClient, clock) -> None:
        client.get("/")
        client.get("/add-todo", params={"task": "a"})
        clock.advance(599)
        client.get("/")
        assert _ids_in_json(client) == [0]

    def test_expired_session_resets(self, client: TestClient, state: AppState, clock) -> None:
        client.get("/")
        client.get("/add-todo", params={"task": "a"})
        client.get("/add-todo", params={"task": "b"})

        clock.advance(601)
        response = client.get("/")

        assert "sessionId" in response.cookies
        assert response.cookies["sessionExpires"] == "2026-01-01T12:20:01"
        assert state.tasks.is_empty()
        client.get("/add-todo", params={"task": "c"})
        assert _ids_in_json(client) == [0]

    def test_malformed_expiry_resets(self, client: TestClient, state: AppState) -> None:
        client.get("/add-todo", params={"task": "a"})
        client.cookies.set("sessionId", "abc")
        client.cookies.set("sessionExpires", "next tuesday")

        response = client.get("/")

        assert "sessionId" in response.cookies
        assert state.tasks.is_empty()

    def test_valid_foreign_cookies_are_accepted(
        self, client: TestClient, state: AppState
    ) -> None:
        """The server keeps no session table; a well-formed future expiry passes."""
        client.get("/add-todo", params={"task": "a"})
        client.cookies.set("sessionId", "anything")
        client.cookies.set("sessionExpires", "2026-01-01 12:05:00")

        response = client.get("/")

        assert "set-cookie" not in response.headers
        assert len(state.tasks) == 1
