"""
NoteApp Backend — HTTP Route Tests
====================================

What:  End-to-end tests through the FastAPI app (no server process).
How:   HTTPX AsyncClient over ASGITransport; redirects are not followed so
       each test sees the 303 and its Location header.
"""

import json

import pytest
from httpx import AsyncClient, ASGITransport


def _location(response) -> str:
    return response.headers["location"]


class TestPages:
    """Landing page, static assets and health."""

    @pytest.mark.asyncio
    async def test_index_renders(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert "NoteApp" in response.text

    @pytest.mark.asyncio
    async def test_register_and_login_forms_render(self, test_client):
        for path in ("/register", "/login"):
            response = await test_client.get(path)
            assert response.status_code == 200
            assert 'name="username"' in response.text

    @pytest.mark.asyncio
    async def test_static_file_served(self, test_client):
        response = await test_client.get("/static/style.css")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_static_file_404(self, test_client):
        response = await test_client.get("/static/nope.css")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_health_reports_unwritable_before_first_write(self, test_client):
        """Lifespan does not run under ASGITransport, so data_dir is not created yet."""
        response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["storage"] == "unwritable"

    @pytest.mark.asyncio
    async def test_health_reports_writable(self, test_client, data_dir):
        data_dir.mkdir(parents=True)
        response = await test_client.get("/health")
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "writable"


class TestRegister:
    """POST /register."""

    @pytest.mark.asyncio
    async def test_register_redirects_to_index(self, test_client, data_dir):
        response = await test_client.post(
            "/register", data={"username": "alice", "password": "secret"}
        )

        assert response.status_code == 303
        assert _location(response) == "/"
        users = json.loads((data_dir / "users.json").read_text())
        assert [u["username"] for u in users] == ["alice"]
        assert users[0]["password"] != "secret"

    @pytest.mark.asyncio
    async def test_register_duplicate_is_400(self, test_client, data_dir):
        form = {"username": "alice", "password": "secret"}
        await test_client.post("/register", data=form)

        response = await test_client.post("/register", data=form)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "already_exists"
        assert body["message"] == "Username already exists"
        assert len(json.loads((data_dir / "users.json").read_text())) == 1

    @pytest.mark.asyncio
    async def test_register_path_traversal_is_400(self, test_client, data_dir):
        response = await test_client.post(
            "/register", data={"username": "../../etc", "password": "secret"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert not data_dir.exists()


class TestLogin:
    """POST /login and POST /logout."""

    @pytest.mark.asyncio
    async def test_login_redirects_to_notes_and_sets_cookie(self, test_client):
        await test_client.post("/register", data={"username": "alice", "password": "secret"})

        response = await test_client.post(
            "/login", data={"username": "alice", "password": "secret"}
        )

        assert response.status_code == 303
        assert _location(response) == "/notes"
        assert "session" in response.cookies

    @pytest.mark.asyncio
    async def test_login_wrong_password_is_401(self, test_client):
        await test_client.post("/register", data={"username": "alice", "password": "secret"})

        response = await test_client.post(
            "/login", data={"username": "alice", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, logged_in_client):
        assert (await logged_in_client.get("/notes")).status_code == 200

        response = await logged_in_client.post("/logout")

        assert response.status_code == 303
        assert _location(response) == "/"
        assert "session=null" in response.headers["set-cookie"]
        response = await logged_in_client.get("/notes")
        assert response.status_code == 303
        assert _location(response) == "/"

    @pytest.mark.asyncio
    async def test_logout_without_session(self, test_client):
        response = await test_client.post("/logout")
        assert response.status_code == 303
        assert _location(response) == "/"


class TestAuthRequired:
    """Anonymous access to note routes redirects to the landing page."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/notes"),
            ("POST", "/notes"),
            ("GET", "/edit?name=a"),
            ("POST", "/edit"),
            ("GET", "/delete?name=a"),
            ("POST", "/delete?name=a"),
        ],
    )
    async def test_redirects_to_index(self, test_client, method, path):
        response = await test_client.request(method, path)
        assert response.status_code == 303
        assert _location(response) == "/"


class TestNotes:
    """Note management for a logged-in user."""

    @pytest.mark.asyncio
    async def test_notes_page_is_not_cached(self, logged_in_client):
        response = await logged_in_client.get("/notes")
        assert response.status_code == 200
        assert "no-store" in response.headers["cache-control"]
        assert response.headers["pragma"] == "no-cache"

    @pytest.mark.asyncio
    async def test_create_note_redirects_and_lists(self, logged_in_client):
        response = await logged_in_client.post(
            "/notes", data={"name": "todo", "content": "buy milk"}
        )
        assert response.status_code == 303
        assert _location(response) == "/notes"

        page = await logged_in_client.get("/notes")
        assert "todo" in page.text
        assert "buy milk" in page.text

    @pytest.mark.asyncio
    async def test_duplicate_note_is_400(self, logged_in_client, data_dir):
        await logged_in_client.post("/notes", data={"name": "todo", "content": "1"})

        response = await logged_in_client.post("/notes", data={"name": "todo", "content": "2"})

        assert response.status_code == 400
        assert response.json()["error"] == "duplicate_name"
        notes = json.loads((data_dir / "alice.json").read_text())
        assert notes == [{"name": "todo", "content": "1"}]

    @pytest.mark.asyncio
    async def test_edit_form_prefilled(self, logged_in_client):
        await logged_in_client.post("/notes", data={"name": "todo", "content": "buy milk"})

        response = await logged_in_client.get("/edit", params={"name": "todo"})

        assert response.status_code == 200
        assert 'value="todo"' in response.text
        assert "buy milk" in response.text

    @pytest.mark.asyncio
    async def test_edit_form_for_unknown_note_is_empty(self, logged_in_client):
        response = await logged_in_client.get("/edit", params={"name": "ghost"})
        assert response.status_code == 200
        assert 'name="old_name" value=""' in response.text

    @pytest.mark.asyncio
    async def test_edit_missing_note_is_silent(self, logged_in_client, data_dir):
        await logged_in_client.post("/notes", data={"name": "a", "content": "x"})

        response = await logged_in_client.post(
            "/edit", data={"old_name": "ghost", "name": "b", "content": "y"}
        )

        assert response.status_code == 303
        assert json.loads((data_dir / "alice.json").read_text()) == [
            {"name": "a", "content": "x"}
        ]

    @pytest.mark.asyncio
    async def test_delete_missing_note_is_silent(self, logged_in_client):
        response = await logged_in_client.get("/delete", params={"name": "ghost"})
        assert response.status_code == 303
        assert _location(response) == "/notes"

    @pytest.mark.asyncio
    async def test_corrupt_note_file_is_500(self, logged_in_client, data_dir):
        (data_dir / "alice.json").write_text("{oops")

        response = await logged_in_client.get("/notes")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "format_error"
        assert "alice.json" not in json.dumps(body)


class TestSessionIsolation:
    """Sessions are per client, not a process-wide slot."""

    @pytest.mark.asyncio
    async def test_second_client_login_does_not_change_first(self, test_app, logged_in_client):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as bob:
            await bob.post("/register", data={"username": "bob", "password": "pw"})
            await bob.post("/login", data={"username": "bob", "password": "pw"})
            await bob.post("/notes", data={"name": "bob-note", "content": ""})

            alice_page = await logged_in_client.get("/notes")
            bob_page = await bob.get("/notes")

        assert "alice" in alice_page.text
        assert "bob-note" not in alice_page.text
        assert "bob-note" in bob_page.text

    @pytest.mark.asyncio
    async def test_tampered_cookie_is_anonymous(self, test_client):
        test_client.cookies.set("session", "forged-value")
        response = await test_client.get("/notes")
        assert response.status_code == 303
        assert _location(response) == "/"


class TestScenario:
    """register → login → add → edit → delete, checked on disk after each step."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, test_client, note_repo):
        form = {"username": "alice", "password": "secret"}
        assert (await test_client.post("/register", data=form)).status_code == 303
        assert (await test_client.post("/login", data=form)).status_code == 303

        await test_client.post("/notes", data={"name": "a", "content": "x"})
        assert [n.model_dump() for n in await note_repo.load("alice")] == [
            {"name": "a", "content": "x"}
        ]

        await test_client.post("/edit", data={"old_name": "a", "name": "b", "content": "y"})
        assert [n.model_dump() for n in await note_repo.load("alice")] == [
            {"name": "b", "content": "y"}
        ]

        await test_client.post("/delete", params={"name": "b"})
        assert await note_repo.load("alice") == []
