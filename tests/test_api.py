from datetime import timedelta

import httpx
import pytest

from shop_accounts.api.dependencies import get_github_oauth_service
from shop_accounts.core.config import Settings
from shop_accounts.core.security import utcnow, verify_password
from shop_accounts.domain.enums import UserRole
from shop_accounts.infrastructure.external_services.github_oauth_service import (
    ACCESS_TOKEN_URL,
    GitHubOAuthService,
)
from shop_accounts.infrastructure.repositories.user_repository_impl import UserRepositoryImpl
from shop_accounts.main import app

from conftest import ALL_DOCUMENTS

REGISTER_FORM = {
    "first_name": "Ana",
    "last_name": "Lopez",
    "email": "ana@example.com",
    "password": "pw1",
    "age": "30",
}


def login(client, email="ana@example.com", password="secret1"):
    return client.post("/api/users/login", data={"email": email, "password": password})


class TestRegistration:

    def test_register_redirects_to_login(self, client, fetch_user):
        response = client.post("/api/users/register", data=REGISTER_FORM)

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        user = fetch_user("ana@example.com")
        assert user.cart_id is not None
        assert user.role == UserRole.USER

    def test_duplicate_registration_is_opaque(self, client, fetch_user):
        client.post("/api/users/register", data=REGISTER_FORM)
        response = client.post("/api/users/register", data={**REGISTER_FORM, "password": "pw2"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert verify_password("pw1", fetch_user("ana@example.com").hashed_password)

    def test_missing_field(self, client):
        form = {key: value for key, value in REGISTER_FORM.items() if key != "email"}
        response = client.post("/api/users/register", data=form)
        assert response.status_code == 422


class TestSession:

    def test_login_sets_session_cookie(self, client, make_user):
        make_user()

        response = login(client)

        assert response.status_code == 303
        assert response.headers["location"] == "/profile"
        assert "session" in response.cookies

        current = client.get("/api/users/current")
        assert current.status_code == 200
        assert current.json()["email"] == "ana@example.com"

    def test_bad_credentials_are_indistinguishable(self, client, make_user):
        make_user()

        unknown = login(client, email="ghost@example.com")
        wrong = login(client, password="nope")

        assert unknown.status_code == wrong.status_code == 500
        assert unknown.json() == wrong.json()
        assert "session" not in wrong.cookies

    def test_logout_clears_session_and_stamps_connection(self, client, make_user, fetch_user, db_session):
        make_user()
        login(client)
        stale = utcnow() - timedelta(days=1)
        fetch_user("ana@example.com").last_connection = stale
        db_session.commit()

        response = client.get("/api/users/logout")

        assert response.status_code == 303
        assert response.headers["location"] == "/login"
        assert fetch_user("ana@example.com").last_connection > stale + timedelta(hours=23)
        assert client.get("/api/users/current").status_code == 401

    def test_anonymous_logout_redirects(self, client):
        response = client.get("/api/users/logout")
        assert response.status_code == 303
        assert response.headers["location"] == "/login"

    def test_logout_failure_keeps_session(self, client, make_user, monkeypatch):
        make_user()
        login(client)

        async def broken_update(self, user):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(UserRepositoryImpl, "update", broken_update)
        response = client.get("/api/users/logout")

        assert response.status_code == 500
        assert response.text == "Internal server error"
        assert "set-cookie" not in response.headers

    def test_profile_page_requires_session(self, client, make_user):
        assert client.get("/profile").headers["location"] == "/login"

        make_user()
        login(client)
        page = client.get("/profile")
        assert page.status_code == 200
        assert "ana@example.com" in page.text


class TestAdminGate:

    def test_anonymous_is_denied(self, client):
        response = client.get("/api/users/admin")
        assert response.status_code == 403
        assert response.text == "Access denied"

    @pytest.mark.parametrize("role", [UserRole.USER, UserRole.PREMIUM])
    def test_non_admin_is_denied(self, client, make_user, role):
        make_user(role=role)
        login(client)
        assert client.get("/api/users/admin").status_code == 403

    def test_admin_sees_panel(self, client, make_user):
        make_user(role=UserRole.ADMIN)
        login(client)

        response = client.get("/api/users/admin")

        assert response.status_code == 200
        assert "Admin panel" in response.text


class TestPasswordReset:

    def request_reset(self, client, email="ana@example.com"):
        return client.post("/api/users/request-password-reset", data={"email": email})

    def change(self, client, token, password="brand-new", email="ana@example.com"):
        return client.post(
            "/api/users/reset-password",
            data={"email": email, "password": password, "token": token},
        )

    def test_unknown_email(self, client, email_service):
        response = self.request_reset(client, "ghost@example.com")
        assert response.status_code == 404
        assert response.text == "User not found"
        assert email_service.sent == []

    def test_mail_failure(self, client, make_user, email_service):
        make_user()
        email_service.failing.add("ana@example.com")
        assert self.request_reset(client).status_code == 500

    def test_full_flow(self, client, make_user, fetch_user, email_service):
        make_user()

        response = self.request_reset(client)
        assert response.status_code == 303
        assert response.headers["location"] == "/reset-sent"
        [token] = email_service.tokens_for("ana@example.com")

        changed = self.change(client, token)
        assert changed.status_code == 303
        assert changed.headers["location"] == "/login"
        assert verify_password("brand-new", fetch_user("ana@example.com").hashed_password)

        reused = self.change(client, token, password="other")
        assert reused.status_code == 200
        assert "The reset code is invalid" in reused.text

    def test_expired_code(self, client, make_user, db_session, fetch_user, email_service):
        make_user()
        self.request_reset(client)
        [token] = email_service.tokens_for("ana@example.com")

        user = fetch_user("ana@example.com")
        user.reset_token_expires_at = utcnow() - timedelta(seconds=1)
        db_session.commit()

        response = self.change(client, token)
        assert "The reset code has expired" in response.text

    def test_same_password(self, client, make_user, email_service):
        make_user(password="secret1")
        self.request_reset(client)
        [token] = email_service.tokens_for("ana@example.com")

        response = self.change(client, token, password="secret1")
        assert "The new password cannot be the same as the previous one" in response.text

    def test_unknown_user_on_change(self, client):
        response = self.change(client, "whatever", email="ghost@example.com")
        assert "User not found" in response.text


class TestPremiumToggle:

    def test_missing_documents(self, client, make_user):
        user = make_user(documents=("Identification",))

        response = client.put(f"/api/users/premium/{user.id}")

        assert response.status_code == 400
        assert response.json()["required_documents"] == list(ALL_DOCUMENTS)

    def test_toggle(self, client, make_user):
        user = make_user(documents=ALL_DOCUMENTS)

        first = client.put(f"/api/users/premium/{user.id}")
        second = client.put(f"/api/users/premium/{user.id}")

        assert first.status_code == second.status_code == 200
        assert first.json()["role"] == "premium"
        assert second.json()["role"] == "user"

    def test_unknown_user(self, client):
        response = client.put("/api/users/premium/not-a-user")
        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestListAndPrune:

    def test_list_empty(self, client):
        response = client.get("/api/users")
        assert response.status_code == 200
        assert response.json() == {"status": "success", "payload": []}

    def test_list_projection(self, client, make_user):
        make_user()

        payload = client.get("/api/users").json()["payload"]

        assert len(payload) == 1
        assert set(payload[0]) == {"first_name", "last_name", "email", "role", "last_connection"}
        assert payload[0]["email"] == "ana@example.com"

    def test_prune(self, client, make_user, fetch_user, email_service):
        make_user(email="stale@example.com", last_connection=utcnow() - timedelta(days=3))
        make_user(email="fresh@example.com")

        response = client.delete("/api/users")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "success"
        assert body["deleted"] == ["stale@example.com"]
        assert email_service.sent == [("inactive", "stale@example.com", None)]
        assert fetch_user("stale@example.com") is None
        assert fetch_user("fresh@example.com") is not None

    def test_prune_partial(self, client, make_user, email_service):
        make_user(email="stale@example.com", last_connection=utcnow() - timedelta(days=3))
        email_service.failing.add("stale@example.com")

        body = client.delete("/api/users").json()

        assert body["status"] == "partial"
        assert body["deleted"] == []
        assert list(body["failed"]) == ["stale@example.com"]


def github_service(emails=None, token_error=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == ACCESS_TOKEN_URL:
            if token_error:
                return httpx.Response(200, json={"error": token_error})
            return httpx.Response(200, json={"access_token": "gho_test", "token_type": "bearer"})
        assert request.headers["Authorization"] == "Bearer gho_test"
        return httpx.Response(200, json=emails or [])

    config = Settings(GITHUB_CLIENT_ID="client-id", GITHUB_CLIENT_SECRET="client-secret")
    return GitHubOAuthService(config, transport=httpx.MockTransport(handler))


class TestGitHubLogin:

    @pytest.fixture(autouse=True)
    def use_github(self):
        def _use(service):
            app.dependency_overrides[get_github_oauth_service] = lambda: service
        return _use

    def test_start_redirects_to_github(self, client, use_github):
        use_github(github_service())

        response = client.get("/api/users/github")

        assert response.status_code == 302
        location = response.headers["location"]
        assert location.startswith("https://github.com/login/oauth/authorize?")
        assert "scope=user%3Aemail" in location
        assert "oauth_state" in response.cookies

    def test_callback_signs_in_registered_user(self, client, make_user, use_github):
        make_user()
        use_github(github_service(emails=[
            {"email": "old@example.com", "primary": False, "verified": True},
            {"email": "ana@example.com", "primary": True, "verified": True},
        ]))
        client.cookies.set("oauth_state", "state-1")

        response = client.get("/api/users/githubcallback", params={"code": "abc", "state": "state-1"})

        assert response.status_code == 303
        assert response.headers["location"] == "/profile"
        assert client.get("/api/users/current").json()["email"] == "ana@example.com"

    def test_callback_for_unregistered_email(self, client, use_github):
        use_github(github_service(emails=[
            {"email": "stranger@example.com", "primary": True, "verified": True},
        ]))
        client.cookies.set("oauth_state", "state-1")

        response = client.get("/api/users/githubcallback", params={"code": "abc", "state": "state-1"})

        assert response.headers["location"] == "/login"
        assert "session" not in response.cookies

    def test_callback_state_mismatch(self, client, use_github):
        use_github(github_service())
        client.cookies.set("oauth_state", "state-1")

        response = client.get("/api/users/githubcallback", params={"code": "abc", "state": "forged"})

        assert response.headers["location"] == "/login"

    def test_provider_error_propagates(self, client, use_github):
        use_github(github_service(token_error="bad_verification_code"))
        client.cookies.set("oauth_state", "state-1")

        response = client.get("/api/users/githubcallback", params={"code": "abc", "state": "state-1"})

        assert response.status_code == 500
        assert response.json()["code"] == "oauth_fail"
