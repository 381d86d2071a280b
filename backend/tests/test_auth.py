from conftest import PASSWORD


class TestSignUp:
    def test_signup_with_role(self, client):
        r = client.post("/api/v1/auth/signup", json={
            "email": "Seeker@Acme.io",
            "password": PASSWORD,
            "full_name": "Ada Lovelace",
            "role": "job_seeker",
        })
        assert r.status_code == 201
        data = r.json()
        assert data["email"] == "seeker@acme.io"
        assert data["role"] == "job_seeker"
        assert data["full_name"] == "Ada Lovelace"

    def test_duplicate_email(self, client):
        body = {"email": "dup@acme.io", "password": PASSWORD}
        client.post("/api/v1/auth/signup", json=body)
        r = client.post("/api/v1/auth/signup", json=body)
        assert r.status_code == 409

    def test_short_password(self, client):
        r = client.post("/api/v1/auth/signup", json={"email": "a@acme.io", "password": "123"})
        assert r.status_code == 422


class TestSignIn:
    def test_signin_returns_token(self, client, make_user):
        user = make_user("employer")
        r = client.get("/api/v1/auth/me", headers=user["headers"])
        assert r.status_code == 200
        assert r.json()["role"] == "employer"

    def test_wrong_password(self, client, make_user):
        user = make_user()
        r = client.post("/api/v1/auth/signin", json={"email": user["email"], "password": "wrong-password"})
        assert r.status_code == 401

    def test_throttled_after_repeated_failures(self, client, make_user):
        user = make_user()
        for _ in range(3):
            client.post("/api/v1/auth/signin", json={"email": user["email"], "password": "wrong-password"})
        r = client.post("/api/v1/auth/signin", json={"email": user["email"], "password": PASSWORD})
        assert r.status_code == 429
        assert r.json()["detail"]["error"] == "too_many_attempts"

    def test_signout_revokes_token(self, client, make_user):
        user = make_user()
        assert client.post("/api/v1/auth/signout", headers=user["headers"]).status_code == 200
        assert client.get("/api/v1/auth/me", headers=user["headers"]).status_code == 401

    def test_bad_token(self, client):
        r = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer nope"})
        assert r.status_code == 401


class TestRoleRegistry:
    def test_set_role_once(self, client, make_user):
        user = make_user(role=None)
        r = client.post("/api/v1/auth/role", json={"role": "employer"}, headers=user["headers"])
        assert r.status_code == 201
        assert r.json()["role"] == "employer"

        r = client.get("/api/v1/auth/me", headers=user["headers"])
        assert r.json()["role"] == "employer"

    def test_second_assignment_conflicts(self, client, make_user):
        user = make_user("job_seeker")
        r = client.post("/api/v1/auth/role", json={"role": "employer"}, headers=user["headers"])
        assert r.status_code == 409

        r = client.get("/api/v1/auth/me", headers=user["headers"])
        assert r.json()["role"] == "job_seeker"

    def test_unknown_role(self, client, make_user):
        user = make_user(role=None)
        r = client.post("/api/v1/auth/role", json={"role": "admin"}, headers=user["headers"])
        assert r.status_code == 422
