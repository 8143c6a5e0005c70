"""
Test suite for user endpoints.

Tests cover:
- Admin-only user creation and listing
- Same-user-or-admin access to a single account
- Applying to jobs
"""

from jobly.core.security import create_token, decode_token

U1 = {
    "username": "u1",
    "firstName": "U1F",
    "lastName": "U1L",
    "email": "u1@user.com",
    "isAdmin": False,
}


class TestUserCreation:
    """Tests for POST /users"""

    new_user = {
        "username": "u-new",
        "firstName": "First-new",
        "lastName": "Last-new",
        "password": "password-new",
        "email": "new@email.com",
        "isAdmin": False,
    }

    def test_works_for_admin(self, client, seeded, admin_headers):
        response = client.post("/api/v1/users/", json=self.new_user, headers=admin_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["user"] == {k: v for k, v in self.new_user.items() if k != "password"}
        assert decode_token(body["token"])["username"] == "u-new"

    def test_create_admin(self, client, seeded, admin_headers):
        response = client.post("/api/v1/users/", json={**self.new_user, "isAdmin": True},
                               headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["user"]["isAdmin"] is True
        assert decode_token(response.json()["token"])["isAdmin"] is True

    def test_forbidden_for_non_admin(self, client, seeded, u1_headers):
        response = client.post("/api/v1/users/", json=self.new_user, headers=u1_headers)

        assert response.status_code == 403

    def test_unauth_for_anon(self, client, seeded):
        response = client.post("/api/v1/users/", json=self.new_user)

        assert response.status_code == 401

    def test_missing_data(self, client, seeded, admin_headers):
        response = client.post("/api/v1/users/", json={"username": "u-new"}, headers=admin_headers)

        assert response.status_code == 400

    def test_invalid_email(self, client, seeded, admin_headers):
        response = client.post("/api/v1/users/", json={**self.new_user, "email": "not-an-email"},
                               headers=admin_headers)

        assert response.status_code == 400

    def test_duplicate(self, client, seeded, admin_headers):
        response = client.post("/api/v1/users/", json={**self.new_user, "username": "u1"},
                               headers=admin_headers)

        assert response.status_code == 400


class TestUserList:
    """Tests for GET /users"""

    def test_works_for_admin(self, client, seeded, admin_headers):
        response = client.get("/api/v1/users/", headers=admin_headers)

        assert response.status_code == 200
        users = response.json()["users"]
        assert [u["username"] for u in users] == ["admin", "u1", "u2"]
        assert users[1] == {**U1, "jobs": []}

    def test_forbidden_for_non_admin(self, client, seeded, u1_headers):
        response = client.get("/api/v1/users/", headers=u1_headers)

        assert response.status_code == 403

    def test_unauth_for_anon(self, client, seeded):
        response = client.get("/api/v1/users/")

        assert response.status_code == 401


class TestUserDetail:
    """Tests for GET /users/{username}"""

    def test_works_for_admin(self, client, seeded, admin_headers):
        response = client.get("/api/v1/users/u1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"user": {**U1, "jobs": []}}

    def test_works_for_same_user(self, client, seeded, u1_headers):
        response = client.get("/api/v1/users/u1", headers=u1_headers)

        assert response.status_code == 200
        assert response.json()["user"]["username"] == "u1"

    def test_forbidden_for_other_user(self, client, seeded, u1_headers):
        response = client.get("/api/v1/users/u2", headers=u1_headers)

        assert response.status_code == 403

    def test_unauth_for_anon(self, client, seeded):
        response = client.get("/api/v1/users/u1")

        assert response.status_code == 401

    def test_not_found(self, client, seeded, admin_headers):
        response = client.get("/api/v1/users/nope", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "No user: nope"

    def test_missing_user_forbidden_for_non_admin(self, client, seeded, u1_headers):
        response = client.get("/api/v1/users/nope", headers=u1_headers)

        assert response.status_code == 403


class TestUserUpdate:
    """Tests for PATCH /users/{username}"""

    def test_works_for_admin(self, client, seeded, admin_headers):
        response = client.patch("/api/v1/users/u1", json={"firstName": "New"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"user": {**U1, "firstName": "New"}}

    def test_works_for_same_user(self, client, seeded, u1_headers):
        response = client.patch("/api/v1/users/u1", json={"lastName": "New"}, headers=u1_headers)

        assert response.status_code == 200
        assert response.json()["user"]["lastName"] == "New"

    def test_set_new_password(self, client, seeded, u1_headers):
        response = client.patch("/api/v1/users/u1", json={"password": "new-password"}, headers=u1_headers)
        assert response.status_code == 200
        assert "password" not in response.json()["user"]

        response = client.post("/api/v1/auth/token", json={"username": "u1", "password": "new-password"})
        assert response.status_code == 200

    def test_forbidden_for_other_user(self, client, seeded, u1_headers):
        response = client.patch("/api/v1/users/u2", json={"firstName": "New"}, headers=u1_headers)

        assert response.status_code == 403

    def test_unauth_for_anon(self, client, seeded):
        response = client.patch("/api/v1/users/u1", json={"firstName": "New"})

        assert response.status_code == 401

    def test_not_found(self, client, seeded, admin_headers):
        response = client.patch("/api/v1/users/nope", json={"firstName": "Nope"}, headers=admin_headers)

        assert response.status_code == 404

    def test_cannot_change_admin_flag(self, client, seeded, u1_headers):
        response = client.patch("/api/v1/users/u1", json={"isAdmin": True}, headers=u1_headers)

        assert response.status_code == 400

    def test_invalid_data(self, client, seeded, admin_headers):
        response = client.patch("/api/v1/users/u1", json={"firstName": 42}, headers=admin_headers)

        assert response.status_code == 400

    def test_empty_body(self, client, seeded, u1_headers):
        response = client.patch("/api/v1/users/u1", json={}, headers=u1_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No data"


class TestUserDeletion:
    """Tests for DELETE /users/{username}"""

    def test_works_for_admin(self, client, seeded, admin_headers):
        response = client.delete("/api/v1/users/u1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "u1"}
        assert client.get("/api/v1/users/u1", headers=admin_headers).status_code == 404

    def test_works_for_same_user(self, client, seeded, u1_headers):
        response = client.delete("/api/v1/users/u1", headers=u1_headers)

        assert response.json() == {"deleted": "u1"}

    def test_forbidden_for_other_user(self, client, seeded, u1_headers):
        response = client.delete("/api/v1/users/u2", headers=u1_headers)

        assert response.status_code == 403

    def test_unauth_for_anon(self, client, seeded):
        response = client.delete("/api/v1/users/u1")

        assert response.status_code == 401

    def test_not_found(self, client, seeded, admin_headers):
        response = client.delete("/api/v1/users/nope", headers=admin_headers)

        assert response.status_code == 404


class TestApplyToJob:
    """Tests for POST /users/{username}/jobs/{id}"""

    def test_works_for_admin(self, client, seeded, admin_headers):
        job_id = seeded["job_ids"][1]
        response = client.post(f"/api/v1/users/u1/jobs/{job_id}", headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == {"applied": job_id}

        user = client.get("/api/v1/users/u1", headers=admin_headers).json()["user"]
        assert user["jobs"] == [job_id]

    def test_works_for_same_user(self, client, seeded, u1_headers):
        job_id = seeded["job_ids"][0]
        response = client.post(f"/api/v1/users/u1/jobs/{job_id}", headers=u1_headers)

        assert response.status_code == 201
        assert response.json() == {"applied": job_id}

    def test_forbidden_for_other_user(self, client, seeded, u1_headers):
        response = client.post(f"/api/v1/users/u2/jobs/{seeded['job_ids'][0]}", headers=u1_headers)

        assert response.status_code == 403

    def test_unauth_for_anon(self, client, seeded):
        response = client.post(f"/api/v1/users/u1/jobs/{seeded['job_ids'][0]}")

        assert response.status_code == 401

    def test_no_such_user(self, client, seeded, admin_headers):
        response = client.post(f"/api/v1/users/nope/jobs/{seeded['job_ids'][0]}", headers=admin_headers)

        assert response.status_code == 404

    def test_no_such_job(self, client, seeded, u1_headers):
        response = client.post("/api/v1/users/u1/jobs/0", headers=u1_headers)

        assert response.status_code == 404

    def test_invalid_job_id(self, client, seeded, u1_headers):
        response = client.post("/api/v1/users/u1/jobs/not-a-number", headers=u1_headers)

        assert response.status_code == 400

    def test_apply_twice(self, client, seeded, u1_headers):
        job_id = seeded["job_ids"][0]
        client.post(f"/api/v1/users/u1/jobs/{job_id}", headers=u1_headers)
        response = client.post(f"/api/v1/users/u1/jobs/{job_id}", headers=u1_headers)

        assert response.status_code == 400


class TestTokenForDeletedUser:
    """A token stays valid after its user is gone; lookups then 404"""

    def test_get_deleted_user(self, client, seeded):
        headers = {"Authorization": f"Bearer {create_token({'username': 'ghost', 'isAdmin': False})}"}
        response = client.get("/api/v1/users/ghost", headers=headers)

        assert response.status_code == 404
