"""Tests for admin user management."""


class TestUsers:

    def test_create_and_list(self, client, admin_headers):
        response = client.post("/api/users", json={
            "email": " New.Admin@Fleet.test ", "national_id": "321", "password": "secret1", "role": "ADMIN"
        }, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["email"] == "new.admin@fleet.test"
        assert "password_hash" not in response.json()

        admins = client.get("/api/users", params={"role": "ADMIN"}, headers=admin_headers).json()
        assert len(admins) == 2

    def test_duplicate_email(self, client, admin_headers):
        payload = {"email": "x@fleet.test", "national_id": "1", "password": "secret1"}
        assert client.post("/api/users", json=payload, headers=admin_headers).status_code == 201
        payload["national_id"] = "2"
        response = client.post("/api/users", json=payload, headers=admin_headers)
        assert response.status_code == 409

    def test_duplicate_national_id(self, client, admin_headers):
        client.post("/api/users", json={"email": "a@fleet.test", "national_id": "1", "password": "secret1"},
                    headers=admin_headers)
        response = client.post("/api/users", json={"email": "b@fleet.test", "national_id": "1", "password": "secret1"},
                               headers=admin_headers)
        assert response.status_code == 409

    def test_invalid_email_and_short_password(self, client, admin_headers):
        response = client.post("/api/users", json={"email": "nope", "national_id": "1", "password": "secret1"},
                               headers=admin_headers)
        assert response.status_code == 422
        response = client.post("/api/users", json={"email": "a@b.c", "national_id": "1", "password": "123"},
                               headers=admin_headers)
        assert response.status_code == 422

    def test_last_admin_cannot_be_demoted(self, client, admin_headers, admin_user):
        response = client.put(f"/api/users/{admin_user.id}", json={"role": "DRIVER"}, headers=admin_headers)
        assert response.status_code == 400
        assert "At least one active admin" in response.json()["detail"]

    def test_last_admin_cannot_be_deleted(self, client, admin_headers, admin_user):
        response = client.delete(f"/api/users/{admin_user.id}", headers=admin_headers)
        assert response.status_code == 400

    def test_password_reset_revokes_sessions(self, client, admin_headers, admin_user):
        response = client.put(f"/api/users/{admin_user.id}", json={"password": "brand-new"}, headers=admin_headers)
        assert response.status_code == 200
        assert client.get("/api/auth/me", headers=admin_headers).status_code == 401
        relogin = client.post("/api/auth/login", json={"identifier": admin_user.email, "password": "brand-new"})
        assert relogin.status_code == 200

    def test_driver_user_cannot_be_deleted_directly(self, client, admin_headers, make_driver):
        driver = make_driver()
        response = client.delete(f"/api/users/{driver['user_id']}", headers=admin_headers)
        assert response.status_code == 400

    def test_get_missing_user(self, client, admin_headers):
        assert client.get("/api/users/999", headers=admin_headers).status_code == 404
