import pytest


@pytest.mark.anyio
async def test_login_with_form_data(async_client):
    """Test OAuth2 compatible login endpoint"""
    resp = await async_client.post(
        "/api/v1/auth/login",
        data={"username": "desk@test.com", "password": "deskpass"},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["token_type"] == "bearer"


@pytest.mark.anyio
async def test_login_with_json(async_client):
    """Test JSON login endpoint"""
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "desk@test.com", "password": "deskpass"}
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert "access_token" in data
    assert "refresh_token" in data


@pytest.mark.anyio
async def test_login_invalid_credentials(async_client):
    """Test login with wrong password"""
    resp = await async_client.post(
        "/api/v1/auth/login",
        data={"username": "desk@test.com", "password": "wrongpassword"},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert resp.status_code == 401
    assert "Incorrect email or password" in resp.json()["detail"]


@pytest.mark.anyio
async def test_login_nonexistent_user(async_client):
    """Test login with non-existent email"""
    resp = await async_client.post(
        "/api/v1/auth/login",
        data={"username": "nobody@test.com", "password": "password"},
        headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_login_disabled_account(async_client):
    """Deactivated staff cannot sign in"""
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "retired@test.com", "password": "retiredpass"}
    )
    assert resp.status_code == 401
    assert "disabled" in resp.json()["detail"]


@pytest.mark.anyio
async def test_refresh_token(async_client):
    """Test token refresh endpoint"""
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "desk@test.com", "password": "deskpass"}
    )
    assert resp.status_code == 200
    tokens = resp.json()

    resp = await async_client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": tokens["refresh_token"]}
    )
    assert resp.status_code == 200, resp.text
    new_tokens = resp.json()
    assert "access_token" in new_tokens
    assert "refresh_token" in new_tokens


@pytest.mark.anyio
async def test_refresh_token_invalid(async_client):
    """Test refresh with invalid token"""
    resp = await async_client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": "invalid.token.here"}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_refresh_token_with_non_numeric_subject(async_client):
    """A refresh token whose subject is not a user id is rejected, not a server error"""
    from core.security import create_refresh_token

    resp = await async_client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": create_refresh_token({"sub": "desk"})}
    )
    assert resp.status_code == 401
    assert "Invalid user ID" in resp.json()["detail"]


@pytest.mark.anyio
async def test_access_token_cannot_refresh(async_client, desk_token):
    """An access token is not accepted where a refresh token is expected"""
    resp = await async_client.post(
        "/api/v1/auth/refresh",
        json={"refresh_token": desk_token}
    )
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_get_current_user(async_client, auth_headers):
    """Test getting current user profile"""
    resp = await async_client.get("/api/v1/auth/me", headers=auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["email"] == "desk@test.com"
    assert "role" not in data
    assert "id" in data
    assert data["is_active"] is True


@pytest.mark.anyio
async def test_get_current_user_unauthorized(async_client):
    """Test getting current user without authentication"""
    resp = await async_client.get("/api/v1/auth/me")
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_business_endpoints_require_login(async_client):
    """Every lending endpoint rejects anonymous requests"""
    for path in (
        "/api/v1/assets",
        "/api/v1/borrows",
        "/api/v1/catalogs",
        "/api/v1/reports/borrows",
        "/api/v1/dashboard/overview",
    ):
        resp = await async_client.get(path)
        assert resp.status_code == 401, path


@pytest.mark.anyio
async def test_update_current_user(async_client, auth_headers):
    """Test updating current user profile"""
    resp = await async_client.put(
        "/api/v1/auth/me",
        json={"full_name": "Equipment Desk (Main)"},
        headers=auth_headers
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["full_name"] == "Equipment Desk (Main)"


@pytest.mark.anyio
async def test_update_email_already_in_use(async_client, auth_headers):
    resp = await async_client.put(
        "/api/v1/auth/me",
        json={"email": "nurse@test.com"},
        headers=auth_headers
    )
    assert resp.status_code == 409


@pytest.mark.anyio
async def test_change_password(async_client):
    """Test changing password"""
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "nurse@test.com", "password": "nursepass"}
    )
    assert resp.status_code == 200
    token = resp.json()["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    resp = await async_client.post(
        "/api/v1/auth/me/password",
        json={
            "current_password": "nursepass",
            "new_password": "newnursepass123"
        },
        headers=headers
    )
    assert resp.status_code == 200, resp.text
    assert "Password changed successfully" in resp.json()["message"]

    # Verify old password no longer works
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "nurse@test.com", "password": "nursepass"}
    )
    assert resp.status_code == 401

    # Verify new password works
    resp = await async_client.post(
        "/api/v1/auth/login/json",
        json={"email": "nurse@test.com", "password": "newnursepass123"}
    )
    assert resp.status_code == 200


@pytest.mark.anyio
async def test_change_password_wrong_current(async_client, auth_headers):
    """Test change password with wrong current password"""
    resp = await async_client.post(
        "/api/v1/auth/me/password",
        json={
            "current_password": "wrongpassword",
            "new_password": "newpassword123"
        },
        headers=auth_headers
    )
    assert resp.status_code == 400
    assert "Current password is incorrect" in resp.json()["detail"]
