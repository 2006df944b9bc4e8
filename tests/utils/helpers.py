def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def assert_error_response(response, status_code: int, message: str | None = None) -> None:
    assert response.status_code == status_code
    data = response.json()
    assert data["success"] is False
    if message is not None:
        assert data["message"] == message


def assert_user_response_valid(data: dict) -> None:
    assert "id" in data
    assert "email" in data
    assert "name" in data
    assert "role" in data
    assert "password" not in data
