"""Assertion helpers for kennel JSON responses."""

from typing import Any

from kennel.http.response import Response


def assert_json(response: Response, *, status: int = 200) -> Any:
    """Assert status and a JSON content type; return the decoded body."""
    assert response.status == status, (
        f"Expected status {status}, got {response.status}: {response.text}"
    )
    assert response.content_type.startswith("application/json"), (
        f"Expected a JSON response, got {response.content_type!r}"
    )
    return response.json


def assert_message(response: Response, status: int, message: str) -> None:
    """Assert the response is ``{"message": message}`` with *status*."""
    body = assert_json(response, status=status)
    assert body == {"message": message}, f"Expected message {message!r}, got {body!r}"
