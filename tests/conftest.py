import os

import pytest

# The suite relies on deterministic logging and CORS settings. Local overrides
# used for manual runs would otherwise leak into the app built at import time.
os.environ["LOG_JSON"] = "true"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["ALLOWED_ORIGINS"] = "http://allowed.example"

from corsgate.http import FixedTake, Request, Response  # noqa: E402

ALLOWED_ORIGIN = os.environ["ALLOWED_ORIGINS"]


class FailingTake:
    """Take that raises the given error and records that it was invoked."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    async def act(self, request: Request) -> Response:
        self.calls += 1
        raise self.error


class RecordingTake:
    """Take that remembers every request it received."""

    def __init__(self, response: Response) -> None:
        self.response = response
        self.requests: list[Request] = []

    async def act(self, request: Request) -> Response:
        self.requests.append(request)
        return self.response


@pytest.fixture
def inner_response() -> Response:
    return Response(
        status=201,
        headers=("Content-Type: text/plain", "X-Inner: yes"),
        body=b"hello",
    )


@pytest.fixture
def fixed_take(inner_response) -> FixedTake:
    return FixedTake(inner_response)
