"""Fakes shared by the tests."""

from __future__ import annotations

import copy
from http.cookies import SimpleCookie
from typing import Any


def make_cookies(**values: str) -> SimpleCookie:
    cookies: SimpleCookie = SimpleCookie()
    for key, value in values.items():
        cookies[key] = value
    return cookies


class MockResponse:
    def __init__(
        self,
        status: int,
        json_data: Any = None,
        *,
        cookies: SimpleCookie | None = None,
        json_exc: Exception | None = None,
    ) -> None:
        self.status = status
        self._json = json_data
        self._json_exc = json_exc
        self.cookies = cookies if cookies is not None else SimpleCookie()

    async def __aenter__(self) -> MockResponse:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def json(self, content_type: str | None = "application/json") -> Any:
        if self._json_exc is not None:
            raise self._json_exc
        return self._json


class FakeSession:
    def __init__(self) -> None:
        self._queues: dict[str, list[Any]] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False

    def queue(self, path: str, *responses: Any) -> None:
        self._queues.setdefault(path, []).extend(responses)

    def calls_to(self, path: str) -> list[tuple[str, str, dict[str, Any]]]:
        return [call for call in self.calls if call[1].endswith(path)]

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append((method, url, copy.deepcopy(kwargs)))
        for path, queue in self._queues.items():
            if url.endswith(path):
                if not queue:
                    break
                result: Any = queue.pop(0)
                if callable(result):
                    result = result()
                if isinstance(result, Exception):
                    raise result
                return result
        raise AssertionError(f"Unexpected {method} {url} with no queued response")

    async def close(self) -> None:
        self.closed = True


class FakeAccumulator:
    def __init__(self) -> None:
        self.samples: list[tuple[str, dict[str, Any], dict[str, str] | None]] = []
        self.errors: list[Exception] = []

    def add_fields(
        self,
        measurement: str,
        fields: dict[str, Any],
        tags: dict[str, str] | None = None,
    ) -> None:
        self.samples.append((measurement, fields, tags))

    def add_error(self, err: Exception) -> None:
        self.errors.append(err)
