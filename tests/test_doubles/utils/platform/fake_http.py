# to simulate the `requests.Session` the platform adapters are given
from typing import Any, Dict, Optional


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        json_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        invalid_json: bool = False,
    ):
        self.status_code = status_code
        self._json_data = json_data
        self.headers = headers or {}
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json_data


class FakeSession:
    """
    Answers GET requests from a url -> response table.

    Unknown urls answer 404. `received_calls` keeps `(url, kwargs)` for every call.
    """

    def __init__(self, responses: Optional[Dict[str, FakeResponse]] = None):
        self.responses = dict(responses or {})
        self.exceptions: Dict[str, Exception] = {}
        self.received_calls = []

    def set_response(self, url: str, response: FakeResponse):
        self.responses[url] = response

    def set_exception(self, url: str, exception: Exception):
        self.exceptions[url] = exception

    def get(self, url, **kwargs):
        self.received_calls.append((url, kwargs))
        if url in self.exceptions:
            raise self.exceptions[url]
        return self.responses.get(url, FakeResponse(404, {"message": "Not Found"}))
