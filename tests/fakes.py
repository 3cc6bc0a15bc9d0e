import json

import httpx

BASE_URL = "https://x.test"


def envelope(payload) -> dict:
    """Wrap a payload the way the articles-mcp plugin does."""
    return {"content": [{"type": "text", "text": json.dumps(payload)}]}


class FakeUpstream:
    """Records outbound calls and answers them from a queue of responses."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def respond(self, body=None, status_code=200, text=None):
        if text is not None:
            self.responses.append(httpx.Response(status_code, text=text))
        else:
            self.responses.append(httpx.Response(status_code, json=body))

    def fail(self, exc):
        self.responses.append(exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_call(self) -> dict:
        return self.requests[-1]
