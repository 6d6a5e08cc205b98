import json
import pathlib
import sys
from dataclasses import dataclass

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from shopify_storefront_gql.transport import Transport


@dataclass
class DummyResponse:
    status_code: int
    content: bytes = b""
    reason: str = ""
    closed: bool = False

    @classmethod
    def of_json(cls, status_code, data, reason="OK"):
        return cls(status_code, json.dumps(data).encode("utf-8"), reason)

    @property
    def text(self):
        return self.content.decode("utf-8", errors="replace")

    def close(self):
        self.closed = True


class ListTransport(Transport):
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp
