"""
通用测试 Fixture 定义

提供测试所需的桩响应、可编排的传输层和客户端 Fixture
"""

import json

import pytest
from requests.structures import CaseInsensitiveDict

from fetchflex.transport import BaseTransport, TransportResponse


class StubResponse(TransportResponse):
    """可编排的传输层响应"""

    def __init__(self, status=200, headers=None, body="", content_type="application/json"):
        self.status = status
        merged = {"Content-Type": content_type} if content_type else {}
        merged.update(headers or {})
        self._headers = CaseInsensitiveDict(merged)
        self.body = body if isinstance(body, str) else json.dumps(body)
        self.json_calls = 0
        self.text_calls = 0

    @property
    def headers(self):
        return self._headers

    async def json(self):
        self.json_calls += 1
        return json.loads(self.body)

    async def text(self):
        self.text_calls += 1
        return self.body


class FakeTransport(BaseTransport):
    """按顺序返回预设响应并记录每次调用的传输层"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    async def fetch(self, url, options):
        self.calls.append((url, options))
        if not self.responses:
            return StubResponse(200, body={})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True

    @property
    def last_url(self):
        return self.calls[-1][0]

    @property
    def last_options(self):
        return self.calls[-1][1]


@pytest.fixture
def stub_response():
    """StubResponse 构造器"""
    return StubResponse


@pytest.fixture
def fake_transport():
    """空的 FakeTransport，默认返回 200 + {}"""
    return FakeTransport()


@pytest.fixture
def client(fake_transport):
    """使用 FakeTransport 的 FetchClient 实例"""
    from fetchflex import FetchClient

    return FetchClient(transport=fake_transport)
