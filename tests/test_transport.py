"""
测试 fetchflex.transport 模块

测试基于 requests 的默认传输层:
- 请求方法、请求头、请求体透传
- 响应适配（状态码、大小写不敏感的响应头、json/text）
- 网络异常转换为 TransportError
"""

import asyncio
from unittest.mock import MagicMock

import pytest
import requests
import responses

from fetchflex.exceptions import TransportError
from fetchflex.transport import BaseTransport, FetchOptions, RequestsResponse, RequestsTransport, TransportResponse


class TestAbstractContracts:
    """测试抽象基类"""

    @pytest.mark.unit
    def test_base_transport_is_abstract(self):
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            BaseTransport()

    @pytest.mark.unit
    def test_transport_response_is_abstract(self):
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            TransportResponse()


class TestFetchOptions:
    """测试 FetchOptions"""

    @pytest.mark.unit
    def test_credentials_always_include(self):
        """UT-TRANS-001: 凭据策略默认为 include"""
        options = FetchOptions(method="GET")

        assert options.credentials == "include"
        assert options.body is None


class TestRequestsTransport:
    """测试 RequestsTransport"""

    @pytest.mark.integration
    @responses.activate
    def test_request_forwarded(self):
        """IT-TRANS-001: 方法、请求头、请求体透传给 requests"""
        responses.add(responses.POST, "https://api.example.com/items", json={"id": 1}, status=201)
        transport = RequestsTransport()
        options = FetchOptions(
            method="POST",
            headers={"content-type": "application/x-www-form-urlencoded", "ntag": "abc"},
            body="name=a%20b",
        )

        response = asyncio.run(transport.fetch("https://api.example.com/items", options))

        assert isinstance(response, RequestsResponse)
        assert response.status == 201
        request = responses.calls[0].request
        assert request.method == "POST"
        assert request.body == b"name=a%20b"
        assert request.headers["ntag"] == "abc"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"

    @pytest.mark.integration
    @responses.activate
    def test_non_ascii_body_sent_as_utf8(self):
        """IT-TRANS-002: 请求体按 UTF-8 编码"""
        responses.add(responses.PUT, "https://api.example.com/items/1", status=204)
        transport = RequestsTransport()

        asyncio.run(
            transport.fetch("https://api.example.com/items/1", FetchOptions(method="PUT", body='{"name":"é"}'))
        )

        assert responses.calls[0].request.body == '{"name":"é"}'.encode("utf-8")

    @pytest.mark.integration
    @responses.activate
    def test_response_adapter(self):
        """IT-TRANS-003: 响应头大小写不敏感，json/text 可等待"""
        responses.add(
            responses.GET,
            "https://api.example.com/items",
            json={"ok": True},
            headers={"NTag": "t1"},
        )
        transport = RequestsTransport()

        response = asyncio.run(transport.fetch("https://api.example.com/items", FetchOptions(method="GET")))

        assert response.headers.get("ntag") == "t1"
        assert "application/json" in response.headers.get("content-type")
        assert asyncio.run(response.json()) == {"ok": True}
        assert asyncio.run(response.text()) == '{"ok": true}'

    @pytest.mark.integration
    @responses.activate
    def test_connection_error_mapped(self):
        """IT-TRANS-004: 网络异常转换为 TransportError"""
        responses.add(
            responses.GET, "https://api.example.com/down", body=requests.exceptions.ConnectionError("refused")
        )
        transport = RequestsTransport()

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(transport.fetch("https://api.example.com/down", FetchOptions(method="GET")))

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    @pytest.mark.integration
    @responses.activate
    def test_timeout_mapped(self):
        """IT-TRANS-005: 超时转换为 TransportError"""
        responses.add(responses.GET, "https://api.example.com/slow", body=requests.exceptions.ReadTimeout())
        transport = RequestsTransport(timeout=1)

        with pytest.raises(TransportError, match="timed out"):
            asyncio.run(transport.fetch("https://api.example.com/slow", FetchOptions(method="GET")))

    @pytest.mark.unit
    def test_configuration_passed_to_session(self):
        """UT-TRANS-002: verify、timeout 和额外参数传给 Session.request"""
        session = MagicMock()
        session.request.return_value = MagicMock(status_code=200)
        transport = RequestsTransport(session=session, verify=False, timeout=5, proxies={"https": "p"})

        asyncio.run(transport.fetch("https://api.example.com", FetchOptions(method="DELETE")))

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "DELETE"
        assert kwargs["verify"] is False
        assert kwargs["timeout"] == 5
        assert kwargs["proxies"] == {"https": "p"}
        assert kwargs["data"] is None

    @pytest.mark.unit
    def test_no_timeout_by_default(self):
        """UT-TRANS-003: 默认不设置超时"""
        assert RequestsTransport().timeout is None

    @pytest.mark.unit
    def test_close_closes_session(self):
        """UT-TRANS-004: close 关闭 Session"""
        session = MagicMock()
        RequestsTransport(session=session).close()
        session.close.assert_called_once()
