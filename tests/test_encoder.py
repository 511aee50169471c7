"""
测试 fetchflex.encoder 模块

测试参数值编码规则:
- 标量：转字符串后百分号编码
- 序列：逗号连接后百分号编码
- 字典：紧凑 JSON 后百分号编码
"""

import pytest

from fetchflex.encoder import encode, quote_component, stringify, to_json


class TestStringify:
    """测试 stringify 函数"""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("abc", "abc"),
            (5, "5"),
            (1.5, "1.5"),
            (2.0, "2"),
            (True, "true"),
            (False, "false"),
            (None, ""),
        ],
    )
    def test_scalar_stringification(self, value, expected):
        """UT-ENC-001: 标量转字符串"""
        assert stringify(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value, expected",
        [
            (float("nan"), "NaN"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (-0.0, "0"),
            (100.0, "100"),
            (-2.5, "-2.5"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1.5e21, "1.5e+21"),
            (0.000001, "0.000001"),
            (1e-7, "1e-7"),
            (1.25e-7, "1.25e-7"),
        ],
    )
    def test_float_follows_javascript_rendering(self, value, expected):
        """UT-ENC-001b: 非有限值和极大极小浮点数按 JavaScript 规则输出"""
        assert stringify(value) == expected


class TestEncode:
    """测试 encode 函数"""

    @pytest.mark.unit
    def test_encode_plain_string(self):
        """UT-ENC-002: 普通字符串编码"""
        assert encode("a b") == "a%20b"

    @pytest.mark.unit
    def test_encode_number(self):
        """UT-ENC-003: 数字先转字符串"""
        assert encode(5) == "5"

    @pytest.mark.unit
    def test_encode_boolean(self):
        """UT-ENC-004: 布尔值输出小写"""
        assert encode(True) == "true"

    @pytest.mark.unit
    def test_encode_sequence_joins_with_comma(self):
        """UT-ENC-005: 列表用逗号连接后整体编码"""
        assert encode(["a", "b c"]) == "a%2Cb%20c"
        assert encode((1, 2, 3)) == "1%2C2%2C3"

    @pytest.mark.unit
    def test_encode_mapping_as_json(self):
        """UT-ENC-006: 字典序列化为紧凑 JSON 后编码"""
        assert encode({"k": 1}) == "%7B%22k%22%3A1%7D"

    @pytest.mark.unit
    def test_encode_keeps_uri_component_safe_chars(self):
        """UT-ENC-007: 与 encodeURIComponent 一致的保留字符"""
        assert encode("a-b_c.d!e~f*g'h(i)") == "a-b_c.d!e~f*g'h(i)"

    @pytest.mark.unit
    def test_encode_reserved_chars(self):
        """UT-ENC-008: 保留字符全部转义"""
        assert encode("a/b?c&d=e#f") == "a%2Fb%3Fc%26d%3De%23f"

    @pytest.mark.unit
    def test_encode_non_ascii_as_utf8(self):
        """UT-ENC-009: 非 ASCII 字符按 UTF-8 编码"""
        assert encode("é") == "%C3%A9"

    @pytest.mark.unit
    def test_encoding_is_applied_once(self):
        """UT-ENC-010: 已编码的字符串会被再次转义，编码不是幂等的"""
        once = encode("a b")
        assert encode(once) == "a%2520b"
        assert encode(once) != once


class TestHelpers:
    """测试辅助函数"""

    @pytest.mark.unit
    def test_to_json_is_compact(self):
        """紧凑 JSON 没有多余空格"""
        assert to_json({"name": "a", "ids": [1, 2]}) == '{"name":"a","ids":[1,2]}'

    @pytest.mark.unit
    def test_quote_component_encodes_space_as_percent20(self):
        """空格编码为 %20 而不是 +"""
        assert quote_component("a b+c") == "a%20b%2Bc"
