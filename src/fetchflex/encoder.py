"""
参数值编码模块

路径参数、查询参数和 urlencoded 请求体共用同一套编码规则:
    - 列表/元组：元素转字符串后用 "," 连接，再整体百分号编码
    - 字典：序列化为紧凑 JSON，再百分号编码
    - 标量：转字符串后直接百分号编码
"""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any
from urllib.parse import quote

from fetchflex.constants import URI_COMPONENT_SAFE_CHARS


def _format_float(value: float) -> str:
    """
    按 JavaScript Number 转字符串的规则输出浮点数

    取最短往返表示的有效数字，十进制指数在 (-6, 21] 之间用普通写法，否则用 1.5e+21 形式
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    n = k + exponent  # 小数点相对于首位有效数字的位置

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"

    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{n - 1:+d}"


def stringify(value: Any) -> str:
    """
    将标量转换为字符串

    布尔值输出为小写的 true/false，None 输出为空字符串，浮点数按 JavaScript 规则输出（2.0 为 "2"，1e21 为 "1e+21"）
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def to_json(value: Any) -> str:
    """紧凑格式的 JSON 序列化，保留非 ASCII 字符"""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def quote_component(text: str) -> str:
    """与 encodeURIComponent 行为一致的百分号编码"""
    return quote(text, safe=URI_COMPONENT_SAFE_CHARS)


def encode(value: Any) -> str:
    """
    编码单个参数值

    参数:
        value: 标量、标量序列或字典

    返回:
        百分号编码后的字符串

    示例:
        >>> encode(["a", "b c"])
        'a%2Cb%20c'
        >>> encode({"k": 1})
        '%7B%22k%22%3A1%7D'
    """
    if isinstance(value, (list, tuple)):
        text = ",".join(stringify(item) for item in value)
    elif isinstance(value, dict):
        text = to_json(value)
    else:
        text = stringify(value)
    return quote_component(text)
