"""
URL 解析模块

负责 URL 模板占位符提取、路径参数替换、查询字符串构建以及参数划分
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from fetchflex.constants import PLACEHOLDER_PATTERN
from fetchflex.encoder import encode
from fetchflex.exceptions import MissingParameterError

_placeholder_re = re.compile(PLACEHOLDER_PATTERN)


def extract_placeholder_names(template: str) -> list[str]:
    """
    提取 URL 模板中的占位符名称

    参数:
        template: URL 模板，如 "/users/{user_id}/posts/{post_id}"

    返回:
        按出现顺序排列的占位符名称列表（保留重复项，不含花括号）
    """
    return _placeholder_re.findall(template)


def resolve_path(template: str, params: Mapping[str, Any]) -> str:
    """
    将 URL 模板中的占位符替换为编码后的参数值

    参数:
        template: URL 模板
        params: 完整的参数字典（包括稍后会被排除在查询/请求体之外的路径参数）

    返回:
        替换后的路径

    异常:
        MissingParameterError: 占位符在 params 中不存在或值为 None
    """

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if params.get(name) is None:
            raise MissingParameterError(name)
        return encode(params[name])

    return _placeholder_re.sub(replace, template)


def partition_params(template: str, params: Mapping[str, Any]) -> tuple[list[str], dict[str, Any]]:
    """
    将参数划分为路径参数和剩余参数

    参数:
        template: URL 模板
        params: 调用方传入的完整参数字典

    返回:
        (占位符名称列表, 去掉路径参数后的剩余参数字典)，剩余参数保持原插入顺序
    """
    path_names = extract_placeholder_names(template)
    consumed = set(path_names)
    remaining = {key: value for key, value in params.items() if key not in consumed}
    return path_names, remaining


def build_query(params: Mapping[str, Any]) -> list[str]:
    """
    构建 "key=value" 形式的查询参数列表，键和值都会被编码

    参数:
        params: 剩余参数字典

    返回:
        按插入顺序排列的 "key=value" 列表
    """
    return [f"{encode(key)}={encode(value)}" for key, value in params.items()]


def build_url(path: str, query: Iterable[str] | None = None) -> str:
    """
    拼接路径和查询字符串

    路径中已经包含 "?" 时用 "&" 连接，否则用 "?"；查询为空时原样返回路径
    """
    query_string = "&".join(query or ())
    if not query_string:
        return path
    delimiter = "&" if "?" in path else "?"
    return f"{path}{delimiter}{query_string}"
