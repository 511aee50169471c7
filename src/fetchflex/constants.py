"""
HTTP 客户端常量配置模块

定义请求构建、响应归一化所使用的常量、默认配置等
"""

# HTTP 方法常量
HTTP_METHOD_GET = "GET"
HTTP_METHOD_POST = "POST"
HTTP_METHOD_PUT = "PUT"
HTTP_METHOD_DELETE = "DELETE"

# HTTP 状态码
HTTP_NO_CONTENT = 204
HTTP_BAD_REQUEST = 400  # 大于等于该值的状态码视为错误响应

# 媒体类型
MEDIA_TYPE_JSON = "application/json"
MEDIA_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded"

# 请求头名称（统一小写）
HEADER_ACCEPT = "accept"
HEADER_CONTENT_TYPE = "content-type"
HEADER_NTAG = "ntag"

# 默认请求头
DEFAULT_HEADERS = {
    HEADER_ACCEPT: MEDIA_TYPE_JSON,
}

# 带请求体方法（POST/PUT）的默认请求头
BODY_DEFAULT_HEADERS = {
    HEADER_CONTENT_TYPE: MEDIA_TYPE_FORM_URLENCODED,
    **DEFAULT_HEADERS,
}

# 会话标签初始值：尚未从任何响应中收到 ntag
NO_NTAG_RECEIVED_YET = "NO_NTAG_RECEIVED_YET"

# 传输层凭据策略：总是携带 cookie
CREDENTIALS_INCLUDE = "include"

# 占位符匹配模式：非贪婪，名称可以包含任意字符
PLACEHOLDER_PATTERN = r"\{([\s\S]+?)\}"

# 与 encodeURIComponent 一致的不转义字符
URI_COMPONENT_SAFE_CHARS = "-_.!~*'()"
