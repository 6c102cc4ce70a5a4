"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
便于在 API 层统一映射为 HTTP 响应。

分类：
- InvalidInput: 请求体不合法（400）。
- UpstreamError: 上游豆包服务失败（网络、非 2xx、响应结构错误、未配置密钥）。
- InternalError: 其他意外错误（500）。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider、url 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class InvalidInput(BusinessError):
    """请求参数校验失败。"""


class UpstreamError(BusinessError):
    """上游 HTTP 服务调用失败。"""

    def __init__(self, code: str, message: str, http_status: int = 502, **extra):
        super().__init__(code, message, http_status=http_status, **extra)


class NetworkError(UpstreamError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(UpstreamError):
    """上游返回非 2xx 状态码。"""


class MalformedResponseError(UpstreamError):
    """上游响应无法按约定的 JSON 结构解析。"""


class InternalError(BusinessError):
    """未预期的内部错误。"""

    def __init__(self, code: str, message: str, http_status: int = 500, **extra):
        super().__init__(code, message, http_status=http_status, **extra)
