"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
由 MessageRelay 在最外层统一捕获并转换为安全的回复。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 错误信息，只写入日志，不返回给终端用户。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """第三方 API 返回非 2xx/429 错误时抛出。"""


class RateLimitError(BusinessError):
    """Provider 限流错误。Relay 自身不重试。"""


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


# 上游调用失败的统一集合，Relay 对它们给出同一种降级回复
UPSTREAM_ERRORS = (NetworkError, ApiError, RateLimitError)
