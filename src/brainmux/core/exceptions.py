"""BrainMux 自定义异常类"""


class BrainMuxError(Exception):
    """BrainMux 基础异常类"""

    pass


class IndexUnavailableError(BrainMuxError):
    """嵌入索引不可用（调用失败）"""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"嵌入索引调用 '{operation}' 失败: {reason}")


class IndexTimeoutError(IndexUnavailableError):
    """嵌入索引调用超时"""

    def __init__(self, operation: str, timeout: float):
        self.timeout = timeout
        super().__init__(operation, f"超过 {timeout:.1f} 秒未返回")


class RegistryError(BrainMuxError):
    """Brain 注册表数据无效"""

    pass
