"""领域层模型与异常。

包含：
- models: ChatMessage / CompletionRequest / CompletionResult / RelayResponse 等模型。
- exceptions: 业务异常类型定义。
"""
