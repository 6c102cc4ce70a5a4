"""领域层模型与异常。

包含：
- models: ChatMessage / ChatRequest / CompletionResult / ChatTurnResult 等请求级模型。
- exceptions: 业务异常类型定义。
"""
