"""错误类型定义"""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """所有命令错误的基类，由 cli.main 统一转换为提示信息 + 非零退出码"""

    def describe(self) -> str:
        """面向用户的单行错误信息"""
        return f"Error: {self}"


class InvalidArgument(TodoError):
    """缺少文本/编号，或编号不是数字"""

    def __init__(self, message: str, hint: str = "") -> None:
        super().__init__(message)
        self.hint = hint


class InvalidRank(TodoError):
    """编号小于 1"""

    def __init__(self, rank: int) -> None:
        super().__init__("Todo ID must be 1 or greater")
        self.rank = rank


class NotFound(TodoError):
    """编号在对应过滤视图中不存在"""

    def __init__(self, rank: int, completed: bool = False) -> None:
        label = "Completed todo" if completed else "Todo"
        super().__init__(f"{label} #{rank} not found")
        self.rank = rank
        self.completed = completed


class CorruptData(TodoError):
    """状态文件存在但无法解析"""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

    def describe(self) -> str:
        return f"Error loading todos: {self}"


class PersistenceFailure(TodoError):
    """状态文件读写失败（文件不存在除外）"""

    def __init__(self, path: Path, operation: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.operation = operation
        self.reason = reason

    def describe(self) -> str:
        verb = "saving" if self.operation == "save" else "loading"
        return f"Error {verb} todos: {self}"
