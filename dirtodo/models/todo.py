"""待办事项模型定义"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class Todo:
    """单条待办

    没有 id 字段：对外的编号只由它在过滤视图中的位置决定。
    """
    text: str
    completed: bool = False
    created_at: datetime = field(default_factory=_now)

    def mark_completed(self) -> None:
        """标记完成（不可撤销）"""
        self.completed = True

    def to_dict(self) -> dict:
        """序列化为字典"""
        return {
            "text": self.text,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Todo:
        """从字典反序列化

        Raises:
            KeyError: 缺少必填字段
            TypeError: 字段类型不符
            ValueError: created_at 不是合法的 ISO 8601 时间
        """
        text = data["text"]
        completed = data.get("completed", False)
        created_raw = data["created_at"]
        if not isinstance(text, str) or not text:
            raise TypeError("text must be a non-empty string")
        if not isinstance(completed, bool):
            raise TypeError("completed must be a boolean")
        if not isinstance(created_raw, str):
            raise TypeError("created_at must be a string")

        return cls(
            text=text,
            completed=completed,
            created_at=datetime.fromisoformat(created_raw),
        )
