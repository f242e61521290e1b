"""运行配置"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_TODO_FILE = ".dirtodo.json"


@dataclass
class TodoConfig:
    """单次命令调用的运行配置，由 cli 显式传入各组件"""
    base_dir: Path = field(default_factory=Path.cwd)
    todo_file: str = DEFAULT_TODO_FILE
    use_color: bool = False
    verbose: bool = False

    @property
    def state_path(self) -> Path:
        """状态文件路径（相对于 base_dir）"""
        return Path(self.base_dir) / self.todo_file
