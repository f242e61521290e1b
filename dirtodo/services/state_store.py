"""状态持久化服务 — JSON 文件读写"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from dirtodo.errors import CorruptData, PersistenceFailure
from dirtodo.models.todo import Todo

logger = logging.getLogger(__name__)

_FORMAT_VERSION = 1


class StateStore:
    """待办列表持久化到 JSON 文件

    每次调用都是完整的 load → 修改 → save，不加锁，多进程并发时后写者覆盖。
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, todos: list[Todo]) -> None:
        """整体写入待办列表（先写临时文件再替换，不会留下半截文件）

        Raises:
            PersistenceFailure: 写入失败
        """
        data = {
            "version": _FORMAT_VERSION,
            "todos": [t.to_dict() for t in todos],
        }
        payload = json.dumps(data, ensure_ascii=False, indent=2) + "\n"

        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f"{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceFailure(self._path, "save", str(e)) from e

        logger.debug(f"已保存 {len(todos)} 条待办: {self._path}")

    def load(self) -> list[Todo]:
        """从 JSON 文件加载待办列表，文件不存在时返回空列表

        Raises:
            CorruptData: 文件内容无法解析
            PersistenceFailure: 读取失败
        """
        try:
            with open(self._path, "rb") as f:
                payload = f.read()
        except FileNotFoundError:
            logger.debug(f"无状态文件，使用空列表: {self._path}")
            return []
        except OSError as e:
            raise PersistenceFailure(self._path, "load", str(e)) from e

        try:
            raw = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptData(self._path, f"invalid UTF-8 ({e})") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptData(self._path, f"invalid JSON ({e})") from e
        except RecursionError as e:
            raise CorruptData(self._path, "JSON nested too deeply") from e

        if not isinstance(data, dict):
            raise CorruptData(self._path, "top-level value must be an object")

        entries = data.get("todos")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise CorruptData(self._path, "'todos' must be a list")

        todos: list[Todo] = []
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise CorruptData(self._path, f"todo #{i} must be an object")
            try:
                todos.append(Todo.from_dict(entry))
            except KeyError as e:
                raise CorruptData(self._path, f"todo #{i} is missing field {e}") from e
            except (TypeError, ValueError) as e:
                raise CorruptData(self._path, f"todo #{i}: {e}") from e

        logger.debug(f"已加载 {len(todos)} 条待办: {self._path}")
        return todos

    def exists(self) -> bool:
        """状态文件是否存在"""
        return self._path.exists()
