"""命令处理：加载 → 解析编号 → 修改/查询 → 保存"""

from __future__ import annotations

import logging
import re

from dirtodo.errors import (
    CorruptData,
    InvalidArgument,
    InvalidRank,
    PersistenceFailure,
)
from dirtodo.models.context import TodoConfig
from dirtodo.models.todo import Todo
from dirtodo.services.console import Console, Emphasis
from dirtodo.services.state_store import StateStore
from dirtodo.services.view_resolver import (
    count,
    filtered_view,
    is_active,
    is_completed,
    resolve_rank,
)

logger = logging.getLogger(__name__)

PROG = "dirtodo"

_RANK_PATTERN = re.compile(r"[+-]?\d+")


def parse_rank(raw: str | None, command: str) -> int:
    """解析用户输入的编号（在加载状态文件之前完成校验）

    Raises:
        InvalidArgument: 未提供或不是整数
        InvalidRank: 小于 1
    """
    if raw is None:
        raise InvalidArgument(
            "Please provide todo ID", hint=f"Usage: {PROG} {command} <id>"
        )
    if not _RANK_PATTERN.fullmatch(raw.strip()):
        raise InvalidArgument(f"Invalid todo ID '{raw}'")
    try:
        rank = int(raw)
    except ValueError as e:
        # 超长数字串超出 int 转换上限
        raise InvalidArgument(f"Invalid todo ID '{raw}'") from e
    if rank < 1:
        raise InvalidRank(rank)
    return rank


class TodoCommands:
    """所有子命令的实现，每个方法对应一次完整调用"""

    def __init__(
        self,
        config: TodoConfig,
        console: Console | None = None,
        store: StateStore | None = None,
    ) -> None:
        self._console = console or Console(use_color=config.use_color)
        self._store = store or StateStore(config.state_path)

    @property
    def store(self) -> StateStore:
        return self._store

    def add(self, words: list[str]) -> None:
        text = " ".join(words).strip()
        if not text:
            raise InvalidArgument(
                "Please provide todo text", hint=f"Usage: {PROG} add <text>"
            )

        todos = self._store.load()
        todo = Todo(text=text)
        todos.append(todo)
        self._store.save(todos)

        rank = count(todos, is_active)
        logger.debug(f"新增待办 #{rank}，共 {len(todos)} 条")
        self._confirm("[Added]", Emphasis.SUCCESS, f"Todo #{rank}: {todo.text}")

    def done(self, raw_rank: str | None) -> None:
        rank = parse_rank(raw_rank, "done")
        todos = self._store.load()
        index = resolve_rank(todos, is_active, rank)

        target = todos[index]
        target.mark_completed()
        self._store.save(todos)

        logger.debug(f"完成待办 #{rank}（下标 {index}）")
        self._confirm("[Completed]", Emphasis.SUCCESS, f"Todo #{rank}: {target.text}")

    def remove(self, raw_rank: str | None) -> None:
        rank = parse_rank(raw_rank, "remove")
        todos = self._store.load()
        index = resolve_rank(todos, is_active, rank)

        removed = todos.pop(index)
        self._store.save(todos)

        logger.debug(f"删除待办 #{rank}（下标 {index}）")
        self._confirm("[Removed]", Emphasis.FAILURE, f"Todo #{rank}: {removed.text}")

    def clean(self, raw_rank: str | None = None) -> None:
        """无编号时清理全部已完成待办，有编号时只删除对应的已完成待办"""
        if raw_rank is not None:
            self._clean_one(parse_rank(raw_rank, "clean"))
            return

        todos = self._store.load()
        remaining = list(filtered_view(todos, is_active))
        removed_count = len(todos) - len(remaining)
        if removed_count == 0:
            self._console.line("No completed todos to clean")
            return

        self._store.save(remaining)
        logger.debug(f"清理 {removed_count} 条已完成待办")
        self._confirm(
            "[Cleaned]", Emphasis.SUCCESS, f"Removed {removed_count} completed todo(s)"
        )

    def _clean_one(self, rank: int) -> None:
        todos = self._store.load()
        index = resolve_rank(todos, is_completed, rank)

        removed = todos.pop(index)
        self._store.save(todos)

        logger.debug(f"删除已完成待办 #{rank}（下标 {index}）")
        self._confirm(
            "[Removed]", Emphasis.FAILURE, f"Completed todo #{rank}: {removed.text}"
        )

    def list_todos(self, include_all: bool = False) -> None:
        todos = self._store.load()
        if not todos:
            self._console.line(f"No todos yet. Add one with: {PROG} add <text>")
            return

        out = self._console
        active = list(filtered_view(todos, is_active))
        if active:
            out.line(out.emphasize("Active Todos:", Emphasis.INFO))
            self._print_view(active)
        else:
            out.line(out.emphasize("No active todos.", Emphasis.MUTED))

        if not include_all:
            return
        completed = list(filtered_view(todos, is_completed))
        if completed:
            out.line()
            out.line(out.emphasize("Completed Todos:", Emphasis.MUTED))
            self._print_view(completed, muted=True)

    def show(self) -> None:
        """供 shell 提示符钩子调用：出错或没有未完成待办时不输出任何内容"""
        try:
            todos = self._store.load()
        except (CorruptData, PersistenceFailure) as e:
            logger.debug(f"show 静默忽略加载错误: {e}")
            return

        active = list(filtered_view(todos, is_active))
        if not active:
            return

        self._console.line(self._console.emphasize("Todos:", Emphasis.INFO))
        self._print_view(active)

    def _print_view(self, todos: list[Todo], muted: bool = False) -> None:
        out = self._console
        for rank, todo in enumerate(todos, start=1):
            label = out.emphasize(f"[{rank}]", Emphasis.MUTED if muted else Emphasis.WARNING)
            text = out.emphasize(todo.text, Emphasis.MUTED) if muted else todo.text
            out.line(f"  {label} {text}")

    def _confirm(self, tag: str, kind: Emphasis, message: str) -> None:
        self._console.line(f"{self._console.emphasize(tag, kind)} {message}")
