"""过滤视图与编号解析

用户看到的编号是记录在过滤视图（未完成 / 已完成）中的 1-based 位置，
底层列表按插入顺序保存。每次命令都从当前列表重新计算编号，
完成或删除第 k 条后，后面的第 j 条在下一次调用中变成第 j-1 条。
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence

from dirtodo.errors import NotFound
from dirtodo.models.todo import Todo

Predicate = Callable[[Todo], bool]


def is_active(todo: Todo) -> bool:
    return not todo.completed


def is_completed(todo: Todo) -> bool:
    return todo.completed


def filtered_view(todos: Iterable[Todo], predicate: Predicate) -> Iterator[Todo]:
    """惰性产出满足 predicate 的记录，保持原有相对顺序"""
    return (todo for todo in todos if predicate(todo))


def count(todos: Iterable[Todo], predicate: Predicate) -> int:
    """满足 predicate 的记录数"""
    return sum(1 for _ in filtered_view(todos, predicate))


def resolve_rank(todos: Sequence[Todo], predicate: Predicate, rank: int) -> int:
    """把过滤视图中的编号转换为底层列表下标

    Args:
        todos: 底层待办列表
        predicate: is_active 或 is_completed
        rank: 1-based 编号

    Returns:
        底层列表中的下标

    Raises:
        NotFound: 视图中不存在该编号（包括 rank <= 0）
    """
    seen = 0
    for index, todo in enumerate(todos):
        if not predicate(todo):
            continue
        seen += 1
        if seen == rank:
            return index
    raise NotFound(rank, completed=predicate is is_completed)
