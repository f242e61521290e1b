"""数据模型 + 状态持久化测试"""

import json
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from dirtodo.errors import CorruptData, PersistenceFailure
from dirtodo.models.context import TodoConfig
from dirtodo.models.todo import Todo
from dirtodo.services.state_store import StateStore

FIXTURES = Path(__file__).parent / "fixtures"


class TestTodoSerialization:
    """Todo 序列化/反序列化测试"""

    def test_defaults(self) -> None:
        """新建待办未完成且带时区时间戳"""
        todo = Todo(text="buy milk")
        assert todo.completed is False
        assert todo.created_at.tzinfo is not None

    def test_round_trip(self) -> None:
        """序列化→反序列化往返一致（保留微秒）"""
        created = datetime(2025, 3, 1, 8, 15, 30, 654321, tzinfo=timezone(timedelta(hours=2)))
        todo = Todo(text="write tests", completed=True, created_at=created)
        restored = Todo.from_dict(todo.to_dict())
        assert restored == todo
        assert restored.created_at.microsecond == 654321

    def test_mark_completed(self) -> None:
        """mark_completed 只会置为 True"""
        todo = Todo(text="x")
        todo.mark_completed()
        todo.mark_completed()
        assert todo.completed is True

    def test_from_dict_rejects_empty_text(self) -> None:
        """空文本 → TypeError"""
        with pytest.raises(TypeError):
            Todo.from_dict({"text": "", "completed": False, "created_at": "2025-01-01T00:00:00+00:00"})

    def test_from_dict_rejects_bad_timestamp(self) -> None:
        """非法时间 → ValueError"""
        with pytest.raises(ValueError):
            Todo.from_dict({"text": "a", "completed": False, "created_at": "yesterday"})


class TestStateStore:
    """StateStore 状态持久化测试"""

    def test_save_and_load(self, tmp_path: Path) -> None:
        """写入→读取→顺序与字段完全一致"""
        store = StateStore(tmp_path / ".dirtodo.json")
        todos = [
            Todo(text="first"),
            Todo(text="second", completed=True),
            Todo(text="第三条"),
        ]
        store.save(todos)
        assert store.load() == todos

    def test_resave_is_byte_stable(self, tmp_path: Path) -> None:
        """加载后再次保存，文件内容不变"""
        store = StateStore(tmp_path / ".dirtodo.json")
        store.save([Todo(text="a"), Todo(text="b", completed=True)])
        before = store.path.read_bytes()
        store.save(store.load())
        assert store.path.read_bytes() == before

    def test_document_format(self, tmp_path: Path) -> None:
        """文档结构为 {version, todos: [{text, completed, created_at}]}"""
        store = StateStore(tmp_path / ".dirtodo.json")
        store.save([Todo(text="ünïcode")])
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert list(data["todos"][0]) == ["text", "completed", "created_at"]
        assert "ünïcode" in store.path.read_text(encoding="utf-8")

    def test_load_empty(self, tmp_path: Path) -> None:
        """加载不存在的文件返回空列表"""
        store = StateStore(tmp_path / "nonexistent.json")
        assert store.load() == []
        assert store.exists() is False

    def test_exists(self, tmp_path: Path) -> None:
        """exists 方法正确报告文件状态"""
        store = StateStore(tmp_path / ".dirtodo.json")
        assert store.exists() is False
        store.save([])
        assert store.exists() is True

    def test_load_legacy_document(self, tmp_path: Path) -> None:
        """兼容旧工具写出的文件（无 version、纳秒、Z 后缀）"""
        path = tmp_path / ".dirtodo.json"
        shutil.copy(FIXTURES / "legacy_godo.json", path)
        todos = StateStore(path).load()
        assert [t.text for t in todos] == [
            "Implement user authentication",
            "Write README",
            "Ship release",
        ]
        assert [t.completed for t in todos] == [False, True, False]
        assert todos[0].created_at.microsecond == 123456
        assert todos[1].created_at.utcoffset() == timedelta(0)

    def test_load_null_todos(self, tmp_path: Path) -> None:
        """todos 为 null 时视为空列表"""
        path = tmp_path / ".dirtodo.json"
        path.write_text('{"todos": null}', encoding="utf-8")
        assert StateStore(path).load() == []

    @pytest.mark.parametrize(
        "fixture",
        ["corrupt_todos.json", "missing_field.json"],
    )
    def test_load_corrupt_fixture(self, tmp_path: Path, fixture: str) -> None:
        """无法解析的文件 → CorruptData"""
        path = tmp_path / ".dirtodo.json"
        shutil.copy(FIXTURES / fixture, path)
        with pytest.raises(CorruptData) as exc_info:
            StateStore(path).load()
        assert exc_info.value.path == path

    @pytest.mark.parametrize(
        "content",
        [
            "[]",
            '{"todos": {}}',
            '{"todos": ["text"]}',
            '{"todos": [{"text": "a", "completed": "no", "created_at": "2025-01-01T00:00:00+00:00"}]}',
        ],
    )
    def test_load_malformed_structure(self, tmp_path: Path, content: str) -> None:
        """结构不符 → CorruptData"""
        path = tmp_path / ".dirtodo.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(CorruptData):
            StateStore(path).load()

    def test_load_invalid_utf8(self, tmp_path: Path) -> None:
        """非 UTF-8 字节 → CorruptData"""
        path = tmp_path / ".dirtodo.json"
        path.write_bytes(b"\xff\xfe garbage")
        with pytest.raises(CorruptData, match="invalid UTF-8"):
            StateStore(path).load()

    def test_load_deeply_nested(self, tmp_path: Path) -> None:
        """嵌套过深的 JSON → CorruptData"""
        path = tmp_path / ".dirtodo.json"
        path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
        with pytest.raises(CorruptData):
            StateStore(path).load()

    def test_load_unreadable(self, tmp_path: Path) -> None:
        """路径是目录 → PersistenceFailure"""
        with pytest.raises(PersistenceFailure) as exc_info:
            StateStore(tmp_path).load()
        assert exc_info.value.operation == "load"

    def test_save_failure_leaves_no_temp_file(self, tmp_path: Path) -> None:
        """写入失败 → PersistenceFailure，且不残留临时文件"""
        target = tmp_path / "occupied"
        target.mkdir()
        with pytest.raises(PersistenceFailure) as exc_info:
            StateStore(target).save([Todo(text="a")])
        assert exc_info.value.operation == "save"
        assert [p.name for p in tmp_path.iterdir()] == ["occupied"]


class TestTodoConfig:
    """TodoConfig 基本测试"""

    def test_state_path(self, tmp_path: Path) -> None:
        """state_path 拼接 base_dir 与文件名"""
        config = TodoConfig(base_dir=tmp_path)
        assert config.state_path == tmp_path / ".dirtodo.json"
        assert config.use_color is False
