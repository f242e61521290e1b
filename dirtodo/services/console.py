"""终端输出：着色标签 + 行输出"""

from __future__ import annotations

import sys
from enum import Enum
from typing import TextIO


class Emphasis(str, Enum):
    """输出强调类型"""
    SUCCESS = "success"
    FAILURE = "failure"
    WARNING = "warning"
    INFO = "info"
    MUTED = "muted"


class Console:
    """命令输出通道，着色可关闭（非 TTY / --no-color / NO_COLOR）"""

    _RESET = "\x1b[0m"
    _COLORS: dict[Emphasis, str] = {
        Emphasis.SUCCESS: "\x1b[32m",   # 绿
        Emphasis.FAILURE: "\x1b[31m",   # 红
        Emphasis.WARNING: "\x1b[33m",   # 黄
        Emphasis.INFO: "\x1b[36m",      # 青
        Emphasis.MUTED: "\x1b[90m",     # 灰
    }

    def __init__(self, stream: TextIO | None = None, use_color: bool = False) -> None:
        self._stream = stream
        self._use_color = use_color

    def emphasize(self, text: str, kind: Emphasis | str) -> str:
        if not self._use_color:
            return text
        return f"{self._COLORS[Emphasis(kind)]}{text}{self._RESET}"

    def line(self, text: str = "") -> None:
        # 未指定 stream 时每次取当前的 sys.stdout
        stream = self._stream if self._stream is not None else sys.stdout
        print(text, file=stream)
