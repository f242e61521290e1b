"""日志格式器：按日志级别着色输出"""

from __future__ import annotations

import logging
import re


class LevelColorFormatter(logging.Formatter):
    """为不同日志级别输出不同颜色，store 相关日志单独着色。"""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS: dict[int, str] = {
        logging.DEBUG: "\x1b[90m",      # 灰
        logging.INFO: "\x1b[37m",       # 白
        logging.WARNING: "\x1b[33m",    # 黄
        logging.ERROR: "\x1b[31m",      # 红
        logging.CRITICAL: "\x1b[91m",   # 亮红
    }
    _SOURCE_COLORS: dict[str, str] = {
        "state_store": "\x1b[36m",      # 青
        "commands": "\x1b[34m",         # 蓝
    }
    _SOURCE_PATTERN = re.compile(r"dirtodo\.(?:services\.)?(state_store|commands)\b")

    def __init__(self, fmt: str, use_color: bool) -> None:
        super().__init__(fmt=fmt)
        self._use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        if not self._use_color:
            return text

        # WARNING 及以上始终按级别着色
        source = self._extract_source(record.name) if record.levelno < logging.WARNING else None
        if source:
            color = self._SOURCE_COLORS.get(source)
        else:
            color = self._LEVEL_COLORS.get(record.levelno)

        if not color:
            return text
        return f"{color}{text}{self._RESET}"

    def _extract_source(self, name: str) -> str | None:
        match = self._SOURCE_PATTERN.match(name)
        if not match:
            return None
        return match.group(1)
