"""dirtodo — 目录级待办清单管理工具"""

__version__ = "0.1.0"
