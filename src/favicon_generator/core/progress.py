"""进度更新的数据模型。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(slots=True)
class ProgressUpdate:
    """生成过程中的进度信息，每写完一个文件推送一次。"""

    total: int
    completed: int
    artifact: Optional[Path] = None
    message: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.total > 0 and self.completed >= self.total
