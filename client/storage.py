import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class TokenStorage:
    """
    토큰 / 사용자 정보 보관소 (브라우저 localStorage 역할)
    - path 를 주면 JSON 파일로 영속화, 없으면 메모리에만 보관
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path) if path else None
        self._data: dict = {}
        if self.path and self.path.exists():
            try:
                self._data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
                self._data = {}

    def get(self, key: str):
        return self._data.get(key)

    def set(self, key: str, value) -> None:
        self._data[key] = value
        self._save()

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
        self._save()

    def clear(self) -> None:
        self._data = {}
        self._save()

    @property
    def token(self) -> Optional[str]:
        return self.get("token")

    def _save(self) -> None:
        if self.path:
            self.path.write_text(json.dumps(self._data, ensure_ascii=False), encoding="utf-8")
