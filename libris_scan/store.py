"""Write-once file store keyed by identifier."""

import os
import tempfile


class LocalStore:
    """Files only appear under their final name once fully written."""

    def __init__(self, directory: str, suffix: str):
        self.directory = directory
        self.suffix = suffix

    def ensure(self):
        os.makedirs(self.directory, exist_ok=True)

    def path_for(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}{self.suffix}")

    def exists(self, key: str) -> bool:
        return os.path.exists(self.path_for(key))

    def write_text(self, key: str, content: str) -> str:
        return self._write(key, content.encode("utf-8"))

    def write_bytes(self, key: str, content: bytes) -> str:
        return self._write(key, content)

    def _write(self, key: str, data: bytes) -> str:
        self.ensure()
        path = self.path_for(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".part")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        return path

    def count(self) -> int:
        if not os.path.isdir(self.directory):
            return 0
        return sum(1 for name in os.listdir(self.directory) if name.endswith(self.suffix))
