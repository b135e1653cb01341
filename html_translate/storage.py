from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_text(path: str | Path, encoding: str = "utf-8") -> str:
    """Read a whole text file; undecodable bytes raise UnicodeDecodeError."""
    with open(Path(path), "r", encoding=encoding, newline="") as f:
        return f.read()


def write_text(path: str | Path, text: str, encoding: str = "utf-8") -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the model's line endings byte-for-byte
    with open(p, "w", encoding=encoding, newline="") as f:
        f.write(text)


def read_json(path: str | Path) -> Any:
    return json.loads(read_text(path))
