from __future__ import annotations
import re
from typing import List
from pydantic import BaseModel

_FILE_DELIM = re.compile(r"--- FILE: (.*?) ---")
FALLBACK_NAME = "generated_script.py"

class GeneratedFile(BaseModel):
    name: str
    content: str

def split_generated_files(text: str) -> List[GeneratedFile]:
    """Split multi-file output marked with ``--- FILE: path ---`` lines."""
    parts = _FILE_DELIM.split(text or "")
    files = [
        GeneratedFile(name=parts[i].strip(), content=parts[i + 1].strip())
        for i in range(1, len(parts) - 1, 2)
    ]
    if not files:
        files.append(GeneratedFile(name=FALLBACK_NAME, content=text or ""))
    return files
