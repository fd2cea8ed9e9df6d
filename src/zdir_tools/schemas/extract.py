from pathlib import Path

from pydantic import BaseModel


class ExtractResult(BaseModel):
    output_root: Path
    records: int
    files_extracted: int
    files_unknown: int
    bytes_written: int
