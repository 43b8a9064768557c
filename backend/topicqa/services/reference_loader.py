"""
Reference text loading
"""
import asyncio
from pathlib import Path
from typing import Optional, Union

from topicqa.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)


class ReferenceLoader:
    """
    Reads the topic's reference text.

    The file is read again on every call so edits show up without a
    restart. Line endings are kept as stored. Read failures are logged
    and reported as None.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def _read(self) -> str:
        with self.path.open(encoding=self.encoding, newline="") as f:
            return f.read()

    async def load(self) -> Optional[str]:
        try:
            return await asyncio.to_thread(self._read)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(
                "Error reading the data file",
                extra={"data_file": str(self.path), "error": str(e), "error_type": type(e).__name__},
            )
            return None
