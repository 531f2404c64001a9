from contextlib import contextmanager
import os
import tempfile
from typing import IO, Iterator

from modules.logger import ProvisionedLogger

logger = ProvisionedLogger().provision("Atomic File Operations")

@contextmanager
def atomic_write(path: str)->Iterator[IO[str]]:
  """Writes to a temporary file in the same directory and swaps it into ``path`` once the block finishes.
  Readers never see a half-written file. If the block raises, ``path`` is left untouched."""
  dirpath = os.path.dirname(path) or "."
  os.makedirs(dirpath, exist_ok=True)
  tmp = tempfile.NamedTemporaryFile('w', encoding='utf-8', dir=dirpath, delete=False)
  logger.debug(f"Created temporary file {tmp.name}")
  temp_path = tmp.name
  try:
    with tmp:
      yield tmp
    os.replace(temp_path, path)
    logger.debug(f"Replaced the file at {path} with the file at {temp_path}.")
  finally:
    if os.path.exists(temp_path):
      try:
        os.remove(temp_path)
      except OSError as e:
        logger.error(f"Failed to clean up {temp_path} due to the following error: {e}")


__all__ = [
  "atomic_write",
]
