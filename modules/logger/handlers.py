import logging
from logging.handlers import RotatingFileHandler
import os
import sys

TERMINAL_FORMAT = '\033[38;5;247m%(asctime)s %(levelname)s\033[0m \033[1m[%(name)s]\033[0m: %(message)s'
PLAIN_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'

# 100 kB per file, keeping two rotated files around
LOG_FILE_MAX_BYTES = 100 * 1000
LOG_FILE_BACKUP_COUNT = 2

def create_terminal_handler()->logging.Handler:
  handler = logging.StreamHandler(sys.stdout)
  # Escape codes only render on an interactive terminal
  is_tty = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
  handler.setFormatter(logging.Formatter(TERMINAL_FORMAT if is_tty else PLAIN_FORMAT))
  return handler

def create_file_handler(path: str)->RotatingFileHandler:
  dirpath = os.path.dirname(path)
  if dirpath:
    os.makedirs(dirpath, exist_ok=True)
  handler = RotatingFileHandler(
    filename=path,
    maxBytes=LOG_FILE_MAX_BYTES,
    backupCount=LOG_FILE_BACKUP_COUNT,
    encoding="utf-8",
  )
  handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
  return handler

__all__ = [
  "create_terminal_handler",
  "create_file_handler",
]
