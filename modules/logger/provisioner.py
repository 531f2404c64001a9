import logging
import threading
from typing import Optional

from modules.baseclass import Singleton

from .handlers import create_file_handler, create_terminal_handler

class ProvisionedLogger(metaclass=Singleton):
  """Hands out named loggers that share one level and one set of handlers.

  Loggers are usually provisioned at import time, long before ``main.py`` knows the environment.
  ``configure`` therefore re-applies the level and handlers to every logger that has been provisioned so far."""
  level: int
  loggers: dict[str, logging.Logger]
  handlers: list[logging.Handler]
  lock: threading.Lock
  __owned_handlers: set[logging.Handler]
  __terminal_handler: Optional[logging.Handler]
  __file_handler: Optional[logging.Handler]
  __file_path: Optional[str]

  def __init__(self):
    super().__init__()
    self.level = logging.INFO
    self.loggers = {}
    self.handlers = []
    self.lock = threading.Lock()
    self.__owned_handlers = set()
    self.__terminal_handler = None
    self.__file_handler = None
    self.__file_path = None

  def __apply(self, logger: logging.Logger):
    logger.setLevel(self.level)
    for handler in list(logger.handlers):
      if handler in self.__owned_handlers and handler not in self.handlers:
        logger.removeHandler(handler)
    for handler in self.handlers:
      if handler not in logger.handlers:
        logger.addHandler(handler)

  def provision(self, name: str)->logging.Logger:
    with self.lock:
      logger = self.loggers.get(name, None)
      if logger is None:
        logger = logging.getLogger(name)
        self.__apply(logger)
        self.loggers[name] = logger
      return logger

  def __get_file_handler(self, file: str)->logging.Handler:
    if self.__file_handler is not None and self.__file_path == file:
      return self.__file_handler
    if self.__file_handler is not None:
      self.__file_handler.close()
    self.__file_handler = create_file_handler(file)
    self.__file_path = file
    self.__owned_handlers.add(self.__file_handler)
    return self.__file_handler

  def configure(
    self,
    *,
    terminal: bool,
    level: int,
    file: Optional[str],
  ):
    with self.lock:
      handlers: list[logging.Handler] = []
      if terminal:
        if self.__terminal_handler is None:
          self.__terminal_handler = create_terminal_handler()
          self.__owned_handlers.add(self.__terminal_handler)
        handlers.append(self.__terminal_handler)
      if file is not None:
        handlers.append(self.__get_file_handler(file))

      self.level = level
      self.handlers = handlers
      for logger in self.loggers.values():
        self.__apply(logger)


__all__ = [
  "ProvisionedLogger"
]
