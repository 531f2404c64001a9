import logging
import time
from typing import Optional, Union

from .provisioner import ProvisionedLogger

def format_duration(seconds: float)->str:
  if seconds < 1e-3:
    return f"{seconds * 1e6:.1f} μs"
  if seconds < 1:
    return f"{seconds * 1e3:.1f} ms"
  return f"{seconds:.2f} s"

class TimeLogger:
  """Logs how long the block took at debug level, or as a warning if it took longer than ``slow_threshold`` seconds."""
  title: str
  logger: logging.Logger
  report_start: bool
  slow_threshold: Optional[float]
  start_time: float
  elapsed: Optional[float]
  def __init__(
    self,
    logger: Union[str, logging.Logger],
    title: str,
    *,
    report_start: bool = False,
    slow_threshold: Optional[float] = None,
  ):
    if isinstance(logger, logging.Logger):
      self.logger = logger
    else:
      self.logger = ProvisionedLogger().provision(logger)
    self.title = title
    self.report_start = report_start
    self.slow_threshold = slow_threshold
    self.elapsed = None

  def __enter__(self):
    if self.report_start:
      self.logger.debug(f"{self.title} - START")
    self.start_time = time.perf_counter()
    return self

  def __exit__(self, *args):
    self.elapsed = time.perf_counter() - self.start_time
    is_slow = self.slow_threshold is not None and self.elapsed > self.slow_threshold
    self.logger.log(
      logging.WARNING if is_slow else logging.DEBUG,
      f"{self.title} - {format_duration(self.elapsed)}{' (slow)' if is_slow else ''}"
    )

__all__ = [
  "TimeLogger",
  "format_duration",
]
