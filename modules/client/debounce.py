from contextlib import contextmanager
from dataclasses import dataclass
import datetime
import itertools
import threading
from typing import Any, Callable, Iterator, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.background import BackgroundScheduler

from modules.logger import ProvisionedLogger

logger = ProvisionedLogger().provision("Debouncer")
# Register apscheduler logger
ProvisionedLogger().provision("apscheduler")

@dataclass
class PendingCall:
  fn: Callable[..., Any]
  args: tuple[Any, ...]
  # Identifies the job that was scheduled for this call
  generation: int

class Debouncer:
  """Collapses bursts of calls that share a key into a single call.

  Every ``call`` cancels the job that is pending for that key and schedules a new one ``wait`` seconds later,
  so the function only runs once the key has been quiet for ``wait`` seconds, and only with the latest arguments."""
  wait: float
  scheduler: BackgroundScheduler
  lock: threading.RLock
  pending: dict[str, PendingCall]
  generations: Iterator[int]

  def __init__(self, wait: float, *, scheduler: Optional[BackgroundScheduler] = None):
    self.wait = wait
    self.scheduler = scheduler if scheduler is not None else BackgroundScheduler(
      jobstores=dict(
        default=MemoryJobStore(),
      ),
    )
    self.lock = threading.RLock()
    self.pending = {}
    self.generations = itertools.count()

  def call(self, key: str, fn: Callable[..., Any], *args: Any):
    with self.lock:
      is_rescheduled = key in self.pending
      generation = next(self.generations)
      self.pending[key] = PendingCall(fn=fn, args=args, generation=generation)
      run_date = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(seconds=self.wait)
      self.scheduler.add_job(
        self._fire,
        trigger="date",
        run_date=run_date,
        args=[key, generation],
        id=key,
        # Replacing the job cancels the previous timer.
        replace_existing=True,
        misfire_grace_time=None,
        max_instances=1,
      )
    logger.debug(f"{'Rescheduled' if is_rescheduled else 'Scheduled'} {key} to run in {self.wait} seconds.")

  def _fire(self, key: str, generation: Optional[int] = None):
    """Runs the call pending for ``key``. Timers pass the generation they were scheduled for, so a timer that was
    already running when the call got replaced leaves the newer call to its own timer."""
    with self.lock:
      pending = self.pending.get(key, None)
      if pending is None:
        # Already flushed or cancelled.
        return
      if generation is not None and pending.generation != generation:
        logger.debug(f"Skipping the outdated timer of {key}.")
        return
      self.pending.pop(key)
    logger.debug(f"Running debounced call {key}.")
    pending.fn(*pending.args)

  def __remove_job(self, key: str):
    try:
      self.scheduler.remove_job(key)
    except JobLookupError:
      pass

  def is_pending(self, key: str)->bool:
    with self.lock:
      return key in self.pending

  def cancel(self, key: str):
    with self.lock:
      self.__remove_job(key)
      cancelled = self.pending.pop(key, None)
    if cancelled is not None:
      logger.debug(f"Cancelled the pending call {key}.")

  def flush(self, key: str):
    """Runs the pending call for ``key`` right now instead of waiting for the timer."""
    with self.lock:
      self.__remove_job(key)
    self._fire(key)

  def flush_all(self):
    with self.lock:
      keys = list(self.pending.keys())
    for key in keys:
      self.flush(key)

  @contextmanager
  def run(self):
    self.scheduler.start()
    try:
      yield self
    finally:
      logger.info("Flushing pending calls and shutting down the debouncer...")
      try:
        self.flush_all()
      finally:
        self.scheduler.shutdown(wait=True)

__all__ = [
  "Debouncer",
]
