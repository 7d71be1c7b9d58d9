"""Countdown clock that drives one quiz session in real time.

Used by the terminal runner. The clock owns exactly one countdown thread at a
time; loading new questions or restarting cancels the running one before
anything else happens.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from pdfquiz.services import quiz_session
from pdfquiz.services.quiz_session import QuizSession

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[QuizSession, str], None]


class SessionClock:
    """Holds the active QuizSession behind a lock and ticks it once per interval.

    ``on_change(session, reason)`` is called after every transition with reason
    one of ``load``, ``select``, ``tick``, ``advance``, ``timeout``, ``restart``.
    The callback runs while the lock is held and must not call back into the clock.
    """

    def __init__(
        self,
        interval: float = 1.0,
        time_limit: int = quiz_session.QUESTION_TIME_LIMIT,
        on_change: Optional[ChangeCallback] = None,
        expected_length: Optional[int] = quiz_session.QUIZ_LENGTH,
    ):
        self.interval = interval
        self.time_limit = time_limit
        self.expected_length = expected_length
        self._on_change = on_change
        self._lock = threading.RLock()
        self._session = quiz_session.restart()
        self._thread: Optional[threading.Thread] = None
        self._stop: Optional[threading.Event] = None
        self._finished = threading.Event()

    @property
    def session(self) -> QuizSession:
        with self._lock:
            return self._session

    @property
    def running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def wait_until_completed(self, timeout: Optional[float] = None) -> bool:
        return self._finished.wait(timeout)

    def load(self, questions) -> QuizSession:
        """Start a fresh session for ``questions`` with its own countdown."""
        with self._lock:
            self._cancel_countdown()
            self._session = quiz_session.start_session(
                questions,
                time_limit=self.time_limit,
                expected_length=self.expected_length,
            )
            self._finished.clear()
            self._notify("load")
            self._start_countdown()
            return self._session

    def select(self, option: str) -> QuizSession:
        with self._lock:
            self._session = quiz_session.select_option(self._session, option)
            self._notify("select")
            return self._session

    def next(self) -> QuizSession:
        """Manual "Next": the same ``advance`` a timeout uses."""
        with self._lock:
            self._session = quiz_session.advance(self._session)
            self._after_advance("advance")
            return self._session

    def restart(self) -> QuizSession:
        with self._lock:
            self._cancel_countdown()
            self._session = quiz_session.restart(self._session)
            self._finished.clear()
            self._notify("restart")
            return self._session

    def stop(self) -> None:
        with self._lock:
            self._cancel_countdown()

    # ------------------------------------------------------------

    def _start_countdown(self) -> None:
        stop = threading.Event()
        thread = threading.Thread(
            target=self._run, args=(stop,), name="quiz-countdown", daemon=True
        )
        self._stop = stop
        self._thread = thread
        thread.start()

    def _cancel_countdown(self) -> None:
        # The old worker re-checks its event under the lock before ticking.
        if self._stop is not None:
            self._stop.set()
        self._stop = None
        self._thread = None

    def _run(self, stop: threading.Event) -> None:
        while not stop.wait(self.interval):
            with self._lock:
                # A newer countdown or a restart owns the session now.
                if stop.is_set():
                    return
                before = self._session.current_index
                self._session = quiz_session.tick(self._session)
                if (
                    self._session.is_completed
                    or self._session.current_index != before
                ):
                    self._after_advance("timeout")
                else:
                    self._notify("tick")
                if self._session.is_completed:
                    return

    def _after_advance(self, reason: str) -> None:
        self._notify(reason)
        if self._session.is_completed:
            if self._stop is not None:
                self._stop.set()
            self._finished.set()

    def _notify(self, reason: str) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self._session, reason)
        except Exception:
            logger.exception("Session change callback failed (%s)", reason)


__all__ = ["SessionClock"]
