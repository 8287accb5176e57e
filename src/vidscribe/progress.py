"""Progress indicators for long-running pipeline phases."""

from __future__ import annotations

import abc
import sys
import threading
import time
from dataclasses import dataclass

_BRAILLE = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
_FILLED = "█"
_EMPTY = "░"
_BAR_WIDTH = 20
_INTERVAL = 0.1


def _frame() -> str:
    return _BRAILLE[int(time.time() / _INTERVAL) % len(_BRAILLE)]


def _bar(fraction: float) -> str:
    filled = int(fraction * _BAR_WIDTH)
    return f"[{_FILLED * filled}{_EMPTY * (_BAR_WIDTH - filled)}] {int(fraction * 100):3d}%"


class _Ticker(abc.ABC):
    """Redraws on a background thread every ``_INTERVAL`` seconds until halted."""

    def __init__(self) -> None:
        self._stderr = sys.stderr
        self._halt_event = threading.Event()
        self._thread: threading.Thread | None = None

    def _start_ticking(self) -> None:
        if self._thread is not None:
            return
        self._halt_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _stop_ticking(self) -> None:
        self._halt_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _run(self) -> None:
        while not self._halt_event.is_set():
            self._tick()
            time.sleep(_INTERVAL)

    @abc.abstractmethod
    def _tick(self) -> None:
        """Draw one frame."""


class Spinner(_Ticker):
    """Indeterminate spinner shown while waiting on a single remote call."""

    def __init__(self, label: str) -> None:
        super().__init__()
        self._label = label

    def __enter__(self) -> Spinner:
        self._stderr = sys.stderr
        self._start_ticking()
        return self

    def __exit__(self, *_exc) -> None:
        self._stop_ticking()
        self._stderr.write(f"\r  ✔ {self._label} done.\033[K\n")
        self._stderr.flush()

    def _tick(self) -> None:
        self._stderr.write(f"\r  {_frame()} {self._label}\033[K")
        self._stderr.flush()


@dataclass
class _Step:
    key: str
    label: str


class PipelineProgress(_Ticker):
    """Checklist of pipeline steps redrawn in place on stderr.

    A step is pending, active, done or failed. An active step shows a bar once
    it has reported a fraction, otherwise a spinner. Reported fractions never
    move backwards, since chunks can settle in any order.
    """

    def __init__(self, *, chunks: int = 0, chapters: bool = False) -> None:
        super().__init__()
        self._steps = [
            _Step("transcribing", f"Transcribing {chunks} chunks" if chunks else "Transcribing"),
            _Step("assembling", "Assembling captions"),
        ]
        if chapters:
            self._steps.append(_Step("chapters", "Generating chapters"))
        self._step_map = {s.key: s for s in self._steps}
        self._active: set[str] = set()
        self._completed: set[str] = set()
        self._failed: set[str] = set()
        self._progress: dict[str, float] = {}
        self._lock = threading.Lock()
        self._lines_rendered = 0

    def __enter__(self) -> PipelineProgress:
        self._stderr = sys.stderr
        return self

    def __exit__(self, *_exc) -> None:
        self._stop_ticking()
        with self._lock:
            self._completed.update(self._active)
            self._active.clear()
            self._progress.clear()
        if self._lines_rendered or self._completed or self._failed:
            self._render_all(final=True)

    def begin(self, key: str) -> None:
        with self._lock:
            if key not in self._step_map:
                return
            # Steps run one at a time
            self._completed.update(self._active)
            self._active = {key}
            self._progress.clear()
        self._start_ticking()

    def complete(self, key: str) -> None:
        self._settle(key, self._completed)

    def fail(self, key: str) -> None:
        """Mark a step as failed instead of completed."""
        self._settle(key, self._failed)

    def _settle(self, key: str, bucket: set[str]) -> None:
        with self._lock:
            if key not in self._step_map:
                return
            self._active.discard(key)
            self._progress.pop(key, None)
            bucket.add(key)

    def update(self, key: str, fraction: float) -> None:
        with self._lock:
            if key in self._step_map:
                fraction = max(0.0, min(1.0, fraction))
                self._progress[key] = max(fraction, self._progress.get(key, 0.0))

    def percent_callback(self, key: str):
        """Adapter for callbacks that report whole percentages."""
        return lambda percent: self.update(key, percent / 100.0)

    def _line(self, step: _Step, frame: str) -> str:
        if step.key in self._failed:
            return f"  ✘ {step.label} failed."
        if step.key in self._completed:
            return f"  ✔ {step.label} done."
        if step.key not in self._active:
            return f"  ○ {step.label}"
        fraction = self._progress.get(step.key)
        if fraction is None:
            return f"  {frame} {step.label}"
        return f"  {step.label:<24s} {_bar(fraction)}"

    def _render_all(self, *, final: bool = False) -> None:
        frame = "" if final else _frame()
        with self._lock:
            lines = [self._line(step, frame) for step in self._steps]

        if self._lines_rendered:
            self._stderr.write(f"\033[{self._lines_rendered}A")
        self._stderr.write("".join(f"{line}\033[K\n" for line in lines))
        self._stderr.flush()
        self._lines_rendered = len(lines)

    def _tick(self) -> None:
        self._render_all()


class NullProgress:
    """No-op progress for when no display is needed."""

    def begin(self, key: str) -> None:
        pass

    def complete(self, key: str) -> None:
        pass

    def fail(self, key: str) -> None:
        pass

    def update(self, key: str, fraction: float) -> None:
        pass

    def percent_callback(self, key: str):
        return lambda percent: None

    def __enter__(self) -> NullProgress:
        return self

    def __exit__(self, *_exc) -> None:
        pass
