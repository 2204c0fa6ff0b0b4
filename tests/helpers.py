"""Shared test helpers for NØDE timer."""


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class EventLog:
    """Records every notification from an IntervalTimer, in order."""

    def __init__(self, timer):
        self.events: list[tuple] = []
        timer.tick.connect(lambda r, p, n: self.events.append(("tick", r, p, n)))
        timer.phase_changed.connect(lambda p, n: self.events.append(("phase", p, n)))
        timer.completed.connect(lambda: self.events.append(("completed",)))

    def of(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]


def run_ticks(timer, n: int) -> None:
    """Deliver *n* one-second ticks without waiting on the clock."""
    for _ in range(n):
        timer._on_tick()


class FakeSpeaker:
    """Stands in for QTextToSpeech."""

    def __init__(self):
        self.said: list[str] = []
        self.stops = 0
        self.volume = None
        self.rate = None
        self.pitch = None

    def say(self, text):
        self.said.append(text)

    def stop(self):
        self.stops += 1

    def setVolume(self, volume):
        self.volume = volume

    def setRate(self, rate):
        self.rate = rate

    def setPitch(self, pitch):
        self.pitch = pitch


class FakeSounds:
    """Same surface as SoundManager; records what would have played."""

    def __init__(self):
        self.played: list[str] = []
        self.enabled = True
        self.volume = 80

    def set_enabled(self, enabled):
        self.enabled = enabled

    def set_volume(self, level):
        self.volume = level

    def play(self, name):
        if self.enabled:
            self.played.append(name)
