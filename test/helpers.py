from entrykit.config.target import DependencyTarget
from entrykit.gate.probe import Probe


class FakeClock:
    """Deterministic clock whose sleep advances time instead of blocking."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProbe(Probe):
    """Probe returning scripted results per target and recording every attempt."""

    def __init__(self, ready: dict[str, bool] | None = None, clock: FakeClock | None = None, cost: float = 0.0):
        self.ready = ready or {}
        self.clock = clock
        self.cost = cost
        self.calls: list[tuple[str, float]] = []

    def is_ready(self, target, timeout: float) -> bool:
        self.calls.append((str(target), timeout))
        if self.clock is not None and self.cost:
            self.clock.advance(min(self.cost, timeout))
        result = self.ready.get(str(target), False)
        if callable(result):
            return result()
        return result

    def probed(self) -> list[str]:
        return [target for target, _ in self.calls]


def make_targets(*tokens: str) -> list[DependencyTarget]:
    """Parse target tokens into dependency targets."""
    return [DependencyTarget.parse(token) for token in tokens]
