"""Readiness gate for container startup.

The gate checks an ordered list of dependency targets one after another. Each target gets its own full timeout
window, measured from the moment checking that target begins. The first target that does not become ready inside its
window stops the gate; later targets are never checked.
"""

import logging
import time
from typing import Annotated, Callable, Iterable, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from entrykit.config.target import DependencyTarget
from entrykit.const import (
    GateStatusEnum,
    DEFAULT_INTERVAL,
    DEFAULT_ATTEMPT_TIMEOUT,
    MIN_ATTEMPT_TIMEOUT,
)
from entrykit.gate.probe import Probe, AutoProbe
from entrykit.gate.retry import retry_until

log = logging.getLogger(__name__)


class GateOutcome(BaseModel):
    """Terminal result of a readiness gate run."""

    model_config = ConfigDict(frozen=True)

    status: GateStatusEnum
    target: Annotated[DependencyTarget | None, Field(default=None)]
    elapsed: Annotated[float, Field(default=0.0, ge=0.0)]

    @model_validator(mode="after")
    def check_target_matches_status(self) -> Self:
        """Ensure a failing target is recorded only for timed out outcomes."""
        if self.status == GateStatusEnum.TIMED_OUT and self.target is None:
            raise ValueError("A timed out outcome must name the target that timed out.")
        if self.status == GateStatusEnum.READY and self.target is not None:
            raise ValueError("A ready outcome must not name a target.")
        return self

    @property
    def is_ready(self) -> bool:
        return self.status == GateStatusEnum.READY

    @classmethod
    def ready(cls, elapsed: float = 0.0) -> "GateOutcome":
        return cls(status=GateStatusEnum.READY, elapsed=elapsed)

    @classmethod
    def timed_out(cls, target: DependencyTarget, elapsed: float = 0.0) -> "GateOutcome":
        return cls(status=GateStatusEnum.TIMED_OUT, target=target, elapsed=elapsed)


class ReadinessGate:
    """Blocks until every target is ready or one of them runs out of time."""

    def __init__(
        self,
        probe: Probe | None = None,
        interval: float = DEFAULT_INTERVAL,
        attempt_timeout: float = DEFAULT_ATTEMPT_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval <= 0:
            raise ValueError("Poll interval must be greater than 0.")
        if attempt_timeout <= 0:
            raise ValueError("Attempt timeout must be greater than 0.")
        self.probe = probe or AutoProbe()
        self.interval = interval
        self.attempt_timeout = attempt_timeout
        self.clock = clock
        self.sleep = sleep

    def _attempt_timeout(self, deadline: float) -> float:
        remaining = deadline - self.clock()
        return min(self.attempt_timeout, max(remaining, MIN_ATTEMPT_TIMEOUT))

    def wait_for(self, target: DependencyTarget, timeout: float) -> bool:
        """Poll a single target until it is ready or its own timeout elapses

        :param target: The target to poll
        :param timeout: Seconds allowed for this target
        :return: True if the target became ready in time
        """
        deadline = self.clock() + timeout
        return retry_until(
            lambda: self.probe.is_ready(target, self._attempt_timeout(deadline)),
            interval=self.interval,
            deadline=deadline,
            clock=self.clock,
            sleep=self.sleep,
        )

    def await_ready(self, targets: Iterable[DependencyTarget], timeout: float) -> GateOutcome:
        """Check targets in order, each with its own timeout window

        :param targets: The ordered targets to wait for
        :param timeout: Seconds allowed per target
        :return: A ready outcome, or a timed out outcome naming the first target that was not ready in time
        """
        targets = list(targets)
        if not targets:
            log.debug("No services to wait for")
            return GateOutcome.ready()

        start = self.clock()
        for target in targets:
            if target.is_http:
                log.info(f"Waiting for service {target} with timeout {timeout:g}")
            else:
                log.info(f"Waiting for service {target.host} port {target.port} with timeout {timeout:g}")
            if not self.wait_for(target, timeout):
                elapsed = self.clock() - start
                log.error(f"Service {target} was not ready after {timeout:g}s")
                return GateOutcome.timed_out(target, elapsed=max(elapsed, 0.0))
            log.debug(f"Service {target} is ready")

        return GateOutcome.ready(elapsed=max(self.clock() - start, 0.0))


def await_ready(targets: Iterable[DependencyTarget], timeout: float, **kwargs) -> GateOutcome:
    """Run a readiness gate with default settings

    :param targets: The ordered targets to wait for
    :param timeout: Seconds allowed per target
    :param kwargs: Extra arguments for ReadinessGate
    """
    return ReadinessGate(**kwargs).await_ready(targets, timeout)
