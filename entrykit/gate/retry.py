import time
from typing import Callable


def retry_until(
    predicate: Callable[[], bool],
    interval: float,
    deadline: float,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Call predicate at a fixed interval until it returns True or the deadline passes

    The predicate is always called at least once. There is no backoff or jitter; the last sleep is shortened so the
    final attempt happens at the deadline.

    :param predicate: Zero-argument callable returning True once the condition holds
    :param interval: Seconds to wait between attempts
    :param deadline: Absolute time, on the same scale as clock, after which no further attempt is started
    :param clock: Time source
    :param sleep: Sleep function
    :return: True if the predicate succeeded before the deadline, otherwise False
    """
    while True:
        if predicate():
            return True
        remaining = deadline - clock()
        if remaining <= 0:
            return False
        sleep(min(interval, remaining))
