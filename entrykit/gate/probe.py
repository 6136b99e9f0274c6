import abc
import logging
import socket

import requests

from entrykit.config.target import DependencyTarget

log = logging.getLogger(__name__)


class Probe(abc.ABC):
    """Checks whether a single dependency target is ready."""

    @abc.abstractmethod
    def is_ready(self, target: DependencyTarget, timeout: float) -> bool:
        """Make one readiness attempt against target

        Connection failures are reported by returning False, never raised.

        :param target: The target to check
        :param timeout: Upper bound in seconds for this single attempt
        """
        raise NotImplementedError("Subclasses must implement the 'is_ready' method.")


class TcpProbe(Probe):
    """Ready once a TCP connection to the target can be completed."""

    def is_ready(self, target: DependencyTarget, timeout: float) -> bool:
        try:
            with socket.create_connection((target.host, target.port), timeout=timeout):
                return True
        except OSError as e:
            log.debug(f"Connection to {target.host}:{target.port} failed: {e}")
            return False


class HttpProbe(Probe):
    """Ready once an HTTP GET against the target URL answers with a 2xx or 3xx status."""

    def __init__(self, session: requests.Session | None = None):
        self.session = session or requests.Session()

    def is_ready(self, target: DependencyTarget, timeout: float) -> bool:
        url = target.url or f"http://{target.host}:{target.port}/"
        try:
            response = self.session.get(url, timeout=timeout, allow_redirects=True)
        except requests.RequestException as e:
            log.debug(f"Request to {url} failed: {e}")
            return False
        if not 200 <= response.status_code < 400:
            log.debug(f"Request to {url} returned status {response.status_code}")
            return False
        return True


class AutoProbe(Probe):
    """Uses an HTTP check for targets given as URLs and a TCP connect for everything else."""

    def __init__(self, tcp: Probe | None = None, http: Probe | None = None):
        self.tcp = tcp or TcpProbe()
        self.http = http or HttpProbe()

    def is_ready(self, target: DependencyTarget, timeout: float) -> bool:
        if target.is_http:
            return self.http.is_ready(target, timeout)
        return self.tcp.is_ready(target, timeout)
