from .gate import GateOutcome, ReadinessGate, await_ready
from .probe import Probe, TcpProbe, HttpProbe, AutoProbe
from .retry import retry_until

__all__ = [
    "GateOutcome",
    "ReadinessGate",
    "await_ready",
    "Probe",
    "TcpProbe",
    "HttpProbe",
    "AutoProbe",
    "retry_until",
]
