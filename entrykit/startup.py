"""The linear startup pipeline run before handing off to the main process.

Configuration files are materialized first so that nothing checks dependent services against stale configuration.
The readiness gate runs second, and the main command is only started once every dependency is reachable.
"""

import logging
from typing import Mapping

from entrykit.config.settings import StartupSettings
from entrykit.error import EntrykitTimeoutError
from entrykit.gate.gate import ReadinessGate, GateOutcome
from entrykit.handoff import expand_command, exec_command
from entrykit.materialize.apply import apply_bindings

log = logging.getLogger(__name__)


def run_materializer(settings: StartupSettings) -> None:
    """Apply the settings' bindings to the configured root directory."""
    if not settings.materialize:
        log.debug("Placeholder substitution disabled")
        return
    changed = apply_bindings(settings.root, settings.bindings)
    log.debug(f"Updated {len(changed)} file(s) under {settings.root}")


def run_gate(settings: StartupSettings, **gate_options) -> GateOutcome:
    """Wait for the settings' services, raising if one of them times out

    :param settings: The startup settings
    :param gate_options: Extra arguments for ReadinessGate, such as a probe override
    :raises EntrykitTimeoutError: If a service is not ready inside its timeout
    """
    gate = ReadinessGate(interval=settings.interval, attempt_timeout=settings.attempt_timeout, **gate_options)
    outcome = gate.await_ready(settings.services, settings.timeout)
    if not outcome.is_ready:
        raise EntrykitTimeoutError(outcome.target, settings.timeout, elapsed=outcome.elapsed)
    return outcome


def run_startup(
    settings: StartupSettings,
    environ: Mapping[str, str],
    command: list[str] | None = None,
    expand: bool = True,
    **gate_options,
) -> None:
    """Materialize configuration, wait for services and hand off to command

    Returns only when there is no command to start.

    :param settings: The startup settings
    :param environ: The environment for variable expansion and for the started command
    :param command: The command and arguments to start once startup succeeded
    :param expand: Whether to expand variable references in the command
    :param gate_options: Extra arguments for ReadinessGate
    """
    run_materializer(settings)
    run_gate(settings, **gate_options)

    if not command:
        log.info("Startup succeeded, no command to start")
        return
    if expand:
        command = expand_command(command, environ)
    exec_command(command, environ)
