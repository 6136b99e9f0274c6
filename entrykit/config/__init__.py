from entrykit.config.settings import StartupSettings
from entrykit.config.target import DependencyTarget, parse_targets

__all__ = ["StartupSettings", "DependencyTarget", "parse_targets"]
