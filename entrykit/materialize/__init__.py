from .bindings import Binding, derive_bindings
from .apply import apply_bindings, materialize

__all__ = ["Binding", "derive_bindings", "apply_bindings", "materialize"]
