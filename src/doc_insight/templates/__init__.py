# Analysis template catalog

from .registry import BUILTIN_TEMPLATES, TemplateRegistry, default_registry

__all__ = [
    "BUILTIN_TEMPLATES",
    "TemplateRegistry",
    "default_registry",
]
