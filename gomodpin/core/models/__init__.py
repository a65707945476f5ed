"""
Domain models — Pydantic types for the pin pipeline.

    from gomodpin.core.models import Manifest, ModuleRef, ReplaceDirective
"""

from gomodpin.core.models.manifest import (
    ExcludeDirective,
    Manifest,
    ModuleRef,
    ReplaceDirective,
)

__all__ = [
    "ExcludeDirective",
    "Manifest",
    "ModuleRef",
    "ReplaceDirective",
]
