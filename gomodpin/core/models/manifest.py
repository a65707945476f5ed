"""
Manifest models — the structured view of a go.mod.

Produced by the modfile parser, consumed by the resolver and the
exclusion filter. Lists keep the order they appear in the file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ModuleRef(BaseModel):
    """A module path at a version.

    An empty ``version`` means "no usable version" (for example the
    target of a replace pointing at a local directory).
    """

    path: str
    version: str = ""

    def __str__(self) -> str:
        return f"{self.path}@{self.version}" if self.version else self.path


class ReplaceDirective(BaseModel):
    """``replace old [version] => new [version]``."""

    old: ModuleRef
    new: ModuleRef

    @property
    def is_self_replace(self) -> bool:
        """True when the directive points a module at itself (a version pin)."""
        return self.old.path == self.new.path


class ExcludeDirective(BaseModel):
    """``exclude path version``."""

    path: str
    version: str


class Manifest(BaseModel):
    """Everything the pin pipeline needs from a go.mod."""

    module_path: str = ""
    go_version: str = ""
    requires: list[ModuleRef] = Field(default_factory=list)
    replaces: list[ReplaceDirective] = Field(default_factory=list)
    excludes: list[ExcludeDirective] = Field(default_factory=list)
