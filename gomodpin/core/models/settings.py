"""
PinSettings — tool configuration loaded from .gomodpin.yml.

Immutable once loaded; CLI flags produce a new instance via
``with_overrides`` rather than mutating it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from gomodpin.core.services.exclusions import DEFAULT_EXCLUDES


class PinSettings(BaseModel):
    """Which modules are kept out of the pin block."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_excludes: tuple[str, ...] = DEFAULT_EXCLUDES
    exclude: tuple[str, ...] = ()
    use_default_excludes: bool = True

    def with_overrides(
        self,
        *,
        extra_excludes: tuple[str, ...] | list[str] = (),
        no_default_excludes: bool = False,
    ) -> PinSettings:
        """Return a copy with CLI flags applied on top."""
        return self.model_copy(update={
            "exclude": self.exclude + tuple(extra_excludes),
            "use_default_excludes": self.use_default_excludes and not no_default_excludes,
        })
