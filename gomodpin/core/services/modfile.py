"""
go.mod parser — turns manifest text into a ``Manifest``.

Line-oriented, like the go.mod grammar itself. Handles ``//`` comments,
quoted and back-quoted strings, single-line directives and
``verb ( ... )`` blocks for:

    module, go, toolchain, godebug, require, replace, exclude, retract,
    tool, ignore

Only ``require``, ``replace`` and ``exclude`` feed the pin pipeline;
the rest are validated and dropped.

Errors are raised as ``ManifestParseError`` with a ``file:line: reason``
message, which the CLI shows verbatim.
"""

from __future__ import annotations

import json
import logging
import re

from gomodpin.core.errors import ManifestParseError
from gomodpin.core.models.manifest import (
    ExcludeDirective,
    Manifest,
    ModuleRef,
    ReplaceDirective,
)

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Grammar constants
# ═══════════════════════════════════════════════════════════════════

BLOCK_VERBS = frozenset({
    "require", "replace", "exclude", "retract", "godebug", "tool", "ignore",
})

_PUNCT = "()[],"
_ARROW = "=>"

_SEMVER_RE = re.compile(
    r"^v(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(-[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?"
    r"(\+incompatible)?$"
)
_GO_VERSION_RE = re.compile(r"^[1-9]\d*\.(0|[1-9]\d*)(\.(0|[1-9]\d*))?([a-z]+[0-9]+)?$")

_REPLACE_USAGE = (
    "usage: replace module/path [v1.2.3] => other/module v1.4\n"
    "\t or replace module/path [v1.2.3] => ../local/directory"
)


# ═══════════════════════════════════════════════════════════════════
#  Tokenizer
# ═══════════════════════════════════════════════════════════════════


def _tokenize(line: str, filename: str, lineno: int) -> list[str]:
    """Split one line into tokens, dropping any ``//`` comment."""
    tokens: list[str] = []
    i, n = 0, len(line)
    while i < n:
        c = line[i]
        if c.isspace():
            i += 1
            continue
        if line.startswith("//", i):
            break
        if line.startswith(_ARROW, i):
            tokens.append(_ARROW)
            i += 2
            continue
        if c in _PUNCT:
            tokens.append(c)
            i += 1
            continue
        if c == '"':
            j = i + 1
            while j < n and line[j] != '"':
                if line[j] == "\\":
                    j += 1
                j += 1
            if j >= n:
                raise ManifestParseError(filename, lineno, "unterminated quoted string")
            tokens.append(_unquote(line[i:j + 1], filename, lineno))
            i = j + 1
            continue
        if c == "`":
            j = line.find("`", i + 1)
            if j < 0:
                raise ManifestParseError(filename, lineno, "unterminated raw string")
            tokens.append(line[i + 1:j])
            i = j + 1
            continue

        j = i
        while (
            j < n
            and not line[j].isspace()
            and line[j] not in _PUNCT + '"`'
            and not line.startswith("//", j)
            and not line.startswith(_ARROW, j)
        ):
            j += 1
        tokens.append(line[i:j])
        i = j
    return tokens


def _unquote(raw: str, filename: str, lineno: int) -> str:
    try:
        value = json.loads(raw)
    except ValueError as e:
        raise ManifestParseError(filename, lineno, f"invalid quoted string {raw}: {e}") from e
    return value


# ═══════════════════════════════════════════════════════════════════
#  Validation helpers
# ═══════════════════════════════════════════════════════════════════


def is_directory_path(path: str) -> bool:
    """True for a local replacement target (rooted, ./ or ../)."""
    return (
        path.startswith(("/", "./", "../", ".\\", "..\\"))
        or path in (".", "..")
        or bool(re.match(r"^[A-Za-z]:[\\/]", path))
    )


def _check_version(version: str, filename: str, lineno: int) -> str:
    if not _SEMVER_RE.match(version):
        raise ManifestParseError(
            filename, lineno,
            f"invalid version {version!r}: must be of the form v1.2.3",
        )
    return version


# ═══════════════════════════════════════════════════════════════════
#  Parser
# ═══════════════════════════════════════════════════════════════════


class _ModfileParser:
    """Accumulates directives into a Manifest, one line at a time."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        self.manifest = Manifest()
        self._seen_module = False
        self._seen_go = False

    def error(self, lineno: int, message: str) -> ManifestParseError:
        return ManifestParseError(self.filename, lineno, message)

    def parse(self, text: str) -> Manifest:
        block_verb: str | None = None
        block_start = 0

        for lineno, line in enumerate(text.split("\n"), start=1):
            line = line.removesuffix("\r")
            tokens = _tokenize(line, self.filename, lineno)
            if not tokens:
                continue

            if block_verb is not None:
                if tokens[0] == ")":
                    if len(tokens) > 1:
                        raise self.error(lineno, "unexpected tokens after ')'")
                    block_verb = None
                    continue
                self.directive(block_verb, tokens, lineno)
                continue

            verb, args = tokens[0], tokens[1:]
            if verb == ")":
                raise self.error(lineno, "unexpected ')'")
            if args and args[0] == "(":
                if verb not in BLOCK_VERBS:
                    raise self.error(lineno, f"{verb} does not accept a block")
                if args == ["(", ")"]:
                    continue
                if len(args) > 1:
                    raise self.error(lineno, "unexpected tokens after '('")
                block_verb, block_start = verb, lineno
                continue

            self.directive(verb, args, lineno)

        if block_verb is not None:
            raise self.error(block_start, f"{block_verb} block is not closed")

        return self.manifest

    # ── Directives ──────────────────────────────────────────────

    def directive(self, verb: str, args: list[str], lineno: int) -> None:
        handler = getattr(self, f"_on_{verb}", None)
        if handler is None:
            raise self.error(lineno, f"unknown directive: {verb}")
        handler(args, lineno)

    def _on_module(self, args: list[str], lineno: int) -> None:
        if self._seen_module:
            raise self.error(lineno, "repeated module statement")
        if len(args) != 1:
            raise self.error(lineno, "usage: module module/path")
        self._seen_module = True
        self.manifest.module_path = args[0]

    def _on_go(self, args: list[str], lineno: int) -> None:
        if self._seen_go:
            raise self.error(lineno, "repeated go statement")
        if len(args) != 1:
            raise self.error(lineno, "go directive expects exactly one argument")
        if not _GO_VERSION_RE.match(args[0]):
            raise self.error(lineno, f"invalid go version '{args[0]}': must match format 1.23.0")
        self._seen_go = True
        self.manifest.go_version = args[0]

    def _on_toolchain(self, args: list[str], lineno: int) -> None:
        if len(args) != 1:
            raise self.error(lineno, "toolchain directive expects exactly one argument")

    def _on_godebug(self, args: list[str], lineno: int) -> None:
        if len(args) != 1 or "=" not in args[0]:
            raise self.error(lineno, "usage: godebug key=value")

    def _on_tool(self, args: list[str], lineno: int) -> None:
        if len(args) != 1:
            raise self.error(lineno, "tool directive expects exactly one argument")

    def _on_ignore(self, args: list[str], lineno: int) -> None:
        if len(args) != 1:
            raise self.error(lineno, "ignore directive expects exactly one argument")

    def _on_require(self, args: list[str], lineno: int) -> None:
        if len(args) != 2:
            raise self.error(lineno, "usage: require module/path v1.2.3")
        path, version = args
        self.manifest.requires.append(
            ModuleRef(path=path, version=_check_version(version, self.filename, lineno))
        )

    def _on_exclude(self, args: list[str], lineno: int) -> None:
        if len(args) != 2:
            raise self.error(lineno, "usage: exclude module/path v1.2.3")
        path, version = args
        self.manifest.excludes.append(
            ExcludeDirective(path=path, version=_check_version(version, self.filename, lineno))
        )

    def _on_replace(self, args: list[str], lineno: int) -> None:
        try:
            arrow = args.index(_ARROW)
        except ValueError:
            raise self.error(lineno, _REPLACE_USAGE) from None

        left, right = args[:arrow], args[arrow + 1:]
        if len(left) not in (1, 2) or len(right) not in (1, 2):
            raise self.error(lineno, _REPLACE_USAGE)

        old = ModuleRef(path=left[0])
        if len(left) == 2:
            old.version = _check_version(left[1], self.filename, lineno)

        new = ModuleRef(path=right[0])
        if len(right) == 2:
            if is_directory_path(new.path):
                raise self.error(
                    lineno, "replacement module directory path must not have version"
                )
            new.version = _check_version(right[1], self.filename, lineno)
        elif not is_directory_path(new.path):
            raise self.error(
                lineno,
                "replacement module without version must be directory path "
                "(rooted or starting with ./ or ../)",
            )

        self.manifest.replaces.append(ReplaceDirective(old=old, new=new))

    def _on_retract(self, args: list[str], lineno: int) -> None:
        if len(args) == 1:
            _check_version(args[0], self.filename, lineno)
            return
        if len(args) == 5 and args[0] == "[" and args[2] == "," and args[4] == "]":
            _check_version(args[1], self.filename, lineno)
            _check_version(args[3], self.filename, lineno)
            return
        raise self.error(lineno, "usage: retract version or retract [low, high]")


def parse_modfile(filename: str, data: bytes | str) -> Manifest:
    """Parse go.mod content.

    Args:
        filename: Name used in error messages (usually the path given on the CLI).
        data: Raw file bytes, or already-decoded text.

    Returns:
        Manifest with requires, replaces and excludes in file order.

    Raises:
        ManifestParseError: If the content is not a valid go.mod.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            lineno = data.count(b"\n", 0, e.start) + 1
            raise ManifestParseError(filename, lineno, "invalid UTF-8 encoding") from e
    else:
        text = data

    manifest = _ModfileParser(filename).parse(text)
    logger.debug(
        "Parsed %s: %d require, %d replace, %d exclude",
        filename, len(manifest.requires), len(manifest.replaces), len(manifest.excludes),
    )
    return manifest
