"""Build constraint evaluation mirroring go/build file selection."""

from __future__ import annotations

import os
import platform
import re
import sys
from dataclasses import dataclass, field
from typing import FrozenSet, List, Mapping, Optional

from ..errors import ParseError

KNOWN_OS = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "js",
        "linux",
        "nacl",
        "netbsd",
        "openbsd",
        "plan9",
        "solaris",
        "wasip1",
        "windows",
        "zos",
    }
)

UNIX_OS = frozenset(
    {
        "aix",
        "android",
        "darwin",
        "dragonfly",
        "freebsd",
        "hurd",
        "illumos",
        "ios",
        "linux",
        "netbsd",
        "openbsd",
        "solaris",
    }
)

KNOWN_ARCH = frozenset(
    {
        "386",
        "amd64",
        "amd64p32",
        "arm",
        "armbe",
        "arm64",
        "arm64be",
        "loong64",
        "mips",
        "mipsle",
        "mips64",
        "mips64le",
        "mips64p32",
        "mips64p32le",
        "ppc",
        "ppc64",
        "ppc64le",
        "riscv",
        "riscv64",
        "s390",
        "s390x",
        "sparc",
        "sparc64",
        "wasm",
    }
)

# Newest go1.N release tag considered satisfied.
LATEST_GO_MINOR = 25

_PLATFORM_OS = {
    "linux": "linux",
    "darwin": "darwin",
    "win32": "windows",
    "cygwin": "windows",
    "msys": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
    "dragonfly": "dragonfly",
    "aix": "aix",
    "sunos": "solaris",
    "emscripten": "js",
    "wasi": "wasip1",
}

_MACHINE_ARCH = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "loongarch64": "loong64",
    "mips64": "mips64",
    "mips": "mips",
}

_RELEASE_TAG = re.compile(r"^go1\.(\d+)$")
_TOKEN = re.compile(r"\s*(\|\||&&|!|\(|\)|[A-Za-z0-9_.]+)")


@dataclass(frozen=True)
class BuildContext:
    """Target platform and tags used to decide which files belong to a build."""

    goos: str
    goarch: str
    tags: FrozenSet[str] = field(default_factory=frozenset)
    cgo: bool = False

    @classmethod
    def from_environment(cls, env: Optional[Mapping[str, str]] = None) -> "BuildContext":
        """Honour ``GOOS``/``GOARCH``/``CGO_ENABLED`` and fall back to the host platform."""
        values = os.environ if env is None else env
        goos = values.get("GOOS") or _host_os()
        goarch = values.get("GOARCH") or _host_arch()
        return cls(goos=goos, goarch=goarch, cgo=values.get("CGO_ENABLED") == "1")

    def matches_tag(self, tag: str) -> bool:
        if tag in self.tags or tag == "gc":
            return True
        if tag == "cgo":
            return self.cgo
        if tag in {self.goos, self.goarch}:
            return True
        if tag == "unix":
            return self.goos in UNIX_OS
        if tag == "linux" and self.goos == "android":
            return True
        if tag == "solaris" and self.goos == "illumos":
            return True
        if tag == "darwin" and self.goos == "ios":
            return True
        release = _RELEASE_TAG.match(tag)
        if release:
            return 1 <= int(release.group(1)) <= LATEST_GO_MINOR
        return False

    def matches_file_name(self, name: str) -> bool:
        """Apply the ``*_GOOS``, ``*_GOARCH`` and ``*_GOOS_GOARCH`` name rules."""
        stem = name.split(".", 1)[0]
        if "_" not in stem:
            return True
        parts = stem[stem.index("_") :].split("_")
        if parts[-1] == "test":
            parts = parts[:-1]
        if len(parts) >= 2 and parts[-2] in KNOWN_OS and parts[-1] in KNOWN_ARCH:
            return self.matches_tag(parts[-2]) and self.matches_tag(parts[-1])
        if parts and (parts[-1] in KNOWN_OS or parts[-1] in KNOWN_ARCH):
            return self.matches_tag(parts[-1])
        return True

    def should_build(self, source: bytes, filename: str = "") -> bool:
        """Evaluate the header constraints of a Go file.

        A ``//go:build`` line takes precedence. Legacy ``// +build`` lines are
        consulted only when no ``//go:build`` line is present; each line is a
        space-separated OR of comma-separated ANDs, and all lines must hold.
        """
        go_build: Optional[str] = None
        plus_build: List[str] = []
        for line in _header_comments(source):
            if line.startswith("//go:build"):
                rest = line[len("//go:build") :]
                if rest and not rest[0].isspace():
                    continue
                if go_build is not None:
                    raise ParseError(f"{filename}: multiple //go:build comments")
                go_build = rest.strip()
                continue
            body = line[2:].strip()
            if body.startswith("+build") and (len(body) == 6 or body[6].isspace()):
                plus_build.append(body[6:].strip())

        if go_build is not None:
            return _ExpressionParser(go_build, self, filename).evaluate()
        return all(self._plus_build_line(line) for line in plus_build)

    def _plus_build_line(self, line: str) -> bool:
        for option in line.split():
            if all(self._plus_build_term(term) for term in option.split(",")):
                return True
        return False

    def _plus_build_term(self, term: str) -> bool:
        if term.startswith("!!") or not term:
            return False
        if term.startswith("!"):
            return not self.matches_tag(term[1:])
        return self.matches_tag(term)


class _ExpressionParser:
    """Recursive-descent evaluator for ``//go:build`` expressions."""

    def __init__(self, text: str, context: BuildContext, filename: str) -> None:
        self.context = context
        self.filename = filename
        self.tokens = self._tokenize(text)
        self.position = 0

    def _tokenize(self, text: str) -> List[str]:
        tokens: List[str] = []
        index = 0
        text = text.rstrip()
        while index < len(text):
            match = _TOKEN.match(text, index)
            if match is None:
                raise self._error(f"unexpected character in {text!r}")
            tokens.append(match.group(1))
            index = match.end()
        return tokens

    def _error(self, message: str) -> ParseError:
        prefix = f"{self.filename}: " if self.filename else ""
        return ParseError(f"{prefix}parsing //go:build line: {message}")

    def _peek(self) -> Optional[str]:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def _take(self) -> str:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of expression")
        self.position += 1
        return token

    def evaluate(self) -> bool:
        if not self.tokens:
            raise self._error("empty expression")
        result = self._or()
        if self._peek() is not None:
            raise self._error(f"unexpected token {self._peek()!r}")
        return result

    # Both operands are always parsed so malformed input is reported.
    def _or(self) -> bool:
        result = self._and()
        while self._peek() == "||":
            self._take()
            right = self._and()
            result = result or right
        return result

    def _and(self) -> bool:
        result = self._not()
        while self._peek() == "&&":
            self._take()
            right = self._not()
            result = result and right
        return result

    def _not(self) -> bool:
        if self._peek() == "!":
            self._take()
            return not self._not()
        return self._atom()

    def _atom(self) -> bool:
        token = self._take()
        if token == "(":
            result = self._or()
            if self._take() != ")":
                raise self._error("missing )")
            return result
        if token in {")", "||", "&&"}:
            raise self._error(f"unexpected token {token!r}")
        return self.context.matches_tag(token)


def _header_comments(source: bytes) -> List[str]:
    """Return the line comments preceding the package clause."""
    lines: List[str] = []
    in_block = False
    for raw in source.splitlines():
        line = raw.decode("utf-8", errors="replace").strip()
        if in_block:
            if "*/" in line:
                in_block = False
            continue
        if not line:
            continue
        if line.startswith("//"):
            lines.append(line)
            continue
        if line.startswith("/*"):
            in_block = "*/" not in line[2:]
            continue
        break
    return lines


def _host_os() -> str:
    for prefix, goos in _PLATFORM_OS.items():
        if sys.platform.startswith(prefix):
            return goos
    return sys.platform


def _host_arch() -> str:
    machine = platform.machine().lower()
    if machine in _MACHINE_ARCH:
        return _MACHINE_ARCH[machine]
    if machine.startswith("arm"):
        return "arm"
    return machine


__all__ = ["BuildContext", "KNOWN_ARCH", "KNOWN_OS", "LATEST_GO_MINOR", "UNIX_OS"]
