"""Read-only version table mapping property names to coordinate strings."""

from __future__ import annotations

import logging
import os
import types
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional

import yaml

from .errors import ModweaverError

logger = logging.getLogger(__name__)

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class VersionTable(Mapping):
    """Immutable ``str -> str`` mapping; a missing key means "no artifact"."""

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self._entries = types.MappingProxyType(dict(entries or {}))

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"VersionTable({len(self)} entries)"

    @classmethod
    def load(cls, path: str) -> "VersionTable":
        """Load a table from a ``.properties`` or YAML file, chosen by extension."""
        if not os.path.isfile(path):
            raise FileNotFoundError(path)
        lower = path.lower()
        if lower.endswith((".yml", ".yaml")):
            table = cls.from_yaml_file(path)
        else:
            with open(path, "r", encoding="utf-8") as fh:
                table = cls.from_properties(fh.read())
        logger.info("Loaded %d version table entries from %s", len(table), path)
        return table

    @classmethod
    def from_yaml_file(cls, path: str) -> "VersionTable":
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ModweaverError(f"Version table {path} must be a mapping")
        return cls({str(k): str(v) for k, v in data.items() if v is not None})

    @classmethod
    def from_properties(cls, text: str) -> "VersionTable":
        """Parse Java properties syntax: ``=``/``:``/whitespace separators,
        ``#``/``!`` comments, backslash continuations and escapes."""
        entries: Dict[str, str] = {}
        for line in _logical_lines(text):
            key, value = _split_property(line)
            entries[_unescape(key)] = _unescape(value)
        return cls(entries)


def _logical_lines(text: str) -> Iterator[str]:
    pending: List[str] = []
    for physical in text.splitlines():
        line = physical.lstrip() if pending else physical.strip()
        if not pending and (not line or line[0] in "#!"):
            continue
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending.append(line[:-1])
            continue
        pending.append(line)
        yield "".join(pending)
        pending = []
    if pending:
        yield "".join(pending)


def _split_property(line: str):
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=: \t":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(" \t")
    if rest[:1] in ("=", ":") and (i >= len(line) or line[i] in " \t"):
        rest = rest[1:].lstrip(" \t")
    elif i < len(line) and line[i] in "=:":
        rest = line[i + 1:].lstrip(" \t")
    return key, rest


def _unescape(s: str) -> str:
    out = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch == "\\" and i + 1 < len(s):
            nxt = s[i + 1]
            if nxt == "u" and i + 6 <= len(s):
                try:
                    out.append(chr(int(s[i + 2:i + 6], 16)))
                    i += 6
                    continue
                except ValueError:
                    pass
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)
