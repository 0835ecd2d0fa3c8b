"""Data models for channel definitions."""

import re
from dataclasses import dataclass, field
from typing import List, Optional

WILDCARD = "*"


@dataclass(frozen=True)
class Stream:
    """Version rule for one ``groupId:artifactId`` (``*`` allowed as artifactId or both)."""
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    version_pattern: Optional[str] = None

    def matches(self, group_id: str, artifact_id: str) -> bool:
        if self.group_id == WILDCARD:
            return True
        if self.group_id != group_id:
            return False
        return self.artifact_id in (WILDCARD, artifact_id)

    @property
    def specificity(self) -> int:
        """2 for an exact stream, 1 for an artifact wildcard, 0 for a full wildcard."""
        if self.group_id == WILDCARD:
            return 0
        if self.artifact_id == WILDCARD:
            return 1
        return 2

    def accepts(self, version: str) -> bool:
        """Whether ``version`` satisfies this stream's pattern."""
        if self.version_pattern is None:
            return version == self.version
        return re.fullmatch(self.version_pattern, version) is not None


@dataclass
class Channel:
    """A named set of streams; the most specific matching stream wins."""
    name: str
    streams: List[Stream] = field(default_factory=list)
    source: Optional[str] = None

    def find_stream(self, group_id: str, artifact_id: str) -> Optional[Stream]:
        best = None
        for stream in self.streams:
            if not stream.matches(group_id, artifact_id):
                continue
            if best is None or stream.specificity > best.specificity:
                best = stream
        return best
