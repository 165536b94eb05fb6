"""Source description models.

Source groups are value types compared by their contents. They are the
de-duplication key for source/binary pairs: two binaries contributing the
same root directories with the same include/exclude patterns produce one
pair in the toolchain's pair set.

All set-valued fields are emitted sorted so the rendered document does not
depend on hash ordering.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Tuple


def ordered_unique(items: Iterable[str]) -> List[str]:
    """De-duplicate strings keeping first-seen order."""
    return list(dict.fromkeys(items))


@dataclass(frozen=True)
class SourceGroup:
    """Root directories plus include/exclude patterns, compared structurally."""

    src_dirs: FrozenSet[str] = frozenset()
    includes: FrozenSet[str] = frozenset()
    excludes: FrozenSet[str] = frozenset()

    @classmethod
    def of(cls, src_dirs: Iterable[str] = (), includes: Iterable[str] = (), excludes: Iterable[str] = ()) -> "SourceGroup":
        """Create a group from any iterables of strings."""
        return cls(frozenset(src_dirs), frozenset(includes), frozenset(excludes))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "srcDirs": sorted(self.src_dirs),
            "includes": sorted(self.includes),
            "excludes": sorted(self.excludes),
        }


@dataclass
class SourceSet:
    """One language-tagged source set of a binary.

    Attributes:
        cpp: True for C++ sources, False for C
        args: Compiler arguments of the binary for this language
        macros: Macros of the binary for this language, formatted as -DNAME=VALUE
        source: Own sources
        exported_headers: Exported header directories
    """

    cpp: bool = True
    args: List[str] = field(default_factory=list)
    macros: List[str] = field(default_factory=list)
    source: SourceGroup = field(default_factory=SourceGroup)
    exported_headers: SourceGroup = field(default_factory=SourceGroup)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source.to_dict(),
            "exportedHeaders": self.exported_headers.to_dict(),
            "cpp": self.cpp,
            "args": list(self.args),
            "macros": list(self.macros),
        }


@dataclass
class BinaryDescriptor:
    """Per-binary record of component name, source sets and library headers."""

    component_name: str = ""
    source_sets: List[SourceSet] = field(default_factory=list)
    lib_headers: List[str] = field(default_factory=list)

    def add_lib_header(self, path: str) -> None:
        if path not in self.lib_headers:
            self.lib_headers.append(path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "componentName": self.component_name,
            "sourceSets": [s.to_dict() for s in self.source_sets],
            "libHeaders": sorted(self.lib_headers),
        }


class SourceBinaryPair:
    """A source group annotated with the metadata of the source set that contributed it.

    Equality and hashing use only the source group. Two pairs with equal
    groups are the same pair even if they came from different components
    or languages.
    """

    __slots__ = ("source", "component_name", "cpp", "args", "macros")

    def __init__(self, source_set: SourceSet, source: SourceGroup, component_name: str):
        self.source = source
        self.component_name = component_name
        self.cpp = source_set.cpp
        self.args: Tuple[str, ...] = tuple(source_set.args)
        self.macros: Tuple[str, ...] = tuple(source_set.macros)

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, SourceBinaryPair):
            return NotImplemented
        return self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        return f"SourceBinaryPair(component_name={self.component_name!r}, cpp={self.cpp!r}, source={self.source!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source.to_dict(),
            "componentName": self.component_name,
            "cpp": self.cpp,
            "args": list(self.args),
            "macros": list(self.macros),
        }


class SourceBinaryPairSet:
    """Insertion-ordered set of source/binary pairs keyed by source group.

    The first pair registered for a source group keeps its metadata; later
    pairs with an equal group are dropped.
    """

    def __init__(self) -> None:
        self._pairs: Dict[SourceGroup, SourceBinaryPair] = {}

    def add(self, pair: SourceBinaryPair) -> bool:
        """Add a pair.

        Returns:
            True if the pair was added, False if an equal source group was already present
        """
        if pair.source in self._pairs:
            return False
        self._pairs[pair.source] = pair
        return True

    def __contains__(self, item: object) -> bool:
        if isinstance(item, SourceBinaryPair):
            return item.source in self._pairs
        return item in self._pairs

    def __iter__(self) -> Iterator[SourceBinaryPair]:
        return iter(self._pairs.values())

    def __len__(self) -> int:
        return len(self._pairs)

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self._pairs.values()]
