"""Archive manifest models"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union, Any


@dataclass(frozen=True)
class FileSource:
    """Entry content read from a file on disk"""
    path: Path

    def read(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class BufferSource:
    """Entry content generated in memory"""
    data: bytes

    def read(self) -> bytes:
        return self.data


EntrySource = Union[FileSource, BufferSource]


class ArchiveManifest:
    """Ordered mapping of archive entry name to its content source

    Entry names are relative and ``/``-separated. Assigning an existing name
    replaces the earlier source (last writer wins).
    """

    def __init__(self, entries: Optional[Mapping[str, EntrySource]] = None):
        self._entries: Dict[str, EntrySource] = {}
        if entries:
            for name, source in entries.items():
                self._entries[name] = source

    def add_file(self, name: str, path: Union[str, Path]) -> None:
        """Map an entry name to a file on disk"""
        self._entries[name] = FileSource(Path(path))

    def add_buffer(self, name: str, data: Union[str, bytes]) -> None:
        """Map an entry name to in-memory content"""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._entries[name] = BufferSource(data)

    def remove(self, name: str) -> Optional[EntrySource]:
        """Drop an entry, returning its source if it was present"""
        return self._entries.pop(name, None)

    def merged(self, extra_entries: Mapping[str, Union[str, bytes]]) -> 'ArchiveManifest':
        """Return a new manifest with synthetic entries applied as overwrites"""
        result = ArchiveManifest(self._entries)
        for name, data in extra_entries.items():
            result.add_buffer(name, data)
        return result

    def get(self, name: str) -> Optional[EntrySource]:
        return self._entries.get(name)

    def items(self) -> List[Tuple[str, EntrySource]]:
        return list(self._entries.items())

    @property
    def names(self) -> List[str]:
        return list(self._entries.keys())

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"ArchiveManifest({len(self._entries)} entries)"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {}
        for name, source in self._entries.items():
            if isinstance(source, FileSource):
                data[name] = str(source.path)
            else:
                data[name] = f"<buffer {len(source.data)} bytes>"
        return data


@dataclass(frozen=True)
class ArchiveHandle:
    """Reference to a completed archive on disk"""
    path: Path
    size: int
    entry_count: int
    checksum: Optional[str] = None  # sha256

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'path': str(self.path),
            'size': self.size,
            'entry_count': self.entry_count,
        }
        if self.checksum:
            data['checksum'] = self.checksum
        return data
