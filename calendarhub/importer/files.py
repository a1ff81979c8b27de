"""File handles accepted by the importer."""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class CalendarFile(Protocol):
    """An uploaded or local file: a name plus asynchronously readable content."""

    @property
    def name(self) -> str: ...

    async def read(self) -> Union[bytes, str]: ...


@dataclass(frozen=True)
class InMemoryFile:
    """File whose content is already in memory (e.g. a multipart upload)."""

    name: str
    data: Union[bytes, str]

    async def read(self) -> Union[bytes, str]:
        return self.data


@dataclass(frozen=True)
class LocalFile:
    """File on disk, read off the event loop."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


def decode_content(data: Union[bytes, str]) -> str:
    """Decode file bytes as UTF-8, dropping a leading BOM.

    Raises:
        UnicodeDecodeError: If the bytes are not valid UTF-8
    """
    if isinstance(data, str):
        return data
    return data.decode("utf-8-sig")
