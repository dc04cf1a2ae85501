"""Parsing of PE (Portable Executable) headers, sections and imports."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

DOS_HEADER_SIZE = 64
FILE_HEADER_SIZE = 20
SECTION_HEADER_SIZE = 40
IMPORT_DESCRIPTOR_SIZE = 20
DIRECTORY_COUNT = 16
NT_HEADERS_32_SIZE = 248
NT_HEADERS_64_SIZE = 264
PE32_MAGIC = 0x10B
DOS_MAGIC = 0x5A4D
NT_SIGNATURE = 0x4550

_DOS_NAMES = (
    "e_magic", "e_cblp", "e_cp", "e_crlc", "e_cparhdr", "e_minalloc",
    "e_maxalloc", "e_ss", "e_sp", "e_csum", "e_ip", "e_cs", "e_lfarlc", "e_ovno",
)

_FILE_HEADER_FORMAT = "<HHIIIHH"
_FILE_HEADER_NAMES = (
    "machine", "number_of_sections", "time_date_stamp", "pointer_to_symbol_table",
    "number_of_symbols", "size_of_optional_header", "characteristics",
)

_OPT32_FORMAT = "<HBB9I6H4I2H6I"
_OPT64_FORMAT = "<HBB5IQ2I6H4I2H4Q2I"
_OPT_HEAD = (
    "magic", "major_linker_version", "minor_linker_version", "size_of_code",
    "size_of_initialized_data", "size_of_uninitialized_data",
    "address_of_entry_point", "base_of_code",
)
_OPT_TAIL = (
    "image_base", "section_alignment", "file_alignment",
    "major_operating_system_version", "minor_operating_system_version",
    "major_image_version", "minor_image_version", "major_subsystem_version",
    "minor_subsystem_version", "win32_version_value", "size_of_image",
    "size_of_headers", "check_sum", "subsystem", "dll_characteristics",
    "size_of_stack_reserve", "size_of_stack_commit", "size_of_heap_reserve",
    "size_of_heap_commit", "loader_flags", "number_of_rva_and_sizes",
)
_OPT32_NAMES = _OPT_HEAD + ("base_of_data",) + _OPT_TAIL
_OPT64_NAMES = _OPT_HEAD + _OPT_TAIL

_SECTION_FORMAT = "<8s6I2HI"


class PeFormatError(ValueError):
    """Raised when data is not a well-formed PE file."""


@dataclass(frozen=True)
class DataDirectory:
    """One entry of the optional header's data directory."""

    virtual_address: int
    size: int


@dataclass(frozen=True)
class SectionHeader:
    """One entry of the section table."""

    name: bytes
    virtual_size: int
    virtual_address: int
    size_of_raw_data: int
    pointer_to_raw_data: int
    pointer_to_relocations: int
    pointer_to_linenumbers: int
    number_of_relocations: int
    number_of_linenumbers: int
    characteristics: int

    def size_in_memory(self, alignment: int) -> int:
        """Size the section occupies once aligned to ``alignment``."""
        size = max(self.virtual_size, self.size_of_raw_data)
        if alignment <= 0:
            return size
        return math.ceil(size / alignment) * alignment


@dataclass(frozen=True)
class ImportEntry:
    """A DLL imported by the image, with its name table and address table.

    Imports by ordinal are listed as the ordinal number in decimal.
    """

    dll: str
    names: list[str] = field(default_factory=list)
    addresses: list[str] = field(default_factory=list)


def _unpack(fmt: str, data: bytes, offset: int, what: str) -> tuple:
    if offset < 0 or offset + struct.calcsize(fmt) > len(data):
        raise PeFormatError(f"file too short for {what}")
    return struct.unpack_from(fmt, data, offset)


def _cstring(data: bytes, offset: int) -> str:
    if offset >= len(data):
        return ""
    end = data.find(b"\0", offset)
    if end < 0:
        end = len(data)
    return data[offset:end].decode("latin-1")


@dataclass
class PeFile:
    """A parsed PE image.

    Header dictionaries use snake_case forms of the PE specification's field
    names; ``dos["e_res"]`` and ``dos["e_res2"]`` are tuples of words.
    """

    raw: bytes
    dos: dict
    dos_stub: bytes
    signature: int
    file_header: dict
    optional_header: dict
    data_directories: list[DataDirectory]
    sections: list[SectionHeader]

    @property
    def is_32bit(self) -> bool:
        """True for a PE32 image, False for PE32+."""
        return self.optional_header["magic"] == PE32_MAGIC

    @property
    def nt_offset(self) -> int:
        """File offset of the NT headers."""
        return self.dos["e_lfanew"]

    @property
    def optional_header_offset(self) -> int:
        """File offset of the optional header."""
        return self.nt_offset + 4 + FILE_HEADER_SIZE

    @property
    def section_table_offset(self) -> int:
        """File offset of the section table."""
        size = NT_HEADERS_32_SIZE if self.is_32bit else NT_HEADERS_64_SIZE
        return self.nt_offset + size

    @classmethod
    def parse(cls, data: bytes) -> "PeFile":
        """Parse a PE image from its bytes."""
        data = bytes(data)
        words = _unpack("<30Hl", data, 0, "DOS header")
        if words[0] != DOS_MAGIC:
            raise PeFormatError("not a standard PE file: bad DOS magic")
        dos = dict(zip(_DOS_NAMES, words[:14]))
        dos["e_res"] = tuple(words[14:18])
        dos["e_oemid"] = words[18]
        dos["e_oeminfo"] = words[19]
        dos["e_res2"] = tuple(words[20:30])
        dos["e_lfanew"] = words[30]
        nt = dos["e_lfanew"]
        if nt < DOS_HEADER_SIZE:
            raise PeFormatError(f"invalid NT header offset: {nt}")

        (signature,) = _unpack("<I", data, nt, "NT signature")
        if signature != NT_SIGNATURE:
            raise PeFormatError("not a standard PE file: bad NT signature")
        file_header = dict(zip(
            _FILE_HEADER_NAMES,
            _unpack(_FILE_HEADER_FORMAT, data, nt + 4, "file header"),
        ))

        opt_offset = nt + 4 + FILE_HEADER_SIZE
        (magic,) = _unpack("<H", data, opt_offset, "optional header")
        is_32 = magic == PE32_MAGIC
        fmt, names = (_OPT32_FORMAT, _OPT32_NAMES) if is_32 else (_OPT64_FORMAT, _OPT64_NAMES)
        optional_header = dict(zip(names, _unpack(fmt, data, opt_offset, "optional header")))

        dir_offset = opt_offset + struct.calcsize(fmt)
        pairs = _unpack(f"<{2 * DIRECTORY_COUNT}I", data, dir_offset, "data directories")
        directories = [DataDirectory(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)]

        table = nt + (NT_HEADERS_32_SIZE if is_32 else NT_HEADERS_64_SIZE)
        sections = [
            SectionHeader(*_unpack(_SECTION_FORMAT, data, table + i * SECTION_HEADER_SIZE, "section table"))
            for i in range(file_header["number_of_sections"])
        ]

        return cls(
            raw=data,
            dos=dos,
            dos_stub=data[DOS_HEADER_SIZE:nt],
            signature=signature,
            file_header=file_header,
            optional_header=optional_header,
            data_directories=directories,
            sections=sections,
        )

    def rva_to_foa(self, rva: int) -> Optional[int]:
        """Map a relative virtual address to a file offset, or None if unmapped.

        Addresses inside the headers map to themselves.
        """
        if rva < self.section_table_offset:
            return rva or None
        alignment = self.optional_header["section_alignment"]
        for section in self.sections:
            start = section.virtual_address
            if start <= rva < start + section.size_in_memory(alignment):
                return section.pointer_to_raw_data + (rva - start)
        return None

    @property
    def import_offset(self) -> Optional[int]:
        """File offset of the import descriptor table, or None."""
        return self.rva_to_foa(self.data_directories[1].virtual_address)

    def _thunk_names(self, rva: int) -> list[str]:
        offset = self.rva_to_foa(rva)
        if offset is None:
            return []
        width = 4 if self.is_32bit else 8
        fmt = "<I" if width == 4 else "<Q"
        ordinal_flag = 1 << (8 * width - 1)
        names = []
        while offset + width <= len(self.raw):
            (value,) = struct.unpack_from(fmt, self.raw, offset)
            if not value:
                break
            if value & ordinal_flag:
                names.append(str(value & (ordinal_flag - 1)))
            else:
                hint_offset = self.rva_to_foa(value & 0xFFFFFFFF)
                names.append("" if hint_offset is None else _cstring(self.raw, hint_offset + 2))
            offset += width
        return names

    def imports(self) -> list[ImportEntry]:
        """List the imported DLLs with their imported names."""
        offset = self.import_offset
        if offset is None:
            return []
        entries = []
        while offset + IMPORT_DESCRIPTOR_SIZE <= len(self.raw):
            original, _, _, name_rva, first = struct.unpack_from("<5I", self.raw, offset)
            if not original:
                break
            name_offset = self.rva_to_foa(name_rva)
            dll = "" if name_offset is None else _cstring(self.raw, name_offset)
            entries.append(ImportEntry(dll, self._thunk_names(original), self._thunk_names(first)))
            offset += IMPORT_DESCRIPTOR_SIZE
        return entries


def load_pe(path: Union[str, Path]) -> PeFile:
    """Read and parse a PE file from disk."""
    return PeFile.parse(Path(path).read_bytes())