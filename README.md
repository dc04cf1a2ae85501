# devtoolkit

Small developer utilities that work on bytes and files. The package has no
dependencies beyond the standard library.

## What is in it

### PE files

- `devtoolkit.pefile`: `load_pe(path)` or `PeFile.parse(data)` reads the DOS
  header and stub, the NT signature, the file and optional headers (PE32 and
  PE32+), the 16 data directories and the section table. Malformed input raises
  `PeFormatError`, which is a `ValueError`.
  - `PeFile.rva_to_foa(rva)` maps a relative virtual address to a file offset.
    It returns `None` when no section holds the address.
  - `PeFile.imports()` returns one `ImportEntry` per imported DLL. Each entry
    has its name table (`names`) and its address table (`addresses`). Imports by
    ordinal appear as the ordinal in decimal.
- `devtoolkit.petable`:
  - `hex_rows(data)` lays a file out as `HexRow`s of 16 bytes. Each row has an
    8-digit address and a text column.
  - `byte_cells(offset, length)` gives the table cells of a byte range.
  - `parse_hex_address(text)` reads a bare hex address.
  - `describe_foa(pe, text)` turns a typed virtual address into a status text
    such as `FOA:0x400`.

### Captured frames (Ethernet / IPv4 / UDP)

- `devtoolkit.packet`:
  - `analyze_headers(data)` decodes a frame into `PacketHeaders`, which holds
    `EthernetHeader`, `Ipv4Header` and `UdpHeader`.
  - `protocol_info(protocol, data)` returns the protocol name to show and a
    one-line summary. It covers ICMP messages and GigE Vision GVCP (port 3956)
    and GVSP (port 3959) traffic, and otherwise writes ports and payload length.
- `devtoolkit.packetview`:
  - `packet_tree(data, headers, protocol)` builds the detail tree as a list of
    `FieldNode`s. Each node carries its byte offset and length.
  - `gige_tree(data)` decodes GigE Vision payloads.
  - `hex_dump_rows(data)` gives 16-cell hex rows with a text column.
  - `cells_for_range(offset, length)` maps a byte range to `(row, column)` cells.
- `devtoolkit.protocols`: `ether_type_name(value)` and `ip_protocol_name(number)`.
- `devtoolkit.capfilter`:
  - `parse_filter("src.ip=10.0.0.1,dst.port=3956")` returns a `PacketFilter`.
    Its `matches(headers, payload_length)` and `is_empty()` methods apply and
    inspect the filter.
  - `completions(text)` lists the filter keys that contain `text`.

### Display helpers

`devtoolkit.display` provides the following:

- `FieldNode`, with `add`, `walk` and `find`
- `byte_to_hex`
- `hex_string`
- `printable`
- `int_to_hex`
- `int_array_hex`

### Hot keys and macro settings

- `devtoolkit.keys`: `key_name(code)` names a Windows virtual-key code and
  returns `""` when the code is unknown. `stop_hint(code)` returns the status
  text that names the Alt hot key.
- `devtoolkit.settings`: `MacroSettings` holds the click and replay parameters
  and three hot keys. They are stored as a 44-byte record of little-endian
  32-bit integers, read with `from_bytes` / `load` and written with
  `to_bytes` / `save`. If the file is missing or too short, `load` writes the
  defaults to it and returns them.

### Installer packaging

`devtoolkit.packager` bundles an application directory with its installer. It
runs these steps in order:

1. It runs a generated deploy script over the directory (`run_deploy`). The
   script calls `windeployqt` on Windows, or the tool given as the Qt
   directory on Linux.
2. It zips the directory (`zip_directory`), skipping the ignored names.
3. It writes a file made of the installer's bytes, then the zip, then the
   zip's size in 8 little-endian bytes, then its MD5 as 32 hex characters,
   then the flag `PackagedTool PACKAGE FLAG` (`build_package`).

`read_package(data)` splits such a file back into the installer and the zip,
and checks the digest. Failures raise `PackageError`.

## Installing

```
pip install .
```

## Packaging from the command line

```
devtoolkit-package --installer setup.exe --package-dir ./app --output-name app-setup.exe
```

Options:

- `--config` (default `conf/PackagedTool.conf`)
- `--qt-dir`
- `--installer`
- `--package-dir`
- `--output-dir`
- `--output-name`
- `--ignore-files`
- `--ignore-dirs`
- `--platform {linux,windows}`

Options that are given override the values read from the config file. The
merged values are then written back to that file.

If no output directory is set, the package directory is used. The config file
holds one value per line, in this order:

1. the deploy tool (Linux) or the Qt `bin` directory (Windows)
2. the installer
3. the directory to package
4. the output directory
5. the output file name
6. file names to ignore, separated by `;`
7. directory names to ignore, separated by `;`

Lines of two characters or fewer, counting the line end, are skipped. If the
file is missing or empty, the platform's default deploy tool location is used.

## Library example

```python
from devtoolkit.pefile import load_pe
from devtoolkit.petable import hex_rows

pe = load_pe("program.exe")
for entry in pe.imports():
    print(entry.dll, entry.names)
print(pe.rva_to_foa(pe.optional_header["address_of_entry_point"]))
print(hex_rows(pe.raw[:32])[0].cells)
```

## What it does not do

- It has no windows or viewers. It returns data that a viewer could show.
- It does not capture network traffic. It only decodes frames that you pass in
  as bytes.
- It does not build a field tree from PE headers. `FieldNode` is available,
  but no builder for PE headers is included.
- It does not record, replay, read or write mouse and keyboard macros. It does
  not register hot keys. Only the hot-key names and the settings record are
  covered.