"""Bundle a deployed application directory with its installer into one package.

The package is the installer's bytes followed by a zip of the directory, the
zip's size (8 bytes, little-endian), its MD5 digest as 32 hex characters and a
fixed trailer flag.
"""

from __future__ import annotations

import argparse
import hashlib
import io
import subprocess
import sys
import zipfile
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, Optional, Union

FLAG = b"PackagedTool PACKAGE FLAG"
ZIP_NAME = "PackagedTool.zip"
DEFAULT_CONFIG = "conf/PackagedTool.conf"
_SIZE_BYTES = 8
_MD5_BYTES = 32
_LINUX = not sys.platform.startswith("win")
_LINUX_QT_DIR = "/usr/local/bin/linuxdeployqt"
_WINDOWS_QT_DIR = "C:\\Qt\\Qt5.12.12\\5.12.12\\msvc2017_64\\bin"

PathLike = Union[str, Path]


class PackageError(Exception):
    """Raised when a package cannot be built or read."""


def _clean(text: str) -> str:
    return text.replace("\r", "").replace("\n", "")


def _default_qt_dir(linux: bool) -> str:
    return _LINUX_QT_DIR if linux else _WINDOWS_QT_DIR


def _lines(text: str) -> list[str]:
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


@dataclass
class PackagerConfig:
    """Paths and ignore lists of one packaging job."""

    qt_dir: str = ""
    installer: str = ""
    package_dir: str = ""
    output_dir: str = ""
    output_name: str = ""
    ignore_files: str = ""
    ignore_dirs: str = ""

    @classmethod
    def load(cls, path: PathLike) -> "PackagerConfig":
        """Read a config file of one value per line.

        Lines of two characters or fewer (counting the line end) are skipped.
        A missing or empty file gives the platform's default deploy tool.
        """
        try:
            raw = Path(path).read_bytes()
        except FileNotFoundError:
            raw = b""
        if not raw:
            return cls(qt_dir=_default_qt_dir(_LINUX))
        text = raw.decode("utf-8", errors="replace")
        values = [_clean(line) for line in _lines(text) if len(line) > 2]
        names = [f.name for f in fields(cls)]
        return cls(**dict(zip(names, values)))

    def save(self, path: PathLike) -> None:
        """Write the config, one value per line with CRLF endings."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = "".join(getattr(self, f.name) + "\r\n" for f in fields(self))
        path.write_bytes(text.encode("utf-8"))


def split_ignore_list(text: str) -> set[str]:
    """Split a ``;``-separated list of names; a trailing ``;`` adds nothing."""
    text = _clean(text)
    if not text:
        return set()
    parts = text.split(";")
    if text.endswith(";"):
        parts.pop()
    return set(parts)


def _visible_entries(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    entries = [p for p in directory.iterdir() if not p.name.startswith(".")]
    return sorted(entries, key=lambda p: (p.name.lower(), p.name))


def deploy_script(qt_dir: str, package_dir: str, linux: bool) -> str:
    """Script that runs the deploy tool on each file of ``package_dir``.

    On Linux every regular file is handed to the tool at ``qt_dir``; on
    Windows ``windeployqt`` from ``qt_dir`` is run on each ``.exe`` file.
    """
    qt_dir = _clean(qt_dir)
    package_dir = _clean(package_dir)
    files = [
        p for p in _visible_entries(Path(package_dir))
        if p.is_file() and not p.is_symlink()
    ]
    if linux:
        lines = ["#!/bin/bash\r\n"]
        command = qt_dir + " "
    else:
        lines = ['@echo off\r\nset "PATH=' + qt_dir + '; %PATH%"\r\n']
        command = "windeployqt "
    for path in files:
        if linux or path.name.rpartition(".")[2] == "exe" and "." in path.name:
            lines.append(f"{command}{package_dir}/{path.name}\r\n")
    return "".join(lines)


def run_deploy(qt_dir: str, package_dir: str, linux: bool) -> int:
    """Write the deploy script into ``package_dir``, run it and remove it.

    Returns the script's exit status.
    """
    package_dir = _clean(package_dir)
    script = Path(package_dir) / ("PackagedTool.sh" if linux else "PackagedTool.bat")
    try:
        script.write_bytes(deploy_script(qt_dir, package_dir, linux).encode("utf-8"))
    except OSError as exc:
        raise PackageError("无法写入脚本") from exc
    try:
        command = ["sh", str(script)] if linux else [str(script)]
        return subprocess.run(command, check=False).returncode
    finally:
        script.unlink(missing_ok=True)


def _add_directory(
    archive: zipfile.ZipFile,
    directory: Path,
    base: str,
    ignore_dirs: set[str],
    ignore_files: set[str],
) -> None:
    prefix = base + "/" if base else ""
    entries = _visible_entries(directory)
    for sub in entries:
        if sub.is_dir() and sub.name not in ignore_dirs:
            _add_directory(archive, sub, prefix + sub.name, ignore_dirs, ignore_files)
    for item in entries:
        if not item.is_file() or item.name in ignore_files or item.name == ZIP_NAME:
            continue
        try:
            content = item.read_bytes()
        except OSError:
            continue
        archive.writestr(prefix + item.name, content)


def zip_directory(
    directory: PathLike,
    ignore_dirs: Iterable[str] = (),
    ignore_files: Iterable[str] = (),
) -> bytes:
    """Zip ``directory`` recursively, skipping the named directories and files."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        _add_directory(archive, Path(directory), "", set(ignore_dirs), set(ignore_files))
    return buffer.getvalue()


def build_package(installer: bytes, zip_bytes: bytes) -> bytes:
    """Append the zip, its size, its MD5 digest and the flag to the installer."""
    zip_bytes = bytes(zip_bytes)
    digest = hashlib.md5(zip_bytes).hexdigest().encode("ascii")
    return b"".join((
        bytes(installer),
        zip_bytes,
        len(zip_bytes).to_bytes(_SIZE_BYTES, "little"),
        digest,
        FLAG,
    ))


def read_package(data: bytes) -> tuple[bytes, bytes]:
    """Split a package into the installer and the zip, checking the digest."""
    data = bytes(data)
    tail = _SIZE_BYTES + _MD5_BYTES + len(FLAG)
    if len(data) < tail or not data.endswith(FLAG):
        raise PackageError("package flag not found")
    meta = len(data) - tail
    size = int.from_bytes(data[meta:meta + _SIZE_BYTES], "little")
    digest = data[meta + _SIZE_BYTES:meta + _SIZE_BYTES + _MD5_BYTES]
    if size > meta:
        raise PackageError(f"zip size {size} exceeds package contents")
    zip_bytes = data[meta - size:meta]
    if hashlib.md5(zip_bytes).hexdigest().encode("ascii") != digest.lower():
        raise PackageError("zip digest does not match")
    return data[:meta - size], zip_bytes


def package(config: PackagerConfig, linux: bool) -> Path:
    """Deploy, zip and bundle as the config says; return the written file's path."""
    installer_path = _clean(config.installer)
    try:
        installer = Path(installer_path).read_bytes()
    except OSError as exc:
        raise PackageError("未找到安装程序!") from exc

    run_deploy(config.qt_dir, config.package_dir, linux)
    zip_bytes = zip_directory(
        _clean(config.package_dir),
        split_ignore_list(config.ignore_dirs),
        split_ignore_list(config.ignore_files),
    )
    output = Path(_clean(config.output_dir) + "/" + _clean(config.output_name))
    try:
        output.write_bytes(build_package(installer, zip_bytes))
    except OSError as exc:
        raise PackageError(f"cannot write package {output}: {exc}") from exc
    return output


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bundle an application directory with its installer."
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="config file to read and update")
    parser.add_argument("--qt-dir", dest="qt_dir")
    parser.add_argument("--installer")
    parser.add_argument("--package-dir", dest="package_dir")
    parser.add_argument("--output-dir", dest="output_dir")
    parser.add_argument("--output-name", dest="output_name")
    parser.add_argument("--ignore-files", dest="ignore_files")
    parser.add_argument("--ignore-dirs", dest="ignore_dirs")
    parser.add_argument("--platform", choices=("linux", "windows"),
                        default="linux" if _LINUX else "windows")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line entry point."""
    args = _parser().parse_args(argv)
    config = PackagerConfig.load(args.config)
    for f in fields(PackagerConfig):
        value = getattr(args, f.name)
        if value is not None:
            setattr(config, f.name, value)
    try:
        config.save(args.config)
    except OSError:
        print("无法写入配置文件", file=sys.stderr)
    if not config.output_dir:
        config.output_dir = config.package_dir
    try:
        output = package(config, args.platform == "linux")
    except PackageError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(f"打包完成: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())