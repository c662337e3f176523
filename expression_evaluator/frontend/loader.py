"""Read expression files, plain or archived."""
from pathlib import Path
import tarfile
import tempfile
from typing import Callable, Dict, Iterable, List, Optional
import zipfile

import py7zr


def read_expressions(input_file: Path) -> List[str]:
    """
    Read the non-empty lines of an expression file.

    :param Path input_file: A .txt file or an archive holding one

    :return: Stripped, non-empty lines in file order
    :rtype: List[str]
    :raises ValueError: If the archive format is unsupported or contains no .txt file
    """
    if input_file.suffix == ".txt":
        content = input_file.read_text(encoding="utf-8")
    else:
        content = extract_archive(input_file)
    return [line.strip() for line in content.splitlines() if line.strip()]


def _first_text_file(names: Iterable[str], archive_path: Path) -> str:
    for name in names:
        if name.endswith(".txt"):
            return name
    raise ValueError(f"No .txt file found in {archive_path.name}")


def _read_zip(archive_path: Path, workdir: Path) -> str:
    with zipfile.ZipFile(archive_path, "r") as archive:
        name = _first_text_file(archive.namelist(), archive_path)
        return archive.read(name).decode("utf-8")


def _read_tar_xz(archive_path: Path, workdir: Path) -> str:
    with tarfile.open(archive_path, "r:xz") as archive:
        members = {member.name: member for member in archive.getmembers() if member.isfile()}
        name = _first_text_file(members, archive_path)
        return archive.extractfile(members[name]).read().decode("utf-8")


def _read_7z(archive_path: Path, workdir: Path) -> str:
    # py7zr only reads member data by extracting it
    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
        name = _first_text_file(archive.getnames(), archive_path)
        archive.extract(path=workdir, targets=[name])
    return (workdir / name).read_text(encoding="utf-8")


ARCHIVE_READERS: Dict[str, Callable[[Path, Path], str]] = {
    ".zip": _read_zip,
    ".tar.xz": _read_tar_xz,
    ".7z": _read_7z,
}


def archive_format(archive_path: Path) -> Optional[str]:
    """Return the ARCHIVE_READERS key matching the file name, or None."""
    name = archive_path.name.lower()
    return next((suffix for suffix in ARCHIVE_READERS if name.endswith(suffix)), None)


def extract_archive(archive_path: Path) -> str:
    """
    Return the content of the first .txt file found in a supported archive.

    Supported formats are the keys of ARCHIVE_READERS: .zip, .tar.xz and .7z.

    :param Path archive_path: Path to the archive file

    :return: Content of the .txt file
    :rtype: str
    :raises ValueError: If no .txt file is found or format is unsupported
    """
    suffix = archive_format(archive_path)
    if suffix is None:
        raise ValueError(f"Unsupported archive format: {''.join(archive_path.suffixes)}")
    with tempfile.TemporaryDirectory() as workdir:
        return ARCHIVE_READERS[suffix](archive_path, Path(workdir))
