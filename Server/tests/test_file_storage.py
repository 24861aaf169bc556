"""
Tests for filesystem operations in FileDepot Server
"""

import hashlib
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from exceptions import DirectoryCreateFailed, FileWriteFailed, FileReadFailed, FileDeleteFailed
from file_storage import (
    CreateDirectory, DeleteDirectory, FileExists, WriteBytes, WriteResource,
    RemoveFile, ReadFile, ListStoredFiles, CalculateFileHash, TEMP_SUFFIX
)
from resources import UploadedFileResource


class RefusingResource(UploadedFileResource):
    """Resource whose save reports failure"""

    def SaveAs(self, path):
        return False


class BrokenResource(UploadedFileResource):
    """Resource that leaves a partial file and then fails"""

    def SaveAs(self, path):
        Path(path).write_bytes(self.content[:2])
        raise OSError("disk full")


# ==================== Directories ====================

def test_create_directory_is_idempotent(tmp_path):
    """Creating an existing directory succeeds"""
    target = tmp_path / "a" / "b" / "c"
    assert CreateDirectory(target)
    assert target.is_dir()
    assert CreateDirectory(target)


def test_create_directory_failure_raises(tmp_path):
    """A directory below a regular file cannot be created"""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(DirectoryCreateFailed):
        CreateDirectory(blocker / "sub")


def test_delete_directory(tmp_path):
    """Only existing, empty directories are deleted"""
    empty = tmp_path / "empty"
    empty.mkdir()
    full = tmp_path / "full"
    full.mkdir()
    (full / "file.txt").write_text("x")
    regular = tmp_path / "regular.txt"
    regular.write_text("x")

    assert DeleteDirectory(empty)
    assert not empty.exists()
    assert not DeleteDirectory(tmp_path / "missing")
    assert not DeleteDirectory(regular)
    assert not DeleteDirectory(full)
    assert (full / "file.txt").exists()


# ==================== Files ====================

def test_write_bytes_replaces_atomically(tmp_path):
    """WriteBytes leaves only the final file behind"""
    target = tmp_path / "out.bin"
    WriteBytes(target, b"first")
    WriteBytes(target, b"second")

    assert target.read_bytes() == b"second"
    assert [p.name for p in tmp_path.iterdir()] == ["out.bin"]


def test_write_resource(tmp_path):
    """A resource is written to its destination"""
    target = tmp_path / "photo-1.jpg"
    assert WriteResource(UploadedFileResource("photo.jpg", b"jpeg bytes"), target)
    assert target.read_bytes() == b"jpeg bytes"


def test_write_resource_refused(tmp_path):
    """A resource refusing to save raises and leaves no file"""
    target = tmp_path / "photo-1.jpg"
    with pytest.raises(FileWriteFailed):
        WriteResource(RefusingResource("photo.jpg", b"jpeg bytes"), target)
    assert not target.exists()


def test_write_resource_partial_file_removed(tmp_path):
    """An I/O error removes the partially written file"""
    target = tmp_path / "photo-1.jpg"
    with pytest.raises(FileWriteFailed):
        WriteResource(BrokenResource("photo.jpg", b"jpeg bytes"), target)
    assert not target.exists()


def test_remove_file(tmp_path):
    """Removing a missing file is not an error"""
    target = tmp_path / "gone.txt"
    target.write_text("x")

    assert RemoveFile(target)
    assert not FileExists(target)
    assert not RemoveFile(target)


def test_remove_file_failure_raises(tmp_path, monkeypatch):
    """An existing file that cannot be removed raises"""
    target = tmp_path / "locked.txt"
    target.write_text("x")

    def refuse(self, missing_ok=False):
        raise PermissionError("locked")

    monkeypatch.setattr(Path, "unlink", refuse)

    with pytest.raises(FileDeleteFailed):
        RemoveFile(target)
    assert target.exists()


def test_read_file(tmp_path):
    """ReadFile returns the full contents or raises"""
    target = tmp_path / "data.bin"
    target.write_bytes(b"\x00\x01\x02")

    assert ReadFile(target) == b"\x00\x01\x02"
    with pytest.raises(FileReadFailed):
        ReadFile(tmp_path / "missing.bin")


def test_list_stored_files_skips_temporary_files(tmp_path):
    """Stored files are listed relative to the root, temporary files skipped"""
    (tmp_path / "albums").mkdir()
    (tmp_path / "albums" / "photo-2.jpg").write_bytes(b"x")
    (tmp_path / "notes-1.txt").write_bytes(b"x")
    (tmp_path / f".notes-3.txt.abc{TEMP_SUFFIX}").write_bytes(b"x")

    assert ListStoredFiles(tmp_path) == ["albums/photo-2.jpg", "notes-1.txt"]
    assert ListStoredFiles(tmp_path / "missing") == []


# ==================== Hashing ====================

def test_calculate_file_hash(tmp_path):
    """Hash equals the SHA-256 of the content, independent of chunk size"""
    content = b"integrity" * 5000
    target = tmp_path / "big.bin"
    target.write_bytes(content)

    expected = hashlib.sha256(content).hexdigest()
    assert CalculateFileHash(target) == expected
    assert CalculateFileHash(target, chunk_size=7) == expected


def test_calculate_file_hash_missing_file(tmp_path):
    """Hashing a missing file raises"""
    with pytest.raises(FileReadFailed):
        CalculateFileHash(tmp_path / "missing.bin")
