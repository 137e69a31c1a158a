import io
import os
import tarfile

import pytest

from domekit.fuse import FusedHeader, FuseError, fuse, read_fused, run, usage


@pytest.fixture
def egg(tmp_path):
    path = tmp_path / "game.egg"
    with tarfile.open(path, "w", format=tarfile.USTAR_FORMAT) as tar:
        info = tarfile.TarInfo("main.wren")
        info.size = 4
        tar.addfile(info, io.BytesIO(b"main"))
    return path


@pytest.fixture
def binary(tmp_path):
    path = tmp_path / "engine"
    path.write_bytes(b"ENGINE-BYTES")
    return path


def test_header_layout():
    packed = FusedHeader(offset=42).pack()
    assert len(packed) == FusedHeader.SIZE == 17
    assert packed[:4] == b"DOME" and packed[-4:] == b"DOME"
    assert packed[4] == 1


def test_header_round_trip():
    header = FusedHeader(offset=123456, version=3)
    assert FusedHeader.unpack(header.pack()) == header


def test_header_unpack_wrong_length():
    with pytest.raises(FuseError):
        FusedHeader.unpack(b"DOME")


def test_fuse_and_read_back(binary, egg, tmp_path):
    out = tmp_path / "game"
    header = fuse(binary, egg, out)
    egg_bytes = egg.read_bytes()
    assert header.offset == len(egg_bytes) + FusedHeader.SIZE
    data = out.read_bytes()
    assert data.startswith(b"ENGINE-BYTES")
    assert read_fused(out) == egg_bytes
    assert os.stat(out).st_mode & 0o777 == 0o755


def test_fused_bundle_is_a_tar(binary, egg, tmp_path):
    out = tmp_path / "game"
    fuse(binary, egg, out)
    with tarfile.open(fileobj=io.BytesIO(read_fused(out))) as tar:
        assert tar.getnames() == ["main.wren"]


def test_fuse_rejects_non_tar(binary, tmp_path):
    bad = tmp_path / "bad.egg"
    bad.write_bytes(b"not a tar archive at all")
    with pytest.raises(FuseError, match="is not a valid EGG file"):
        fuse(binary, bad, tmp_path / "out")


def test_fuse_missing_binary(egg, tmp_path):
    with pytest.raises(FuseError, match="Error loading DOME binary"):
        fuse(tmp_path / "missing", egg, tmp_path / "out")


def test_read_unfused_returns_none(binary):
    binary.write_bytes(b"x" * 64)
    assert read_fused(binary) is None


def test_read_short_file_raises(tmp_path):
    path = tmp_path / "tiny"
    path.write_bytes(b"abc")
    with pytest.raises(FuseError):
        read_fused(path)


def test_read_wrong_version_raises(tmp_path):
    path = tmp_path / "bin"
    path.write_bytes(b"payload" + FusedHeader(offset=24, version=2).pack())
    with pytest.raises(FuseError, match="wrong format"):
        read_fused(path)


def test_run_fuses(binary, egg, tmp_path):
    out = tmp_path / "mygame"
    logs = []
    assert run(["fuse", str(egg), str(out)], logs.append, binary) == 0
    assert read_fused(out) == egg.read_bytes()
    assert "successfully" in logs[-1]


def test_run_missing_file_name():
    logs = []
    assert run(["fuse"], logs.append, None) == 1
    assert "dome: Missing file name.\n" in logs


def test_run_invalid_egg(binary, tmp_path):
    bad = tmp_path / "bad.egg"
    bad.write_bytes(b"junk")
    logs = []
    assert run(["fuse", str(bad), str(tmp_path / "o")], logs.append, binary) == 1
    assert logs[0].startswith("dome: Could not fuse")


def test_run_help():
    logs = []
    assert run(["fuse", "--help"], logs.append, None) == 0
    assert usage() in logs