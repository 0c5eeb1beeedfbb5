import base64

import pytest

from src.timeclock.timeclock.core.exceptions import ValidationError
from src.timeclock.timeclock.storage.local_storage import LocalObjectStorage
from src.timeclock.timeclock.storage.selfie import decode_selfie
from tests.fakes import selfie_b64


def test_decode_accepts_data_url_and_bare_base64():
    with_prefix = decode_selfie(selfie_b64())
    bare = decode_selfie(selfie_b64(data_url=False))

    assert with_prefix == bare
    assert with_prefix[:2] == b"\xff\xd8"


@pytest.mark.parametrize("payload", ["", "%%%not-base64%%%", base64.b64encode(b"plain text").decode()])
def test_decode_rejects_bad_payloads(payload):
    with pytest.raises(ValidationError):
        decode_selfie(payload)


def test_local_storage_writes_under_bucket(tmp_path):
    storage = LocalObjectStorage(tmp_path, bucket="selfies")

    ref = storage.store("1/2026-03-02/1000.jpg", b"jpeg-bytes", "image/jpeg")

    assert ref == "selfies/1/2026-03-02/1000.jpg"
    assert (tmp_path / "selfies" / "1" / "2026-03-02" / "1000.jpg").read_bytes() == b"jpeg-bytes"


def test_local_storage_never_overwrites(tmp_path):
    storage = LocalObjectStorage(tmp_path)
    storage.store("1/a.jpg", b"first", "image/jpeg")

    with pytest.raises(FileExistsError):
        storage.store("1/a.jpg", b"second", "image/jpeg")


@pytest.mark.parametrize("path", ["/etc/passwd", "../escape.jpg", "1/../../x.jpg"])
def test_local_storage_rejects_paths_outside_bucket(tmp_path, path):
    with pytest.raises(ValueError):
        LocalObjectStorage(tmp_path).store(path, b"x", "image/jpeg")


def test_local_storage_remove_deletes_the_object(tmp_path):
    storage = LocalObjectStorage(tmp_path)
    storage.store("1/a.jpg", b"first", "image/jpeg")

    storage.remove("1/a.jpg")
    storage.remove("1/a.jpg")

    assert not (tmp_path / "selfies" / "1" / "a.jpg").exists()
    with pytest.raises(ValueError):
        storage.remove("../a.jpg")
