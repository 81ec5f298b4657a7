"""Local Asset Store — verifies upload checks, reference format, and path confinement.

Invariants:
    - save() returns a unique reference under upload_dir
    - Disallowed extension / oversize / empty → DirectoryValidationError
    - load() refuses references outside upload_dir
    - remove() is best-effort
"""

import pytest

from employee_directory.core.errors import (
    AssetStorageError, DirectoryValidationError, ResourceNotFoundError,
)
from employee_directory.infrastructure.asset_store import LocalAssetStore, sanitize_filename


def test_sanitize_filename_strips_directories():
    assert sanitize_filename("../../etc/passwd") == "passwd"
    assert sanitize_filename("my photo (1).png") == "my_photo_1_.png"
    assert sanitize_filename("") == "image"


async def test_save_and_load(asset_store, tmp_path):
    ref = await asset_store.save(b"\x89PNG", "Face.PNG")
    assert ref.startswith((tmp_path / "uploads").as_posix())
    assert ref.endswith("-Face.PNG")
    assert await asset_store.load(ref) == b"\x89PNG"


async def test_references_are_unique(asset_store):
    first = await asset_store.save(b"a", "same.png")
    second = await asset_store.save(b"b", "same.png")
    assert first != second


@pytest.mark.parametrize(
    "data, filename",
    [(b"x", "script.sh"), (b"x" * 2048, "big.png"), (b"", "empty.png")],
)
async def test_save_rejects_bad_upload(asset_store, data, filename):
    with pytest.raises(DirectoryValidationError) as exc:
        await asset_store.save(data, filename)
    assert exc.value.field == "image"


async def test_load_refuses_foreign_paths(asset_store, tmp_path):
    outside = tmp_path / "secret.png"
    outside.write_bytes(b"secret")
    with pytest.raises(ResourceNotFoundError):
        await asset_store.load(outside.as_posix())


async def test_load_missing_file(asset_store, tmp_path):
    with pytest.raises(ResourceNotFoundError):
        await asset_store.load((tmp_path / "uploads" / "gone.png").as_posix())


async def test_remove_deletes_and_tolerates_missing(asset_store):
    ref = await asset_store.save(b"\x89PNG", "me.png")
    await asset_store.remove(ref)
    with pytest.raises(ResourceNotFoundError):
        await asset_store.load(ref)
    await asset_store.remove(ref)


async def test_unwritable_directory_is_storage_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = LocalAssetStore(str(blocker / "uploads"), allowed_extensions=[".png"])
    with pytest.raises(AssetStorageError):
        await store.save(b"\x89PNG", "me.png")
