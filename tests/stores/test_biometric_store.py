from __future__ import annotations

import pytest

from workforce_portal.core.exceptions import ValidationError
from workforce_portal.stores.biometric_store import BiometricStore
from workforce_portal.stores.storage import JsonFileStorage


def test_defaults_to_not_complete(storage):
    assert BiometricStore(storage).is_biometric_setup_complete is False


def test_flag_survives_a_new_process(tmp_path):
    BiometricStore(JsonFileStorage(tmp_path)).set_biometric_setup_complete(True)

    # A fresh storage + store on the same directory stands in for a restart.
    assert BiometricStore(JsonFileStorage(tmp_path)).is_biometric_setup_complete is True


def test_reset_then_read_is_false(tmp_path):
    store = BiometricStore(JsonFileStorage(tmp_path))
    store.set_biometric_setup_complete(True)
    store.reset_biometric_setup()

    assert store.is_biometric_setup_complete is False
    assert BiometricStore(JsonFileStorage(tmp_path)).is_biometric_setup_complete is False


def test_set_is_idempotent(storage):
    store = BiometricStore(storage)
    store.set_biometric_setup_complete(True)
    store.set_biometric_setup_complete(True)
    assert store.is_biometric_setup_complete is True


def test_persisted_shape(storage):
    BiometricStore(storage).set_biometric_setup_complete(True)
    assert storage.get_item("biometric-storage") == {"state": {"isBiometricSetupComplete": True}}


@pytest.mark.parametrize("value", [1, "true", None])
def test_rejects_non_bool(storage, value):
    store = BiometricStore(storage)
    with pytest.raises(ValidationError):
        store.set_biometric_setup_complete(value)
    assert store.is_biometric_setup_complete is False


def test_corrupt_file_reads_as_not_complete(tmp_path):
    storage = JsonFileStorage(tmp_path)
    (tmp_path / "biometric-storage.json").write_text("{not json", encoding="utf-8")
    assert BiometricStore(storage).is_biometric_setup_complete is False
