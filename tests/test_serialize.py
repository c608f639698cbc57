import json

import numpy as np
import pytest

from noukit.serialize import (
    pack_matrix,
    pack_quat,
    pack_vector,
    unpack_matrix,
    unpack_quat,
    unpack_vector,
)
from noukit.transform import quat_to_matrix, translate_matrix


def test_pack_vector_keeps_components():
    assert pack_vector([1.5, 2.5, 3.5]) == [1.5, 2.5, 3.5]


def test_pack_vector_keeps_integers():
    packed = pack_vector(np.array([4, 5], dtype=np.int32))
    assert packed == [4, 5]
    assert all(isinstance(value, int) for value in packed)


@pytest.mark.parametrize("values", [[1.0], [1.0, 2.0, 3.0, 4.0, 5.0], [[1.0, 2.0]]])
def test_vector_size_is_checked(values):
    with pytest.raises(ValueError):
        pack_vector(values)
    with pytest.raises(ValueError):
        unpack_vector(values)


def test_vector_round_trip_through_json():
    vector = np.array([0.25, -1.0, 8.0, 2.0])
    restored = unpack_vector(json.loads(json.dumps(pack_vector(vector))))
    np.testing.assert_array_equal(restored, vector)


def test_pack_matrix_writes_columns():
    packed = pack_matrix(translate_matrix([1.0, 2.0, 3.0]))
    assert packed[3] == [1.0, 2.0, 3.0, 1.0]
    assert packed[0] == [1.0, 0.0, 0.0, 0.0]


@pytest.mark.parametrize("size", [2, 3, 4])
def test_matrix_round_trip(size):
    matrix = np.arange(size * size, dtype=float).reshape(size, size)
    np.testing.assert_array_equal(unpack_matrix(pack_matrix(matrix), size), matrix)


def test_unpack_matrix_accepts_flat_column_major():
    matrix = quat_to_matrix([0.5, 0.5, 0.5, 0.5])
    flat = [value for column in pack_matrix(matrix) for value in column]
    np.testing.assert_allclose(unpack_matrix(flat, 4), matrix)


def test_unpack_matrix_wrong_count():
    with pytest.raises(ValueError):
        unpack_matrix([1.0, 2.0, 3.0], 2)


def test_pack_matrix_rejects_non_square():
    with pytest.raises(ValueError):
        pack_matrix(np.zeros((3, 4)))


def test_pack_identity_quat_puts_w_last():
    assert pack_quat([1.0, 0.0, 0.0, 0.0]) == [0.0, 0.0, 0.0, 1.0]


def test_quat_round_trip():
    quat = np.array([0.5, -0.5, 0.5, 0.5])
    np.testing.assert_array_equal(unpack_quat(pack_quat(quat)), quat)


def test_quat_size_is_checked():
    with pytest.raises(ValueError):
        pack_quat([1.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        unpack_quat([1.0, 0.0, 0.0, 0.0, 0.0])