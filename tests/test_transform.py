import math

import numpy as np
import pytest

from noukit.transform import (
    Transform,
    quat_to_matrix,
    scale_matrix,
    translate_matrix,
)


def _z_quarter_turn():
    half = math.pi / 4
    return np.array([math.cos(half), 0.0, 0.0, math.sin(half)])


def test_translate_matrix_moves_point():
    m = translate_matrix([1.0, 2.0, 3.0])
    assert np.allclose(m @ np.array([0.0, 0.0, 0.0, 1.0]), [1.0, 2.0, 3.0, 1.0])


def test_scale_matrix_diagonal():
    m = scale_matrix([2.0, 3.0, 4.0])
    assert np.allclose(np.diag(m), [2.0, 3.0, 4.0, 1.0])


def test_identity_quaternion_is_identity():
    assert np.allclose(quat_to_matrix([1.0, 0.0, 0.0, 0.0]), np.eye(4))


def test_quarter_turn_about_z_maps_x_to_y():
    m = quat_to_matrix(_z_quarter_turn())
    assert np.allclose(m[:3, :3] @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0])


def test_rotation_matrix_is_orthonormal():
    q = np.array([0.3, -0.5, 0.4, 0.7])
    q = q / np.linalg.norm(q)
    r = quat_to_matrix(q)[:3, :3]
    assert np.allclose(r.T @ r, np.eye(3))
    assert np.isclose(np.linalg.det(r), 1.0)


def test_root_global_is_local():
    t = Transform()
    t.pos = np.array([1.0, 2.0, 3.0])
    t.scale = np.array([2.0, 2.0, 2.0])
    result = t.recompute_global()
    expected = translate_matrix(t.pos) @ scale_matrix(t.scale)
    assert np.allclose(result, expected)
    assert np.allclose(t.global_matrix, expected)


def test_child_global_composes_with_parent():
    parent = Transform()
    parent.pos = np.array([5.0, 0.0, 0.0])
    parent.rotation = _z_quarter_turn()
    child = Transform()
    child.pos = np.array([1.0, 0.0, 0.0])
    child.set_parent(parent)

    parent.do_fk()
    assert np.allclose(child.global_matrix, parent.global_matrix @ translate_matrix(child.pos))

    origin = child.global_matrix @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin[:3], [5.0, 1.0, 0.0])


def test_recompute_global_matches_do_fk_for_unit_quaternion():
    parent = Transform()
    parent.pos = np.array([0.0, 1.0, 0.0])
    child = Transform()
    child.rotation = _z_quarter_turn()
    child.set_parent(parent)
    parent.do_fk()
    fk = child.global_matrix.copy()
    assert np.allclose(child.recompute_global(), fk)


def test_do_fk_normalizes_rotation():
    t = Transform()
    t.rotation = _z_quarter_turn() * 3.0
    t.do_fk()
    assert np.allclose(t.global_matrix, quat_to_matrix(_z_quarter_turn()))


def test_set_parent_updates_children():
    a, b, child = Transform(), Transform(), Transform()
    child.set_parent(a)
    assert a.children == (child,)
    child.set_parent(b)
    assert a.children == ()
    assert b.children == (child,)
    assert child.parent is b
    child.set_parent(None)
    assert b.children == ()
    assert child.parent is None


def test_normal_matrix_uniform_scale_is_upper_block():
    t = Transform()
    t.scale = np.array([2.0, 2.0, 2.0])
    t.rotation = _z_quarter_turn()
    t.recompute_global()
    assert np.allclose(t.normal_matrix(), t.global_matrix[:3, :3])


@pytest.mark.parametrize("scale", [[1.0, 2.0, 3.0], [0.5, 4.0, 1.0]])
def test_normal_matrix_nonuniform_is_inverse_transpose(scale):
    t = Transform()
    t.scale = np.array(scale)
    t.rotation = _z_quarter_turn()
    t.recompute_global()
    n = t.normal_matrix()
    assert np.allclose(n.T @ t.global_matrix[:3, :3], np.eye(3))