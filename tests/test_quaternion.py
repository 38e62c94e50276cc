import math

import pytest

from renderkit.quaternion import Quaternion, q_lerp, q_slerp
from renderkit.vector import Vector3

IDENTITY = Quaternion(1.0, 0.0, 0.0, 0.0)


def _rotate(q: Quaternion, v: Vector3) -> Vector3:
    p = Quaternion(0.0, v.x, v.y, v.z)
    r = q.multiply(p).multiply(q.inverse())
    return Vector3(r.x, r.y, r.z)


def test_from_angle_axis_is_unit():
    q = Quaternion.from_angle_axis(1.2, Vector3(3.0, -1.0, 2.0))
    assert math.isclose(q.norm(), 1.0, rel_tol=1e-9)


def test_angle_axis_round_trip():
    axis = Vector3(1.0, 2.0, 3.0)
    q = Quaternion.from_angle_axis(0.7, axis)
    theta, back = q.to_angle_axis()
    assert math.isclose(theta, 0.7, rel_tol=1e-9)
    assert back == axis.normalized()


def test_identity_angle_axis_defaults_to_x_axis():
    theta, axis = IDENTITY.to_angle_axis()
    assert theta == 0.0
    assert axis == Vector3(1.0, 0.0, 0.0)


def test_multiply_by_inverse_is_identity():
    q = Quaternion(2.0, -1.0, 0.5, 3.0)
    assert q.multiply(q.inverse()) == IDENTITY
    assert q.inverse().multiply(q) == IDENTITY


def test_conjugate_negates_vector_part():
    q = Quaternion(2.0, -1.0, 0.5, 3.0)
    assert q.conjugate() == Quaternion(2.0, 1.0, -0.5, -3.0)
    assert q.conjugate().conjugate() == q


def test_quadrance_and_norm_agree():
    q = Quaternion(2.0, -1.0, 0.5, 3.0)
    assert math.isclose(q.norm() ** 2, q.quadrance(), rel_tol=1e-12)


def test_rotation_preserves_length():
    q = Quaternion.from_angle_axis(2.1, Vector3(0.3, 0.4, -1.0))
    v = Vector3(1.0, -2.0, 0.5)
    assert math.isclose(_rotate(q, v).magnitude(), v.magnitude(), rel_tol=1e-9)


def test_rotation_around_axis_keeps_axis_fixed():
    axis = Vector3(0.0, 0.0, 1.0)
    q = Quaternion.from_angle_axis(math.pi / 2, axis)
    assert _rotate(q, axis) == axis
    assert _rotate(q, Vector3(1.0, 0.0, 0.0)) == Vector3(0.0, 1.0, 0.0)


def test_composition_of_rotations_adds_angles():
    axis = Vector3(0.0, 1.0, 0.0)
    a = Quaternion.from_angle_axis(0.3, axis)
    b = Quaternion.from_angle_axis(0.5, axis)
    assert a.multiply(b) == Quaternion.from_angle_axis(0.8, axis)


def test_identity_rotation_matrix():
    m = IDENTITY.gl_rotation_matrix()
    expected = tuple(1.0 if i % 5 == 0 else 0.0 for i in range(16))
    assert m == pytest.approx(expected)


def test_rotation_matrix_first_column_is_rotated_x_axis():
    q = Quaternion.from_angle_axis(math.pi / 2, Vector3(0.0, 0.0, 1.0))
    m = q.gl_rotation_matrix()
    rotated = _rotate(q, Vector3(1.0, 0.0, 0.0))
    assert m[0:3] == pytest.approx((rotated.x, rotated.y, rotated.z), abs=1e-9)
    assert m[15] == 1.0


def test_scalar_operators():
    q = Quaternion(1.0, 2.0, 3.0, 4.0)
    assert q * 2 == Quaternion(2.0, 4.0, 6.0, 8.0)
    assert 2 * q == q * 2
    assert (q * 2) / 2 == q
    assert q + q == q * 2


def test_normalize_in_place():
    q = Quaternion(2.0, 0.0, 0.0, 0.0)
    q.normalize()
    assert q == IDENTITY


def test_normalize_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Quaternion().normalized()


def test_equality_is_tolerant():
    assert Quaternion(1.0, 0.0, 0.0, 0.0) == Quaternion(1.000001, 0.0, 0.0, 0.0)
    assert Quaternion(1.0, 0.0, 0.0, 0.0) != Quaternion(1.001, 0.0, 0.0, 0.0)


def test_str_format():
    assert str(IDENTITY) == "(1, 0, 0, 0)"


def test_lerp_endpoints():
    axis = Vector3(1.0, 1.0, 0.0)
    q0 = Quaternion.from_angle_axis(0.2, axis)
    q1 = Quaternion.from_angle_axis(1.4, axis)
    assert q_lerp(q0, q1, 0.0) == q0
    assert q_lerp(q0, q1, 1.0) == q1


def test_slerp_endpoints_and_midpoint():
    axis = Vector3(0.0, 0.0, 1.0)
    q0 = Quaternion.from_angle_axis(0.2, axis)
    q1 = Quaternion.from_angle_axis(1.4, axis)
    assert q_slerp(q0, q1, 0.0) == q0
    assert q_slerp(q0, q1, 1.0) == q1
    assert q_slerp(q0, q1, 0.5) == Quaternion.from_angle_axis(0.8, axis)


def test_slerp_results_are_unit():
    q0 = Quaternion.from_angle_axis(0.4, Vector3(1.0, 0.0, 0.0))
    q1 = Quaternion.from_angle_axis(1.1, Vector3(0.0, 1.0, 0.0))
    for k in (0.1, 0.25, 0.6, 0.9):
        assert math.isclose(q_slerp(q0, q1, k).norm(), 1.0, rel_tol=1e-9)
        assert math.isclose(q_lerp(q0, q1, k).norm(), 1.0, rel_tol=1e-9)


def test_slerp_of_identical_raises():
    with pytest.raises(ZeroDivisionError):
        q_slerp(IDENTITY, IDENTITY, 0.5)