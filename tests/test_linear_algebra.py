import math

import numpy as np
import pytest

from parking_sim.linear_algebra import Matrix, Vector2D
from parking_sim.exceptions import DegenerateMatrixError


ANGLES = [0.0, 0.3, -1.1, math.pi / 2, 2.9, -math.pi]


@pytest.mark.parametrize("angle", ANGLES)
def test_inverse_matches_negative_angle(angle):
    rotation = Matrix.rotation(angle)
    assert rotation.inverse().allclose(Matrix.rotation(-angle))


@pytest.mark.parametrize("angle", ANGLES)
def test_product_with_inverse_is_identity(angle):
    rotation = Matrix.rotation(angle)
    assert (rotation @ rotation.inverse()).allclose(Matrix.eye())
    assert (rotation.inverse() @ rotation).allclose(Matrix.eye())


def test_composition_sums_angles():
    composed = Matrix.rotation(0.4) @ Matrix.rotation(1.3)
    assert composed.allclose(Matrix.rotation(1.7))
    assert composed.determinant() == pytest.approx(1.0)


def test_transpose_equals_inverse_for_rotation():
    rotation = Matrix.rotation(0.77)
    assert rotation.transpose().allclose(rotation.inverse())


def test_angle_recovers_construction_angle():
    assert Matrix.rotation(1.2).angle() == pytest.approx(1.2)
    assert Matrix.rotation(-2.5).angle() == pytest.approx(-2.5)
    assert Matrix.eye().angle() == 0.0


def test_matrix_vector_product():
    rotated = Matrix.rotation(math.pi / 2) @ Vector2D(1.0, 0.0)
    assert isinstance(rotated, Vector2D)
    np.testing.assert_allclose(rotated.inner, [0.0, 1.0], atol=1e-12)


def test_inverse_of_singular_matrix_raises():
    with pytest.raises(DegenerateMatrixError):
        Matrix([[1.0, 2.0], [2.0, 4.0]]).inverse()
    with pytest.raises(ArithmeticError):
        Matrix([[0.0, 0.0], [0.0, 0.0]]).inverse()


def test_inverse_of_general_matrix():
    matrix = Matrix([[2.0, 1.0], [1.0, 1.0]])
    np.testing.assert_allclose(matrix.inverse().inner, [[1.0, -1.0], [-1.0, 2.0]])


def test_rejects_non_square_input():
    with pytest.raises(ValueError):
        Matrix([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])


def test_single_precision_is_preserved():
    a = Matrix.rotation(0.3, dtype=np.float32)
    b = Matrix.rotation(-0.1, dtype=np.float32)
    assert a.dtype == np.float32
    assert (a @ b).dtype == np.float32
    assert a.inverse().dtype == np.float32
    assert (a @ Vector2D(1.0, 2.0, dtype=np.float32)).dtype == np.float32
    assert (a @ b).allclose(Matrix.rotation(0.2, dtype=np.float32))


def test_vector_arithmetic():
    a = Vector2D(1.0, 2.0)
    b = Vector2D(-3.0, 0.5)
    assert a + b == b + a
    assert a - b == Vector2D(4.0, 1.5)
    assert -a == Vector2D(-1.0, -2.0)
    assert 2 * a == Vector2D(2.0, 4.0)
    assert Vector2D(3.0, 4.0).norm() == pytest.approx(5.0)
