# tests/test_degenerate.py
import numpy as np
import pytest

from irlb import irlb, IRLBStatus
from irlb.matrices import planted_rank_matrix, rank_deficient_diagonal



@pytest.mark.parametrize("backend", ["blas", "numpy"])
def test_zero_seed_is_near_null_space(backend):
    A, _, _, _ = planted_rank_matrix(20, 12, 2, rseed=0)

    result = irlb(A, 2, work=6, v0=np.zeros(12), backend=backend)

    assert result.status == IRLBStatus.NEAR_NULL_SPACE
    assert result.iterations == 0
    assert result.mprod == 0
    assert result.s is None and result.U is None and result.V is None




@pytest.mark.parametrize("backend", ["blas", "numpy"])
def test_zero_matrix_is_near_null_space(backend):
    A = np.zeros((12, 10))

    result = irlb(A, 2, work=5, backend=backend)

    assert result.status == IRLBStatus.NEAR_NULL_SPACE
    assert result.mprod == 1




@pytest.mark.parametrize("backend", ["blas", "numpy"])
def test_seed_spanning_invariant_subspace_is_linear_dependence(backend):
    # A^T A e_0 = 16 e_0, so the Krylov space stops growing after one step
    A = rank_deficient_diagonal(20, 10, [4.0, 3.0, 2.0, 1.0])
    v0 = np.zeros(10)
    v0[0] = 1.0

    result = irlb(A, 2, work=5, v0=v0, backend=backend)

    assert result.status == IRLBStatus.LINEAR_DEPENDENCE
    assert result.iterations == 0
    assert result.mprod == 2
    assert result.s is None




@pytest.mark.parametrize("m, n, nu, work, maxit, tol", [
    (3, 10, 1, 4, 10, 1e-5),     # too few rows
    (10, 3, 1, 4, 10, 1e-5),     # too few columns
    (10, 10, 1, 3, 10, 1e-5),    # work < 4
    (10, 10, 4, 4, 10, 1e-5),    # work must exceed nu
    (10, 10, 0, 4, 10, 1e-5),    # nu < 1
    (10, 8, 2, 9, 10, 1e-5),     # work > min(m, n)
    (10, 10, 2, 5, 0, 1e-5),     # maxit < 1
    (10, 10, 2, 5, 10, 0.0),     # tol must be positive
])
def test_invalid_configuration(m, n, nu, work, maxit, tol):
    A = np.random.default_rng(0).standard_normal((m, n))

    result = irlb(A, nu, work=work, maxit=maxit, tol=tol)

    assert result.status == IRLBStatus.INVALID_INPUT
    assert result.status == -1
    assert result.iterations == 0
    assert result.mprod == 0
    assert result.s is None




@pytest.mark.parametrize("backend", ["blas", "numpy"])
def test_collapsed_left_vector_is_linear_dependence(backend):
    # A e_1 = A e_0 = e_0: the second left vector cancels exactly after the
    # Gram-Schmidt step, while the right residual still has unit norm
    A = np.zeros((6, 5))
    A[0, 0] = 1.0
    A[0, 1] = 1.0
    v0 = np.zeros(5)
    v0[0] = 1.0

    result = irlb(A, 1, work=4, v0=v0, backend=backend)

    assert result.status == IRLBStatus.LINEAR_DEPENDENCE
    # A v0, A^T w0 and A v1: the failure is on the left extension
    assert result.mprod == 3
    assert result.s is None




@pytest.mark.parametrize("backend", ["blas", "numpy"])
@pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
def test_non_finite_matrix_is_invalid_input(backend, bad):
    A = np.random.default_rng(0).standard_normal((20, 10))
    A[3, 4] = bad

    result = irlb(A, 2, work=5, backend=backend)

    assert result.status == IRLBStatus.INVALID_INPUT
    assert result.mprod == 0
    assert result.s is None




def test_non_finite_seed_is_invalid_input():
    A = np.random.default_rng(0).standard_normal((20, 10))
    v0 = np.ones(10)
    v0[2] = np.nan

    result = irlb(A, 2, work=5, v0=v0)

    assert result.status == IRLBStatus.INVALID_INPUT
