# tests/test_matrices.py
import numpy as np

from irlb.matrices import planted_spectrum_matrix, planted_rank_matrix, rank_deficient_diagonal



def test_planted_spectrum_has_requested_singular_values():
    A, U, s, V = planted_spectrum_matrix(30, 20, [1.0, 5.0, 2.0], rseed=0)

    np.testing.assert_allclose(s, [5.0, 2.0, 1.0])
    np.testing.assert_allclose(np.linalg.svd(A, compute_uv=False)[:3], s, rtol=1e-12)
    np.testing.assert_allclose(U.T @ U, np.eye(3), atol=1e-12)
    np.testing.assert_allclose(V.T @ V, np.eye(3), atol=1e-12)




def test_planted_rank_gap():
    A, _, s, _ = planted_rank_matrix(100, 50, 3, signal=10.0, noise=1.0, rseed=0)

    s_ref = np.linalg.svd(A, compute_uv=False)
    np.testing.assert_allclose(s_ref, s, rtol=1e-10, atol=1e-12)
    assert s_ref[2] >= 10.0 * s_ref[3]




def test_rank_deficient_diagonal():
    A = rank_deficient_diagonal(6, 5, [3.0, 2.0])

    assert A.shape == (6, 5)
    assert np.linalg.matrix_rank(A) == 2
    assert A[0, 0] == 3.0 and A[1, 1] == 2.0
