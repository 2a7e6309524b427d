import numpy as np
from scipy.linalg import qr



def _random_orthonormal(rng, rows, cols):
    Q, R = qr(rng.standard_normal((rows, cols)), mode="economic")
    # fix column signs so Q is uniformly distributed
    Q *= np.sign(np.diag(R))
    return Q



def planted_spectrum_matrix(m, n, singular_values, rseed=0):
    """Constructs an m x n matrix with prescribed singular values and random singular vectors.
    Returns A, U, s, V with A = U diag(s) V^T; s is sorted in descending order.
    """

    s = np.sort(np.asarray(singular_values, dtype=float))[::-1]
    r = s.size
    assert r <= min(m, n), "More singular values than min(m, n)!"
    assert np.all(s >= 0), "Singular values must be nonnegative."

    rng = np.random.default_rng(rseed)
    U = _random_orthonormal(rng, m, r)
    V = _random_orthonormal(rng, n, r)
    A = (U * s) @ V.T

    return A, U, s, V



def planted_rank_matrix(m, n, rank, signal=10.0, noise=1.0, rseed=0):
    """Constructs a matrix whose leading `rank` singular values stand at least `signal` times
    above the remaining ones, which are spread over (0, noise].
    """

    assert rank < min(m, n), "rank must be smaller than min(m, n)."
    p = min(m, n)
    tail = noise * np.linspace(1.0, 0.1, p - rank)
    head = signal * noise * np.linspace(3.0, 1.5, rank)
    A, U, s, V = planted_spectrum_matrix(m, n, np.concatenate([head, tail]), rseed=rseed)

    return A, U, s, V



def rank_deficient_diagonal(m, n, diag):
    """Padded m x n diagonal matrix. Entries of diag beyond min(m, n) are ignored;
    missing ones are zero, so the rank equals the number of nonzero entries given.
    """

    A = np.zeros((m, n))
    d = np.asarray(diag, dtype=float)[: min(m, n)]
    A[np.arange(d.size), np.arange(d.size)] = d

    return A
