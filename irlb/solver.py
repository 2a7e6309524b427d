"""Implicitly restarted Lanczos bidiagonalization (IRLB).

Computes a few of the largest singular values and the corresponding singular
vectors of a dense matrix without forming a full SVD, using the augmented
implicitly restarted Lanczos bidiagonalization method of

    J. Baglama and L. Reichel, "Augmented implicitly restarted Lanczos
    bidiagonalization methods," SIAM J. Sci. Comput. 27 (2005), 19-42.

:func:`irlb_core` is the iteration itself. It works in caller-provided
buffers (:class:`irlb.workspace.IRLBWorkspace`) and reports failures through
:class:`irlb.status.IRLBStatus` codes instead of raising. :func:`irlb` wraps
it: it prepares the matrix, seed and workspace and returns an
:class:`IRLBResult`.
"""

import numbers
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .convergence import convtests
from .linalg import get_backend, orthog
from .status import IRLBError, IRLBStatus
from .workspace import IRLBWorkspace


DEFAULT_MAXIT = 100
DEFAULT_TOL = 1e-5
DEFAULT_EXTRA_WORK = 7



@dataclass
class IRLBResult:
    """Outcome of an IRLB run.

    s, U and V hold the nu approximate singular triplets (A V ~ U diag(s)).
    They are filled on SUCCESS and NOT_CONVERGED, and are None for every
    other status. iterations and mprod are always reported.
    """

    status: IRLBStatus
    iterations: int
    mprod: int
    s: Optional[np.ndarray] = None
    U: Optional[np.ndarray] = None
    V: Optional[np.ndarray] = None
    tol: Optional[float] = None
    history: List[dict] = field(default_factory=list)

    @property
    def converged(self):
        return self.status == IRLBStatus.SUCCESS

    @property
    def Vt(self):
        return None if self.V is None else self.V.T

    def check(self):
        """Return self on success, raise IRLBError otherwise."""
        if self.status != IRLBStatus.SUCCESS:
            raise IRLBError(self.status)
        return self

    def reconstruct(self):
        """Rank-nu approximation U diag(s) V^T."""
        if self.s is None:
            raise IRLBError(self.status, f"No singular triplets to reconstruct from ({self.status.message}).")
        return (self.U * self.s) @ self.V.T



def valid_dimensions(m, n, nu, work, maxit, tol):
    """Whether a problem of this shape and configuration can be started."""
    if m < 4 or n < 4 or work < 4:
        return False
    if nu < 1 or work <= nu or work > min(m, n):
        return False
    if maxit < 1 or not tol > 0:
        return False
    return True



def irlb_core(A, nu, work, maxit, tol, eps, ws, backend, verbose=False, record_history=False):
    """Run the IRLB iteration in the buffers of ``ws``.

    Parameters
    ----------
    A : ndarray, shape (m, n)
        Column-major float64 matrix, read only.
    nu : int
        Number of singular triplets requested.
    work : int
        Working subspace dimension, 4 <= work, nu < work <= min(m, n).
    maxit : int
        Maximum number of outer (restart) iterations.
    tol : float
        Convergence tolerance relative to the largest Ritz value.
    eps : float
        Machine epsilon, threshold for linear dependence.
    ws : IRLBWorkspace
        Buffers sized for (m, n, nu, work). ws.V[:, 0] holds the starting
        vector, which does not need to be normalized.
    backend : object
        Linear-algebra backend, see :mod:`irlb.linalg`.
    verbose : bool
        Print one line per outer iteration.
    record_history : bool
        Keep a per-iteration record of the residual estimates. Off by
        default, since it grows with the number of outer iterations.

    Returns
    -------
    status : IRLBStatus
    iterations : int
        Outer iterations performed.
    mprod : int
        Matrix-vector products with A or A^T.
    history : list of dict
        Per outer iteration: k, mprod, smax, ritz values and residual
        estimates of the first nu candidates. Empty unless record_history.

    On SUCCESS and NOT_CONVERGED, ws.s holds the singular values and the
    first nu columns of ws.U and ws.V the left and right singular vectors.
    """
    m, n = A.shape
    history = []
    if not valid_dimensions(m, n, nu, work, maxit, tol):
        return IRLBStatus.INVALID_INPUT, 0, 0, history
    if not (np.isfinite(A).all() and np.isfinite(ws.V[:, 0]).all()):
        return _fail(IRLBStatus.INVALID_INPUT, 0, 0, history, verbose)

    la = backend
    V, V1, W, U1, F = ws.V, ws.V1, ws.W, ws.U1, ws.F
    B, BU, BV, BS = ws.B, ws.BU, ws.BV, ws.BS
    res, T = ws.res, ws.T

    mprod = 0
    iteration = 0
    k = 0
    smax = 0.0
    R_F = 0.0
    converged = False
    B.fill(0.0)

    while iteration < maxit:

        j = 0
        if iteration == 0:
            d = la.nrm2(V[:, 0])
            if d < 2 * eps:
                return _fail(IRLBStatus.NEAR_NULL_SPACE, iteration, mprod, history, verbose)
            la.scal(1.0 / d, V[:, 0])
        else:
            j = k

        # Lanczos bidiagonalization with full reorthogonalization:
        #   A V = W B,   A^T W = V B^T + F e_work^T
        la.gemm(A, V[:, j], W[:, j])
        mprod += 1
        if iteration > 0:
            orthog(W[:, :j], W[:, j], T, la)

        S = la.nrm2(W[:, j])
        if iteration == 0 and S < tol:
            return _fail(IRLBStatus.NEAR_NULL_SPACE, iteration, mprod, history, verbose)
        if S < eps:
            return _fail(IRLBStatus.LINEAR_DEPENDENCE, iteration, mprod, history, verbose)
        la.scal(1.0 / S, W[:, j])

        while j < work:
            la.gemm(A, W[:, j], F, trans_a=True)
            mprod += 1
            la.axpy(-S, V[:, j], F)
            orthog(V[:, :j + 1], F, T, la)
            R_F = la.nrm2(F)

            if j + 1 < work:
                if R_F < eps:
                    return _fail(IRLBStatus.LINEAR_DEPENDENCE, iteration, mprod, history, verbose)
                V[:, j + 1] = F
                la.scal(1.0 / R_F, V[:, j + 1])
                B[j, j] = S
                B[j, j + 1] = R_F

                la.gemm(A, V[:, j + 1], W[:, j + 1])
                mprod += 1
                # one step of classical Gram-Schmidt
                la.axpy(-R_F, W[:, j], W[:, j + 1])
                if iteration > 0:
                    orthog(W[:, :j + 1], W[:, j + 1], T, la)

                S = la.nrm2(W[:, j + 1])
                if S < eps:
                    return _fail(IRLBStatus.LINEAR_DEPENDENCE, iteration, mprod, history, verbose)
                la.scal(1.0 / S, W[:, j + 1])
            else:
                B[j, j] = S
            j += 1

        la.svd(B, BU, BS, BV)
        if R_F > 0:
            la.scal(1.0 / R_F, F)
        # residual of Ritz triplet i is R_F times the last entry of its left vector
        np.multiply(BU[work - 1, :work], R_F, out=res[:work])

        smax = max(smax, float(BS[0]))
        converged, k = convtests(work, nu, tol, smax, res, k)
        iteration += 1

        if record_history:
            history.append({
                "iteration": iteration,
                "mprod": mprod,
                "k": k,
                "smax": smax,
                "ritz_values": BS[:nu].copy(),
                "residuals": np.abs(res[:nu]),
            })
        if verbose:
            print(f"irlb: iter {iteration:4d}  mprod {mprod:6d}  k {k:3d}  "
                  f"max residual {np.abs(res[:nu]).max():.3e}  smax {smax:.6e}")

        if converged or iteration >= maxit:
            break

        # Restart: keep the k leading Ritz vectors, append the residual direction
        la.gemm(V, BV[:k, :], V1[:, :k], trans_b=True)
        V[:, :k] = V1[:, :k]
        V[:, k] = F

        B.fill(0.0)
        for i in range(k):
            B[i, i] = BS[i]
        B[:k, k] = res[:k]

        la.gemm(W, BU[:, :k], U1[:, :k])
        W[:, :k] = U1[:, :k]

    # Ritz triplets of the last (unrestarted) basis
    ws.s[:] = BS[:nu]
    la.gemm(W, BU[:, :nu], ws.U[:, :nu])
    la.gemm(V, BV[:nu, :], V1[:, :nu], trans_b=True)
    V[:, :nu] = V1[:, :nu]

    status = IRLBStatus.SUCCESS if converged else IRLBStatus.NOT_CONVERGED
    if verbose:
        print(f"irlb: {status.message} after {iteration} iterations, {mprod} matrix-vector products")
    return status, iteration, mprod, history



def _as_count(name, value):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{name} must be an integer, got {value!r}.")
    return int(value)



def _fail(status, iteration, mprod, history, verbose):
    if verbose:
        print(f"irlb: {status.message} (iteration {iteration}, {mprod} matrix-vector products)")
    return status, iteration, mprod, history



def irlb(A, nu, work=None, maxit=DEFAULT_MAXIT, tol=DEFAULT_TOL, v0=None, eps=None, rseed=0,
         workspace=None, backend=None, verbose=False, record_history=False):
    """Estimate the nu largest singular triplets of a dense matrix A.

    Parameters
    ----------
    A : array_like, shape (m, n)
        Dense matrix, both dimensions at least 4.
    nu : int
        Number of singular values/vectors to compute.
    work : int, optional
        Working subspace dimension, nu < work <= min(m, n). Defaults to
        min(nu + 7, min(m, n)).
    maxit : int, default 100
        Maximum number of restarts.
    tol : float, default 1e-5
        A triplet is converged when its residual estimate is below
        tol times the largest Ritz value seen.
    v0 : array_like, shape (n,), optional
        Starting right vector. Drawn from a standard normal when None.
    eps : float, optional
        Linear dependence threshold, machine epsilon by default.
    rseed : int, default 0
        Seed for the random starting vector.
    workspace : IRLBWorkspace, optional
        Preallocated buffers to reuse across calls; must match
        (m, n, nu, work).
    backend : {"blas", "numpy"} or object, optional
        Linear-algebra backend, see :mod:`irlb.linalg`.
    verbose : bool, default False
        Print progress.
    record_history : bool, default False
        Store per-iteration residual estimates in ``result.history``
        (needed by :func:`irlb.plotting.plot_convergence`).

    Returns
    -------
    IRLBResult
        Check ``result.status``; ``result.check()`` raises IRLBError unless
        the run converged.
    """
    A = np.asarray(A, dtype=float)
    if A.ndim != 2:
        raise ValueError(f"A must be a 2D array, got {A.ndim} dimensions.")
    A = np.asfortranarray(A)
    m, n = A.shape

    nu = _as_count("nu", nu)
    if work is None:
        work = min(nu + DEFAULT_EXTRA_WORK, min(m, n))
    work = _as_count("work", work)
    if eps is None:
        eps = np.finfo(float).eps
    la = get_backend(backend)

    if not valid_dimensions(m, n, nu, work, maxit, tol):
        if verbose:
            print(f"irlb: {IRLBStatus.INVALID_INPUT.message} (m={m}, n={n}, nu={nu}, work={work}, maxit={maxit}, tol={tol})")
        return IRLBResult(IRLBStatus.INVALID_INPUT, 0, 0, tol=tol)

    if workspace is None:
        ws = IRLBWorkspace(m, n, nu, work)
    else:
        if not workspace.fits(m, n, nu, work):
            raise ValueError(
                f"Workspace sized for (m, n, nu, work) = {(workspace.m, workspace.n, workspace.nu, workspace.work)}, "
                f"problem needs {(m, n, nu, work)}."
            )
        ws = workspace
        ws.reset()

    if v0 is None:
        rng = np.random.default_rng(rseed)
        v0 = rng.standard_normal(n)
    ws.set_seed(v0)

    status, iterations, mprod, history = irlb_core(A, nu, work, maxit, tol, eps, ws, la, verbose=verbose,
                                                   record_history=record_history)

    result = IRLBResult(status, iterations, mprod, tol=tol, history=history)
    if status in (IRLBStatus.SUCCESS, IRLBStatus.NOT_CONVERGED):
        result.s = ws.s.copy()
        result.U = np.array(ws.U[:, :nu])
        result.V = np.array(ws.V[:, :nu])
    return result
