"""Dense linear-algebra primitives used by the IRLB iteration.

The solver only ever talks to a backend object through five operations:

    nrm2(x)                       Euclidean norm of a vector
    axpy(alpha, x, y)             y <- alpha * x + y                 (in place)
    scal(alpha, x)                x <- alpha * x                     (in place)
    gemm(a, b, out, ...)          out <- alpha * op(a) op(b) + beta * out
    svd(a, u, s, vt)              full SVD of a small square matrix

Any object providing these methods can be passed as ``backend=`` to
:func:`irlb.irlb`. Two implementations ship: :class:`BlasBackend` calls the
BLAS/LAPACK routines exposed by SciPy directly, :class:`NumpyBackend` uses
plain NumPy.

Vectors are 1D views, matrices are column-major (Fortran ordered) so that
column slices such as ``V[:, :j]`` stay contiguous and reach BLAS without a
copy. Every write goes to a caller-owned ``out`` array; ``out`` must not
alias ``a`` or ``b``.
"""

import numpy as np
import scipy.linalg
from scipy.linalg import blas



def _as_matrix(x):
    """View a 1D vector as a single column."""
    if x.ndim == 1:
        return x[:, None]
    return x



class BlasBackend:
    """Backend calling the double precision BLAS/LAPACK wrappers of scipy.linalg."""

    name = "blas"

    def nrm2(self, x):
        return float(blas.dnrm2(x))

    def axpy(self, alpha, x, y):
        y[...] = blas.daxpy(x, y, a=alpha)
        return y

    def scal(self, alpha, x):
        x[...] = blas.dscal(alpha, x)
        return x

    def gemm(self, a, b, out, alpha=1.0, beta=0.0, trans_a=False, trans_b=False):
        a2 = _as_matrix(a)
        b2 = _as_matrix(b)
        if a2.size == 0 or b2.size == 0:
            out *= beta
            return out
        c_out = _as_matrix(out)
        # a column-major float64 out is written by dgemm directly
        in_place = c_out.flags.f_contiguous and c_out.dtype == np.float64
        c = blas.dgemm(alpha, a2, b2, beta=beta, c=c_out, overwrite_c=int(in_place),
                       trans_a=int(trans_a), trans_b=int(trans_b))
        if not np.may_share_memory(c, out):
            out[...] = c.reshape(out.shape)
        return out

    def svd(self, a, u, s, vt):
        # gesvd rather than the default gesdd
        _u, _s, _vt = scipy.linalg.svd(a, full_matrices=True, lapack_driver="gesvd", check_finite=False)
        u[...] = _u
        s[...] = _s
        vt[...] = _vt
        return u, s, vt



class NumpyBackend:
    """Backend written with numpy / numpy.linalg only."""

    name = "numpy"

    def nrm2(self, x):
        return float(np.linalg.norm(x))

    def axpy(self, alpha, x, y):
        y += alpha * x
        return y

    def scal(self, alpha, x):
        x *= alpha
        return x

    def gemm(self, a, b, out, alpha=1.0, beta=0.0, trans_a=False, trans_b=False):
        a2 = _as_matrix(a)
        b2 = _as_matrix(b)
        if trans_a:
            a2 = a2.T
        if trans_b:
            b2 = b2.T
        if alpha == 1.0 and beta == 0.0:
            np.matmul(a2, b2, out=_as_matrix(out))
            return out
        c = a2 @ b2
        if alpha != 1.0:
            c *= alpha
        if beta != 0.0:
            c += beta * _as_matrix(out)
        out[...] = c.reshape(out.shape)
        return out

    def svd(self, a, u, s, vt):
        _u, _s, _vt = np.linalg.svd(a, full_matrices=True)
        u[...] = _u
        s[...] = _s
        vt[...] = _vt
        return u, s, vt



_BACKENDS = {
    "blas": BlasBackend,
    "numpy": NumpyBackend,
}

_REQUIRED = ("nrm2", "axpy", "scal", "gemm", "svd")


def get_backend(backend=None):
    """Resolve a backend name (or None for the default) to a backend instance.

    Objects that already implement the five primitives are returned as is.
    """
    if backend is None:
        return BlasBackend()
    if isinstance(backend, str):
        try:
            return _BACKENDS[backend.lower()]()
        except KeyError:
            raise ValueError(f"Unknown backend '{backend}', expected one of {sorted(_BACKENDS)}.") from None
    missing = [op for op in _REQUIRED if not callable(getattr(backend, op, None))]
    if missing:
        raise ValueError(f"Backend object is missing required operations: {missing}")
    return backend



def orthog(X, y, T, backend):
    """One classical Gram-Schmidt pass of y against every column of X, in place.

    T is scratch space of length at least X.shape[1]; on return its leading
    entries hold the removed coefficients X^T y.
    """
    ncols = X.shape[1]
    if ncols == 0:
        return y
    t = T[:ncols]
    backend.gemm(X, y, t, trans_a=True)
    backend.gemm(X, t, y, alpha=-1.0, beta=1.0)
    return y
