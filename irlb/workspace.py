import numpy as np



class IRLBWorkspace:
    """Working storage for one IRLB run, allocated once up front.

    All matrices are column-major float64 so that column slices are
    contiguous. Buffers are overwritten in place on every outer iteration
    and nothing is allocated or released while the iteration runs.

    V, W : (n x work), (m x work) right/left Lanczos bases. On exit their
        leading nu columns hold the right singular vectors (V) and the
        final left basis (W).
    U : (m x work) left singular vectors on exit (leading nu columns).
    V1, U1 : double buffers for projecting V and W onto the retained Ritz
        vectors; V1 never aliases V and U1 never aliases W.
    F : (n,) residual vector of the last Lanczos step.
    B : (work x work) projected matrix, upper bidiagonal plus the
        augmentation column written at each restart.
    BU, BS, BV : SVD of B. BV stores V^T, so its rows are right singular
        vectors of B.
    res : (work,) residual estimates of the Ritz triplets.
    T : (work,) scratch for re-orthogonalization coefficients.
    s : (nu,) singular values on exit.
    """

    def __init__(self, m, n, nu, work):

        self.m = int(m)
        self.n = int(n)
        self.nu = int(nu)
        self.work = int(work)

        self.V = np.zeros((self.n, self.work), order="F")
        self.V1 = np.zeros((self.n, self.work), order="F")
        self.W = np.zeros((self.m, self.work), order="F")
        self.U = np.zeros((self.m, self.work), order="F")
        self.U1 = np.zeros((self.m, self.work), order="F")
        self.F = np.zeros(self.n)
        self.B = np.zeros((self.work, self.work), order="F")
        self.BU = np.zeros((self.work, self.work), order="F")
        self.BV = np.zeros((self.work, self.work), order="F")
        self.BS = np.zeros(self.work)
        self.res = np.zeros(self.work)
        self.T = np.zeros(self.work)
        self.s = np.zeros(self.nu)


    def fits(self, m, n, nu, work):
        """Whether this workspace has the shapes required for the given problem."""
        return (self.m, self.n, self.nu, self.work) == (m, n, nu, work)


    def set_seed(self, v0):
        """Store the starting right vector in the first column of V."""
        v0 = np.asarray(v0, dtype=float).reshape(-1)
        if v0.size != self.n:
            raise ValueError(f"Starting vector has length {v0.size}, expected {self.n}.")
        self.V[:, 0] = v0


    def reset(self):
        """Zero every buffer so the workspace can serve another call."""
        for buf in (self.V, self.V1, self.W, self.U, self.U1, self.F, self.B,
                    self.BU, self.BV, self.BS, self.res, self.T, self.s):
            buf.fill(0.0)


    @property
    def nbytes(self):
        return sum(getattr(self, name).nbytes for name in
                   ("V", "V1", "W", "U", "U1", "F", "B", "BU", "BV", "BS", "res", "T", "s"))
