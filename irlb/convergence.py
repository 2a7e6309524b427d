import numpy as np



def convtests(nwork, nu, tol, smax, res, k):
    """Convergence test for the Ritz triplets of one outer iteration.

    Candidate i is converged when |res[i]| < tol * smax. The run is converged
    when the first nu candidates (largest Ritz values) all are. Otherwise the
    number k of Ritz vectors kept for the restart grows to cover nu plus every
    converged candidate, capped so that k < nwork.

    Parameters
    ----------
    nwork : int
        Size of the current Lanczos basis (number of candidates).
    nu : int
        Number of requested singular triplets.
    tol : float
        Relative tolerance.
    smax : float
        Largest Ritz value seen so far, used as the scale reference.
    res : ndarray
        Residual estimates, at least nwork entries.
    k : int
        Number of Ritz vectors retained at the previous restart.

    Returns
    -------
    converged : bool
    k : int
    """
    passed = np.abs(res[:nwork]) < tol * smax
    if passed[:nu].all():
        return True, k

    n_conv = int(np.count_nonzero(passed))
    k = max(k, nu + n_conv)
    # keep three fresh Lanczos steps per restart whenever nwork allows it
    k = min(k, max(nwork - 3, nu))
    k = max(k, 1)
    return False, k
