import numpy as np
import scipy.linalg




def triplet_residuals(A, U, s, V):
    """Residual norms ||A v_i - s_i u_i|| and ||A^T u_i - s_i v_i|| for each triplet.
    """
    A = np.asarray(A, dtype=float)
    right = np.linalg.norm(A @ V - U * s, axis=0)
    left = np.linalg.norm(A.T @ U - V * s, axis=0)
    return right, left




def orthonormality_defect(Q):
    """Spectral norm of Q^T Q - I."""
    k = Q.shape[1]
    return np.linalg.norm(Q.T @ Q - np.eye(k), ord=2)




def compare_with_dense_svd(A, result):
    """Compares an IRLBResult against a dense reference SVD of A.
    """

    assert result.s is not None, f"Result carries no singular triplets ({result.status.message})."

    A = np.asarray(A, dtype=float)
    nu = result.s.size
    U_ref, s_ref, Vt_ref = scipy.linalg.svd(A, full_matrices=False)
    U_ref = U_ref[:, :nu]
    s_ref = s_ref[:nu]
    V_ref = Vt_ref[:nu, :].T

    # singular vectors are only defined up to sign
    u_align = np.abs(np.sum(result.U * U_ref, axis=0))
    v_align = np.abs(np.sum(result.V * V_ref, axis=0))

    right, left = triplet_residuals(A, result.U, result.s, result.V)

    data = {
        "s": result.s,
        "s_ref": s_ref,
        "s_rel_err": np.abs(result.s - s_ref) / s_ref[0],
        "u_alignment_err": 1.0 - u_align,
        "v_alignment_err": 1.0 - v_align,
        "right_residuals": right,
        "left_residuals": left,
        "U_orth_defect": orthonormality_defect(result.U),
        "V_orth_defect": orthonormality_defect(result.V),
        "iterations": result.iterations,
        "mprod": result.mprod,
    }

    return data
