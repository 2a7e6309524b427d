import matplotlib.pyplot as plt
import numpy as np



def plot_convergence(result, plot_path=None):
    """Plots the residual estimate of each requested Ritz triplet against the outer iteration,
    together with the convergence threshold tol * Smax.
    """

    assert len(result.history) > 0, "Result has no iteration history to plot."

    iterations = np.array([h["iteration"] for h in result.history])
    residuals = np.vstack([h["residuals"] for h in result.history])
    thresholds = np.array([result.tol * h["smax"] for h in result.history])

    fig, axs = plt.subplots(figsize=(8,5))
    for i in range(residuals.shape[1]):
        axs.plot(iterations, residuals[:, i], marker="o", label=f"$\\sigma_{{{i+1}}}$")
    axs.plot(iterations, thresholds, color="black", linestyle="--", label="tol $\\cdot$ Smax")
    axs.set_yscale("log")
    axs.set_xlabel("outer iteration")
    axs.set_ylabel("residual estimate")
    axs.set_title(f"IRLB convergence ({result.status.message})")
    axs.legend()
    fig.tight_layout()

    if plot_path is not None:
        fig.savefig(plot_path, dpi=250)
        plt.close()
        return None
    else:
        plt.show()
        return None



def plot_singular_values(result, reference=None, plot_path=None):
    """Plots the computed singular values, and optionally a reference spectrum.
    """

    assert result.s is not None, f"Result carries no singular values ({result.status.message})."

    fig, axs = plt.subplots(figsize=(8,5))
    if reference is not None:
        reference = np.asarray(reference)
        axs.plot(np.arange(1, reference.size + 1), reference, color="gray", marker=".", label="reference")
    axs.scatter(np.arange(1, result.s.size + 1), result.s, color="red", s=60, zorder=10, label="irlb")
    axs.set_yscale("log")
    axs.set_xlabel("index")
    axs.set_ylabel("singular value")
    axs.set_title("Singular values")
    axs.legend()
    fig.tight_layout()

    if plot_path is not None:
        fig.savefig(plot_path, dpi=250)
        plt.close()
        return None
    else:
        plt.show()
        return None
