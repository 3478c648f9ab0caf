import numpy as np
import matplotlib.pyplot as plt


def plot_polynomials_and_solution(problem, solution, path="plot.png", num_points=1000, show=False, keep_open=False):
    """
    Plot the registered polynomials together with the envelope found by the solver.

    :param problem: EnvelopeProblemSOS the solution belongs to.
    :param solution: Solution of the interior-point solver.
    :param path: File the figure is saved to, None to skip saving.
    :param num_points: Number of sample points.
    :param show: Open a window with the figure.
    :param keep_open: Leave the figure registered with pyplot. The caller then has to close it
                      with plt.close(fig). By default it is closed before returning.
    :return: The matplotlib figure.
    """
    assert num_points > 1, "Need at least two sample points"
    assert len(problem.domain) == 1, "Only univariate domains can be plotted"

    print("Create picture of solution..." if path is None else f"Create picture of solution. Saved in {path}...")
    x = problem.domain.linspace(num_points, pad=0.05)
    x_min, x_max = problem.domain.lower, problem.domain.upper

    polys = problem.polynomials_in_monomial_basis(solution)
    plots = np.array([problem.evaluate(poly, x) for poly in polys])
    bound_plots, envelope_plot = plots[:-1], plots[-1]

    # The y-range covers the bounds inside the domain up to the top of their pointwise minimum
    inside = (x >= x_min) & (x <= x_max)
    y_min = bound_plots[:, inside].min()
    y_max = bound_plots[:, inside].min(axis=0).max()

    offset_envelope = envelope_plot - (y_max - y_min) / 100.

    fig, ax = plt.subplots(figsize=(20, 40 / 3))
    y_bound_offset = (y_max - y_min) / 50
    ax.set_ylim(y_min - y_bound_offset, y_max + y_bound_offset)
    for bound_plot in bound_plots:
        ax.plot(x, bound_plot)
    ax.plot(x, offset_envelope, label="lower envelope")

    ax.axvline(x_min, 0, 1, linestyle="--", color="black", alpha=.5)
    ax.axvline(x_max, 0, 1, linestyle="--", color="black", alpha=.5)

    title = "Lower envelope"
    title += ", weighted" if problem.use_weighted_polynomials else ", unweighted"
    title += f", degree {problem.U - 1}."
    ax.set_title(title)
    ax.legend()

    if path is not None:
        fig.savefig(path)
    if show:
        plt.show()
    if not keep_open:
        plt.close(fig)

    print("Done.")
    return fig
