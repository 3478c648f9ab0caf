import argparse
import logging

import numpy as np

from .config import EnvelopeConfig
from .envelope_problem import EnvelopeProblemSOS


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build an SOS instance for the lower envelope of univariate polynomials")
    parser.add_argument("--degree", type=int, required=True, help="Maximal degree d; polynomials have 2d + 1 coefficients")
    parser.add_argument("--domain", type=float, nargs=2, default=[-1.0, 1.0], metavar=("MIN", "MAX"),
                        help="Domain of the variable (default: -1 1)")
    parser.add_argument(
        "--polynomial",
        type=float,
        nargs="+",
        action="append",
        required=True,
        help="Coefficients of one polynomial, constant term first, e.g. --polynomial -1 0 1 (repeat for more)",
    )
    parser.add_argument("--interpolant", action="store_true",
                        help="Polynomials are given by their values at all 2d + 1 interpolation nodes")
    parser.add_argument("--unweighted", action="store_true", help="Do not add the 1 - x^2 weighted cones")
    parser.add_argument("--save-instance", default=None, help="Write the dual A, b and c to this .npz file")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Log progress (-vv for debug output)")
    return parser.parse_args(argv)


def pad_coefficients(coefficients, length):
    """Zero-pad a coefficient list to the basis size."""
    if len(coefficients) > length:
        raise ValueError(f"Polynomial has {len(coefficients)} coefficients, at most {length} are allowed")
    padded = np.zeros(length)
    padded[:len(coefficients)] = coefficients
    return padded


def build_instance(args):
    config = EnvelopeConfig(
        input_in_interpolant_basis=args.interpolant,
        use_weighted_polynomials=not args.unweighted,
    )
    problem = EnvelopeProblemSOS(1, args.degree, [tuple(args.domain)], config=config)

    for coefficients in args.polynomial:
        # Node values are never padded, add_polynomial rejects anything but U of them
        if not args.interpolant:
            coefficients = pad_coefficients(coefficients, problem.U)
        problem.add_polynomial(np.asarray(coefficients, dtype=float))

    instance = problem.construct_sos_instance()
    print(f"Degree {problem.max_degree}: L = {problem.L}, U = {problem.U}, {problem.num_polynomials()} polynomials")
    print(instance.summary())

    if args.save_instance is not None:
        np.savez(args.save_instance, A=instance.constraints.A, b=instance.constraints.b, c=instance.constraints.c)
        print(f"Saved dual instance to {args.save_instance}")

    return instance


def main(argv=None):
    args = parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s")

    build_instance(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
