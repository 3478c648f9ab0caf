import pytest
import numpy as np
import sys
import os

# Add the parent directory to the path to import the module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sos_envelopes.__main__ import build_instance, main, pad_coefficients, parse_args


def test_pad_coefficients():
    assert np.array_equal(pad_coefficients([1.0, 2.0], 5), [1.0, 2.0, 0.0, 0.0, 0.0])
    with pytest.raises(ValueError):
        pad_coefficients([1.0] * 6, 5)


def test_build_instance(capsys):
    args = parse_args(["--degree", "1", "--polynomial", "0", "--polynomial", "-1", "0", "1"])
    instance = build_instance(args)
    assert instance.primal.A.shape == (3, 6)
    assert len(instance.barrier) == 2

    out = capsys.readouterr().out
    assert "L = 2, U = 3, 2 polynomials" in out


def test_main_saves_instance(tmp_path, capsys):
    path = tmp_path / "instance.npz"
    exit_code = main([
        "--degree", "2",
        "--unweighted",
        "--polynomial", "1",
        "--polynomial", "0", "1",
        "--polynomial", "-1", "0", "2",
        "--save-instance", str(path),
    ])
    assert exit_code == 0

    data = np.load(path)
    assert data["A"].shape == (5, 15)
    assert data["b"].shape == (5,)
    assert data["c"].shape == (15,)
    assert "Saved dual instance" in capsys.readouterr().out


def test_single_polynomial_fails():
    from sos_envelopes.exceptions import TrivialInstanceError
    with pytest.raises(TrivialInstanceError):
        main(["--degree", "1", "--polynomial", "0"])


def test_interpolant_values_are_not_padded():
    from sos_envelopes.exceptions import DimensionMismatchError
    args = parse_args(["--degree", "1", "--interpolant", "--unweighted", "--polynomial", "1", "--polynomial", "2"])
    with pytest.raises(DimensionMismatchError) as excinfo:
        build_instance(args)
    assert excinfo.value.expected == 3
    assert excinfo.value.actual == 1


def test_interpolant_values_at_all_nodes():
    args = parse_args([
        "--degree", "1",
        "--interpolant",
        "--unweighted",
        "--polynomial", "1", "1", "1",
        "--polynomial", "2", "2", "2",
    ])
    instance = build_instance(args)
    assert np.array_equal(instance.primal.b, [1.0, 1.0, 1.0])
