import importlib.util
import json
import os
import subprocess
import sys
import unittest
import numpy as np
import envgp.num as gnp
from envgp.errors import NumericalError

HAS_JAX = importlib.util.find_spec("jax") is not None
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# The backend is chosen once per process, at import time.
FIT_AND_PREDICT = """
import json
import numpy as np
import envgp as gp

x = np.linspace(0.0, 10.0, 15)
y = gp.misc.testfunctions.two_sines(x)
xt = np.linspace(-1.0, 11.0, 7)
noise_std = 0.1

hp = gp.fit_hyperparameters(x, y, noise_std)
post = gp.predict(x, y, xt, *hp, noise_std)
fixed = gp.predict(x, y, xt, 0.3, 0.1, noise_std)
K = gp.evaluate_kernel(x, xt, 0.3, 0.1)
model, _ = gp.Model(noise_std).fit(x, y)
outputs = [K, post.mean, post.covariance, model.predict(x, y, xt).mean, model.covariance(x)]

print(json.dumps({
    "backend": gp.config.get_backend(),
    "hyperparameters": list(hp),
    "model_hyperparameters": list(model.hyperparameters),
    "mean": post.mean.tolist(),
    "fixed_mean": fixed.mean.tolist(),
    "fixed_covariance": fixed.covariance.tolist(),
    "kernel": K.tolist(),
    "ndarray": [type(a) is np.ndarray for a in outputs],
    "writeable": [bool(a.flags.writeable) for a in outputs],
}))
"""


def run_with_backend(backend):
    env = dict(os.environ)
    env["ENVGP_BACKEND"] = backend
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in [ROOT_DIR, env.get("PYTHONPATH")] if p
    )
    out = subprocess.run(
        [sys.executable, "-c", FIT_AND_PREDICT],
        env=env,
        cwd=ROOT_DIR,
        capture_output=True,
        text=True,
        timeout=600,
        check=True,
    )
    return json.loads(out.stdout.strip().splitlines()[-1])


class TestNumpyBackend(unittest.TestCase):
    def test_finite_difference_gradient(self):
        from envgp.num import numpy_backend as nb

        def f(p):
            return nb.sum(p**2) + 3.0 * p[0]

        g = nb.grad(f)(np.array([1.0, -2.0]))
        np.testing.assert_allclose(g, [5.0, -4.0], atol=1e-8)

    def test_cholesky_failure(self):
        from envgp.num import numpy_backend as nb

        with self.assertRaises(NumericalError):
            nb.cholesky(np.array([[1.0, 2.0], [2.0, 1.0]]))
        with self.assertRaises(NumericalError):
            nb.cholesky(np.array([[np.inf, 0.0], [0.0, 1.0]]))

    def test_backend_api(self):
        used = [
            "array", "asarray", "ones", "eye", "to_np", "to_scalar", "grad",
            "DifferentiableSelectionCriterion", "distance", "cholesky",
            "cholesky_solve", "set_seed", "rand", "randn", "svd", "einsum",
            "matmul", "diag", "pi", "float64",
        ]
        for name in used:
            self.assertTrue(hasattr(gnp, name), name)
        for name in ["value_and_grad", "zeros", "full", "linspace", "isarray", "eps"]:
            self.assertFalse(hasattr(gnp, name), name)

    def test_distance(self):
        D = gnp.to_np(gnp.distance(gnp.asarray([0.0, 1.0]), gnp.asarray([3.0])))
        np.testing.assert_allclose(D, [[3.0], [2.0]])


@unittest.skipUnless(HAS_JAX, "jax is not installed")
class TestJaxBackend(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        from envgp.num import jax_backend

        cls.jb = jax_backend

    def test_cholesky_solve_matches_numpy(self):
        A = np.array([[4.0, 1.0, 0.5], [1.0, 3.0, 0.2], [0.5, 0.2, 2.0]])
        b = np.array([1.0, -1.0, 2.0])
        x, L = self.jb.cholesky_solve(self.jb.asarray(A), self.jb.asarray(b))
        np.testing.assert_allclose(self.jb.to_np(x), np.linalg.solve(A, b), atol=1e-12)
        np.testing.assert_allclose(self.jb.to_np(L), np.linalg.cholesky(A), atol=1e-12)

    def test_cholesky_failure(self):
        with self.assertRaises(NumericalError):
            self.jb.cholesky(self.jb.asarray([[1.0, 2.0], [2.0, 1.0]]))
        with self.assertRaises(NumericalError):
            self.jb.cholesky(self.jb.asarray([[np.inf, 0.0], [0.0, 1.0]]))

    def test_to_np_is_writable(self):
        a = self.jb.to_np(self.jb.asarray([1.0, 2.0]))
        self.assertIsInstance(a, np.ndarray)
        self.assertTrue(a.flags.writeable)
        a += 1.0
        np.testing.assert_array_equal(a, [2.0, 3.0])

    def test_double_precision(self):
        self.assertEqual(self.jb.asarray([1.0, 2.0]).dtype, np.float64)
        self.assertEqual(self.jb.asarray(1.0).shape, (1,))

    def test_selection_criterion_gradient(self):
        jnp = self.jb

        def crit(p, x, z):
            return jnp.sum((jnp.exp(p[0]) * x + p[1] - z) ** 2)

        x = jnp.asarray([0.0, 1.0, 2.0])
        z = jnp.asarray([1.0, 2.0, 4.0])
        c = self.jb.DifferentiableSelectionCriterion(crit, x, z)
        p = np.array([0.0, 0.5])

        r = np.exp(p[0]) * np.array([0.0, 1.0, 2.0]) + p[1] - np.array([1.0, 2.0, 4.0])
        expected = [
            2.0 * np.sum(r * np.exp(p[0]) * np.array([0.0, 1.0, 2.0])),
            2.0 * np.sum(r),
        ]
        self.assertAlmostEqual(c.evaluate(p), float(np.sum(r**2)))
        g = c.gradient(p)
        self.assertIsInstance(g, np.ndarray)
        np.testing.assert_allclose(g, expected, atol=1e-10)

    def test_distance(self):
        D = self.jb.distance(self.jb.asarray([0.0, 1.0]), self.jb.asarray([3.0]))
        np.testing.assert_allclose(self.jb.to_np(D), [[3.0], [2.0]])

    def test_seed(self):
        self.jb.set_seed(3)
        a = self.jb.to_np(self.jb.randn(4))
        self.jb.set_seed(3)
        b = self.jb.to_np(self.jb.randn(4))
        np.testing.assert_array_equal(a, b)


@unittest.skipUnless(HAS_JAX, "jax is not installed")
class TestJaxEndToEnd(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.np_res = run_with_backend("numpy")
        cls.jax_res = run_with_backend("jax")

    def test_backend_selected(self):
        self.assertEqual(self.np_res["backend"], "numpy")
        self.assertEqual(self.jax_res["backend"], "jax")

    def test_outputs_are_writable_numpy_arrays(self):
        for res in [self.np_res, self.jax_res]:
            with self.subTest(backend=res["backend"]):
                self.assertTrue(all(res["ndarray"]))
                self.assertTrue(all(res["writeable"]))

    def test_fixed_hyperparameters_agree(self):
        for key in ["kernel", "fixed_mean", "fixed_covariance"]:
            with self.subTest(output=key):
                np.testing.assert_allclose(
                    self.jax_res[key], self.np_res[key], atol=1e-8
                )

    def test_fitted_hyperparameters_agree(self):
        # autodiff and finite-difference gradients reach the same optimum
        for key in ["hyperparameters", "model_hyperparameters"]:
            with self.subTest(output=key):
                np.testing.assert_allclose(
                    self.jax_res[key], self.np_res[key], atol=1e-3
                )
        np.testing.assert_allclose(
            self.jax_res["mean"], self.np_res["mean"], atol=1e-3
        )


if __name__ == "__main__":
    unittest.main()
