import math
import unittest
import numpy as np
import envgp as gp
import envgp.num as gnp
from envgp.errors import InvalidArgument
from envgp.kernel import sqexp_kernel, sqexp_covariance


class TestSqexpKernel(unittest.TestCase):
    def setUp(self):
        self.x = np.array([0.0, 0.3, 1.1, 2.0, 4.5, 7.0])

    def test_known_values(self):
        K = gp.evaluate_kernel([0.0], [1.0], 0.0, 0.0)
        self.assertEqual(K.shape, (1, 1))
        self.assertAlmostEqual(K[0, 0], math.exp(-0.5))

        K = gp.evaluate_kernel([1.0], [2.0], math.log(2.0), math.log(3.0))
        self.assertAlmostEqual(K[0, 0], 9.0 * math.exp(-1.0 / 8.0))

    def test_symmetry(self):
        K = gp.evaluate_kernel(self.x, self.x, 0.4, -0.2)
        self.assertTrue(np.allclose(K, K.T, atol=1e-9, rtol=0.0))

    def test_diagonal_is_prior_variance(self):
        log_amplitude = 0.7
        K = gp.evaluate_kernel(self.x, self.x, -0.5, log_amplitude)
        np.testing.assert_allclose(np.diag(K), math.exp(2 * log_amplitude))

    def test_decay_with_distance(self):
        h = np.linspace(0.0, 5.0, 30)
        k = gp.evaluate_kernel([0.0], h, 0.0, 0.0)[0]
        self.assertTrue(np.all(np.diff(k) < 0.0))
        self.assertTrue(np.all(k > 0.0))

    def test_rectangular_shape(self):
        K = gp.evaluate_kernel(self.x, [0.5, 1.5], 0.0, 0.0)
        self.assertEqual(K.shape, (self.x.shape[0], 2))

    def test_positive_definite_with_noise(self):
        noise_std = 0.1
        K = gp.evaluate_kernel(self.x, self.x, 1.0, 0.5)
        C = K + noise_std**2 * np.eye(self.x.shape[0])
        L = np.linalg.cholesky(C)
        self.assertTrue(np.all(np.diag(L) > 0.0))

    def test_column_input_is_flattened(self):
        K1 = gp.evaluate_kernel(self.x.reshape(-1, 1), self.x, 0.0, 0.0)
        K2 = gp.evaluate_kernel(self.x, self.x, 0.0, 0.0)
        np.testing.assert_array_equal(K1, K2)

    def test_profile_and_covariance(self):
        h = gnp.asarray([0.0, 1.0, 2.0])
        np.testing.assert_allclose(
            gnp.to_np(sqexp_kernel(h)), np.exp(-0.5 * np.array([0.0, 1.0, 4.0]))
        )
        x = gnp.asarray([0.0, 1.0, 3.0])
        covparam = gnp.asarray([0.2, 0.3])
        K = gnp.to_np(sqexp_covariance(x, None, covparam))
        v = gnp.to_np(sqexp_covariance(x, None, covparam, pairwise=True))
        np.testing.assert_allclose(v, np.diag(K))
        w = gnp.to_np(sqexp_covariance(x, x, covparam, pairwise=True))
        np.testing.assert_allclose(w, np.diag(K))

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidArgument):
            gp.evaluate_kernel([], [1.0], 0.0, 0.0)
        with self.assertRaises(InvalidArgument):
            gp.evaluate_kernel([1.0], [], 0.0, 0.0)
        with self.assertRaises(InvalidArgument):
            gp.evaluate_kernel(np.ones((2, 2)), [1.0], 0.0, 0.0)
        with self.assertRaises(InvalidArgument):
            gp.evaluate_kernel([0.0, float("nan")], [1.0], 0.0, 0.0)
        with self.assertRaises(InvalidArgument):
            gp.evaluate_kernel(["a", "b"], [1.0], 0.0, 0.0)
        with self.assertRaises(InvalidArgument):
            gp.evaluate_kernel([0.0], [1.0], float("inf"), 0.0)
        with self.assertRaises(InvalidArgument):
            gp.evaluate_kernel([0.0], [1.0], 0.0, None)

    def test_invalid_argument_is_value_error(self):
        with self.assertRaises(ValueError):
            gp.evaluate_kernel([], [], 0.0, 0.0)


if __name__ == "__main__":
    unittest.main()
