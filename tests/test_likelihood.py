import math
import unittest
import numpy as np
from scipy.stats import multivariate_normal
import envgp as gp
import envgp.num as gnp
from envgp.core.likelihood import negative_log_likelihood
from envgp.errors import InvalidArgument, NumericalError


class TestLogMarginalLikelihood(unittest.TestCase):
    def setUp(self):
        self.x = np.array([0.0, 0.7, 1.5, 2.2, 3.9, 5.0])
        self.y = np.array([0.3, 0.9, 1.2, 0.4, -0.8, -0.2])
        self.noise_std = 0.2

    def reference(self, log_length_scale, log_amplitude, mu):
        K = gp.evaluate_kernel(self.x, self.x, log_length_scale, log_amplitude)
        C = K + self.noise_std**2 * np.eye(self.x.shape[0])
        return multivariate_normal(mean=np.full(self.x.shape[0], mu), cov=C).logpdf(
            self.y
        )

    def test_matches_multivariate_normal(self):
        for log_length_scale, log_amplitude in [(0.0, 0.0), (0.5, -0.3), (-1.0, 1.0)]:
            lml = gp.log_marginal_likelihood(
                self.x, self.y, log_length_scale, log_amplitude, self.noise_std
            )
            expected = self.reference(log_length_scale, log_amplitude, self.y.mean())
            self.assertAlmostEqual(lml, expected, places=6)

    def test_explicit_prior_mean(self):
        lml = gp.log_marginal_likelihood(
            self.x, self.y, 0.2, 0.1, self.noise_std, prior_mean=0.0
        )
        self.assertAlmostEqual(lml, self.reference(0.2, 0.1, 0.0), places=6)

    def test_negative_log_likelihood_is_opposite(self):
        covparam = gnp.asarray([0.2, 0.1])
        nll = negative_log_likelihood(
            covparam, gnp.asarray(self.x), gnp.asarray(self.y), self.noise_std**2
        )
        lml = gp.log_marginal_likelihood(self.x, self.y, 0.2, 0.1, self.noise_std)
        self.assertAlmostEqual(gnp.to_scalar(nll), -lml)

    def test_single_observation(self):
        # centered data is zero: only the log-determinant remains
        lml = gp.log_marginal_likelihood([0.0], [5.0], 0.0, 0.0, 0.1)
        expected = -0.5 * (math.log(2 * math.pi) + math.log(1.0 + 0.01))
        self.assertAlmostEqual(lml, expected, places=8)

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidArgument):
            gp.log_marginal_likelihood([], [], 0.0, 0.0, 0.1)
        with self.assertRaises(InvalidArgument):
            gp.log_marginal_likelihood([0.0, 1.0], [1.0], 0.0, 0.0, 0.1)
        with self.assertRaises(InvalidArgument):
            gp.log_marginal_likelihood([0.0], [1.0], 0.0, 0.0, -0.1)
        with self.assertRaises(InvalidArgument):
            gp.log_marginal_likelihood([0.0], [1.0], 0.0, 0.0, float("nan"))

    def test_non_finite_covariance(self):
        with self.assertRaises(NumericalError):
            gp.log_marginal_likelihood(self.x, self.y, 0.0, 400.0, self.noise_std)


if __name__ == "__main__":
    unittest.main()
