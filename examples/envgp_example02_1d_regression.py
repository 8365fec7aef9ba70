'''
Gaussian process regression in 1D with noisy observations.

The true process is a sum of two sines. N = 25 noisy observations are
drawn on [0, 10]; the length scale and amplitude of a squared-exponential
kernel are selected by maximum marginal likelihood, with the noise level
known. The posterior predictive mean, a +-2 std band, and a few joint
sample paths are computed on a regular grid.

The same model is then fitted with the noise standard deviation as an
additional parameter.

----
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
'''
import numpy as np
import envgp.num as gnp
import envgp as gp


def generate_data(n, noise_std):
    """Noisy observations of the two-sines process on [0, 10]."""
    gnp.set_seed(70005)
    xt = gp.misc.designs.regulargrid(200, 0.0, 10.0)
    zt = gp.misc.testfunctions.two_sines(xt)

    xi = gp.misc.designs.randunif(n, 0.0, 10.0)
    zi = gp.misc.testfunctions.noisy_observations(
        gp.misc.testfunctions.two_sines, xi, noise_std
    )
    return xt, zt, xi, zi


def main():
    noise_std = 0.25
    xt, zt, xi, zi = generate_data(25, noise_std)

    hp = gp.fit_hyperparameters(xi, zi, noise_std)
    print(
        f"fitted length scale = {hp.length_scale:.4f}, amplitude = {hp.amplitude:.4f}"
    )
    print(f"log marginal likelihood = "
          f"{gp.log_marginal_likelihood(xi, zi, *hp, noise_std):.4f}")

    post = gp.predict(xi, zi, xt, hp.log_length_scale, hp.log_amplitude, noise_std)
    lower, upper = post.bands(2.0)
    rmse = np.sqrt(np.mean((post.mean - zt) ** 2))
    coverage = np.mean((zt >= lower) & (zt <= upper))
    print(f"RMSE on grid = {rmse:.4f}, +-2 std band coverage = {coverage:.2f}")

    paths = post.sample_paths(5)
    print(f"sample paths: shape {paths.shape}")

    model = gp.Model(noise_std=0.5)
    model, info = model.fit(xi, zi, fit_noise=True, info=True)
    print(model)
    print(f"optimization: {info.nit} iterations in {info.time:.3f} s")


if __name__ == "__main__":
    main()
