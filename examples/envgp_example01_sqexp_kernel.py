'''
Squared-exponential covariance on the real line.

Evaluates k(0, h) for a few length scales, and checks that the
covariance matrix of a small design, with observation noise on its
diagonal, admits a Cholesky factorization.

----
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
'''
import math
import numpy as np
import envgp as gp


def main():
    h = gp.misc.designs.regulargrid(7, 0.0, 3.0)
    log_amplitude = math.log(1.5)

    print("h      " + " ".join(f"{v:7.3f}" for v in h))
    for length_scale in [0.5, 1.0, 2.0]:
        k = gp.evaluate_kernel([0.0], h, math.log(length_scale), log_amplitude)[0]
        print(f"l={length_scale:<4} " + " ".join(f"{v:7.3f}" for v in k))

    x = gp.misc.designs.regulargrid(20, 0.0, 10.0)
    noise_std = 0.25
    K = gp.evaluate_kernel(x, x, 0.0, log_amplitude)
    C = np.linalg.cholesky(K + noise_std**2 * np.eye(x.shape[0]))
    print(f"log det(K + noise) = {2.0 * np.sum(np.log(np.diag(C))):.4f}")


if __name__ == "__main__":
    main()
