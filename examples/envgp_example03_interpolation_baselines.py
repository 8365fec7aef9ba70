'''
Comparison of GP regression with simple baseline predictors.

Linear interpolation extends the end segments of the data linearly.
Inverse distance weighting (IDW) and K nearest neighbors (KNN) are
weighted averages of the observations. Where data are sparse, their
predictions are flat; the GP posterior mean follows the process and
comes with uncertainty bands.

----
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
Copyright (c) 2022-2026, CentraleSupelec
License: GPLv3 (see LICENSE)
'''
import numpy as np
import envgp.num as gnp
import envgp as gp


def main():
    gnp.set_seed(70005)
    noise_std = 0.25
    f = gp.misc.testfunctions.two_sines

    xi = gp.misc.designs.randunif(25, 0.0, 10.0)
    zi = gp.misc.testfunctions.noisy_observations(f, xi, noise_std)
    xt = gp.misc.designs.regulargrid(200, 0.0, 10.0)
    zt = f(xt)

    predictions = {
        "Linear": gp.misc.interpolation.linear(xi, zi, xt),
        "IDW": gp.misc.interpolation.idw(xi, zi, xt),
        "KNN (K=N)": gp.misc.interpolation.knn(xi, zi, xt, k=xi.shape[0]),
        "KNN (K=5)": gp.misc.interpolation.knn(xi, zi, xt, k=5),
    }

    model, _ = gp.Model(noise_std).fit(xi, zi)
    predictions["GP"] = model.predict(xi, zi, xt).mean

    for name, zpred in predictions.items():
        rmse = np.sqrt(np.mean((zpred - zt) ** 2))
        print(f"{name:<10} RMSE = {rmse:.4f}")


if __name__ == "__main__":
    main()
