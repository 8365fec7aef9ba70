import os
import runpy
import unittest

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")


def run_example(name):
    module = runpy.run_path(os.path.join(EXAMPLES_DIR, name + ".py"))
    module["main"]()


class TestExamples(unittest.TestCase):
    def test_01(self):
        run_example("envgp_example01_sqexp_kernel")

    def test_02(self):
        run_example("envgp_example02_1d_regression")

    def test_03(self):
        run_example("envgp_example03_interpolation_baselines")


if __name__ == "__main__":
    unittest.main()
