import math
import unittest

from petronorm.indices import cia, eustar, eustar_simple, wip


class AlterationIndexTests(unittest.TestCase):
    def test_cia_pure_alumina(self):
        self.assertAlmostEqual(cia(15.0, 0.0, 0.0, 0.0), 100.0, places=9)

    def test_cia_no_oxides(self):
        self.assertTrue(math.isnan(cia(0.0, 0.0, 0.0, 0.0)))

    def test_cia_fresh_granite_range(self):
        value = cia(14.5, 1.5, 3.5, 4.5)
        self.assertGreater(value, 45.0)
        self.assertLess(value, 55.0)

    def test_wip_sodium_only(self):
        self.assertAlmostEqual(wip(3.5, 0.0, 0.0, 0.0), 32.27, places=2)

    def test_wip_zero(self):
        self.assertEqual(wip(0.0, 0.0, 0.0, 0.0), 0.0)


class EuropiumTests(unittest.TestCase):
    def test_chondritic_pattern(self):
        self.assertAlmostEqual(eustar(0.4670, 0.1530, 0.2055, 0.0374), 0.058, places=6)

    def test_flat_enriched_pattern(self):
        self.assertAlmostEqual(eustar(4.670, 1.530, 2.055, 0.374), 0.58, places=6)

    def test_partial_pattern(self):
        self.assertAlmostEqual(eustar(math.nan, 1.530, 2.055, math.nan), 0.58, places=6)

    def test_needs_both_sides(self):
        self.assertTrue(math.isnan(eustar(math.nan, math.nan, 0.2055, 0.0374)))
        self.assertTrue(math.isnan(eustar(0.4670, 0.1530, math.nan, math.nan)))

    def test_simple(self):
        self.assertAlmostEqual(eustar_simple(0.1530, 0.2055), 0.058, places=12)


if __name__ == "__main__":
    unittest.main()
