import math
import unittest

import pandas as pd

from petronorm.batch import norm_samples, reconcile_samples
from petronorm.config import Config
from petronorm.models.conversions import FE2O3_TO_FEO

BASALT = {
    "sample_id": "b1",
    "SiO2": 49.5, "TiO2": 1.5, "Al2O3": 15.0, "Fe2O3": 2.0, "FeO": 8.0, "MnO": 0.17,
    "MgO": 8.0, "CaO": 11.0, "Na2O": 2.4, "K2O": 0.3, "P2O5": 0.15,
}


class NormSamplesTests(unittest.TestCase):
    def test_complete_sample(self):
        results = norm_samples([BASALT], Config())
        self.assertEqual(len(results), 1)
        result = results[0]
        self.assertEqual(result.sample_id, "b1")
        self.assertIsNone(result.skipped_reason)
        self.assertIsNotNone(result.assemblage)
        self.assertEqual(result.silica_saturation, "undersaturated")
        self.assertAlmostEqual(result.oxide_total, 98.02, places=6)
        self.assertEqual(result.qc_flags, [])
        self.assertFalse(math.isnan(result.cia))

    def test_missing_oxide_skipped(self):
        sample = dict(BASALT, P2O5=None)
        result = norm_samples([sample], Config())[0]
        self.assertIsNone(result.assemblage)
        self.assertEqual(result.skipped_reason, "missing_oxides:P2O5")

    def test_missing_oxide_imputed(self):
        sample = dict(BASALT, P2O5=None)
        result = norm_samples([sample], Config(missing_policy="impute_zero"))[0]
        self.assertIsNone(result.skipped_reason)
        self.assertEqual(result.assemblage.apatite, 0.0)

    def test_oxide_reconciled_from_metal(self):
        sample = dict(BASALT, TiO2=None, Ti=8992.0)
        result = norm_samples([sample], Config())[0]
        self.assertIsNone(result.skipped_reason)
        self.assertGreater(result.assemblage.ilmenite, 0.0)

    def test_no_reconcile(self):
        sample = dict(BASALT, TiO2=None, Ti=8992.0)
        result = norm_samples([sample], Config(reconcile=False))[0]
        self.assertEqual(result.skipped_reason, "missing_oxides:TiO2")

    def test_missing_ferric_iron_is_zero(self):
        sample = dict(BASALT, Fe2O3=None)
        result = norm_samples([sample], Config())[0]
        self.assertIsNone(result.skipped_reason)
        self.assertEqual(result.assemblage.magnetite, 0.0)

    def test_ferrous_mode(self):
        result = norm_samples([BASALT], Config(iron_mode="ferrous"))[0]
        self.assertEqual(result.assemblage.magnetite, 0.0)
        self.assertAlmostEqual(result.oxide_total, 98.02 - 2.0 + 2.0 * FE2O3_TO_FEO, places=6)

    def test_iron_only_as_total(self):
        sample = dict(BASALT, FeO=None, Fe2O3=None, FeOT=9.8)
        for mode in ("reported", "ferrous"):
            result = norm_samples([sample], Config(iron_mode=mode))[0]
            self.assertIsNone(result.skipped_reason, mode)
            self.assertEqual(result.assemblage.magnetite, 0.0)
            self.assertAlmostEqual(result.oxide_total, 98.02 - 10.0 + 9.8, places=6)

    def test_iron_only_as_metal(self):
        sample = dict(BASALT, FeO=None, Fe2O3=None, Fe=70000.0)
        result = norm_samples([sample], Config())[0]
        self.assertIsNone(result.skipped_reason)
        self.assertGreater(result.assemblage.olivine + result.assemblage.orthopyroxene, 0.0)

    def test_no_iron_at_all_skipped(self):
        sample = dict(BASALT, FeO=None, Fe2O3=None)
        result = norm_samples([sample], Config())[0]
        self.assertEqual(result.skipped_reason, "missing_oxides:Fe2O3,FeO")

    def test_negative_mineral_flags_and_clamp(self):
        sample = {
            "sample_id": "odd", "SiO2": 60.0, "TiO2": 5.0, "Al2O3": 0.0, "Fe2O3": 0.0,
            "FeO": 0.0, "MnO": 0.0, "MgO": 0.0, "CaO": 0.0, "Na2O": 0.0, "K2O": 0.0,
            "P2O5": 0.0,
        }
        raw = norm_samples([sample], Config())[0]
        self.assertLess(raw.assemblage.orthopyroxene, 0.0)
        self.assertIn("negative_mineral", raw.qc_flags)
        self.assertIn("oxide_total", raw.qc_flags)
        clamped = norm_samples([sample], Config(clamp_negative_minerals=True))[0]
        self.assertEqual(clamped.assemblage.orthopyroxene, 0.0)
        self.assertIn("negative_mineral", clamped.qc_flags)

    def test_index_used_without_id(self):
        sample = {key: value for key, value in BASALT.items() if key != "sample_id"}
        results = norm_samples([sample, sample], Config())
        self.assertEqual([r.sample_id for r in results], ["0", "1"])

    def test_dataframe_input(self):
        frame = pd.DataFrame([BASALT, dict(BASALT, sample_id="b2", SiO2="<0.1")])
        results = norm_samples(frame, Config())
        self.assertEqual(len(results), 2)
        self.assertIn("oxide_total", results[1].qc_flags)

    def test_detection_limit_drop(self):
        sample = dict(BASALT, K2O="<0.05")
        result = norm_samples([sample], Config(detection_limit_policy="drop"))[0]
        self.assertEqual(result.skipped_reason, "missing_oxides:K2O")

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            norm_samples([BASALT], Config(iron_mode="bogus"))


class ReconcileSamplesTests(unittest.TestCase):
    def test_fills_every_direction(self):
        frame = reconcile_samples([{"Fe": 10000.0, "MnO": 0.2, "TOC": 0.25}], Config())
        self.assertAlmostEqual(frame.loc[0, "Fe2O3T"], 1.4297, places=4)
        self.assertAlmostEqual(frame.loc[0, "Mn"], 0.2 / 1.29121895771597 * 10000.0, places=6)
        self.assertAlmostEqual(frame.loc[0, "C"], 2500.0, places=9)
        self.assertTrue(math.isnan(frame.loc[0, "SiO2"]))


if __name__ == "__main__":
    unittest.main()
