"""
Tests for SplitterConfig loading.
"""

import unittest

from supergraph_to_subgraph.pipeline.config import (
    CollisionPolicy,
    EmptyEntityPolicy,
    InputKind,
    MarkerSelection,
    SplitterConfig,
)


class TestSplitterConfig(unittest.TestCase):
    def test_defaults(self):
        config = SplitterConfig()
        self.assertEqual(config.federation_version, "v2.5")
        self.assertEqual(config.federation_url, "https://specs.apollo.dev/federation/v2.5")
        self.assertEqual(config.marker_selection, MarkerSelection.FIRST)
        self.assertEqual(config.collision_policy, CollisionPolicy.ERROR)
        self.assertEqual(config.empty_entity_policy, EmptyEntityPolicy.EMIT)
        self.assertEqual(config.input_kind, InputKind.AUTO)
        self.assertTrue(config.add_generation_comment)
        self.assertTrue(config.output.validate_before_write)
        self.assertTrue(config.output.atomic_write)

    def test_from_dict_converts_enums(self):
        config = SplitterConfig.from_dict(
            {
                "marker_selection": "all",
                "collision_policy": "replace",
                "empty_entity_policy": "omit",
                "input_kind": "service",
            }
        )
        self.assertIs(config.marker_selection, MarkerSelection.ALL)
        self.assertIs(config.collision_policy, CollisionPolicy.REPLACE)
        self.assertIs(config.empty_entity_policy, EmptyEntityPolicy.OMIT)
        self.assertIs(config.input_kind, InputKind.SERVICE)

    def test_from_dict_rejects_unknown_enum_value(self):
        with self.assertRaises(ValueError):
            SplitterConfig.from_dict({"empty_entity_policy": "ignore"})

    def test_from_dict_ignores_unknown_keys(self):
        config = SplitterConfig.from_dict({"language": "python", "service_name": "products"})
        self.assertEqual(config.service_name, "products")
        self.assertFalse(hasattr(config, "language"))

    def test_output_section(self):
        config = SplitterConfig.from_dict({"output": {"atomic_write": False}})
        self.assertFalse(config.output.atomic_write)
        self.assertTrue(config.output.validate_before_write)

    def test_to_dict_round_trip(self):
        config = SplitterConfig.from_dict({"federation_version": "v2.3", "marker_selection": "all", "add_generation_comment": False})
        data = config.to_dict()
        self.assertEqual(data["federation_version"], "v2.3")
        self.assertEqual(data["marker_selection"], "all")
        self.assertEqual(SplitterConfig.from_dict(data), config)


if __name__ == "__main__":
    unittest.main()
