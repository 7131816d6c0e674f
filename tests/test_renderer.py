from __future__ import annotations

import unittest

from dashing_charts import AppendRecord, InMemoryRenderer
from dashing_charts.renderer import merge_option


def _seeded_renderer() -> InMemoryRenderer:
    renderer = InMemoryRenderer()
    renderer.set_option(
        {
            "xAxis": [{"type": "category", "data": ["a", "b"]}],
            "yAxis": [{"splitNumber": 3}],
            "series": [{"name": "s0", "data": [1, 2]}, {"name": "s1", "data": [3, 4]}],
        },
        overwrite=True,
    )
    return renderer


class MergeOptionTests(unittest.TestCase):
    def test_component_lists_merge_index_wise(self) -> None:
        base = {"yAxis": [{"splitNumber": 3}], "series": [{"name": "a", "data": [1, 2, 3]}]}
        merge_option(base, {"yAxis": [{"max": 10}], "series": [{"data": [9]}]})
        self.assertEqual(base["yAxis"], [{"splitNumber": 3, "max": 10}])
        self.assertEqual(base["series"], [{"name": "a", "data": [9]}])

    def test_nested_mappings_merge_and_new_keys_are_added(self) -> None:
        base = {"grid": {"x": 1, "y": 2}}
        merge_option(base, {"grid": {"y": 5}, "title": {"text": "t"}, "yAxis": [{"max": 1}]})
        self.assertEqual(base, {"grid": {"x": 1, "y": 5}, "title": {"text": "t"}, "yAxis": [{"max": 1}]})

    def test_patch_is_copied(self) -> None:
        patch = {"series": [{"data": [1]}], "grid": {"x": 1}}
        base: dict = {}
        merge_option(base, patch)
        patch["grid"]["x"] = 99
        self.assertEqual(base["grid"]["x"], 1)


class InMemoryRendererTests(unittest.TestCase):
    def test_get_option_hides_x_axis_until_data_exists(self) -> None:
        renderer = InMemoryRenderer()
        renderer.set_option({"xAxis": [{"type": "category"}], "series": [{"name": "s"}]}, overwrite=True)
        self.assertNotIn("xAxis", renderer.get_option())
        self.assertIn("xAxis", _seeded_renderer().get_option())

    def test_get_option_returns_a_copy(self) -> None:
        renderer = _seeded_renderer()
        renderer.get_option()["series"][0]["data"].append(99)
        self.assertEqual(renderer.series_data(0), [1, 2])

    def test_growing_append_keeps_old_points(self) -> None:
        renderer = _seeded_renderer()
        renderer.add_data([AppendRecord(0, 5, False, True), AppendRecord(1, 6, False, True, "c")])
        self.assertEqual(renderer.series_data(0), [1, 2, 5])
        self.assertEqual(renderer.series_data(1), [3, 4, 6])
        self.assertEqual(renderer.x_labels(), ["a", "b", "c"])

    def test_evicting_append_drops_oldest_per_series(self) -> None:
        renderer = _seeded_renderer()
        renderer.add_data([AppendRecord(0, 5, False, False), AppendRecord(1, 6, False, False, "c")])
        self.assertEqual(renderer.series_data(0), [2, 5])
        self.assertEqual(renderer.series_data(1), [4, 6])
        self.assertEqual(renderer.x_labels(), ["b", "c"])

    def test_bad_record_leaves_option_untouched(self) -> None:
        renderer = _seeded_renderer()
        with self.assertRaises(IndexError):
            renderer.add_data([AppendRecord(0, 5, False, True), AppendRecord(7, 6, False, True)])
        self.assertEqual(renderer.series_data(0), [1, 2])
        with self.assertRaises(NotImplementedError):
            renderer.add_data([AppendRecord(0, 5, True, True)])

    def test_call_history_is_bounded(self) -> None:
        renderer = _seeded_renderer()
        renderer.calls.clear()
        for i in range(100):
            renderer.add_data([AppendRecord(0, i, False, False), AppendRecord(1, i, False, False, i)])
        self.assertEqual(len(renderer.calls), 64)
        self.assertEqual(renderer.calls[-1][1][0].value, 99)
        self.assertEqual(renderer.series_data(0), [98, 99])

        small = InMemoryRenderer(call_history=2)
        small.hide_loading()
        small.hide_loading()
        small.set_option({"series": []}, overwrite=True)
        self.assertEqual(small.call_names(), ["hide_loading", "set_option"])
        self.assertEqual(small.loading_hidden, 2)
        with self.assertRaises(ValueError):
            InMemoryRenderer(call_history=0)

    def test_partial_set_option_merges(self) -> None:
        renderer = _seeded_renderer()
        renderer.set_option({"yAxis": [{"max": 50}]}, overwrite=False)
        self.assertEqual(renderer.get_option()["yAxis"], [{"splitNumber": 3, "max": 50}])
        self.assertEqual(renderer.series_data(1), [3, 4])
        renderer.hide_loading()
        self.assertEqual(renderer.call_names(), ["set_option", "set_option", "hide_loading"])


if __name__ == "__main__":
    unittest.main()
