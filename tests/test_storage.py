import json
import os
import shutil
import sys
import tempfile
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from helpers import make_day, make_routine
from constants import ALL_MUSCLES, PRIORITY_TIERS
from routine_editor import DEFAULT_ROUTINE
from storage import (
    EXPORT_FORMAT_VERSION,
    PRIORITIES_KEY,
    ROUTINE_KEY,
    JsonStore,
    StorageError,
    clear_all_data,
    export_routine_to_json,
    has_stored_data,
    import_routine_from_json,
    load_exercise_library,
    load_priorities,
    load_priority_presets,
    load_routine,
    load_sort_option,
    load_volume_landmarks,
    normalize_priorities,
    parse_routine,
    save_priorities,
    save_routine,
    save_sort_option,
)


class JsonStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "store.json")
        self.store = JsonStore(self.path)
        self.routine = make_routine(make_day("d1", [("bench", 3)], name="Push"))

    def tearDown(self) -> None:
        shutil.rmtree(self.tmpdir)

    def test_routine_round_trip(self) -> None:
        self.assertFalse(has_stored_data(self.store))
        self.assertTrue(save_routine(self.store, self.routine))
        self.assertTrue(has_stored_data(self.store))
        self.assertEqual(load_routine(self.store), self.routine)

        with open(self.path, encoding="utf-8") as f:
            raw = json.load(f)
        self.assertEqual(
            raw[ROUTINE_KEY]["days"][0]["exercises"], [{"exerciseId": "bench", "sets": 3}]
        )

    def test_priorities_round_trip(self) -> None:
        priorities = normalize_priorities({"S": ["Chest"], "F": ["Traps"]})
        save_priorities(self.store, priorities)
        self.assertEqual(load_priorities(self.store), priorities)

    def test_missing_values(self) -> None:
        self.assertIsNone(load_routine(self.store))
        self.assertIsNone(load_priorities(self.store))
        self.assertEqual(load_sort_option(self.store), "volume-high")

    def test_sort_option(self) -> None:
        save_sort_option(self.store, "alphabetical")
        self.assertEqual(load_sort_option(self.store), "alphabetical")

    def test_invalid_stored_routine_is_ignored(self) -> None:
        self.store.save(ROUTINE_KEY, {"id": "r1", "name": "Bad", "days": [{"id": "d1"}]})
        with self.assertLogs("storage", level="ERROR"):
            self.assertIsNone(load_routine(self.store))

    def test_corrupt_file(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertLogs("storage", level="ERROR"):
            self.assertIsNone(self.store.load(ROUTINE_KEY))

    def test_failed_save_keeps_existing_file(self) -> None:
        self.assertTrue(save_routine(self.store, self.routine))
        with self.assertLogs("storage", level="ERROR"):
            self.assertFalse(self.store.save("unserializable", object()))
        self.assertEqual(load_routine(self.store), self.routine)
        with open(self.path, encoding="utf-8") as f:
            self.assertNotIn("unserializable", json.load(f))

    def test_clear_all_data(self) -> None:
        save_routine(self.store, self.routine)
        save_priorities(self.store, normalize_priorities({}))
        save_sort_option(self.store, "volume-low")
        clear_all_data(self.store)
        self.assertFalse(has_stored_data(self.store))
        self.assertIsNone(self.store.load(PRIORITIES_KEY))
        self.assertEqual(load_sort_option(self.store), "volume-low")

        self.store.clear()
        self.assertFalse(os.path.exists(self.path))


class ValidationTestCase(unittest.TestCase):
    def test_parse_routine(self) -> None:
        routine = parse_routine(DEFAULT_ROUTINE.to_dict())
        self.assertEqual(routine, DEFAULT_ROUTINE)

    def test_parse_routine_rejects_bad_sets(self) -> None:
        data = {
            "id": "r1",
            "name": "R",
            "days": [{"id": "d1", "name": "D", "exercises": [{"exerciseId": "x", "sets": "3"}]}],
        }
        with self.assertRaises(StorageError):
            parse_routine(data)
        with self.assertRaises(StorageError):
            parse_routine(["not", "a", "routine"])

    def test_parse_routine_rejects_negative_sets(self) -> None:
        data = {
            "id": "r1",
            "name": "R",
            "days": [{"id": "d1", "name": "D", "exercises": [{"exerciseId": "curl", "sets": -1}]}],
        }
        with self.assertRaises(StorageError):
            parse_routine(data)
        data["days"][0]["exercises"][0]["sets"] = 0
        self.assertEqual(parse_routine(data).days[0].exercises[0].sets, 0)

    def test_normalize_fills_all_tiers(self) -> None:
        priorities = normalize_priorities({"B": ["Lats"], "S": ["Chest"]})
        self.assertEqual(list(priorities), PRIORITY_TIERS)
        self.assertEqual(priorities["S"], ["Chest"])
        self.assertEqual(priorities["B"], ["Lats"])

    def test_normalize_drops_duplicates(self) -> None:
        with self.assertLogs("storage", level="WARNING"):
            priorities = normalize_priorities({"A": ["Chest"], "C": ["Chest", "Abs"]})
        self.assertEqual(priorities["A"], ["Chest"])
        self.assertEqual(priorities["C"], ["Abs"])

    def test_normalize_errors(self) -> None:
        for bad in (
            ["Chest"],
            {"Z": ["Chest"]},
            {"S": "Chest"},
            {"S": [1]},
        ):
            with self.assertRaises(StorageError, msg=repr(bad)):
                normalize_priorities(bad)

    def test_storage_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(StorageError, ValueError))


class ImportExportTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.routine = make_routine(
            make_day("d1", [("bench", 3), ("row", 4)]),
            make_day("d2", [("squat", 5)]),
        )
        self.priorities = normalize_priorities({"S": ["Chest"], "D": ["Calves"]})

    def test_export_shape(self) -> None:
        exported = export_routine_to_json(self.routine, self.priorities)
        self.assertEqual(exported["format_version"], EXPORT_FORMAT_VERSION)
        self.assertEqual(exported["routine"]["name"], "Test Routine")
        self.assertEqual(exported["priorities"]["S"], ["Chest"])
        json.dumps(exported)

    def test_import_exported(self) -> None:
        exported = json.loads(json.dumps(export_routine_to_json(self.routine, self.priorities)))
        routine, priorities = import_routine_from_json(exported)
        self.assertEqual(routine, self.routine)
        self.assertEqual(priorities, self.priorities)

    def test_import_without_priorities(self) -> None:
        routine, priorities = import_routine_from_json(export_routine_to_json(self.routine))
        self.assertEqual(routine, self.routine)
        self.assertIsNone(priorities)

    def test_import_bare_routine(self) -> None:
        routine, priorities = import_routine_from_json(self.routine.to_dict())
        self.assertEqual(routine, self.routine)
        self.assertIsNone(priorities)

    def test_import_invalid(self) -> None:
        with self.assertRaises(StorageError):
            import_routine_from_json("routine")
        with self.assertRaises(StorageError):
            import_routine_from_json({"routine": {"name": "missing id"}})
        with self.assertRaises(StorageError):
            import_routine_from_json(
                {"routine": self.routine.to_dict(), "priorities": {"X": ["Chest"]}}
            )


class ReferenceDataTestCase(unittest.TestCase):
    def test_bundled_exercise_library(self) -> None:
        exercises = load_exercise_library()
        self.assertGreater(len(exercises), 20)
        ids = [ex.id for ex in exercises]
        self.assertEqual(len(ids), len(set(ids)))
        for ex in exercises:
            self.assertTrue(ex.muscle_weightings, ex.id)
            for mw in ex.muscle_weightings:
                self.assertIn(mw.muscle, ALL_MUSCLES)

    def test_bundled_landmarks_cover_every_muscle(self) -> None:
        landmarks = load_volume_landmarks()
        self.assertEqual(set(landmarks), set(ALL_MUSCLES))
        for muscle, lm in landmarks.items():
            self.assertTrue(lm.mv <= lm.mev <= lm.mav_min <= lm.mav_max <= lm.mrv, muscle)

    def test_bundled_presets(self) -> None:
        presets = load_priority_presets()
        self.assertIn("v-taper", [p["id"] for p in presets])
        for preset in presets:
            self.assertEqual(list(preset["tiers"]), PRIORITY_TIERS)

    def test_data_dir_override(self) -> None:
        tmpdir = tempfile.mkdtemp()
        try:
            with open(os.path.join(tmpdir, "exercises.json"), "w", encoding="utf-8") as f:
                json.dump(
                    [{"id": "curl", "name": "Curl", "muscle_weightings": [{"muscle": "Biceps", "weighting": 1}]}],
                    f,
                )
            with open(os.path.join(tmpdir, "volume-landmarks.json"), "w", encoding="utf-8") as f:
                json.dump({"Biceps": {"mv": 1, "mev": 2, "mav_min": 3, "mav_max": 4, "mrv": 5}}, f)

            self.assertEqual([ex.id for ex in load_exercise_library(tmpdir)], ["curl"])
            self.assertEqual(list(load_volume_landmarks(tmpdir)), ["Biceps"])
        finally:
            shutil.rmtree(tmpdir)

    def test_invalid_weighting_rejects_library(self) -> None:
        tmpdir = tempfile.mkdtemp()
        try:
            with open(os.path.join(tmpdir, "exercises.json"), "w", encoding="utf-8") as f:
                json.dump(
                    [{"id": "x", "name": "X", "muscle_weightings": [{"muscle": "Chest", "weighting": 1.5}]}],
                    f,
                )
            with self.assertLogs("storage", level="ERROR"):
                self.assertEqual(load_exercise_library(tmpdir), [])
        finally:
            shutil.rmtree(tmpdir)


if __name__ == "__main__":
    unittest.main()
