import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from helpers import CATALOG, landmark, make_day, make_exercise, make_routine
from models import MuscleVolume
from volume_calculator import (
    calculate_day_muscle_volumes,
    calculate_movement_pattern_volumes,
    calculate_muscle_volumes,
    get_total_session_sets,
    get_volume_zone,
    sort_muscle_volumes,
    summarize_volume_zones,
)
from exercise_library import build_exercise_index


def by_muscle(volumes):
    return {mv.muscle: mv for mv in volumes}


class MuscleVolumeTestCase(unittest.TestCase):
    def test_untrained_catalog_muscles_are_present(self) -> None:
        volumes = by_muscle(calculate_muscle_volumes(make_routine(), CATALOG))
        self.assertEqual(
            set(volumes),
            {"Chest", "Triceps", "Front Delts", "Middle Back", "Lats", "Biceps", "Quads", "Glutes"},
        )
        for mv in volumes.values():
            self.assertEqual(mv.total_sets, 0)
            self.assertEqual(mv.frequency, 0)
            self.assertEqual(mv.session_volumes, ())

    def test_single_day_single_exercise(self) -> None:
        catalog = [make_exercise("bench", [("Chest", 1.0)])]
        routine = make_routine(make_day("d1", [("bench", 4)]))
        chest = by_muscle(calculate_muscle_volumes(routine, catalog))["Chest"]
        self.assertEqual(chest.total_sets, 4)
        self.assertEqual(chest.frequency, 1)
        self.assertEqual(chest.session_volumes, (4,))

    def test_two_days_accumulate(self) -> None:
        catalog = [make_exercise("pulldown", [("Lats", 1.0)])]
        routine = make_routine(
            make_day("d1", [("pulldown", 10)]),
            make_day("d2", [("pulldown", 10)]),
        )
        lats = by_muscle(calculate_muscle_volumes(routine, catalog))["Lats"]
        self.assertEqual(lats.total_sets, 20)
        self.assertEqual(lats.frequency, 2)
        self.assertEqual(lats.session_volumes, (10, 10))

    def test_zero_set_day_does_not_count_toward_frequency(self) -> None:
        routine = make_routine(
            make_day("d1", [("curl", 0)]),
            make_day("d2", [("curl", 3)]),
        )
        biceps = by_muscle(calculate_muscle_volumes(routine, CATALOG))["Biceps"]
        self.assertEqual(biceps.total_sets, 3)
        self.assertEqual(biceps.frequency, 1)
        self.assertEqual(biceps.session_volumes, (3,))
        self.assertEqual(
            calculate_day_muscle_volumes(routine.days[0], build_exercise_index(CATALOG)), {}
        )

    def test_weighted_contributions(self) -> None:
        routine = make_routine(
            make_day("d1", [("bench", 4), ("row", 3)]),
            make_day("d2", [("pulldown", 3), ("curl", 2)]),
        )
        volumes = by_muscle(calculate_muscle_volumes(routine, CATALOG))
        self.assertEqual(volumes["Triceps"].total_sets, 2.0)
        self.assertEqual(volumes["Lats"].total_sets, 3 * 0.75 + 3)
        self.assertEqual(volumes["Lats"].session_volumes, (2.25, 3.0))
        self.assertEqual(volumes["Biceps"].total_sets, 1.5 + 1.5 + 2)
        self.assertEqual(volumes["Biceps"].frequency, 2)
        self.assertEqual(volumes["Quads"].frequency, 0)

    def test_total_matches_sum_of_weighted_sets(self) -> None:
        routine = make_routine(
            make_day("d1", [("bench", 3), ("row", 4), ("curl", 3)]),
            make_day("d2", [("squat", 5), ("pulldown", 3), ("row", 2)]),
            make_day("d3", [("bench", 2), ("curl", 1), ("pulldown", 4)]),
            make_day("d4", [("squat", 0), ("curl", 2)]),
        )
        index = build_exercise_index(CATALOG)
        volumes = by_muscle(calculate_muscle_volumes(routine, CATALOG))

        for muscle, mv in volumes.items():
            expected_total = 0.0
            expected_frequency = 0
            for day in routine.days:
                day_volume = 0.0
                for entry in day.exercises:
                    for mw in index[entry.exercise_id].muscle_weightings:
                        if mw.muscle == muscle:
                            day_volume += entry.sets * mw.weighting
                if day_volume > 0:
                    expected_total += day_volume
                    expected_frequency += 1
            self.assertEqual(mv.total_sets, expected_total, muscle)
            self.assertEqual(mv.frequency, expected_frequency, muscle)

    def test_unknown_exercise_is_skipped(self) -> None:
        routine = make_routine(make_day("d1", [("does-not-exist", 5), ("curl", 3)]))
        volumes = by_muscle(calculate_muscle_volumes(routine, CATALOG))
        self.assertEqual(volumes["Biceps"].total_sets, 3)
        self.assertNotIn("does-not-exist", volumes)

    def test_inputs_are_not_mutated(self) -> None:
        routine = make_routine(make_day("d1", [("bench", 3)]))
        first = calculate_muscle_volumes(routine, CATALOG)
        second = calculate_muscle_volumes(routine, CATALOG)
        self.assertEqual(first, second)

    def test_day_volumes_only_touched_muscles(self) -> None:
        day = make_day("d1", [("curl", 3)])
        self.assertEqual(
            calculate_day_muscle_volumes(day, build_exercise_index(CATALOG)),
            {"Biceps": 3.0},
        )

    def test_total_session_sets_is_unweighted(self) -> None:
        day = make_day("d1", [("bench", 4), ("row", 3), ("missing", 2)])
        self.assertEqual(get_total_session_sets(day.exercises), 9)


class VolumeZoneTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.landmarks = {"Chest": landmark(10, 14, 18, 22, 26)}

    def zone(self, sets):
        return get_volume_zone(sets, self.landmarks, "Chest")

    def test_boundaries(self) -> None:
        self.assertEqual(self.zone(9.99), "below-mv")
        self.assertEqual(self.zone(10), "mv-mev")
        self.assertEqual(self.zone(13.99), "mv-mev")
        self.assertEqual(self.zone(14), "mev-mav")
        self.assertEqual(self.zone(18), "mav")
        self.assertEqual(self.zone(22), "mav")
        self.assertEqual(self.zone(22.01), "mav-mrv")
        self.assertEqual(self.zone(26), "mav-mrv")
        self.assertEqual(self.zone(26.01), "above-mrv")

    def test_zero_sets_with_zero_mv(self) -> None:
        landmarks = {"Glutes": landmark(0, 0, 4, 12, 16)}
        self.assertEqual(get_volume_zone(0, landmarks, "Glutes"), "mev-mav")

    def test_unknown_muscle_defaults_and_logs(self) -> None:
        with self.assertLogs("volume_calculator", level="WARNING") as logs:
            self.assertEqual(get_volume_zone(100, self.landmarks, "Neck"), "mev-mav")
        self.assertIn("Neck", logs.output[0])


class VolumeSummaryTestCase(unittest.TestCase):
    def test_summary_buckets(self) -> None:
        landmarks = {
            "Chest": landmark(6, 10, 12, 20, 22),
            "Lats": landmark(6, 10, 14, 22, 25),
            "Biceps": landmark(5, 8, 14, 20, 26),
            "Quads": landmark(6, 8, 12, 18, 20),
            "Calves": landmark(6, 8, 12, 16, 20),
        }
        volumes = [
            MuscleVolume("Chest", 15, 2),  # mav
            MuscleVolume("Lats", 12, 2),  # mev-mav
            MuscleVolume("Biceps", 3, 1),  # below-mv
            MuscleVolume("Quads", 25, 3),  # above-mrv
            MuscleVolume("Calves", 7, 1),  # mv-mev, not counted
            MuscleVolume("Neck", 10, 1),  # no landmarks
            MuscleVolume("Glutes", 0, 0),
        ]
        self.assertEqual(
            summarize_volume_zones(volumes, landmarks),
            {"optimal": 1, "growth": 1, "needs_attention": 2},
        )


class SortMuscleVolumesTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.volumes = [
            MuscleVolume("chest", 10, 2),
            MuscleVolume("Biceps", 4, 1),
            MuscleVolume("Abs", 10, 1),
            MuscleVolume("Quads", 12, 2),
        ]

    def names(self, volumes):
        return [mv.muscle for mv in volumes]

    def test_volume_high_is_stable(self) -> None:
        self.assertEqual(
            self.names(sort_muscle_volumes(self.volumes, "volume-high")),
            ["Quads", "chest", "Abs", "Biceps"],
        )

    def test_volume_low(self) -> None:
        self.assertEqual(
            self.names(sort_muscle_volumes(self.volumes, "volume-low")),
            ["Biceps", "chest", "Abs", "Quads"],
        )

    def test_alphabetical_ignores_case(self) -> None:
        self.assertEqual(
            self.names(sort_muscle_volumes(self.volumes, "alphabetical")),
            ["Abs", "Biceps", "chest", "Quads"],
        )

    def test_priority_puts_unranked_last(self) -> None:
        priority_map = {"Biceps": "S", "Quads": "C"}
        self.assertEqual(
            self.names(sort_muscle_volumes(self.volumes, "priority", priority_map)),
            ["Biceps", "Quads", "chest", "Abs"],
        )

    def test_unknown_option(self) -> None:
        with self.assertRaises(ValueError):
            sort_muscle_volumes(self.volumes, "random")


class MovementPatternTestCase(unittest.TestCase):
    def test_raw_sets_per_pattern(self) -> None:
        routine = make_routine(
            make_day("d1", [("bench", 4), ("row", 3)]),
            make_day("d2", [("row", 2), ("pulldown", 3), ("missing", 9)]),
        )
        patterns = calculate_movement_pattern_volumes(routine, CATALOG)
        self.assertEqual(
            [(p.pattern, p.sets) for p in patterns],
            [("Horizontal Push", 4), ("Horizontal Pull", 5), ("Vertical Pull", 3)],
        )


if __name__ == "__main__":
    unittest.main()
