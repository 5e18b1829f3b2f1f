import unittest

from game import (
    Board,
    CheckedRegion,
    CheckRegionError,
    Game,
    Region,
    Ruleset,
    Square,
    StaleRegionError,
)


def region(*coords):
    return Region(Square(x, y) for x, y in coords)


class TestCheckRegion(unittest.TestCase):
    def setUp(self):
        self.board = Board.new(3, "ABC" "DEF" "GHI")
        self.ruleset = Ruleset(
            min_length=2,
            max_length=4,
            dictionary=frozenset({"AD", "ABD", "BE", "CFI", "GH", "ABC", "AE"}),
        )
        self.game = Game(self.board, self.ruleset)

    def test_given_valid_candidate_when_checked_then_handle_refers_to_candidate(self):
        candidate = region((0, 0), (0, 1))
        result = self.game.check_region(candidate)
        self.assertIsInstance(result, CheckedRegion)
        self.assertIs(result.region, candidate)
        self.assertEqual(candidate.word(self.board), "AD")

    def test_given_each_failure_when_checked_then_expected_error(self):
        cases = [
            (region((0, 0)), CheckRegionError.TOO_SHORT),
            (region((0, 0), (1, 0), (2, 0), (0, 1), (1, 1)), CheckRegionError.TOO_LONG),
            (region((2, 2), (3, 2)), CheckRegionError.OUT_OF_BOUNDS),
            (region((0, 0), (1, 1)), CheckRegionError.NOT_CONTIGUOUS),
            (region((1, 1), (2, 1)), CheckRegionError.NOT_IN_DICTIONARY),
        ]
        for candidate, expected in cases:
            self.assertIs(self.game.check_region(candidate), expected, candidate)

    def test_given_short_unknown_word_when_checked_then_too_short_wins(self):
        # "I" is neither long enough nor in the dictionary
        self.assertIs(self.game.check_region(region((2, 2))), CheckRegionError.TOO_SHORT)

    def test_given_out_of_bounds_and_disconnected_when_checked_then_bounds_reported_first(self):
        self.assertIs(self.game.check_region(region((0, 0), (5, 5))), CheckRegionError.OUT_OF_BOUNDS)

    def test_given_long_region_off_board_when_checked_then_too_long_before_bounds(self):
        candidate = region((0, 0), (1, 0), (2, 0), (3, 0), (0, 1))
        self.assertIs(self.game.check_region(candidate), CheckRegionError.TOO_LONG)

    def test_given_off_board_region_over_committed_square_when_checked_then_bounds_before_overlap(self):
        self.assertIsNone(self.game.try_add_region(region((0, 0), (0, 1)), "red"))
        self.assertIs(self.game.check_region(region((0, 0), (3, 0))), CheckRegionError.OUT_OF_BOUNDS)

    def test_given_disconnected_unknown_word_when_checked_then_contiguity_before_dictionary(self):
        # "AI" and "BD" are not in the dictionary
        self.assertIs(self.game.check_region(region((0, 0), (2, 2))), CheckRegionError.NOT_CONTIGUOUS)
        self.assertIs(self.game.check_region(region((1, 0), (0, 1))), CheckRegionError.NOT_CONTIGUOUS)

    def test_given_committed_region_when_candidate_overlaps_then_overlapping_before_contiguity(self):
        self.assertIsNone(self.game.try_add_region(region((0, 0), (0, 1)), "red"))
        self.assertIs(self.game.check_region(region((0, 0), (2, 2))), CheckRegionError.OVERLAPPING)
        self.assertIs(self.game.check_region(region((0, 1), (1, 1))), CheckRegionError.OVERLAPPING)
        self.assertFalse(self.game.is_square_free(Square(0, 0)))
        self.assertFalse(self.game.is_square_free(Square(0, 1)))
        self.assertTrue(self.game.is_square_free(Square(1, 1)))

    def test_given_empty_region_when_checked_then_too_short(self):
        self.assertIs(self.game.check_region(Region()), CheckRegionError.TOO_SHORT)


class TestCommitAndRemove(unittest.TestCase):
    def setUp(self):
        self.board = Board.new(3, "ABCDEFGHI")
        self.ruleset = Ruleset(min_length=2, max_length=4, dictionary=frozenset({"AD", "BE", "CFI", "GH"}))
        self.game = Game(self.board, self.ruleset)

    def _commit(self, candidate, label):
        checked = self.game.check_region(candidate)
        self.assertIsInstance(checked, CheckedRegion)
        self.game.add_region(checked, label)

    def test_given_end_to_end_scenario_when_committing_then_state_tracks_region(self):
        candidate = region((0, 0), (0, 1))
        checked = self.game.check_region(candidate)
        self.assertIsInstance(checked, CheckedRegion)
        self.assertEqual(checked.region.word(self.board), "AD")
        self.game.add_region(checked, "X")
        self.assertFalse(self.game.is_square_free(Square(0, 0)))
        self.assertFalse(self.game.is_complete())
        self.assertEqual(self.game.uncovered_count(), 7)
        regions = list(self.game.regions())
        self.assertEqual(len(regions), 1)
        self.assertEqual(regions[0][0], candidate)
        self.assertEqual(regions[0][1], "X")

    def test_given_committed_copy_when_candidate_mutated_later_then_committed_unchanged(self):
        candidate = region((0, 0), (0, 1))
        self._commit(candidate, "X")
        candidate.add_square(Square(2, 2))
        committed, _ = next(self.game.regions())
        self.assertIsNot(committed, candidate)
        self.assertEqual(committed.size(), 2)
        self.assertTrue(self.game.is_square_free(Square(2, 2)))

    def test_given_candidate_mutated_after_check_when_adding_then_stale_error(self):
        candidate = region((0, 0), (0, 1))
        checked = self.game.check_region(candidate)
        candidate.add_square(Square(1, 1))
        with self.assertRaises(StaleRegionError):
            self.game.add_region(checked, "X")
        self.assertEqual(list(self.game.regions()), [])

    def test_given_handle_used_once_when_reused_then_stale_error(self):
        candidate = region((0, 0), (0, 1))
        checked = self.game.check_region(candidate)
        self.game.add_region(checked, "X")
        self.assertTrue(checked.is_stale())
        with self.assertRaises(StaleRegionError):
            self.game.add_region(checked, "Y")
        self.assertEqual(len(list(self.game.regions())), 1)

    def test_given_two_handles_for_same_squares_when_both_added_then_second_rejected(self):
        first = self.game.check_region(region((0, 0), (0, 1)))
        second = self.game.check_region(region((0, 0), (0, 1)))
        self.game.add_region(first, "X")
        with self.assertRaises(StaleRegionError):
            self.game.add_region(second, "Y")

    def test_given_committed_regions_when_removing_then_region_and_label_returned(self):
        self._commit(region((0, 0), (0, 1)), "red")
        self._commit(region((1, 0), (1, 1)), "green")
        self._commit(region((2, 0), (2, 1), (2, 2)), "blue")
        removed = self.game.remove_region(Square(1, 1))
        self.assertIsNotNone(removed)
        removed_region, label = removed
        self.assertEqual(label, "green")
        self.assertEqual(removed_region, region((1, 0), (1, 1)))
        self.assertTrue(self.game.is_square_free(Square(1, 0)))
        labels = sorted(label for _, label in self.game.regions())
        self.assertEqual(labels, ["blue", "red"])

    def test_given_last_region_when_removing_then_list_shrinks(self):
        self._commit(region((0, 0), (0, 1)), "red")
        self._commit(region((1, 0), (1, 1)), "green")
        removed = self.game.remove_region(Square(1, 0))
        self.assertEqual(removed[1], "green")
        self.assertEqual([label for _, label in self.game.regions()], ["red"])

    def test_given_free_square_when_removing_then_none_and_unchanged(self):
        self._commit(region((0, 0), (0, 1)), "red")
        before = [(r.copy(), label) for r, label in self.game.regions()]
        self.assertIsNone(self.game.remove_region(Square(2, 2)))
        after = list(self.game.regions())
        self.assertEqual(len(after), len(before))
        self.assertEqual(after[0][0], before[0][0])
        self.assertEqual(after[0][1], before[0][1])

    def test_given_full_partition_when_checking_completion_then_complete(self):
        self._commit(region((0, 0), (0, 1)), 1)
        self._commit(region((1, 0), (1, 1)), 2)
        self._commit(region((2, 0), (2, 1), (2, 2)), 3)
        self.assertFalse(self.game.is_complete())
        self._commit(region((0, 2), (1, 2)), 4)
        self.assertTrue(self.game.is_complete())
        seen = {}
        for r, label in self.game.regions():
            for s in r.squares():
                self.assertNotIn(s, seen)
                seen[s] = label
        self.assertEqual(set(seen), set(self.board.squares()))

    def test_given_regions_view_when_iterated_twice_then_same_entries(self):
        self._commit(region((0, 0), (0, 1)), "red")
        first = [label for _, label in self.game.regions()]
        second = [label for _, label in self.game.regions()]
        self.assertEqual(first, second)

    def test_given_invalid_candidate_when_try_add_then_error_and_nothing_committed(self):
        self.assertIs(self.game.try_add_region(region((1, 1), (2, 1)), "red"),
                      CheckRegionError.NOT_IN_DICTIONARY)
        self.assertEqual(list(self.game.regions()), [])


if __name__ == '__main__':
    unittest.main()
