import unittest

from game import find_matches, grid_from_categories, is_settled, matched_coords


def make_grid(columns):
    """Columns are given top to bottom, one string per column."""
    return grid_from_categories([list(col) for col in columns])


class TestMatchDetector(unittest.TestCase):
    def test_given_settled_grid_when_scanning_then_no_matches(self):
        grid = make_grid(['AAB', 'ABB', 'BAA'])
        self.assertEqual(find_matches(grid), [])
        self.assertTrue(is_settled(grid))

    def test_given_four_in_a_column_when_scanning_then_single_group_of_four(self):
        grid = make_grid(['AAAAB', 'BCDBC', 'CDBCD'])
        self.assertEqual(find_matches(grid), [[(0, 0), (0, 1), (0, 2), (0, 3)]])

    def test_given_long_row_run_when_scanning_then_not_split_into_threes(self):
        grid = make_grid(['AB', 'AC', 'AB', 'AC', 'AB', 'AC'])
        self.assertEqual(find_matches(grid), [[(x, 0) for x in range(6)]])

    def test_given_run_at_end_of_line_when_scanning_then_emitted(self):
        grid = make_grid(['BCAAA'])
        self.assertEqual(find_matches(grid), [[(0, 2), (0, 3), (0, 4)]])

    def test_given_run_of_two_when_scanning_then_ignored(self):
        grid = make_grid(['AAB', 'BBA', 'AAB'])
        self.assertEqual(find_matches(grid), [])

    def test_given_junction_when_scanning_then_cell_in_both_groups_columns_first(self):
        grid = make_grid(['AAA', 'ABC', 'ACB'])
        matches = find_matches(grid)
        self.assertEqual(matches, [
            [(0, 0), (0, 1), (0, 2)],
            [(0, 0), (1, 0), (2, 0)],
        ])
        self.assertEqual(matched_coords(matches), {(0, 0), (0, 1), (0, 2), (1, 0), (2, 0)})

    def test_given_two_runs_in_one_column_when_scanning_then_two_groups(self):
        grid = make_grid(['AAABBB'])
        self.assertEqual(find_matches(grid), [
            [(0, 0), (0, 1), (0, 2)],
            [(0, 3), (0, 4), (0, 5)],
        ])

    def test_given_uneven_columns_when_scanning_rows_then_gap_breaks_run(self):
        grid = make_grid(['ABCA', 'BCAB', 'CABA', 'DBCA'])
        grid[1].pop()  # column 1 is now one short
        self.assertEqual(find_matches(grid), [])
        grid2 = make_grid(['AB', 'AB', 'A', 'A'])
        self.assertEqual(find_matches(grid2), [[(0, 0), (1, 0), (2, 0), (3, 0)]])

    def test_given_empty_grid_when_scanning_then_no_matches(self):
        self.assertEqual(find_matches([]), [])


if __name__ == '__main__':
    unittest.main(verbosity=2)
