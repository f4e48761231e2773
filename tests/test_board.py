import unittest

from game import (
    Board,
    Chain,
    Founder,
    InvalidPlacement,
    Merger,
    NoPendingFounder,
    Player,
    Tile,
    UnknownChainName,
)


def make_chains(*names, safe_size=11):
    return [Chain(n, 0, safe_size=safe_size) for n in names]


def place(board, x, y, seat_order=None):
    tile = Tile(x, y)
    return tile, board.place_tile(tile, seat_order)


def found_at(board, player, name, coords):
    """Places tiles left to right; the second one triggers the founding."""
    for x, y in coords[:2]:
        place(board, x, y)
    board.found_chain(name, player)
    for x, y in coords[2:]:
        place(board, x, y)
    return board.chain_named(name)


class TestTiles(unittest.TestCase):
    def test_given_coordinates_when_naming_then_column_number_and_row_letter(self):
        self.assertEqual(Tile(0, 0).name, "1A")
        self.assertEqual(Tile(11, 8).name, "12I")
        self.assertEqual(Tile(4, 2).name, "5C")
        self.assertEqual(Tile(4, 2).coordinates, (4, 2))


class TestPlacement(unittest.TestCase):
    def setUp(self):
        self.board = Board(make_chains("Worldwide", "Sackson", "Festival"))
        self.alice = Player("Alice")

    def test_given_empty_board_when_single_tile_placed_then_no_pending_work(self):
        tile, outcome = place(self.board, 5, 5)
        self.assertIsNone(outcome)
        self.assertIs(self.board.at(5, 5), tile)
        self.assertEqual(self.board.played_tile_names(), ["6F"])
        self.assertIsNone(self.board.found_needed())
        self.assertFalse(self.board.merge_needed())
        self.assertIsNone(tile.chain_name)

    def test_given_lone_tile_when_neighbor_placed_then_founder_holds_clump_untagged(self):
        a, _ = place(self.board, 0, 0)
        b, outcome = place(self.board, 1, 0)
        self.assertIsInstance(outcome, Founder)
        self.assertIs(self.board.found_needed(), outcome)
        self.assertEqual({t.name for t in outcome.chain_tiles}, {"1A", "2A"})
        self.assertIsNone(a.chain_name)
        self.assertIsNone(b.chain_name)

    def test_given_pending_founder_when_found_chain_then_tiles_tagged_and_share_issued(self):
        place(self.board, 0, 0)
        place(self.board, 0, 1)
        chain = self.board.found_chain("Sackson", self.alice)
        self.assertEqual(chain.name, "Sackson")
        self.assertEqual(chain.size, 2)
        self.assertTrue(all(t.chain_name == "Sackson" for t in chain.tiles))
        self.assertIn(chain, self.board.founded_chains)
        self.assertNotIn(chain, self.board.unfounded_chains)
        self.assertIsNone(self.board.found_needed())
        self.assertEqual(self.alice.shares_in("Sackson"), 1)
        self.assertEqual(chain.unsold, 24)

    def test_given_pending_founder_when_unknown_name_then_rejected_and_founder_kept(self):
        place(self.board, 0, 0)
        place(self.board, 1, 0)
        with self.assertRaises(UnknownChainName):
            self.board.found_chain("Tower", self.alice)
        self.assertIsNotNone(self.board.found_needed())
        self.assertEqual(len(self.board.unfounded_chains), 3)
        self.assertEqual(self.alice.stocks, [])

    def test_given_founded_name_when_founding_again_then_unknown_chain(self):
        found_at(self.board, self.alice, "Worldwide", [(0, 0), (1, 0)])
        place(self.board, 5, 5)
        place(self.board, 5, 6)
        with self.assertRaises(UnknownChainName):
            self.board.found_chain("Worldwide", self.alice)

    def test_given_no_founder_when_found_chain_then_error(self):
        with self.assertRaises(NoPendingFounder):
            self.board.found_chain("Worldwide", self.alice)

    def test_given_chain_when_adjacent_clump_joins_then_every_clump_tile_tagged(self):
        chain = found_at(self.board, self.alice, "Festival", [(0, 0), (1, 0)])
        place(self.board, 3, 0)  # lone, untagged
        bridge, outcome = place(self.board, 2, 0)
        self.assertIsNone(outcome)
        clump = self.board.clump_of(bridge)
        self.assertEqual(len(clump), 4)
        self.assertEqual(chain.size, len(clump))
        self.assertTrue(all(t.chain_name == "Festival" for t in clump))

    def test_given_chain_when_tile_added_twice_then_not_duplicated(self):
        chain = found_at(self.board, self.alice, "Festival", [(0, 0), (1, 0), (2, 0)])
        self.assertEqual(chain.size, 3)
        self.assertFalse(chain.add_tile(self.board.at(0, 0)))
        self.assertEqual(chain.size, 3)

    def test_given_occupied_or_offboard_cell_when_placing_then_invalid_and_untouched(self):
        place(self.board, 2, 2)
        with self.assertRaises(InvalidPlacement):
            place(self.board, 2, 2)
        with self.assertRaises(InvalidPlacement):
            place(self.board, 12, 0)
        with self.assertRaises(InvalidPlacement):
            place(self.board, 0, -1)
        self.assertEqual(self.board.played_tile_names(), ["3C"])
        self.assertFalse(self.board.move_is_legal(Tile(2, 2)))
        self.assertFalse(self.board.move_is_legal(Tile(0, 9)))

    def test_given_pending_founder_when_placing_then_invalid(self):
        place(self.board, 0, 0)
        place(self.board, 1, 0)
        with self.assertRaises(InvalidPlacement):
            place(self.board, 8, 8)
        self.assertEqual(len(self.board.played_tiles), 2)


class TestMergerDetection(unittest.TestCase):
    def setUp(self):
        self.board = Board(make_chains("Worldwide", "Sackson", "Festival", "Imperial"))
        self.alice = Player("Alice")

    def test_given_two_chains_when_bridged_then_one_merger_larger_acquires(self):
        big = found_at(self.board, self.alice, "Worldwide", [(0, 0), (1, 0), (2, 0)])
        small = found_at(self.board, self.alice, "Sackson", [(5, 0), (4, 0)])
        _, outcome = place(self.board, 3, 0)
        self.assertEqual(len(outcome), 1)
        merger = outcome[0]
        self.assertIsInstance(merger, Merger)
        self.assertIs(merger.acquiring_chain, big)
        self.assertIs(merger.acquired_chain, small)
        self.assertIs(self.board.current_merger, merger)

    def test_given_three_chains_when_bridged_then_k_minus_one_mergers_in_size_order(self):
        a = found_at(self.board, self.alice, "Worldwide", [(2, 4), (3, 4), (4, 4)])
        b = found_at(self.board, self.alice, "Sackson", [(6, 4), (7, 4)])
        c = found_at(self.board, self.alice, "Festival", [(5, 5), (5, 6)])
        _, outcome = place(self.board, 5, 4)
        self.assertEqual(len(outcome), 2)
        self.assertTrue(all(m.acquiring_chain is a for m in outcome))
        self.assertEqual([m.acquired_chain for m in outcome], [b, c])
        self.assertEqual(self.board.mergers_to_handle, outcome)

    def test_given_equal_sizes_when_bridged_then_earlier_founded_chain_acquires(self):
        first = found_at(self.board, self.alice, "Imperial", [(8, 0), (8, 1)])
        second = found_at(self.board, self.alice, "Worldwide", [(8, 3), (8, 4)])
        _, outcome = place(self.board, 8, 2)
        self.assertIs(outcome[0].acquiring_chain, first)
        self.assertIs(outcome[0].acquired_chain, second)

    def test_given_ranking_when_counted_then_ties_follow_founding_order(self):
        first = found_at(self.board, self.alice, "Imperial", [(0, 0), (0, 1)])
        second = found_at(self.board, self.alice, "Worldwide", [(2, 0), (2, 1)])
        clump = list(second.tiles) + list(first.tiles)
        self.assertEqual(self.board.rank_chains(clump), [first, second])


class TestLegality(unittest.TestCase):
    def test_given_two_safe_chains_when_bridging_then_illegal_and_dead(self):
        board = Board(make_chains("Worldwide", "Sackson", safe_size=2))
        alice = Player("Alice")
        found_at(board, alice, "Worldwide", [(0, 0), (1, 0)])
        found_at(board, alice, "Sackson", [(3, 0), (4, 0)])
        bridge = Tile(2, 0)
        self.assertFalse(board.move_is_legal(bridge))
        self.assertTrue(board.is_dead(bridge))
        with self.assertRaises(InvalidPlacement):
            board.place_tile(bridge)
        self.assertIsNone(board.at(2, 0))
        self.assertFalse(board.merge_needed())

    def test_given_only_acquirer_safe_when_bridging_then_legal(self):
        board = Board(make_chains("Worldwide", "Sackson", safe_size=3))
        alice = Player("Alice")
        found_at(board, alice, "Worldwide", [(0, 0), (1, 0), (2, 0)])
        found_at(board, alice, "Sackson", [(4, 0), (5, 0)])
        self.assertTrue(board.move_is_legal(Tile(3, 0)))
        self.assertFalse(board.is_dead(Tile(3, 0)))

    def test_given_every_chain_founded_when_new_clump_would_form_then_illegal(self):
        board = Board(make_chains("Tower"))
        alice = Player("Alice")
        found_at(board, alice, "Tower", [(0, 0), (1, 0)])
        place(board, 6, 6)
        self.assertTrue(board.move_is_legal(Tile(9, 8)))
        self.assertFalse(board.move_is_legal(Tile(6, 7)))
        self.assertFalse(board.is_dead(Tile(6, 7)))
        with self.assertRaises(InvalidPlacement):
            place(board, 6, 7)


class TestClumpSearch(unittest.TestCase):
    SHAPE = [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]

    def _build(self, order):
        board = Board(make_chains("Worldwide"))
        alice = Player("Alice")
        for x, y in order:
            place(board, x, y)
            if board.found_needed():
                board.found_chain("Worldwide", alice)
        return board

    def test_given_same_tiles_in_any_order_when_searching_then_same_clump(self):
        forward = self._build(self.SHAPE)
        backward = self._build(list(reversed(self.SHAPE)))
        expected = set(self.SHAPE)
        for board in (forward, backward):
            for x, y in self.SHAPE:
                clump = board.clump_of(board.at(x, y))
                self.assertEqual({t.coordinates for t in clump}, expected)

    def test_given_unplaced_tile_when_searching_then_preview_includes_neighbors(self):
        board = self._build(self.SHAPE)
        preview = board.clump_of(Tile(3, 2))
        self.assertEqual(len(preview), 6)
        self.assertIsNone(board.at(3, 2))

    def test_given_board_when_pretty_then_marks_chains_and_empty_cells(self):
        board = self._build(self.SHAPE)
        place(board, 11, 8)
        txt = board.pretty()
        self.assertIn("W", txt)
        self.assertIn("#", txt)
        self.assertIn(".", txt)
        self.assertEqual(len(txt.splitlines()), 10)


if __name__ == "__main__":
    unittest.main()
