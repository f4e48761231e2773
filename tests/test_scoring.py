import unittest

from game import Chain, Player, Tile, end_condition_met, final_scoring


def founded(name, size, seq, tier=0):
    chain = Chain(name, tier)
    for i in range(size):
        chain.add_tile(Tile(i % 12, i // 12))
    chain.founded_seq = seq
    return chain


class TestEndCondition(unittest.TestCase):
    def test_given_no_chains_then_game_cannot_end(self):
        self.assertFalse(end_condition_met([]))

    def test_given_a_huge_chain_then_game_can_end(self):
        self.assertTrue(end_condition_met([founded("Tower", 41, 1), founded("Sackson", 2, 2)]))

    def test_given_all_safe_chains_then_game_can_end(self):
        chains = [founded("Tower", 11, 1), founded("Sackson", 12, 2)]
        self.assertTrue(end_condition_met(chains))
        chains.append(founded("Imperial", 10, 3))
        self.assertFalse(end_condition_met(chains))


class TestFinalScoring(unittest.TestCase):
    def test_given_holdings_when_scoring_then_bonuses_and_cash_out(self):
        alice, bob, carol = Player("Alice", balance=1000), Player("Bob", balance=1000), Player("Carol", balance=5000)
        tower = founded("Tower", 6, 1, tier=2)  # price 800
        for _ in range(3):
            tower.issue_to(alice)
        tower.issue_to(bob)

        standings = final_scoring([alice, bob, carol], [tower])

        # Alice: 1000 + 8000 majority + 3 * 800; Bob: 1000 + 4000 minority + 800
        self.assertEqual(alice.balance, 11400)
        self.assertEqual(bob.balance, 5800)
        self.assertEqual(standings, [("Alice", 11400), ("Bob", 5800), ("Carol", 5000)])
        self.assertEqual(alice.stocks, [])
        self.assertEqual(tower.unsold, 25)

    def test_given_equal_balances_then_turn_order_kept(self):
        a, b = Player("A", balance=100), Player("B", balance=100)
        self.assertEqual(final_scoring([b, a], []), [("B", 100), ("A", 100)])


if __name__ == "__main__":
    unittest.main()
