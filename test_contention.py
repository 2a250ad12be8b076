import unittest

from agents.greedy_agent.board import BoardSnapshotBuilder
from agents.greedy_agent.contention import (
    BonusInfo,
    BonusKind,
    BonusTables,
    ContentionTracker,
    Reservation,
    apply_reservation,
)
from city import Citizen, Scenario
from city.core.types import CitizenType, WeaponType


def resolve(scenario: Scenario):
    world = scenario.to_world()
    table = {}
    board = BoardSnapshotBuilder().build(world, table)
    ContentionTracker().resolve(board, world, table)
    return table


class TestContentionTracker(unittest.TestCase):
    def test_money_closest_unit_of_any_side(self):
        scenario = Scenario(layout=["$...."], round=3)
        scenario.add_citizen(Citizen(1, 0, CitizenType.BUILDER, (0, 4), 60))
        scenario.add_citizen(Citizen(9, 1, CitizenType.BUILDER, (0, 2), 60))
        info = resolve(scenario)[(0, 0)]
        self.assertEqual(info.closest_dist, 2)
        self.assertFalse(info.closest_is_friendly)

    def test_weapon_search_passes_uninterested_units(self):
        scenario = Scenario(layout=["g...."], round=3)
        # Builders and warriors already holding a gun do not want a gun.
        scenario.add_citizen(Citizen(1, 0, CitizenType.BUILDER, (0, 1), 60))
        scenario.add_citizen(Citizen(9, 1, CitizenType.WARRIOR, (0, 2), 100, WeaponType.GUN))
        scenario.add_citizen(Citizen(2, 0, CitizenType.WARRIOR, (0, 4), 100, WeaponType.HAMMER))
        info = resolve(scenario)[(0, 0)]
        self.assertEqual(info.closest_dist, 4)
        self.assertTrue(info.closest_is_friendly)

    def test_enemy_warrior_wants_better_weapon(self):
        scenario = Scenario(layout=["z...."], round=3)
        scenario.add_citizen(Citizen(9, 1, CitizenType.WARRIOR, (0, 3), 100, WeaponType.GUN))
        info = resolve(scenario)[(0, 0)]
        self.assertEqual(info.closest_dist, 3)
        self.assertFalse(info.closest_is_friendly)

    def test_enemy_barricade_slows_search(self):
        scenario = Scenario(layout=["$..."], round=3)
        scenario.add_citizen(Citizen(1, 0, CitizenType.BUILDER, (0, 2), 60))
        scenario.add_barricade((0, 1), resistance=160, owner=1)
        info = resolve(scenario)[(0, 0)]
        # 1 + 160 // 80 to cross the barricade, then one more step.
        self.assertEqual(info.closest_dist, 4)

    def test_walls_block_search(self):
        scenario = Scenario(layout=["$#.", ".#.", "..."], round=3)
        scenario.add_citizen(Citizen(1, 0, CitizenType.BUILDER, (0, 2), 60))
        info = resolve(scenario)[(0, 0)]
        self.assertEqual(info.closest_dist, 6)

    def test_defaults_when_nobody_qualifies(self):
        scenario = Scenario(layout=["h...."], round=3)
        scenario.add_citizen(Citizen(1, 0, CitizenType.BUILDER, (0, 4), 60))
        info = resolve(scenario)[(0, 0)]
        self.assertEqual(info.closest_dist, 0)
        self.assertFalse(info.closest_is_friendly)


class TestBonusTables(unittest.TestCase):
    def test_select_alternates_by_round_parity(self):
        tables = BonusTables()
        current, previous = tables.select(4)
        self.assertIs(current, tables[0])
        self.assertIs(previous, tables[1])
        current, previous = tables.select(7)
        self.assertIs(current, tables[1])
        self.assertIs(previous, tables[0])

    def test_apply_reservation(self):
        table = {(1, 1): BonusInfo(BonusKind.WEAPON, closest_dist=5)}
        apply_reservation(table, Reservation((1, 1), 2))
        self.assertEqual(table[(1, 1)].closest_dist, 2)
        self.assertTrue(table[(1, 1)].closest_is_friendly)


if __name__ == "__main__":
    unittest.main()
