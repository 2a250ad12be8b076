"""
Decision engine scenarios.

Each test builds a tiny board with ``Scenario``, runs the board builder and
the contention tracker the way the agent does, and checks the single
decision taken for one citizen. Rounds: 3 is a calm day (next round is day
too), 24 is the last day round, 30 is night, 49 is the last night round.
"""

import unittest

from agents.greedy_agent.board import BoardSnapshotBuilder
from agents.greedy_agent.content import Tier
from agents.greedy_agent.contention import BonusInfo, BonusKind, ContentionTracker
from agents.greedy_agent.decision import DecisionEngine
from agents.greedy_agent.settings import EngineSettings
from city import Citizen, Scenario
from city.core.types import ActionType, CitizenType, Dir, WeaponType


def make_engine(scenario: Scenario, previous=None) -> DecisionEngine:
    world = scenario.to_world()
    current = {}
    board = BoardSnapshotBuilder().build(world, current)
    ContentionTracker().resolve(board, world, current)
    return DecisionEngine(
        world,
        board,
        current,
        previous or {},
        EngineSettings(),
        barricades_built=len(world.barricades(world.me)),
    )


def builder(cid, pos, life=60, player=0):
    return Citizen(cid, player, CitizenType.BUILDER, pos, life)


def warrior(cid, pos, weapon=WeaponType.HAMMER, life=100, player=0):
    return Citizen(cid, player, CitizenType.WARRIOR, pos, life, weapon)


class TestImmediateOpportunity(unittest.TestCase):
    def _weak_enemy_scenario(self, round_index: int) -> Scenario:
        scenario = Scenario(layout=["...", "...", "..."], round=round_index)
        scenario.add_citizen(warrior(1, (1, 1)))
        scenario.add_citizen(builder(5, (1, 2), life=30, player=1))
        return scenario

    def test_attacks_weak_enemy_at_night(self):
        decision = make_engine(self._weak_enemy_scenario(30)).decide(1)
        self.assertEqual(decision.reason, "opportunity")
        self.assertEqual(decision.instruction.kind, ActionType.MOVE)
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertEqual(decision.instruction.priority, EngineSettings().very_high_priority)

    def test_no_attack_in_calm_day(self):
        decision = make_engine(self._weak_enemy_scenario(3)).decide(1)
        self.assertIsNone(decision.instruction)
        self.assertEqual(decision.reason, "no_target")

    def test_attacks_on_last_day_round(self):
        decision = make_engine(self._weak_enemy_scenario(24)).decide(1)
        self.assertEqual(decision.reason, "opportunity")
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)

    def test_attacks_on_last_night_round(self):
        decision = make_engine(self._weak_enemy_scenario(49)).decide(1)
        self.assertEqual(decision.reason, "opportunity")

    def test_no_attack_when_enemy_survives_one_hit(self):
        scenario = Scenario(layout=["...", "...", "..."], round=30)
        scenario.add_citizen(warrior(1, (1, 1)))
        scenario.add_citizen(builder(5, (1, 2), life=50, player=1))
        decision = make_engine(scenario).decide(1)
        self.assertNotEqual(decision.reason, "opportunity")

    def test_no_attack_on_barricaded_enemy(self):
        scenario = self._weak_enemy_scenario(30)
        scenario.add_barricade((1, 2), resistance=40, owner=1)
        decision = make_engine(scenario).decide(1)
        self.assertNotEqual(decision.reason, "opportunity")

    def test_grabs_better_weapon(self):
        scenario = Scenario(layout=["..g."], round=3)
        scenario.add_citizen(warrior(1, (0, 1)))
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "opportunity")
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertEqual(decision.instruction.priority, 500)

    def test_declines_weapon_next_to_stronger_enemy(self):
        scenario = Scenario(layout=["..g."], round=3)
        scenario.add_citizen(warrior(1, (0, 1)))
        scenario.add_citizen(warrior(9, (0, 3), weapon=WeaponType.BAZOOKA, player=1))
        decision = make_engine(scenario).decide(1)
        self.assertIsNone(decision.instruction)
        self.assertEqual(decision.reason, "opportunity_declined")


class TestDangerWindow(unittest.TestCase):
    def _engine(self, round_index: int) -> DecisionEngine:
        scenario = Scenario(layout=["...", "...", "..."], round=round_index)
        scenario.add_citizen(builder(1, (1, 1)))
        scenario.add_citizen(warrior(5, (1, 2), weapon=WeaponType.GUN, player=1))
        return make_engine(scenario)

    def test_no_danger_in_calm_day(self):
        self.assertFalse(self._engine(3).is_danger((1, 1), Tier.BUILDER))

    def test_danger_on_last_day_round(self):
        self.assertTrue(self._engine(24).is_danger((1, 1), Tier.BUILDER))

    def test_danger_at_night(self):
        engine = self._engine(30)
        self.assertTrue(engine.is_danger((1, 1), Tier.BUILDER))
        self.assertTrue(engine.is_danger((1, 1), Tier.HAMMER))
        self.assertFalse(engine.is_danger((1, 1), Tier.GUN))
        self.assertFalse(engine.is_danger((0, 0), Tier.BUILDER))


class TestTargets(unittest.TestCase):
    def test_warrior_hunts_enemy_reachable_at_night(self):
        scenario = Scenario(layout=["....."], round=30)
        scenario.add_citizen(warrior(1, (0, 0)))
        scenario.add_citizen(builder(9, (0, 3), life=60, player=1))
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "target")
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertEqual(decision.instruction.priority, -1)

    def test_warrior_ignores_enemy_reached_by_day(self):
        scenario = Scenario(layout=["....."], round=3)
        scenario.add_citizen(warrior(1, (0, 0)))
        scenario.add_citizen(builder(9, (0, 3), life=60, player=1))
        decision = make_engine(scenario).decide(1)
        self.assertIsNone(decision.instruction)

    def test_warrior_plans_attack_for_nightfall(self):
        scenario = Scenario(layout=["....."], round=23)
        scenario.add_citizen(warrior(1, (0, 0)))
        scenario.add_citizen(builder(9, (0, 3), life=60, player=1))
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "target")

    def test_hurt_builder_prefers_food(self):
        for life in (30, 50):
            scenario = Scenario(layout=["$.f."], round=3)
            scenario.add_citizen(builder(1, (0, 1), life=life))
            decision = make_engine(scenario).decide(1)
            self.assertEqual(decision.instruction.dir, Dir.RIGHT, f"life={life}")

    def test_healthy_builder_ignores_food(self):
        scenario = Scenario(layout=["$.f."], round=3)
        scenario.add_citizen(builder(1, (0, 1), life=60))
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.instruction.dir, Dir.LEFT)

    def test_builder_steals_weapon_wanted_by_enemy(self):
        scenario = Scenario(layout=["..g...."], round=3)
        scenario.add_citizen(builder(1, (0, 0)))
        scenario.add_citizen(warrior(9, (0, 5), player=1))
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertIsNotNone(decision.reservation)
        self.assertEqual(decision.reservation.pos, (0, 2))
        self.assertEqual(decision.reservation.distance, 2)

    def _two_coins(self) -> Scenario:
        # Near coin 4 steps left (teammate 2 steps from it), far coin 5 steps right.
        scenario = Scenario(layout=["....$........$"], round=3)
        scenario.add_citizen(builder(1, (0, 2)))
        scenario.add_citizen(warrior(2, (0, 8)))
        return scenario

    def test_money_not_suppressed_without_history(self):
        engine = make_engine(self._two_coins())
        self.assertEqual(engine.current[(0, 4)].closest_dist, 2)
        decision = engine.decide(2)
        self.assertEqual(decision.instruction.dir, Dir.LEFT)

    def test_money_suppressed_when_teammate_closing_in(self):
        # Teammate was 3 away last round, now 2: it is winning the race.
        previous = {(0, 4): BonusInfo(BonusKind.MONEY, closest_dist=3, closest_is_friendly=True)}
        engine = make_engine(self._two_coins(), previous=previous)
        decision = engine.decide(2)
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)

    def test_money_kept_when_rival_not_approaching(self):
        previous = {(0, 4): BonusInfo(BonusKind.MONEY, closest_dist=2, closest_is_friendly=True)}
        engine = make_engine(self._two_coins(), previous=previous)
        decision = engine.decide(2)
        self.assertEqual(decision.instruction.dir, Dir.LEFT)


class TestBarricades(unittest.TestCase):
    def test_builder_improves_half_built_barricade(self):
        scenario = Scenario(layout=["...", "...", "..."], round=3)
        scenario.add_citizen(builder(1, (1, 1)))
        scenario.add_barricade((1, 2), resistance=160, owner=0)
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "improve_barricade")
        self.assertEqual(decision.instruction.kind, ActionType.BUILD)
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertEqual(decision.instruction.priority, 0)

    def test_finished_barricade_is_not_improved(self):
        scenario = Scenario(layout=["...", "...", "..."], round=3)
        scenario.add_citizen(builder(1, (1, 1)))
        scenario.add_barricade((1, 2), resistance=224, owner=0)
        engine = make_engine(scenario)
        self.assertFalse(engine.has_buildable_barricade((1, 2)))
        decision = engine.decide(1)
        self.assertEqual(decision.reason, "new_barricade")
        self.assertEqual(decision.instruction.dir, Dir.UP)
        self.assertEqual(engine.barricades_built, 2)

    def test_interrupt_threshold_keeps_builder_building(self):
        scenario = Scenario(layout=["........$", "........."], round=3)
        scenario.add_citizen(builder(1, (0, 0)))
        scenario.add_barricade((1, 0), resistance=100, owner=0)
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.instruction.kind, ActionType.BUILD)
        self.assertEqual(decision.instruction.dir, Dir.DOWN)

    def test_worthwhile_target_beats_low_threshold(self):
        scenario = Scenario(layout=["........$", "........."], round=3)
        scenario.add_citizen(builder(1, (0, 0)))
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "target")
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)

    def test_builder_starts_barricade_instead_of_far_target(self):
        scenario = Scenario(layout=["...........$"], round=3)
        scenario.add_citizen(builder(1, (0, 0)))
        engine = make_engine(scenario)
        decision = engine.decide(1)
        self.assertEqual(decision.reason, "new_barricade")
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertEqual(engine.barricades_built, 1)

    def test_barricade_cap_lifts_threshold(self):
        scenario = Scenario(layout=["...........$"], round=3)
        scenario.add_citizen(builder(1, (0, 0)))
        for col in (4, 5, 6):
            scenario.add_barricade((0, col), resistance=300, owner=0)
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "target")
        self.assertEqual(decision.instruction.kind, ActionType.MOVE)

    def test_new_barricade_prefers_calm_cell(self):
        scenario = Scenario(layout=["...", "...", "..."], round=3)
        scenario.add_citizen(builder(1, (1, 1)))
        scenario.add_citizen(warrior(9, (0, 0), player=1))
        decision = make_engine(scenario).decide(1)
        # UP and LEFT are next to the enemy.
        self.assertEqual(decision.instruction.dir, Dir.DOWN)

    def test_warrior_does_nothing_by_day(self):
        scenario = Scenario(layout=["...", "...", "..."], round=3)
        scenario.add_citizen(warrior(1, (1, 1)))
        decision = make_engine(scenario).decide(1)
        self.assertIsNone(decision.instruction)


class TestPathCosts(unittest.TestCase):
    """Two coins: 2 steps left of the unit or 3 steps right of it."""

    def _coins(self) -> Scenario:
        return Scenario(layout=["$....$"], round=3)

    def test_open_road_goes_to_nearest_coin(self):
        scenario = self._coins()
        scenario.add_citizen(builder(1, (0, 2)))
        self.assertEqual(make_engine(scenario).decide(1).instruction.dir, Dir.LEFT)

    def test_enemy_barricade_costs_demolish_turns(self):
        scenario = self._coins()
        scenario.add_citizen(builder(1, (0, 2)))
        scenario.add_barricade((0, 1), resistance=40, owner=1)
        engine = make_engine(scenario)
        self.assertEqual(engine.movement_penalty((0, 1), Tier.BUILDER), 4)
        self.assertEqual(engine.decide(1).instruction.dir, Dir.RIGHT)

    def test_bazooka_walks_through_enemy_barricade(self):
        scenario = self._coins()
        scenario.add_citizen(warrior(1, (0, 2), weapon=WeaponType.BAZOOKA))
        scenario.add_barricade((0, 1), resistance=40, owner=1)
        engine = make_engine(scenario)
        self.assertEqual(engine.movement_penalty((0, 1), Tier.BAZOOKA), 0)
        self.assertEqual(engine.decide(1).instruction.dir, Dir.LEFT)

    def test_tough_enemy_in_the_way(self):
        scenario = self._coins()
        scenario.add_citizen(warrior(1, (0, 2)))
        scenario.add_citizen(builder(9, (0, 1), life=120, player=1))
        engine = make_engine(scenario)
        # 120 life takes three hits, the first one from the adjacent cell.
        self.assertEqual(engine.movement_penalty((0, 1), Tier.HAMMER), 2)
        self.assertEqual(engine.decide(1).instruction.dir, Dir.RIGHT)

    def test_teammate_in_the_way(self):
        scenario = self._coins()
        scenario.add_citizen(builder(1, (0, 2)))
        scenario.add_citizen(builder(2, (0, 1)))
        engine = make_engine(scenario)
        self.assertEqual(
            engine.movement_penalty((0, 1), Tier.BUILDER),
            EngineSettings().cost_walk_into_friendly,
        )
        self.assertEqual(engine.decide(1).instruction.dir, Dir.RIGHT)

    def _weapon_on_the_way(self, with_teammate: bool) -> Scenario:
        scenario = Scenario(layout=["$g...$", "......"], round=3)
        scenario.add_citizen(builder(1, (0, 2)))
        if with_teammate:
            # The gun is an upgrade for this hammer warrior, one step away.
            scenario.add_citizen(warrior(2, (1, 1)))
        return scenario

    def test_steps_around_weapon_teammate_wants(self):
        engine = make_engine(self._weapon_on_the_way(True))
        self.assertTrue(engine.current[(0, 1)].closest_is_friendly)
        self.assertEqual(engine.current[(0, 1)].closest_dist, 1)
        self.assertEqual(engine.decide(1).instruction.dir, Dir.RIGHT)

    def test_unwanted_weapon_is_no_obstacle(self):
        engine = make_engine(self._weapon_on_the_way(False))
        self.assertEqual(engine.current[(0, 1)].closest_dist, 0)
        self.assertEqual(engine.decide(1).instruction.dir, Dir.LEFT)


class TestSafeFirstSeeding(unittest.TestCase):
    def _scenario(self, round_index: int) -> Scenario:
        # Coin two steps left, next to an enemy hammer in the corner.
        scenario = Scenario(layout=[".....", "$....", "....."], round=round_index)
        scenario.add_citizen(warrior(9, (0, 0), player=1))
        scenario.add_citizen(builder(1, (1, 2)))
        return scenario

    def test_night_route_starts_on_a_safe_cell(self):
        engine = make_engine(self._scenario(30))
        self.assertFalse(engine._is_safe((1, 1), Tier.BUILDER))
        self.assertFalse(engine._is_safe((0, 2), Tier.BUILDER))
        decision = engine.decide(1)
        self.assertEqual(decision.reason, "target")
        self.assertEqual(decision.instruction.dir, Dir.DOWN)

    def test_short_route_in_calm_day(self):
        decision = make_engine(self._scenario(3)).decide(1)
        self.assertEqual(decision.instruction.dir, Dir.LEFT)

    def test_unsafe_first_step_when_nothing_else(self):
        # Walls leave only the unsafe step towards the coin.
        scenario = Scenario(layout=["..##", "...#", ".$##"], round=30)
        scenario.add_citizen(warrior(9, (0, 0), player=1))
        scenario.add_citizen(builder(1, (1, 2)))
        engine = make_engine(scenario)
        self.assertFalse(engine._is_safe((1, 1), Tier.BUILDER))
        decision = engine.decide(1)
        self.assertEqual(decision.reason, "target")
        self.assertEqual(decision.instruction.dir, Dir.LEFT)


class TestNightEscape(unittest.TestCase):
    def test_trapped_unit_stays(self):
        scenario = Scenario(layout=["...", "..$"], round=30)
        scenario.add_citizen(builder(1, (1, 0)))
        scenario.add_citizen(builder(2, (1, 1)))
        scenario.add_citizen(warrior(9, (0, 0), player=1))
        engine = make_engine(scenario)

        self.assertEqual(engine.approach_target(engine.world.citizen(1)).reason, "trapped")
        decision = engine.decide(1)
        self.assertIsNone(decision.instruction)
        self.assertEqual(decision.reason, "cornered")

    def test_takes_cover_in_own_barricade(self):
        scenario = Scenario(layout=["...", "..."], round=30)
        scenario.add_citizen(builder(1, (1, 0), life=30))
        scenario.add_citizen(warrior(9, (0, 0), player=1))
        scenario.add_barricade((1, 1), resistance=50, owner=0)
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "take_cover")
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertEqual(decision.instruction.priority, EngineSettings().run_death_priority)

    def test_flees_to_empty_cell(self):
        scenario = Scenario(layout=["...", "..."], round=30)
        scenario.add_citizen(builder(1, (1, 0)))
        scenario.add_citizen(warrior(9, (0, 0), player=1))
        decision = make_engine(scenario).decide(1)
        self.assertEqual(decision.reason, "flee")
        self.assertEqual(decision.instruction.dir, Dir.RIGHT)
        self.assertEqual(decision.instruction.priority, EngineSettings().run_priority)

    def test_safe_unit_stays_at_night(self):
        scenario = Scenario(layout=["...", "..."], round=30)
        scenario.add_citizen(builder(1, (1, 0)))
        decision = make_engine(scenario).decide(1)
        self.assertIsNone(decision.instruction)


if __name__ == "__main__":
    unittest.main()
