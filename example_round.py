import json

from agents import AgentSpec
from city import Citizen, Scenario
from city.core.types import CitizenType, WeaponType
from game_runner import RoundRunner
from infra.logger import configure_logging


def build_scenario(round_index: int) -> Scenario:
    """A small town with two builders, a warrior and one enemy of each role."""
    scenario = Scenario(
        layout=[
            "..$.....",
            ".##..g..",
            ".##.....",
            "....f.#.",
            "..$...#.",
        ],
        me=0,
        round=round_index,
    )
    scenario.add_citizen(Citizen(1, 0, CitizenType.BUILDER, (0, 0), 60))
    scenario.add_citizen(Citizen(2, 0, CitizenType.BUILDER, (4, 0), 30))
    scenario.add_citizen(Citizen(3, 0, CitizenType.WARRIOR, (2, 4), 100, WeaponType.HAMMER))
    scenario.add_citizen(Citizen(10, 1, CitizenType.BUILDER, (4, 5), 40))
    scenario.add_citizen(Citizen(11, 1, CitizenType.WARRIOR, (0, 7), 100, WeaponType.GUN))
    scenario.add_barricade((3, 1), resistance=100, owner=0)
    return scenario


def main():
    """Play a day round and a night round and print the frames."""
    configure_logging(level="DEBUG")

    print("City Survival - Example Rounds")
    print("=" * 80)

    runner = RoundRunner(AgentSpec(type="greedy", player=0, name="Greedy"))
    for round_index in (3, 30):
        scenario = build_scenario(round_index)
        print(f"\n{scenario}")
        frame = runner.play(scenario.to_world())
        print(json.dumps(frame.to_dict(), indent=2))


if __name__ == "__main__":
    main()
