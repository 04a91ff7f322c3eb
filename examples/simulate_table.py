#!/usr/bin/env python3
"""
Example running the round engine unattended.

A DummyAdapter plays a fixed stake with a "hit below 17" strategy against a
seeded local shoe, while event listeners tally the results.
"""

import argparse
import asyncio
import random
from collections import Counter

from twentyone.adapters import DummyAdapter
from twentyone.blackjack.action import Action
from twentyone.engine import BlackjackEngine
from twentyone.events import EventBus, EngineEventType
from twentyone.supply import LocalCardSupply
from twentyone.table import BlackjackTable


async def main():
    parser = argparse.ArgumentParser(description="Simulate rounds of blackjack")
    parser.add_argument("-r", "--rounds", type=int, default=100, help="Rounds to play")
    parser.add_argument("-b", "--bet", type=int, default=10, help="Stake per round")
    parser.add_argument("--seed", type=int, default=1, help="Shoe seed")
    args = parser.parse_args()

    engine = BlackjackEngine(LocalCardSupply(rng=random.Random(args.seed)))

    def strategy(valid_actions):
        if engine.active_hand.value < 17 and Action.HIT in valid_actions:
            return Action.HIT
        return Action.STAND

    adapter = DummyAdapter(bets=[args.bet] * args.rounds, strategy_function=strategy)

    outcomes = Counter()
    shuffles = Counter()
    event_bus = EventBus.get_instance()
    event_bus.on(EngineEventType.HAND_RESULT, lambda data: outcomes.update([data["outcome"]]))
    event_bus.on(EngineEventType.SHUFFLE, lambda data: shuffles.update(["shuffle"]))

    table = BlackjackTable(engine, adapter)
    played = await table.run(max_rounds=args.rounds)

    print(f"Played {played} rounds, final balance {engine.balance}")
    print(f"Shoe shuffled {shuffles['shuffle']} times")
    for outcome, count in outcomes.most_common():
        print(f"  {outcome:<18} {count}")


if __name__ == "__main__":
    asyncio.run(main())
