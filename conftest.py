import itertools
import os
import random
from typing import Dict, Iterator, List, Set, Tuple

import pytest

from nfa2dfa.nfa import NFA, Transition
from nfa2dfa.utils import Epsilon, State, Symbol

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


def words(alphabet, max_length: int) -> Iterator[Tuple[Symbol, ...]]:
    for n in range(max_length + 1):
        yield from itertools.product(list(alphabet), repeat=n)


def random_nfa(rng: random.Random, state_count: int,
               alphabet: List[Symbol]) -> NFA:
    table: Dict[Tuple[State, Symbol], Set[State]] = {}
    for s in range(state_count):
        for _input in [*alphabet, Epsilon]:
            p = 0.15 if _input == Epsilon else 0.3
            targets = set(t for t in range(state_count) if rng.random() < p)
            if targets:
                table[(s, _input)] = targets
    accept_states = [s for s in range(state_count) if rng.random() < 0.3]
    return NFA.from_table(state_count, alphabet, table, 0, accept_states)


@pytest.fixture
def abb_nfa() -> NFA:
    # (a|b)*abb
    def t(f: State, t: State, i: List[Symbol]) -> Transition:
        return Transition(f, t, i)

    return NFA(4, ['a', 'b'], [
        t(0, 0, ['a', 'b']),
        t(0, 1, ['a']),
        t(1, 2, ['b']),
        t(2, 3, ['b'])
    ], 0, [3])


@pytest.fixture
def epsilon_nfa() -> NFA:
    # a single epsilon move 0 -> 1, only the empty word is accepted
    return NFA(2, ['a'], [Transition(0, 1, [Epsilon])], 0, [1])


@pytest.fixture
def random_nfas() -> List[NFA]:
    rng = random.Random(20241019)
    return [
        random_nfa(rng, rng.randint(1, 6), ['a', 'b'])
        for _ in range(40)
    ]
