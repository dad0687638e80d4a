from typing import List

import pytest

from nfa2dfa.closure import epsilon_closure, move
from nfa2dfa.nfa import NFA, Transition
from nfa2dfa.utils import ConfigurationError, Epsilon


@pytest.fixture
def cyclic_nfa() -> NFA:
    # 0 -> 1 -> 2 -> 0 on epsilon, 3 only reachable on 'a'
    return NFA.from_table(4, ['a'], {
        (0, Epsilon): [1],
        (1, Epsilon): [2],
        (2, Epsilon): [0],
        (2, 'a'): [3],
    }, 0, [3])


def test_state_without_epsilon_moves(abb_nfa: NFA):
    assert epsilon_closure([2], abb_nfa) == frozenset({2})


def test_empty_seed(abb_nfa: NFA):
    assert epsilon_closure([], abb_nfa) == frozenset()


def test_epsilon_chain(epsilon_nfa: NFA):
    assert epsilon_closure([0], epsilon_nfa) == frozenset({0, 1})
    assert epsilon_closure([1], epsilon_nfa) == frozenset({1})


def test_cycle_terminates(cyclic_nfa: NFA):
    assert epsilon_closure([1], cyclic_nfa) == frozenset({0, 1, 2})
    assert epsilon_closure([3], cyclic_nfa) == frozenset({3})


def test_order_independent(cyclic_nfa: NFA):
    assert epsilon_closure([3, 1], cyclic_nfa) == epsilon_closure([1, 3, 3], cyclic_nfa)


def test_idempotent_and_monotone(random_nfas: List[NFA]):
    for nfa in random_nfas:
        for s in range(nfa.state_count):
            seeds = {s, (s * 7 + 1) % nfa.state_count}
            closure = epsilon_closure(seeds, nfa)
            assert seeds <= closure
            assert epsilon_closure(closure, nfa) == closure


def test_closed_under_epsilon(random_nfas: List[NFA]):
    for nfa in random_nfas:
        closure = epsilon_closure([0], nfa)
        for trans in nfa.transitions:
            if trans.is_epsilon and trans.current in closure:
                assert trans.target in closure


@pytest.mark.parametrize('seed', [[4], [-1], [0, 9]])
def test_out_of_range_seed(cyclic_nfa: NFA, seed):
    with pytest.raises(ConfigurationError):
        epsilon_closure(seed, cyclic_nfa)


def test_move(abb_nfa: NFA):
    assert move([0, 1], 'b', abb_nfa) == frozenset({0, 2})
    assert move([3], 'a', abb_nfa) == frozenset()
    nfa = NFA(2, ['a'], [Transition(0, 1, [])], 0, [1])
    # move never follows epsilon
    assert move([0], 'a', nfa) == frozenset()
