from typing import TYPE_CHECKING, Iterable, List, Set

from nfa2dfa.utils import State, StateSet, Symbol, TransPair, Epsilon, check_state

if TYPE_CHECKING:
    from nfa2dfa.nfa import NFA


def epsilon_closure(seed: Iterable[State], nfa: 'NFA') -> StateSet:
    """
    smallest superset of `seed` closed under epsilon transitions
    """
    queue: List[State] = list(seed)
    # every seed is checked before the traversal starts
    for state in queue:
        check_state(state, nfa.state_count, 'epsilon_closure.seed')
    closure: Set[State] = set(queue)
    # actually this is a simple graph traversal algorithm, the visited set
    # keeps it finite on epsilon cycles
    while len(queue) != 0:
        curr_state = queue.pop()
        for next_state in nfa.query(TransPair(curr_state, Epsilon)):
            if next_state not in closure:
                closure.add(next_state)
                queue.append(next_state)
    return frozenset(closure)


def move(states: Iterable[State], _input: Symbol, nfa: 'NFA') -> StateSet:
    '''
    states directly reachable from `states` on `_input`
    '''
    res: Set[State] = set()
    for state in states:
        res.update(nfa.query(TransPair(state, _input)))
    return frozenset(res)
