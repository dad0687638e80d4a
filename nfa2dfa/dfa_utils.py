import logging
from collections import deque
from typing import Deque, Dict, List, Optional
from prettytable import PrettyTable

from nfa2dfa.utils import State, Symbol, TransPair, StateLimitExceeded, Oslash, state_name, state_set_name
from nfa2dfa.closure import epsilon_closure, move
from nfa2dfa.identity import StateIdentityTable
from nfa2dfa.dfa import DFA, DFAState, MinimizedDFA
from nfa2dfa.nfa import NFA

logger = logging.getLogger(__name__)


def nfa_to_dfa(nfa: NFA, max_states: Optional[int] = None) -> DFA:
    """
    convert nfa to dfa using subset construction algorithm

    an empty successor set is recorded as None (no transition) instead of
    a dead state, so every dfa state has a non empty identity
    """
    table = StateIdentityTable()
    rows: Dict[State, Dict[Symbol, Optional[State]]] = {}

    initial_closure = epsilon_closure([nfa.start_state], nfa)
    start_state, _ = table.lookup_or_insert(initial_closure)
    if max_states is not None and max_states < 1:
        raise StateLimitExceeded(max_states)

    # breadth first, so indices follow discovery order
    queue: Deque[State] = deque([start_state])

    while len(queue) != 0:
        curr = queue.popleft()
        identity = table.identity(curr)
        rows[curr] = {}
        for _input in nfa.alphabet:
            target = epsilon_closure(move(identity, _input, nfa), nfa)
            if len(target) == 0:
                rows[curr][_input] = None
                continue
            index, is_new = table.lookup_or_insert(target)
            if is_new:
                if max_states is not None and len(table) > max_states:
                    raise StateLimitExceeded(max_states)
                queue.append(index)
            rows[curr][_input] = index

    states = [
        DFAState(identity, rows[i])
        for i, identity in enumerate(table.identities)
    ]
    dfa = DFA(states, nfa.alphabet, nfa.accept_states)

    if logger.isEnabledFor(logging.DEBUG):
        subset_table = PrettyTable(['NFA STATE', 'DFA STATE', *nfa.alphabet])
        for i, state in enumerate(dfa.states):
            row = [state_set_name(state.identity), state_name(i)]
            for target in dfa.row(i):
                row.append(Oslash if target is None else state_name(target))
            subset_table.add_row(row)
        logger.debug('subset construction:\n%s', subset_table)
    logger.info('built a DFA with %d states from an NFA with %d states',
                dfa.state_count, nfa.state_count)
    return dfa


def simplify_dfa(dfa: DFA) -> MinimizedDFA:
    """
    minimize dfa with the table filling algorithm

    a missing transition behaves like a virtual non accepting state which
    loops on every input. it takes the last index so it never shifts the
    class ids of real states
    """
    n = dfa.state_count
    inputs = list(dfa.alphabet)
    FALLBACK_STATE: State = n
    size = n + 1

    accepting: List[bool] = [dfa.is_accepting(s) for s in range(n)]
    accepting.append(False)

    targets: List[List[State]] = []
    for s in range(n):
        targets.append([
            FALLBACK_STATE if t is None else t for t in dfa.row(s)
        ])
    targets.append([FALLBACK_STATE] * len(inputs))

    # distinguished[i][j] is kept symmetric
    distinguished: List[List[bool]] = [[False] * size for _ in range(size)]
    for i in range(size):
        for j in range(i + 1, size):
            if accepting[i] != accepting[j]:
                distinguished[i][j] = distinguished[j][i] = True

    n_iter = 0
    changed = True
    while changed:
        changed = False
        n_iter += 1
        for i in range(size):
            for j in range(i + 1, size):
                if distinguished[i][j]:
                    continue
                for k in range(len(inputs)):
                    t1 = targets[i][k]
                    t2 = targets[j][k]
                    if t1 != t2 and distinguished[t1][t2]:
                        logger.debug('pass %d: %s,%s split on input %s',
                                     n_iter, state_name(i), state_name(j),
                                     inputs[k])
                        distinguished[i][j] = distinguished[j][i] = True
                        changed = True
                        break
    logger.debug('table filling reached a fixpoint after %d passes', n_iter)

    # first occurrence order, so the start state always lands in class 0
    state_class_map: Dict[State, int] = {}
    class_count = 0
    for i in range(size):
        if i in state_class_map:
            continue
        state_class_map[i] = class_count
        for j in range(i + 1, size):
            if j not in state_class_map and not distinguished[i][j]:
                state_class_map[j] = class_count
        class_count += 1

    # the virtual state only survives when a real state is equivalent to it
    fallback_class: Optional[int] = state_class_map[FALLBACK_STATE]
    if not any(state_class_map[s] == fallback_class for s in range(n)):
        class_count -= 1
        fallback_class = None

    representatives: Dict[int, State] = {}
    for s in range(n):
        representatives.setdefault(state_class_map[s], s)

    def project(target: Optional[State]) -> Optional[int]:
        if target is None:
            return fallback_class
        return state_class_map[target]

    transitions: List[Dict[Symbol, Optional[int]]] = []
    accept_states: List[int] = []
    for c in range(class_count):
        rep = representatives[c]
        transitions.append({
            _input: project(dfa.query(TransPair(rep, _input)))
            for _input in inputs
        })
        if accepting[rep]:
            accept_states.append(c)

    minimized = MinimizedDFA(dfa.alphabet,
                             [state_class_map[s] for s in range(n)],
                             transitions, accept_states)
    if class_count == n:
        logger.info('dfa is already minimal (%d states)', n)
    else:
        logger.info('minimized a DFA with %d states to %d states', n,
                    class_count)
    return minimized
