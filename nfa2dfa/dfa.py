from typing import Iterable, List, Any, Dict, Mapping, Optional, Sequence, Union
from graphviz import Digraph
from functools import cached_property
from prettytable import PrettyTable

from nfa2dfa.utils import Alphabet, ConfigurationError, Oslash, State, StateSet, Symbol, TransPair, check_state, check_type, state_name, state_set_name


class DFAState:
    '''
    a dfa state, defined by the set of nfa states it stands for
    '''

    def __init__(self, identity: Iterable[State],
                 transitions: Optional[Mapping[Symbol, Optional[State]]] = None) -> None:
        self._identity: StateSet = frozenset(identity)
        # None means there is no transition on that input
        self._transitions: Dict[Symbol, Optional[State]] = dict(
            transitions or {})

    @property
    def identity(self) -> StateSet:
        return self._identity

    @property
    def transitions(self) -> Dict[Symbol, Optional[State]]:
        return self._transitions

    def __repr__(self) -> str:
        return f'DFAState({state_set_name(self.identity)})'


class DFA:
    '''
    states[0] is always the start state; a state accepts iff its identity
    meets the accepting states of the nfa it was built from
    '''

    def __init__(self, states: Sequence[DFAState],
                 alphabet: Union[Alphabet, Iterable[Symbol]],
                 nfa_accept_states: Iterable[State]) -> None:
        self._states: List[DFAState] = list(states)
        self._alphabet = alphabet if isinstance(
            alphabet, Alphabet) else Alphabet(alphabet)
        self._nfa_accept_states: StateSet = frozenset(nfa_accept_states)

        if len(self._states) == 0:
            raise ConfigurationError('a DFA needs at least its start state')
        seen: Dict[StateSet, State] = {}
        for i, state in enumerate(self._states):
            check_type(state, DFAState, 'DFA.states[]')
            if state.identity in seen:
                raise ConfigurationError(
                    f'DFA states {seen[state.identity]} and {i} share the identity {state_set_name(state.identity)}')
            seen[state.identity] = i
            if set(state.transitions.keys()) != set(self._alphabet):
                raise ConfigurationError(
                    f'DFA state {i} must have one transition per input, requested: {sorted(state.transitions)}')
            for target in state.transitions.values():
                if target is not None:
                    check_state(target, len(self._states), f'DFA.states[{i}].transitions')

    @staticmethod
    def from_table(rows: Sequence[Sequence[Optional[State]]],
                   accept_states: Iterable[State],
                   alphabet: Iterable[Symbol]) -> 'DFA':
        '''
        build a dfa by hand, rows[i][k] being the target of state i on the k-th input
        '''
        alphabet = Alphabet(alphabet)
        states: List[DFAState] = []
        for i, row in enumerate(rows):
            if len(row) != len(alphabet):
                raise ConfigurationError(
                    f'row {i} has {len(row)} targets, expected {len(alphabet)}')
            states.append(DFAState([i], dict(zip(alphabet, row))))
        accept_states = list(accept_states)
        for s in accept_states:
            check_state(s, len(states), 'accept_states')
        return DFA(states, alphabet, accept_states)

    @property
    def states(self) -> List[DFAState]:
        return self._states

    @property
    def state_count(self) -> int:
        return len(self._states)

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def start_state(self) -> State:
        return 0

    @cached_property
    def accept_states(self) -> List[State]:
        return [
            i for i, state in enumerate(self._states)
            if not state.identity.isdisjoint(self._nfa_accept_states)
        ]

    @cached_property
    def non_accept_states(self) -> List[State]:
        return [s for s in range(self.state_count) if s not in self.accept_states]

    def is_accepting(self, state: State) -> bool:
        return not self._states[state].identity.isdisjoint(
            self._nfa_accept_states)

    def identity(self, state: State) -> StateSet:
        return self._states[state].identity

    def query(self, key: TransPair) -> Optional[State]:
        return self._states[key.current].transitions[key.input]

    def row(self, state: State) -> List[Optional[State]]:
        return [self._states[state].transitions[i] for i in self._alphabet]

    def accepts(self, word: Iterable[Symbol]) -> bool:
        current: Optional[State] = self.start_state
        for _input in word:
            if _input not in self._alphabet:
                return False
            current = self.query(TransPair(current, _input))
            if current is None:
                return False
        return self.is_accepting(current)

    def identity_table(self) -> Dict[StateSet, Dict[Symbol, Optional[StateSet]]]:
        # independent of the order states were discovered in
        return {
            state.identity: {
                _input: None if target is None else self.identity(target)
                for _input, target in state.transitions.items()
            }
            for state in self._states
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'DFA',
            'inputs': list(self.alphabet),
            'start_state': self.start_state,
            'accept_states': self.accept_states,
            'states': [{
                'identity': sorted(state.identity),
                'transitions': dict(state.transitions)
            } for state in self._states]
        }

    def __repr__(self) -> str:
        table = PrettyTable(['STATE', *self.alphabet])
        # right alignment
        table.align['STATE'] = 'r'

        def format_state(s: State) -> str:
            res = f'{s}'
            if s == self.start_state:
                res = f'-> {res}'
            if self.is_accepting(s):
                res = f'* {res}'
            return res

        for s in range(self.state_count):
            row: List[str] = [format_state(s)]
            for t in self.row(s):
                row.append(Oslash if t is None else state_name(t))
            table.add_row(row)
        return table.get_string()

    def visualize(self) -> Digraph:
        '''
        visualize transition graph
        '''
        g = Digraph(name='dfa', graph_attr={'rankdir': 'LR'})

        g.node(name='vnode', label='', shape='none')

        for state in range(self.state_count):
            name = state_name(state)
            if self.is_accepting(state):
                g.node(name=name, label=name, shape='doublecircle')
            else:
                g.node(name=name, label=name, shape='circle')

        g.edge('vnode',
               state_name(self.start_state),
               label='start',
               arrowsize='0.5')

        for state in range(self.state_count):
            for _input, target in self._states[state].transitions.items():
                if target is None:
                    continue
                g.edge(state_name(state),
                       state_name(target),
                       _input,
                       arrowsize='0.5')
        return g


class MinimizedDFA:
    '''
    the quotient of a dfa by its equivalence classes

    class 0 always holds the start state of the original dfa
    '''

    def __init__(self, alphabet: Alphabet, class_assignment: Sequence[int],
                 transitions: Sequence[Mapping[Symbol, Optional[int]]],
                 accept_states: Iterable[int]) -> None:
        self._alphabet = alphabet
        self._class_assignment: List[int] = list(class_assignment)
        self._transitions: List[Dict[Symbol, Optional[int]]] = [
            dict(t) for t in transitions
        ]
        self._accept_states = frozenset(accept_states)

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def class_count(self) -> int:
        return len(self._transitions)

    @property
    def class_assignment(self) -> List[int]:
        '''
        class_assignment[i] is the class of the original state i
        '''
        return self._class_assignment

    @property
    def transitions(self) -> List[Dict[Symbol, Optional[int]]]:
        return self._transitions

    @property
    def accept_states(self) -> List[int]:
        return sorted(self._accept_states)

    @property
    def start_state(self) -> int:
        return 0

    def is_accepting(self, c: int) -> bool:
        return c in self._accept_states

    def class_members(self, c: int) -> List[State]:
        return [s for s, _c in enumerate(self._class_assignment) if _c == c]

    def query(self, key: TransPair) -> Optional[int]:
        return self._transitions[key.current][key.input]

    def row(self, c: int) -> List[Optional[int]]:
        return [self._transitions[c][i] for i in self._alphabet]

    def accepts(self, word: Iterable[Symbol]) -> bool:
        current: Optional[int] = self.start_state
        for _input in word:
            if _input not in self._alphabet:
                return False
            current = self.query(TransPair(current, _input))
            if current is None:
                return False
        return self.is_accepting(current)

    def to_dfa(self) -> DFA:
        return DFA.from_table([self.row(c) for c in range(self.class_count)],
                              self.accept_states, self.alphabet)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'MinimizedDFA',
            'inputs': list(self.alphabet),
            'class_count': self.class_count,
            'class_assignment': list(self.class_assignment),
            'transitions': [dict(t) for t in self.transitions],
            'accept_states': self.accept_states
        }

    def __repr__(self) -> str:
        table = PrettyTable(['CLASS', 'DFA STATES', *self.alphabet])
        table.align['CLASS'] = 'r'
        for c in range(self.class_count):
            name = f'{c}'
            if c == self.start_state:
                name = f'-> {name}'
            if self.is_accepting(c):
                name = f'* {name}'
            row: List[str] = [name, state_set_name(self.class_members(c))]
            for t in self.row(c):
                row.append(Oslash if t is None else state_name(t))
            table.add_row(row)
        return table.get_string()

    def visualize(self) -> Digraph:
        '''
        visualize transition graph
        '''
        g = Digraph(name='min_dfa', graph_attr={'rankdir': 'LR'})

        g.node(name='vnode', label='', shape='none')

        for c in range(self.class_count):
            name = state_name(c)
            shape = 'doublecircle' if self.is_accepting(c) else 'circle'
            g.node(name=name, label=name, shape=shape)

        g.edge('vnode', state_name(self.start_state), label='start',
               arrowsize='0.5')

        for c, transitions in enumerate(self._transitions):
            for _input, target in transitions.items():
                if target is not None:
                    g.edge(state_name(c), state_name(target), _input,
                           arrowsize='0.5')
        return g
