from typing import Iterable, List, Any, Dict, Mapping, Set, Tuple, Union, cast
from graphviz import Digraph

from prettytable import PrettyTable

from nfa2dfa.utils import Alphabet, ConfigurationError, Oslash, check_state, check_type, check_array_type, State, Symbol, StateSet, TransPair, Epsilon, state_name


class Transition:
    # epsilon is stored as an empty input list
    def __init__(self, current: State, target: State,
                 inputs: List[Symbol]) -> None:
        check_type(current, int, 'Transition.current')
        check_type(target, int, 'Transition.target')
        check_array_type(inputs, str, list, 'Transition.inputs', True)
        if len(inputs) == 1 and inputs[0] == Epsilon:
            inputs = []
        if Epsilon in inputs:
            raise ConfigurationError(
                f'{Epsilon} must be the only input of a transition, requested: {inputs}')
        self._current = current
        self._target = target
        self._inputs = list(inputs)

    @property
    def current(self) -> State:
        return self._current

    @property
    def target(self) -> State:
        return self._target

    @property
    def inputs(self) -> List[Symbol]:
        return self._inputs

    @property
    def is_epsilon(self) -> bool:
        return len(self.inputs) == 0

    @property
    def label(self) -> str:
        return Epsilon if self.is_epsilon else ','.join(self.inputs)

    def __repr__(self) -> str:
        return f'{self.current}->{self.target} on {{{self.label}}}'

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, Transition):
            return False
        return self.target == __o.target and self.current == __o.current and self.inputs == __o.inputs

    def __hash__(self) -> int:
        return hash((self.target, *self.inputs, self.current))

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Transition':
        current = cast(State, data.get('current'))
        target = cast(State, data.get('target'))
        inputs = cast(List[Symbol], data.get('inputs', []))
        return Transition(current, target, inputs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'Transition',
            'current': self.current,
            'target': self.target,
            'inputs': self.inputs
        }


class NFA:
    '''
    an nfa over the states 0 .. state_count - 1

    the value is immutable once built and always validated
    '''

    def __init__(self, state_count: int, alphabet: Union[Alphabet, Iterable[Symbol]],
                 transitions: Iterable[Transition], start_state: State,
                 accept_states: Iterable[State]) -> None:

        self._state_count = state_count
        self._alphabet = alphabet if isinstance(
            alphabet, Alphabet) else Alphabet(alphabet)
        self._transitions: List[Transition] = list(transitions)
        self._start_state: State = start_state
        self._accept_states: StateSet = frozenset(accept_states)

        self.validate()

        self._trans_table = NFA.trans_list_to_trans_table(self._transitions)

    def validate(self) -> None:
        check_type(self._state_count, int, 'state_count')
        if self._state_count <= 0:
            raise ConfigurationError(
                f'Field state_count must be positive, requested {self._state_count}.')
        check_state(self._start_state, self._state_count, 'start_state')
        for s in self._accept_states:
            check_state(s, self._state_count, 'accept_states')
        for trans in self._transitions:
            check_type(trans, Transition, 'transitions[]')
            check_state(trans.current, self._state_count, 'Transition.current')
            check_state(trans.target, self._state_count, 'Transition.target')
            for _input in trans.inputs:
                if _input not in self._alphabet:
                    raise ConfigurationError(
                        f'{trans} uses input {_input!r} outside the alphabet {list(self._alphabet)}.')

    @staticmethod
    def trans_list_to_trans_table(
            trans_list: Iterable[Transition]) -> Dict[TransPair, Set[State]]:
        trans_table: Dict[TransPair, Set[State]] = {}

        for _tran in trans_list:
            if _tran.is_epsilon:
                trans_table.setdefault(TransPair(_tran.current, Epsilon),
                                       set()).add(_tran.target)
            for _input in _tran.inputs:
                trans_table.setdefault(TransPair(_tran.current, _input),
                                       set()).add(_tran.target)
        return trans_table

    @staticmethod
    def trans_table_to_trans_list(
            trans_table: Mapping[Tuple[State, Symbol], Iterable[State]]) -> List[Transition]:
        # group the inputs sharing the same (current, target) edge
        edges: Dict[Tuple[State, State], List[Symbol]] = {}
        epsilon_edges: List[Tuple[State, State]] = []
        for (current, _input), targets in trans_table.items():
            targets = set(targets)
            for target in targets:
                check_type(target, int, 'trans_table[]')
            for target in sorted(targets):
                if _input == Epsilon:
                    epsilon_edges.append((current, target))
                else:
                    edges.setdefault((current, target), []).append(_input)
        trans_list = [
            Transition(current, target, inputs)
            for (current, target), inputs in edges.items()
        ]
        trans_list.extend(
            Transition(current, target, []) for current, target in epsilon_edges)
        return trans_list

    @staticmethod
    def from_table(state_count: int, alphabet: Iterable[Symbol],
                   trans_table: Mapping[Tuple[State, Symbol], Iterable[State]],
                   start_state: State, accept_states: Iterable[State]) -> 'NFA':
        '''
        build an nfa from a (state, symbol) -> states mapping, epsilon keyed by `Epsilon`
        '''
        for key in trans_table.keys():
            if not isinstance(key, tuple) or len(key) != 2:
                raise ConfigurationError(
                    f'transition table keys must be (state, symbol) pairs, requested: {key!r}')
        return NFA(state_count, alphabet,
                   NFA.trans_table_to_trans_list(trans_table), start_state,
                   accept_states)

    @property
    def transitions(self) -> List[Transition]:
        return self._transitions

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def inputs(self) -> List[Symbol]:
        # the table columns, epsilon last when used
        res = list(self._alphabet)
        if any(trans.is_epsilon for trans in self._transitions):
            res.append(Epsilon)
        return res

    @property
    def state_count(self) -> int:
        return self._state_count

    @property
    def states(self) -> List[State]:
        return list(range(self._state_count))

    @property
    def accept_states(self) -> StateSet:
        return self._accept_states

    @property
    def start_state(self) -> State:
        return self._start_state

    def query(self, key: TransPair) -> Set[State]:
        return self._trans_table.get(key, set())

    def accepts(self, word: Iterable[Symbol]) -> bool:
        from nfa2dfa.closure import epsilon_closure, move

        current = epsilon_closure([self.start_state], self)
        for _input in word:
            if _input not in self._alphabet:
                return False
            current = epsilon_closure(move(current, _input, self), self)
            if len(current) == 0:
                return False
        return not current.isdisjoint(self.accept_states)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Union['NFA', Transition]:
        # using data['type'] to distinguish transition object or nfa object
        type_name = cast(str, data.get('type'))
        if type_name == 'Transition':
            return Transition.from_dict(data)
        elif type_name != 'NFA':
            raise ConfigurationError(
                f'type field of json object must be `Transition` or `NFA`, requested: {type_name}'
            )
        state_count = cast(int, data.get('state_count'))
        start_state = cast(State, data.get('start_state'))
        accept_states = cast(List[State], data.get('accept_states', []))
        inputs = cast(List[Symbol], data.get('inputs'))
        transitions = cast(List[Transition], data.get('transitions', []))
        check_type(state_count, int, 'state_count')
        check_type(start_state, int, 'start_state')
        check_array_type(accept_states, int, list, 'accept_states', True)
        check_array_type(inputs, str, list, 'inputs')
        check_array_type(transitions, Transition, list, 'transitions', True)
        return NFA(state_count, inputs, transitions, start_state,
                   accept_states)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'NFA',
            'state_count': self.state_count,
            'start_state': self.start_state,
            'accept_states': sorted(self.accept_states),
            'inputs': list(self.alphabet),
            'transitions': [trans.to_dict() for trans in self.transitions]
        }

    def __repr__(self) -> str:
        table = PrettyTable(['STATE', *self.inputs])
        # right alignment
        table.align['STATE'] = 'r'

        def format_state(s: State) -> str:
            res = f'{s}'
            if s == self.start_state:
                res = f'-> {res}'
            if s in self.accept_states:
                res = f'* {res}'
            return res

        for s in self.states:
            row: List[str] = [format_state(s)]
            for i in self.inputs:
                states = self.query(TransPair(s, i))
                row.append(Oslash if len(states) ==
                           0 else ','.join(map(state_name, sorted(states))))
            table.add_row(row)
        return table.get_string()

    def visualize(self) -> Digraph:
        '''
        visualize transition graph
        '''
        g = Digraph(name='nfa', graph_attr={'rankdir': 'LR'})

        g.node(name='vnode', label='', shape='none')

        for state in self.states:
            name = state_name(state)
            if state in self.accept_states:
                g.node(name=name, label=name, shape='doublecircle')
            else:
                g.node(name=name, label=name, shape='circle')

        g.edge('vnode',
               state_name(self.start_state),
               label='start',
               arrowsize='0.5')

        for trans in self.transitions:
            g.edge(state_name(trans.current),
                   state_name(trans.target),
                   trans.label,
                   arrowsize='0.5')
        return g
