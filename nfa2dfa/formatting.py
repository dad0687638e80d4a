from typing import Iterable, List, Optional
from prettytable import PrettyTable

from nfa2dfa.dfa import DFA, MinimizedDFA
from nfa2dfa.utils import Alphabet, Oslash, State, state_name, state_set_name


def _transition_table(alphabet: Alphabet,
                      rows: Iterable[List[Optional[State]]]) -> PrettyTable:
    table = PrettyTable(['Sigma', *alphabet])
    table.align['Sigma'] = 'r'
    for i, row in enumerate(rows):
        table.add_row([f'{i}:'] + [
            Oslash if target is None else state_name(target) for target in row
        ])
    return table


def _footer(start_state: State, accept_states: Iterable[State]) -> str:
    accepting = ','.join(map(state_name, accept_states))
    return f'{start_state}: Initial State\n{accepting or Oslash}: Accepting State(s)'


def format_dfa(dfa: DFA) -> str:
    table = _transition_table(dfa.alphabet,
                              (dfa.row(s) for s in range(dfa.state_count)))
    return f'{table.get_string()}\n{_footer(dfa.start_state, dfa.accept_states)}'


def format_subset_table(dfa: DFA) -> str:
    table = PrettyTable(['DFA STATE', 'NFA STATES'])
    for s, state in enumerate(dfa.states):
        table.add_row([state_name(s), state_set_name(state.identity)])
    return table.get_string()


def format_minimized(minimized: MinimizedDFA, mapping: bool = True) -> str:
    table = _transition_table(
        minimized.alphabet,
        (minimized.row(c) for c in range(minimized.class_count)))
    res = f'{table.get_string()}\n{_footer(minimized.start_state, minimized.accept_states)}'
    if mapping:
        mapping_table = PrettyTable(['DFA STATE', 'MINIMIZED STATE'])
        for s, c in enumerate(minimized.class_assignment):
            mapping_table.add_row([state_name(s), state_name(c)])
        res = f'{res}\n{mapping_table.get_string()}'
    return res
