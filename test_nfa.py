import json
import os

import json5
import pytest

from conftest import DATA_DIR
from nfa2dfa.nfa import NFA, Transition
from nfa2dfa.utils import Alphabet, ConfigurationError, Epsilon, TransPair


def test_transition_epsilon():
    trans = Transition(0, 1, [Epsilon])
    assert trans.is_epsilon
    assert trans.inputs == []
    assert trans.label == Epsilon
    assert Transition(0, 1, []) == trans


def test_transition_rejects_mixed_epsilon():
    with pytest.raises(ConfigurationError):
        Transition(0, 1, ['a', Epsilon])


def test_query(abb_nfa: NFA):
    assert abb_nfa.query(TransPair(0, 'a')) == {0, 1}
    assert abb_nfa.query(TransPair(0, 'b')) == {0}
    assert abb_nfa.query(TransPair(3, 'a')) == set()
    assert abb_nfa.query(TransPair(0, Epsilon)) == set()


def test_inputs_lists_epsilon_only_when_used(abb_nfa: NFA, epsilon_nfa: NFA):
    assert abb_nfa.inputs == ['a', 'b']
    assert epsilon_nfa.inputs == ['a', Epsilon]
    assert Epsilon not in epsilon_nfa.alphabet


def test_accepts(abb_nfa: NFA):
    assert abb_nfa.accepts('abb')
    assert abb_nfa.accepts('babaabb')
    assert not abb_nfa.accepts('')
    assert not abb_nfa.accepts('abba')
    assert not abb_nfa.accepts('abc')


@pytest.mark.parametrize('kwargs', [
    dict(state_count=0, start_state=0, accept_states=[]),
    dict(state_count=2, start_state=2, accept_states=[]),
    dict(state_count=2, start_state=0, accept_states=[5]),
    dict(state_count=2, start_state=-1, accept_states=[1]),
])
def test_out_of_range_states(kwargs):
    with pytest.raises(ConfigurationError):
        NFA(kwargs['state_count'], ['a'], [], kwargs['start_state'],
            kwargs['accept_states'])


def test_out_of_range_transition():
    with pytest.raises(ConfigurationError):
        NFA(2, ['a'], [Transition(0, 2, ['a'])], 0, [1])


def test_unknown_input():
    with pytest.raises(ConfigurationError):
        NFA(2, ['a'], [Transition(0, 1, ['b'])], 0, [1])


@pytest.mark.parametrize('symbols', [['a', Epsilon], ['a', 'a'], ['a', '']])
def test_bad_alphabet(symbols):
    with pytest.raises(ConfigurationError):
        Alphabet(symbols)


def test_from_table_matches_transition_list(abb_nfa: NFA):
    nfa = NFA.from_table(4, ['a', 'b'], {
        (0, 'a'): {0, 1},
        (0, 'b'): [0],
        (1, 'b'): [2],
        (2, 'b'): [3],
    }, 0, [3])
    for s in range(4):
        for i in ['a', 'b', Epsilon]:
            assert nfa.query(TransPair(s, i)) == abb_nfa.query(TransPair(s, i))


def test_dict_round_trip(epsilon_nfa: NFA):
    text = json.dumps(epsilon_nfa.to_dict())
    nfa = json.loads(text, object_hook=NFA.from_dict)
    assert isinstance(nfa, NFA)
    assert nfa.to_dict() == epsilon_nfa.to_dict()
    assert nfa.query(TransPair(0, Epsilon)) == {1}


def test_load_json5_file():
    with open(os.path.join(DATA_DIR, 'abb.json5'), 'r', encoding='utf-8') as f:
        nfa = json5.load(f, object_hook=NFA.from_dict)
    assert isinstance(nfa, NFA)
    assert nfa.state_count == 4
    assert nfa.accepts('aabb')


def test_from_dict_rejects_unknown_type():
    with pytest.raises(ConfigurationError):
        NFA.from_dict({'type': 'DFA'})


def test_repr_and_visualize(epsilon_nfa: NFA):
    text = repr(epsilon_nfa)
    assert '-> 0' in text
    assert '* 1' in text
    g = epsilon_nfa.visualize()
    assert 'doublecircle' in g.source
    assert Epsilon in g.source


@pytest.mark.parametrize('targets', [[0, 'x'], ['1'], [True]])
def test_from_table_rejects_non_state_targets(targets):
    with pytest.raises(ConfigurationError):
        NFA.from_table(2, ['a'], {(0, 'a'): targets}, 0, [1])


@pytest.mark.parametrize('key', [0, (0, 'a', 1), 'a'])
def test_from_table_rejects_bad_keys(key):
    with pytest.raises(ConfigurationError):
        NFA.from_table(2, ['a'], {key: [1]}, 0, [1])
