# read nfa descriptions, either the .nfa text layout or json
from typing import Any, Dict, List, Optional, Set, Tuple
import lark
import json5

from nfa2dfa.nfa import NFA
from nfa2dfa.utils import ConfigurationError, NFASyntaxError, Epsilon, State, Symbol, LAMBDA_KEYWORD

NFA_GRAMMAR = r'''
start : _NL? header _NL sigma _NL _RULE _NL rows _RULE _NL initial _NL accepting _NL?
header : "|Q|" ":" INT
sigma : "Sigma" ":" SYMBOL*
rows : row+
row : INT ":" state_set+ _NL
state_set : "{" (INT ("," INT)*)? "}"
initial : "Initial" "State" ":" INT
accepting : "Accepting" "State(s)" ":" (INT ("," INT)*)?

_RULE : /-+/
SYMBOL : /[^\s{},:]+/

%import common.INT
%import common.WS_INLINE
%import common.NEWLINE -> _NL
%ignore WS_INLINE
'''

parser = lark.Lark(grammar=NFA_GRAMMAR, start='start', propagate_positions=True)


class NFATransformer(lark.Transformer):
    """
    turns the parse tree of a .nfa file into an NFA

    every row holds one state set per symbol of sigma, followed by the
    set for the lambda (epsilon) column
    """

    def header(self, children: List[lark.Token]) -> int:
        return int(children[0])

    def sigma(self, children: List[lark.Token]) -> List[Symbol]:
        symbols = [str(tok) for tok in children]
        for tok in children:
            if str(tok) in (LAMBDA_KEYWORD, Epsilon):
                raise NFASyntaxError(
                    f'Sigma must not list {tok}, the lambda column is implicit',
                    tok.line, tok.column)
        return symbols

    def state_set(self, children: List[lark.Token]) -> Set[State]:
        return set(int(tok) for tok in children)

    def row(self, children: List[Any]) -> Tuple[lark.Token, List[Set[State]]]:
        return children[0], children[1:]

    def rows(self, children: List[Tuple[lark.Token, List[Set[State]]]]):
        return children

    def initial(self, children: List[lark.Token]) -> State:
        return int(children[0])

    def accepting(self, children: List[lark.Token]) -> List[State]:
        return [int(tok) for tok in children]

    def start(self, children: List[Any]) -> NFA:
        state_count, sigma, rows, initial, accepting = children
        if len(rows) != state_count:
            raise NFASyntaxError(
                f'|Q| is {state_count} but {len(rows)} state rows were given')
        columns = [*sigma, Epsilon]
        trans_table: Dict[Tuple[State, Symbol], Set[State]] = {}
        for i, (label, state_sets) in enumerate(rows):
            if int(label) != i:
                raise NFASyntaxError(f'expected state row {i}, found {label}',
                                     label.line, label.column)
            if len(state_sets) != len(columns):
                raise NFASyntaxError(
                    f'state {i} has {len(state_sets)} transition sets, expected {len(columns)}',
                    label.line, label.column)
            for _input, targets in zip(columns, state_sets):
                if len(targets) != 0:
                    trans_table[(i, _input)] = targets
        return NFA.from_table(state_count, sigma, trans_table, initial,
                              accepting)


def parse_nfa(text: str) -> NFA:
    try:
        tree = parser.parse(text)
    except lark.exceptions.UnexpectedInput as e:
        raise NFASyntaxError(f'malformed nfa description: {e.__class__.__name__}',
                             getattr(e, 'line', -1), getattr(e, 'column', -1)) from e
    try:
        return NFATransformer().transform(tree)
    except lark.exceptions.VisitError as e:
        if isinstance(e.orig_exc, ConfigurationError):
            raise e.orig_exc from None
        raise


def load_json_nfa(text: str) -> NFA:
    try:
        nfa: Optional[Any] = json5.loads(text, object_hook=NFA.from_dict)
    except ConfigurationError:
        raise
    except ValueError as e:
        raise NFASyntaxError(f'malformed json: {e}') from e
    if not isinstance(nfa, NFA):
        raise NFASyntaxError(f'json root must be an NFA object, requested: {type(nfa)}')
    return nfa


def load_nfa(filename: str) -> NFA:
    '''
    load an nfa from a .json/.json5 file or from a .nfa description
    '''
    with open(filename, 'r', encoding='utf-8') as f:
        text = f.read()
    if filename.endswith(('.json', '.json5')):
        return load_json_nfa(text)
    return parse_nfa(text)
