from os import path

ROOT_DIR = path.dirname(path.dirname(__file__))

OUTPUT_DIR = path.join(ROOT_DIR, 'output')

Epsilon: str = 'ε'

# the epsilon column is spelled out in .nfa files
LAMBDA_KEYWORD: str = 'lambda'

# empty set
Oslash: str = 'Ø'

from typing import Collection, FrozenSet, Iterable, Iterator, NamedTuple, Tuple
from typing_extensions import TypeAlias

State: TypeAlias = int

Symbol: TypeAlias = str

StateSet: TypeAlias = FrozenSet[State]


class ConfigurationError(ValueError):
    '''
    raised when an automaton value is malformed
    '''


class NFASyntaxError(ConfigurationError):

    def __init__(self, message: str, line: int = -1, column: int = -1) -> None:
        if line >= 0:
            message = f'line {line}, column {column}: {message}'
        super().__init__(message)
        self.line = line
        self.column = column


class StateLimitExceeded(RuntimeError):

    def __init__(self, limit: int) -> None:
        super().__init__(
            f'subset construction exceeded the limit of {limit} DFA states')
        self.limit = limit


def state_name(state: State) -> str:
    return f'{state}'


def state_set_name(states: Iterable[State]) -> str:
    return f'{{{",".join(map(state_name, sorted(states)))}}}'


class TransPair(NamedTuple):
    current: State
    input: Symbol


class Alphabet:
    '''
    ordered, duplicate free input symbols, never containing epsilon
    '''

    def __init__(self, symbols: Iterable[Symbol]) -> None:
        symbols = tuple(symbols)
        for s in symbols:
            check_type(s, str, 'Alphabet.symbol')
            if s == Epsilon or s == '':
                raise ConfigurationError(
                    f'alphabet must not contain {Epsilon}, requested: {list(symbols)}')
        if len(set(symbols)) != len(symbols):
            raise ConfigurationError(
                f'alphabet must not contain duplicates, requested: {list(symbols)}')
        self._symbols: Tuple[Symbol, ...] = symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._symbols

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, Alphabet):
            return False
        return self._symbols == __o._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f'Alphabet({",".join(self._symbols)})'


def check_type(_obj: object, _type, field_name: str):
    # bool is an int subclass, but never a valid state
    if isinstance(_obj, bool) or not isinstance(_obj, _type):
        raise ConfigurationError(
            f'Field {field_name} must be type {_type}, requested {type(_obj)}.')


def check_array_type(_list: Collection,
                     element_type,
                     list_type,
                     field_name: str,
                     allow_empty=False):
    check_type(_list, list_type, field_name)
    if not allow_empty and len(_list) == 0:
        raise ConfigurationError(f'Field {field_name} must not be empty.')
    for element in _list:
        check_type(element, element_type, f'{field_name}[]')


def check_state(state: State, state_count: int, field_name: str):
    check_type(state, int, field_name)
    if not 0 <= state < state_count:
        raise ConfigurationError(
            f'Field {field_name} references state {state}, outside [0, {state_count}).')
