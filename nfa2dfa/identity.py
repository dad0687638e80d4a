from typing import Dict, Iterable, List, Optional, Tuple

from nfa2dfa.utils import State, StateSet


class StateIdentityTable:
    '''
    maps each distinct set of nfa states to the index of its dfa state

    sets are keyed as frozensets, so equality is set equality and does
    not depend on how the set was built
    '''

    def __init__(self) -> None:
        self._index: Dict[StateSet, int] = {}
        self._identities: List[StateSet] = []

    def lookup_or_insert(self, identity: Iterable[State]) -> Tuple[int, bool]:
        key = frozenset(identity)
        index = self._index.get(key)
        if index is not None:
            return index, False
        index = len(self._identities)
        self._index[key] = index
        self._identities.append(key)
        return index, True

    def index_of(self, identity: Iterable[State]) -> Optional[int]:
        return self._index.get(frozenset(identity))

    def identity(self, index: int) -> StateSet:
        return self._identities[index]

    @property
    def identities(self) -> List[StateSet]:
        return list(self._identities)

    def __len__(self) -> int:
        return len(self._identities)

    def __contains__(self, identity: object) -> bool:
        if not isinstance(identity, (set, frozenset)):
            return False
        return frozenset(identity) in self._index
