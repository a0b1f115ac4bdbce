from enum import Enum
from types import MappingProxyType

from ops.utils.errors import UnknownChainError


class Category(str, Enum):
    CANONICAL = "canonical"
    PERIPHERAL = "peripheral"
    SVM = "svm"

    @property
    def is_evm(self):
        return self is not Category.SVM


class ChainClassifier:
    """
    Maps chain names to their `Category`. The registry is copied on
    construction and never changes afterwards.
    """

    def __init__(self, registry):
        self._registry = MappingProxyType(
            {name: Category(category) for name, category in registry.items()}
        )

    @classmethod
    def from_chains(cls, chains):
        return cls({name: chain["category"] for name, chain in chains.items()})

    @property
    def chains(self):
        return tuple(self._registry.keys())

    def classify(self, chain) -> Category:
        try:
            return self._registry[chain]
        except (KeyError, TypeError):
            raise UnknownChainError(chain) from None

    def is_evm(self, chain):
        return self.classify(chain).is_evm


def chain_strategy(category, table):
    """
    Picks the entry of `table` registered for `category`, so that batch
    scripts branch on chain categories in one place.
    """
    try:
        return table[Category(category)]
    except (KeyError, ValueError):
        raise UnknownChainError(category) from None
