"""Model kinds and the registry that knows how to build them."""

import logging
from enum import Enum

from mean_probability_model import MeanProbabilityModel
from neighbors_model import NeighborsModel
from titanic_errors import UnknownModelKind

logger = logging.getLogger(__name__)


class ModelKind(Enum):
    MeanProbability = "MeanProbability"
    Neighbors = "Neighbors"


class ModelRegistry:
    """Maps model kinds to zero-argument constructors of unconfigured models.

    Builders are used rather than classes so that any callable returning a
    PredictionModel can be registered.
    """

    def __init__(self):
        self._builders = {}

    def register(self, kind, builder):
        """Register a builder for a model kind.

        Raises:
            ValueError: If the kind is already registered
        """
        if kind in self._builders:
            raise ValueError(f"Model kind {kind.name} is already registered")
        self._builders[kind] = builder
        logger.debug("Registered model kind %s", kind.name)

    @property
    def kinds(self):
        return list(self._builders)

    def __len__(self):
        return len(self._builders)

    def __contains__(self, kind):
        return kind in self._builders

    def build(self, kind):
        """Build an unconfigured model of the given kind.

        Raises:
            UnknownModelKind: If no builder was registered for kind
        """
        if kind not in self._builders:
            raise UnknownModelKind(getattr(kind, 'name', kind))
        return self._builders[kind]()

    def describe(self, kind):
        """Return the description lines of a model kind, headed by its name."""
        model = self.build(kind)
        return [f"Model Type: {kind.name}"] + model.describe()


def default_registry():
    """Return a registry with every model kind shipped with the workbench."""
    registry = ModelRegistry()
    registry.register(ModelKind.MeanProbability, MeanProbabilityModel)
    registry.register(ModelKind.Neighbors, NeighborsModel)
    return registry
