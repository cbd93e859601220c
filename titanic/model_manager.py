"""Live model instances and their lifecycle.

The ModelManager is the one context object owning the model registry, the
table of numbered instances and the simulation random generator. Ids are
assigned in creation order and never reused: deleting a model leaves an
empty slot behind.
"""

import logging
import math
import threading

import numpy as np
from sklearn.metrics import accuracy_score, brier_score_loss

from model_registry import default_registry
from titanic_errors import ModelNotFound, ModelNotTrained, UndefinedProbability

logger = logging.getLogger(__name__)

# Fixed so that simulations are reproducible from one run to the next
SIMULATION_SEED = 1234567


class ModelInstance:
    """A configured model plus what is known about its training.

    Args:
        kind: ModelKind of the underlying model
        model: Configured PredictionModel
    """

    def __init__(self, kind, model):
        self.kind = kind
        self.model = model
        self.is_trained = False
        self.training_set_size = 0

    def info(self):
        """Return ordered (label, value) pairs describing this instance."""
        result = [("Model Type", self.kind.name)]
        for field in type(self.model).FIELDS:
            result.append((field.name, field.format(self.model)))
        result.append(("Is Trained", self.is_trained))

        if self.is_trained:
            result.append(("Training Set Size", self.training_set_size))
            result.extend(self.model.training_info())

        return result

    def train(self, passengers):
        size = self.model.train(passengers)
        self.is_trained = True
        self.training_set_size = size
        return size

    def calculate(self, passenger):
        if not self.is_trained:
            raise ModelNotTrained()
        return self.model.calculate(passenger)


class ModelManager:
    """Creates, trains, duplicates and deletes numbered model instances.

    Args:
        registry: ModelRegistry to build models from (default: all shipped kinds)
        seed: Seed of the generator used by simulate()
    """

    def __init__(self, registry=None, seed=SIMULATION_SEED):
        self.registry = registry if registry is not None else default_registry()
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self._instances = []
        self._lock = threading.RLock()

    @property
    def model_ids(self):
        """Ids of the models that still exist, in creation order."""
        with self._lock:
            return [i for i, instance in enumerate(self._instances) if instance is not None]

    def describe_kind(self, kind):
        return self.registry.describe(kind)

    def build_instance(self, kind, param_values):
        """Build and configure an unregistered, untrained instance.

        Raises:
            UnknownModelKind: If kind isn't registered
            ArgumentCountMismatch: If param_values doesn't match the model's schema
            ParseError: If a parameter doesn't parse
        """
        model = self.registry.build(kind).bind_values(list(param_values))
        return ModelInstance(kind, model)

    def add_instance(self, instance):
        """Record an instance and return its new id."""
        with self._lock:
            self._instances.append(instance)
            model_id = len(self._instances) - 1
        logger.info("Added model %d (%s)", model_id, instance.kind.name)
        return model_id

    def create_instance(self, kind, param_values):
        """Build a model of `kind`, bind its parameters and register it.

        Args:
            kind: ModelKind to build
            param_values: Parameter strings, in the model's schema order

        Returns:
            Id of the new model
        """
        return self.add_instance(self.build_instance(kind, param_values))

    def get(self, model_id):
        """Return the instance with the given id.

        Raises:
            ModelNotFound: If the id was never assigned or the model was deleted
        """
        with self._lock:
            if model_id < 0 or model_id >= len(self._instances) or self._instances[model_id] is None:
                raise ModelNotFound(model_id)
            return self._instances[model_id]

    def delete(self, model_id):
        with self._lock:
            self.get(model_id)
            self._instances[model_id] = None
        logger.info("Deleted model %d", model_id)

    def duplicate(self, model_id):
        """Create an untrained copy of a model with the same parameters.

        Returns:
            Id of the copy
        """
        source = self.get(model_id)
        new_id = self.create_instance(source.kind, source.model.field_texts())
        logger.info("Duplicated model %d into %d", model_id, new_id)
        return new_id

    def instance_info(self, model_id):
        return self.get(model_id).info()

    def train(self, model_id, passengers):
        """Train a model on labelled passengers.

        Returns:
            Size of the training set
        """
        instance = self.get(model_id)
        with self._lock:
            size = instance.train(passengers)
        logger.info("Trained model %d on %d passengers", model_id, size)
        return size

    def calculate(self, model_id, passenger):
        """Return the survival probability of a passenger, possibly nan.

        Raises:
            ModelNotFound: If the model doesn't exist
            ModelNotTrained: If the model was never trained
        """
        instance = self.get(model_id)
        if not instance.is_trained:
            raise ModelNotTrained(model_id)
        return instance.calculate(passenger)

    def simulate(self, model_id, passenger):
        """Draw whether a passenger survives, using the seeded generator.

        Raises:
            UndefinedProbability: If the model can't estimate this passenger
        """
        probability = self.calculate(model_id, passenger)
        if math.isnan(probability):
            raise UndefinedProbability(model_id)
        return bool(self.rng.random() < probability)

    def score(self, model_id, passengers, threshold=0.5):
        """Compare a model's estimates with known outcomes.

        Passengers whose probability is undefined are left out of the metrics
        and counted separately.

        Args:
            model_id: Id of a trained model
            passengers: Iterable of TrainingPassenger
            threshold: Probability at or above which survival is predicted

        Returns:
            Dict with 'scored', 'undefined', 'accuracy' and 'brier'
        """
        outcomes = []
        probabilities = []
        undefined = 0
        for passenger in passengers:
            probability = self.calculate(model_id, passenger)
            if math.isnan(probability):
                undefined += 1
                continue
            outcomes.append(int(passenger.survived))
            probabilities.append(probability)

        if not outcomes:
            return {'scored': 0, 'undefined': undefined, 'accuracy': np.nan, 'brier': np.nan}

        probabilities = np.array(probabilities)
        predictions = (probabilities >= threshold).astype(int)
        return {
            'scored': len(outcomes),
            'undefined': undefined,
            'accuracy': float(accuracy_score(outcomes, predictions)),
            'brier': float(brier_score_loss(outcomes, probabilities, pos_label=1)),
        }
