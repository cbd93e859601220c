"""Base class for survival prediction models."""

from abc import ABC, abstractmethod

from bindable import Bindable
from titanic_errors import TitanicError


class PredictionModel(Bindable, ABC):
    """Base class for survival prediction models.

    A model is configured through its FIELDS schema (its parameters), trained
    on TrainingPassenger records, and then estimates the survival probability
    of plain Passenger records. Models are not created directly: the
    ModelManager builds them from a model kind and parameter strings.
    """

    # Static description shown by the `info` command; independent of parameters.
    DESCRIPTION = ()

    def __init__(self):
        self.is_trained = False

    @classmethod
    def describe(cls):
        """Return the model description as a list of lines."""
        return list(cls.DESCRIPTION)

    @abstractmethod
    def training_info(self):
        """Return ordered (label, value) pairs summarizing the training statistics.

        Only called on trained models.
        """
        pass

    @abstractmethod
    def train(self, passengers):
        """Train the model, replacing any previous statistics.

        Args:
            passengers: Iterable of TrainingPassenger

        Returns:
            Number of passengers in the training set
        """
        pass

    @abstractmethod
    def calculate(self, passenger):
        """Estimate the survival probability of a passenger.

        Args:
            passenger: Passenger instance

        Returns:
            Probability in [0, 1], or nan when it is undefined

        Raises:
            ModelNotTrained: If called before train()
        """
        pass

    def plot(self, output_file):
        """Save a chart of the training statistics to output_file.

        Subclasses override this when they have something to draw.
        """
        raise TitanicError(f"{type(self).__name__} has nothing to plot")

    def __str__(self):
        return type(self).__name__
