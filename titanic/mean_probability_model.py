"""Baseline model: every passenger has the same survival probability."""

import logging

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from base_model import PredictionModel
from titanic_errors import ModelNotTrained

logger = logging.getLogger(__name__)


class MeanProbabilityModel(PredictionModel):
    """Constant-probability model, mostly useful as a baseline."""

    DESCRIPTION = (
        "This model is a very simple one, designed for testing purposes mainly.",
        "We consider that every passenger has the same probability to survive.",
        "This probability is set to the rate of survival observed in the training data set.",
        "It takes no arguments: create MeanProbability",
    )

    # No parameters
    FIELDS = ()

    def __init__(self):
        super().__init__()
        self.num_survivors = 0
        self.num_passengers = 0
        self.mean_probability = np.nan

    def training_info(self):
        return [
            ("Number of Survivors", self.num_survivors),
            ("Probability of Survival", self.mean_probability),
        ]

    def train(self, passengers):
        outcomes = np.array([p.survived for p in passengers], dtype=float)

        self.num_passengers = len(outcomes)
        self.num_survivors = int(outcomes.sum())
        # An empty training set leaves the probability undefined
        self.mean_probability = float(outcomes.mean()) if len(outcomes) else np.nan
        self.is_trained = True

        logger.debug("Mean probability %.4f over %d passengers",
                     self.mean_probability, self.num_passengers)
        return self.num_passengers

    def calculate(self, passenger):
        if not self.is_trained:
            raise ModelNotTrained()
        return self.mean_probability

    def plot(self, output_file):
        """Save a bar chart of survivors vs. non-survivors in the training set.

        Args:
            output_file: Path to save the plot

        Returns:
            output_file
        """
        if not self.is_trained:
            raise ModelNotTrained()

        fig, ax = plt.subplots(figsize=(6, 4))
        sns.barplot(
            x=["Survived", "Died"],
            y=[self.num_survivors, self.num_passengers - self.num_survivors],
            hue=["Survived", "Died"],
            palette={"Survived": "tab:green", "Died": "tab:red"},
            legend=False,
            ax=ax,
        )
        ax.set_ylabel("Passengers")
        ax.set_title(f"Training set (p = {self.mean_probability:.3f})")
        fig.tight_layout()
        fig.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close(fig)

        logger.info("Plot saved to %s", output_file)
        return output_file
