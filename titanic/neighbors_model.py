"""Frequency-table model: passengers share the fate of their "neighbors".

Two passengers are neighbors along a field when they have the same key for
that field (same Sex, same Pclass, ...). Training counts, for every selected
field and every key, how many passengers were seen and how many survived.
A passenger's survival probability is the survival rate over all of its
neighbors, summed across the selected fields.
"""

import logging
from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from base_model import PredictionModel
from bindable import attribute_field
from value_parsers import ChoiceParser, SequenceParser, StringParser
from passenger import Passenger, deck, family_name
from titanic_errors import ModelNotTrained

logger = logging.getLogger(__name__)

# Fields whose neighbor key is derived from the raw value
DERIVED_KEYS = {
    "Name": family_name,
    "Cabin": deck,
}


@dataclass
class NeighborCount:
    """Number of neighbors seen, and how many of them survived."""

    neighbors: int = 0
    survivors: int = 0

    def add(self, other):
        return NeighborCount(self.neighbors + other.neighbors,
                             self.survivors + other.survivors)

    def record(self, survived):
        self.neighbors += 1
        if survived:
            self.survivors += 1

    @property
    def survival_rate(self):
        """survivors / neighbors, nan when no neighbor was seen."""
        if self.neighbors == 0:
            return np.nan
        return self.survivors / self.neighbors


def neighbor_key(field_name, passenger):
    """Return the key grouping `passenger` with its neighbors along a field.

    Args:
        field_name: Name of a Passenger schema field
        passenger: Passenger instance

    Returns:
        The key, or None when the passenger's value is unknown
    """
    value = Passenger.field(field_name).get(passenger)
    if value is None:
        return None
    derive = DERIVED_KEYS.get(field_name)
    return derive(value) if derive is not None else value


class NeighborsModel(PredictionModel):
    """Survival rate among passengers sharing the selected field values."""

    DESCRIPTION = (
        "This model considers that a passenger is likely to share the fate of other passengers "
        "related to them in some way (same deck, same family, same class, etc.).",
        "The survival chance of a passenger is the survival rate amongst all of their neighbors.",
        "Names are grouped by family name and cabins by deck.",
        "Construction call must be: create Neighbors Field1,Field2,...,FieldN",
        "where each FieldI is one of: " + ", ".join(Passenger.field_names()),
    )

    FIELDS = (
        attribute_field(
            "Fields", "fields",
            SequenceParser(ChoiceParser(StringParser(), Passenger.field_names(), type_name="field")),
        ),
    )

    def __init__(self):
        super().__init__()
        self.fields = []
        # field name -> neighbor key -> NeighborCount
        self.neighbors = {}

    def training_info(self):
        return [
            (f"Number of neighbor classes for {field_name}", len(self.neighbors.get(field_name, {})))
            for field_name in self.fields
        ]

    def lookup(self, field_name, key):
        """Return the counts for a key; unseen or unknown keys count as zero."""
        if key is None:
            return NeighborCount()
        return self.neighbors.get(field_name, {}).get(key, NeighborCount())

    def train(self, passengers):
        self.neighbors = {field_name: {} for field_name in self.fields}

        count = 0
        for passenger in passengers:
            count += 1
            for field_name in self.fields:
                key = neighbor_key(field_name, passenger)
                # Unknown values never become neighbor classes
                if key is None:
                    continue
                table = self.neighbors[field_name]
                if key not in table:
                    table[key] = NeighborCount()
                table[key].record(passenger.survived)

        self.is_trained = True
        logger.debug("Trained neighbors on %d passengers over fields %s", count, self.fields)
        return count

    def neighbor_count(self, passenger):
        """Sum the neighbor counts of a passenger across all selected fields."""
        total = NeighborCount()
        for field_name in self.fields:
            total = total.add(self.lookup(field_name, neighbor_key(field_name, passenger)))
        return total

    def calculate(self, passenger):
        """Return the survival rate over the passenger's neighbors.

        Returns nan when no neighbor was observed for any selected field;
        callers must check for it with math.isnan.
        """
        if not self.is_trained:
            raise ModelNotTrained()
        return self.neighbor_count(passenger).survival_rate

    def neighbor_frame(self):
        """Return the frequency table as a DataFrame.

        Returns:
            DataFrame with columns field, key, neighbors, survivors, survival_rate
        """
        rows = [
            {
                'field': field_name,
                'key': key.name if hasattr(key, 'name') else key,
                'neighbors': counts.neighbors,
                'survivors': counts.survivors,
                'survival_rate': counts.survival_rate,
            }
            for field_name in self.fields
            for key, counts in self.neighbors.get(field_name, {}).items()
        ]
        return pd.DataFrame(rows, columns=['field', 'key', 'neighbors', 'survivors', 'survival_rate'])

    def plot(self, output_file, max_classes=20):
        """Save survival rates per neighbor class, one panel per selected field.

        Only the `max_classes` most populated classes of each field are drawn.

        Args:
            output_file: Path to save the plot
            max_classes: Maximum number of bars per panel

        Returns:
            output_file
        """
        if not self.is_trained:
            raise ModelNotTrained()

        frame = self.neighbor_frame()
        fields = list(dict.fromkeys(self.fields))
        n_panels = max(1, len(fields))

        fig, axes = plt.subplots(n_panels, 1, figsize=(10, 3.5 * n_panels), squeeze=False)
        for ax, field_name in zip(axes[:, 0], fields):
            subset = (frame[frame['field'] == field_name]
                      .sort_values('neighbors', ascending=False)
                      .head(max_classes))
            if subset.empty:
                ax.set_title(f"{field_name}: no neighbor classes")
                ax.set_axis_off()
                continue
            subset = subset.assign(label=subset['key'].astype(str))
            sns.barplot(data=subset, x='label', y='survival_rate', color='steelblue', ax=ax)
            ax.set_ylim(0, 1)
            ax.set_xlabel(field_name)
            ax.set_ylabel("Survival rate")
            total_classes = int((frame['field'] == field_name).sum())
            ax.set_title(f"{field_name} ({len(subset)} of {total_classes} classes)")
            ax.tick_params(axis='x', rotation=45)

        fig.tight_layout()
        fig.savefig(output_file, dpi=150, bbox_inches='tight')
        plt.close(fig)

        logger.info("Plot saved to %s", output_file)
        return output_file
