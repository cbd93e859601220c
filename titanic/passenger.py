"""Titanic passenger records, bindable from CSV rows or console input."""

from enum import Enum

from bindable import Bindable, attribute_field
from value_parsers import (
    BoolFromIntParser, EnumParser, FloatParser, IntParser, OptionalParser,
    StringParser,
)


class PassengerClass(Enum):
    FirstClass = 1
    SecondClass = 2
    ThirdClass = 3


class Sex(Enum):
    male = "male"
    female = "female"


class Port(Enum):
    C = "C"
    S = "S"
    Q = "Q"


def family_name(name):
    """Return the family name: everything before the first comma."""
    if name is None:
        return None
    return name.split(',')[0]


def deck(cabin):
    """Return the deck letter of a cabin, or None if the cabin is unknown."""
    if not cabin:
        return None
    return cabin[0]


class Passenger(Bindable):
    """A passenger whose survival is unknown.

    FIELDS follows the column order of the Kaggle test.csv file.
    """

    FIELDS = (
        attribute_field("PassengerId", "passenger_id", IntParser()),
        attribute_field("Pclass", "pclass", EnumParser(PassengerClass)),
        attribute_field("Name", "name", StringParser()),
        attribute_field("Sex", "sex", OptionalParser(EnumParser(Sex))),
        attribute_field("Age", "age", OptionalParser(FloatParser(minimum=0))),
        attribute_field("SibSp", "sib_sp", IntParser(minimum=0)),
        attribute_field("Parch", "parch", IntParser(minimum=0)),
        attribute_field("Ticket", "ticket", StringParser()),
        attribute_field("Fare", "fare", OptionalParser(FloatParser(minimum=0))),
        attribute_field("Cabin", "cabin", OptionalParser(StringParser(allow_empty=False))),
        attribute_field("Embarked", "embarked", OptionalParser(EnumParser(Port))),
    )

    def __init__(self):
        self.passenger_id = 0
        self.pclass = None
        self.name = ""
        self.sex = None
        self.age = None
        self.sib_sp = 0
        self.parch = 0
        self.ticket = ""
        self.fare = None
        self.cabin = None
        self.embarked = None

    @property
    def family_name(self):
        return family_name(self.name)

    @property
    def deck(self):
        return deck(self.cabin)

    def __repr__(self):
        return f"{type(self).__name__}(id={self.passenger_id}, name={self.name!r})"


class TrainingPassenger(Passenger):
    """A passenger whose survival is known, used to train models.

    Same schema as Passenger with Survived in second position, as in the
    Kaggle train.csv file.
    """

    FIELDS = (
        Passenger.FIELDS[:1]
        + (attribute_field("Survived", "survived", BoolFromIntParser()),)
        + Passenger.FIELDS[1:]
    )

    def __init__(self):
        super().__init__()
        self.survived = False
