"""Tests for the MeanProbability and Neighbors models."""

import math

import pytest

from conftest import TEST_ROWS, TRAIN_ROWS
from mean_probability_model import MeanProbabilityModel
from neighbors_model import NeighborCount, NeighborsModel, neighbor_key
from passenger import Passenger, PassengerClass, Sex, TrainingPassenger
from titanic_errors import ArgumentCountMismatch, ModelNotTrained, ParseError, TitanicError


def make_training(survived, **attrs):
    passenger = TrainingPassenger()
    passenger.survived = survived
    for name, value in attrs.items():
        setattr(passenger, name, value)
    return passenger


def make_passenger(**attrs):
    passenger = Passenger()
    for name, value in attrs.items():
        setattr(passenger, name, value)
    return passenger


@pytest.fixture
def training_set():
    return [TrainingPassenger.from_values(row) for row in TRAIN_ROWS]


# --- MeanProbabilityModel ---


class TestMeanProbabilityModel:
    def test_has_no_parameters(self):
        model = MeanProbabilityModel()
        assert model.FIELDS == ()
        assert model.bind_values([]) is model
        with pytest.raises(ArgumentCountMismatch):
            model.bind_values(["0.5"])

    def test_train_mean_and_survivors(self):
        model = MeanProbabilityModel()
        size = model.train([make_training(s) for s in (True, False, True, True)])
        assert size == 4
        assert model.mean_probability == pytest.approx(0.75)
        assert model.num_survivors == 3
        assert model.training_info() == [
            ("Number of Survivors", 3),
            ("Probability of Survival", pytest.approx(0.75)),
        ]

    def test_calculate_before_training_fails(self):
        with pytest.raises(ModelNotTrained):
            MeanProbabilityModel().calculate(make_passenger())

    def test_calculate_ignores_record_content(self):
        model = MeanProbabilityModel()
        model.train([make_training(s) for s in (True, False, True, True)])
        for row in TEST_ROWS:
            assert model.calculate(Passenger.from_values(row)) == pytest.approx(0.75)
        assert model.calculate(make_passenger()) == pytest.approx(0.75)

    def test_train_accepts_generator(self, training_set):
        model = MeanProbabilityModel()
        assert model.train(p for p in training_set) == 8
        assert model.mean_probability == pytest.approx(3 / 8)

    def test_retraining_replaces_statistics(self):
        model = MeanProbabilityModel()
        model.train([make_training(True)] * 3)
        model.train([make_training(False), make_training(True)])
        assert model.num_survivors == 1
        assert model.mean_probability == pytest.approx(0.5)

    def test_empty_training_set_is_undefined(self):
        model = MeanProbabilityModel()
        assert model.train([]) == 0
        assert math.isnan(model.calculate(make_passenger()))

    def test_describe(self):
        lines = MeanProbabilityModel.describe()
        assert len(lines) >= 3
        assert all(isinstance(line, str) for line in lines)

    def test_plot(self, tmp_path, training_set):
        model = MeanProbabilityModel()
        with pytest.raises(ModelNotTrained):
            model.plot(str(tmp_path / "mean.png"))
        model.train(training_set)
        output = tmp_path / "mean.png"
        assert model.plot(str(output)) == str(output)
        assert output.stat().st_size > 0


# --- NeighborsModel ---


class TestNeighborCount:
    def test_record_and_add(self):
        counts = NeighborCount()
        counts.record(True)
        counts.record(False)
        assert counts == NeighborCount(2, 1)
        assert counts.add(NeighborCount(3, 3)) == NeighborCount(5, 4)
        assert counts == NeighborCount(2, 1)

    def test_survival_rate(self):
        assert NeighborCount(4, 1).survival_rate == pytest.approx(0.25)
        assert math.isnan(NeighborCount().survival_rate)


class TestNeighborKey:
    def test_raw_value(self):
        assert neighbor_key("Sex", make_passenger(sex=Sex.female)) is Sex.female
        assert neighbor_key("Pclass", make_passenger(pclass=PassengerClass.FirstClass)) is PassengerClass.FirstClass

    def test_name_uses_family_name(self):
        assert neighbor_key("Name", make_passenger(name="Braund, Mr. Owen Harris")) == "Braund"

    def test_cabin_uses_deck(self):
        assert neighbor_key("Cabin", make_passenger(cabin="C123")) == "C"
        assert neighbor_key("Cabin", make_passenger(cabin=None)) is None

    def test_absent_value(self):
        assert neighbor_key("Age", make_passenger(age=None)) is None


class TestNeighborsModel:
    def test_parameters(self):
        model = NeighborsModel().bind_values(["Sex,Pclass"])
        assert model.fields == ["Sex", "Pclass"]
        assert model.field_texts() == ["Sex,Pclass"]

    @pytest.mark.parametrize("text", ["Sex,Bogus", "Survived", "", "sex"])
    def test_rejects_unknown_fields(self, text):
        with pytest.raises(ParseError):
            NeighborsModel().bind_values([text])

    def test_argument_count(self):
        with pytest.raises(ArgumentCountMismatch) as excinfo:
            NeighborsModel().bind_values([])
        assert (excinfo.value.expected, excinfo.value.got) == (1, 0)

    def test_frequency_accumulation(self):
        model = NeighborsModel().bind_values(["Sex"])
        size = model.train([make_training(True, sex=Sex.female), make_training(False, sex=Sex.female)])
        assert size == 2
        assert model.neighbors == {"Sex": {Sex.female: NeighborCount(2, 1)}}
        assert model.calculate(make_passenger(sex=Sex.female)) == pytest.approx(0.5)

    def test_unobserved_value_is_undefined(self):
        model = NeighborsModel().bind_values(["Sex"])
        model.train([make_training(True, sex=Sex.female), make_training(False, sex=Sex.female)])
        assert math.isnan(model.calculate(make_passenger(sex=Sex.male)))
        assert math.isnan(model.calculate(make_passenger(sex=None)))

    def test_absent_values_never_become_keys(self):
        model = NeighborsModel().bind_values(["Age,Cabin"])
        model.train([
            make_training(True, age=None, cabin=None),
            make_training(False, age=30.0, cabin="E46"),
        ])
        assert model.neighbors["Age"] == {30.0: NeighborCount(1, 0)}
        assert model.neighbors["Cabin"] == {"E": NeighborCount(1, 0)}

    def test_sums_across_fields_then_divides(self, training_set):
        model = NeighborsModel().bind_values(["Sex,Pclass"])
        model.train(training_set)
        kelly, wilkes, myles = (Passenger.from_values(row) for row in TEST_ROWS)
        # female: 3/3, third class: 1/5
        assert model.calculate(wilkes) == pytest.approx(4 / 8)
        # male: 0/5, third class: 1/5
        assert model.calculate(kelly) == pytest.approx(1 / 10)
        # male: 0/5, no second class passenger in training
        assert model.calculate(myles) == pytest.approx(0.0)

    def test_family_and_deck_grouping(self, training_set):
        model = NeighborsModel().bind_values(["Name,Cabin"])
        model.train(training_set + [make_training(True, name="Braund, Mr. Lewis", cabin="C22")])
        assert model.neighbors["Name"]["Braund"] == NeighborCount(2, 1)
        # C85, C123 and C22 share deck C
        assert model.neighbors["Cabin"]["C"] == NeighborCount(3, 3)
        assert model.calculate(make_passenger(name="Braund, Miss. Ann", cabin=None)) == pytest.approx(0.5)

    def test_calculate_before_training_fails(self):
        model = NeighborsModel().bind_values(["Sex"])
        with pytest.raises(ModelNotTrained):
            model.calculate(make_passenger(sex=Sex.male))

    def test_retraining_replaces_statistics(self, training_set):
        model = NeighborsModel().bind_values(["Sex"])
        model.train(training_set)
        model.train([make_training(False, sex=Sex.female)])
        assert model.neighbors == {"Sex": {Sex.female: NeighborCount(1, 0)}}

    def test_training_info(self, training_set):
        model = NeighborsModel().bind_values(["Sex,Embarked"])
        model.train(training_set)
        assert model.training_info() == [
            ("Number of neighbor classes for Sex", 2),
            ("Number of neighbor classes for Embarked", 3),
        ]

    def test_neighbor_frame(self, training_set):
        model = NeighborsModel().bind_values(["Sex"])
        model.train(training_set)
        frame = model.neighbor_frame().set_index('key')
        assert list(frame.columns) == ['field', 'neighbors', 'survivors', 'survival_rate']
        assert frame.loc['female', 'neighbors'] == 3
        assert frame.loc['female', 'survival_rate'] == pytest.approx(1.0)
        assert frame.loc['male', 'survivors'] == 0

    def test_plot(self, tmp_path, training_set):
        model = NeighborsModel().bind_values(["Sex,Pclass,Cabin"])
        model.train(training_set)
        output = tmp_path / "neighbors.png"
        model.plot(str(output))
        assert output.stat().st_size > 0

    def test_describe_lists_fields(self):
        assert any("Pclass" in line for line in NeighborsModel.describe())


def test_base_model_plot_is_a_titanic_error(tmp_path):
    from base_model import PredictionModel

    class Constant(PredictionModel):
        def training_info(self):
            return []

        def train(self, passengers):
            return 0

        def calculate(self, passenger):
            return 0.5

    with pytest.raises(TitanicError):
        Constant().plot(str(tmp_path / "x.png"))
