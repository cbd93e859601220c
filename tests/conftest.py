"""Shared fixtures: passenger rows, CSV files, a scripted console and a manager."""

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from model_manager import ModelManager

TRAIN_HEADERS = ["PassengerId", "Survived", "Pclass", "Name", "Sex", "Age", "SibSp",
                 "Parch", "Ticket", "Fare", "Cabin", "Embarked"]
TEST_HEADERS = [h for h in TRAIN_HEADERS if h != "Survived"]

TRAIN_ROWS = [
    ["1", "0", "3", "Braund, Mr. Owen Harris", "male", "22", "1", "0", "A/5 21171", "7.25", "", "S"],
    ["2", "1", "1", "Cumings, Mrs. John Bradley (Florence Briggs Thayer)", "female", "38", "1", "0",
     "PC 17599", "71.2833", "C85", "C"],
    ["3", "1", "3", "Heikkinen, Miss. Laina", "female", "26", "0", "0", "STON/O2. 3101282", "7.925", "", "S"],
    ["4", "1", "1", "Futrelle, Mrs. Jacques Heath (Lily May Peel)", "female", "35", "1", "0",
     "113803", "53.1", "C123", "S"],
    ["5", "0", "3", "Allen, Mr. William Henry", "male", "35", "0", "0", "373450", "8.05", "", "S"],
    ["6", "0", "3", "Moran, Mr. James", "male", "", "0", "0", "330877", "8.4583", "", "Q"],
    ["7", "0", "1", "McCarthy, Mr. Timothy J", "male", "54", "0", "0", "17463", "51.8625", "E46", "S"],
    ["8", "0", "3", "Palsson, Master. Gosta Leonard", "male", "2", "3", "1", "349909", "21.075", "", "S"],
]

TEST_ROWS = [
    ["892", "3", "Kelly, Mr. James", "male", "34.5", "0", "0", "330911", "7.8292", "", "Q"],
    ["893", "3", "Wilkes, Mrs. James (Ellen Needs)", "female", "47", "1", "0", "363272", "7", "", "S"],
    ["894", "2", "Myles, Mr. Thomas Francis", "male", "62", "0", "0", "240276", "9.6875", "", "Q"],
]


def write_csv(path, headers, rows):
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(f'"{cell}"' if "," in cell else cell for cell in row))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


class ScriptedConsole:
    """Console stand-in that replays input lines and records output."""

    def __init__(self, lines=(), answers=()):
        self.lines = list(lines)
        self.answers = list(answers)
        self.messages = []
        self.errors = []
        self.successes = []
        self.waits = 0

    def print_message(self, message):
        self.messages.append(message)

    def print_success(self, message):
        self.successes.append(message)

    def print_error(self, message):
        self.errors.append(message)

    def get_line(self, prompt=">"):
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def get_yes_or_no(self, message):
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def wait(self):
        self.waits += 1


@pytest.fixture
def train_rows():
    return [list(row) for row in TRAIN_ROWS]


@pytest.fixture
def test_rows():
    return [list(row) for row in TEST_ROWS]


@pytest.fixture
def train_csv(tmp_path):
    return write_csv(tmp_path / "train.csv", TRAIN_HEADERS, TRAIN_ROWS)


@pytest.fixture
def test_csv(tmp_path):
    return write_csv(tmp_path / "test.csv", TEST_HEADERS, TEST_ROWS)


@pytest.fixture
def console():
    return ScriptedConsole()


@pytest.fixture
def manager():
    return ModelManager()
