"""Workbench commands and the dispatcher that routes command lines to them."""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from model_registry import ModelKind
from value_parsers import EnumParser, FloatParser, IntParser
from passenger import Passenger, TrainingPassenger
from titanic_errors import ModelNotTrained, SourceWriteError, TitanicError

logger = logging.getLogger(__name__)

MODEL_ID = IntParser()
MODEL_KIND = EnumParser(ModelKind)
THRESHOLD = FloatParser(minimum=0)


class RetCode(Enum):
    NONE = "none"
    SUCCESS = "success"
    FAILURE = "failure"
    EXIT = "exit"


@dataclass(frozen=True)
class CmdResult:
    code: RetCode
    message: str = ""

    @classmethod
    def none(cls):
        return cls(RetCode.NONE)

    @classmethod
    def success(cls, message):
        return cls(RetCode.SUCCESS, message)

    @classmethod
    def failure(cls, message):
        return cls(RetCode.FAILURE, message)

    @classmethod
    def exit(cls, message):
        return cls(RetCode.EXIT, message)


class Command(ABC):
    """Base class for workbench commands.

    Subclasses implement execute_unsafe() and may raise TitanicError freely;
    execute() turns those errors into failure results.

    Args:
        manager: ModelManager holding the live models
        ui: ConsoleUI (or compatible) for interactive input and output
        csv: CsvUtil used for input and output files
    """

    description = ""
    arg_syntax = ""

    def __init__(self, manager, ui, csv):
        self.manager = manager
        self.ui = ui
        self.csv = csv

    def usage_failure(self, cmd_name):
        return CmdResult.failure(f"Invalid arguments. Usage: {cmd_name}{self.arg_syntax}")

    def execute(self, cmd_name, cmd_args):
        try:
            return self.execute_unsafe(cmd_name, cmd_args)
        except TitanicError as e:
            logger.debug("Command %s failed: %s", cmd_name, e)
            return CmdResult.failure(str(e))

    @abstractmethod
    def execute_unsafe(self, cmd_name, cmd_args):
        pass

    def read_passengers(self, path, passenger_cls=Passenger):
        return [passenger_cls.from_values(fields) for fields in self.csv.read_file(path)]


class CreateCommand(Command):
    description = "Creates a model with given type and arguments"
    arg_syntax = " <type> <args>*"

    def execute_unsafe(self, cmd_name, cmd_args):
        if len(cmd_args) < 1:
            return self.usage_failure(cmd_name)

        kind = MODEL_KIND.parse(cmd_args[0])
        param_values = cmd_args[1:]
        model_id = self.manager.create_instance(kind, param_values)
        return CmdResult.success(
            f"Created model {model_id} with type {kind.name} and arguments '{', '.join(param_values)}'"
        )


class TrainCommand(Command):
    description = "Trains a model on the given dataset"
    arg_syntax = " <modelId> <inputPath>"

    def execute_unsafe(self, cmd_name, cmd_args):
        if len(cmd_args) != 2:
            return self.usage_failure(cmd_name)

        model_id = MODEL_ID.parse(cmd_args[0])
        self.manager.get(model_id)
        passengers = self.read_passengers(cmd_args[1], TrainingPassenger)
        size = self.manager.train(model_id, passengers)
        return CmdResult.success(f"Model {model_id} successfully trained with {size} passengers")


class DisplayCommand(Command):
    description = "Displays key information on given model"
    arg_syntax = " <modelId>"

    def execute_unsafe(self, cmd_name, cmd_args):
        if len(cmd_args) != 1:
            return self.usage_failure(cmd_name)

        model_id = MODEL_ID.parse(cmd_args[0])
        lines = ["+++ MODEL INFORMATION +++"]
        lines += [f"{label}: {value}" for label, value in self.manager.instance_info(model_id)]
        lines.append("+++")
        return CmdResult.success("\n".join(lines))


class InfoCommand(Command):
    description = "Displays information on given model type"
    arg_syntax = " <modelType>"

    def execute_unsafe(self, cmd_name, cmd_args):
        if len(cmd_args) != 1:
            return self.usage_failure(cmd_name)

        kind = MODEL_KIND.parse(cmd_args[0])
        lines = ["++++++++++++++++++++++++ ABOUT THE MODEL  ++++++++++++++++++++++++"]
        lines += self.manager.describe_kind(kind)
        lines.append("+" * 66)
        return CmdResult.success("\n".join(lines))


class DuplicateCommand(Command):
    description = "Creates an untrained model from given model with same parameters"
    arg_syntax = " <modelId>"

    def execute_unsafe(self, cmd_name, cmd_args):
        if len(cmd_args) != 1:
            return self.usage_failure(cmd_name)

        model_id = MODEL_ID.parse(cmd_args[0])
        new_id = self.manager.duplicate(model_id)
        kind = self.manager.get(new_id).kind
        return CmdResult.success(f"Duplicated model {new_id} from model {model_id} of type {kind.name}")


class DeleteCommand(Command):
    description = "Deletes given model"
    arg_syntax = " <modelId>"

    def execute_unsafe(self, cmd_name, cmd_args):
        if len(cmd_args) != 1:
            return self.usage_failure(cmd_name)

        model_id = MODEL_ID.parse(cmd_args[0])
        self.manager.get(model_id)
        if not self.ui.get_yes_or_no(f"Are you sure you want to delete model {model_id}?"):
            return CmdResult.none()

        self.manager.delete(model_id)
        return CmdResult.success(f"Deleted model {model_id}")


class ExecuteCommand(Command):
    """Calculates or simulates survival for one or more passengers.

    Passengers come from a CSV file, or from the console when no input path
    is given. Results go to the console, or to a CSV file when an output
    path is given.
    """

    arg_syntax = " <modelId> [<inputPath> [<outputPath>]]"

    def __init__(self, manager, ui, csv, simulate=False):
        super().__init__(manager, ui, csv)
        self.simulate = simulate

    @property
    def description(self):
        return ("Simulates" if self.simulate else "Calculates") + " survival"

    def result_for(self, model_id, passenger):
        if self.simulate:
            return self.manager.simulate(model_id, passenger)
        return self.manager.calculate(model_id, passenger)

    def execute_unsafe(self, cmd_name, cmd_args):
        if not 1 <= len(cmd_args) <= 3:
            return self.usage_failure(cmd_name)

        model_id = MODEL_ID.parse(cmd_args[0])
        self.manager.get(model_id)

        if len(cmd_args) >= 2:
            passengers = self.read_passengers(cmd_args[1])
        else:
            passengers = [Passenger().bind_interactive(self.ui)]

        if len(cmd_args) == 3:
            out_path = cmd_args[2]
            headers = ["PassengerId", "Survived" if self.simulate else "Probability"]
            rows = []
            for p in passengers:
                result = self.result_for(model_id, p)
                rows.append([p.passenger_id, int(result) if self.simulate else result])
            num_lines = self.csv.write_file(out_path, headers, rows)
            return CmdResult.success(f"Successfully printed {num_lines} lines to {out_path}")

        for p in passengers:
            result = self.result_for(model_id, p)
            if self.simulate:
                if result:
                    self.ui.print_success(f"Passenger {p.passenger_id} survives :-)")
                else:
                    self.ui.print_error(f"Passenger {p.passenger_id} dies :'(")
            elif math.isnan(result):
                self.ui.print_message(
                    f"Passenger {p.passenger_id} has an undefined probability to survive "
                    "(no comparable passenger in the training set)"
                )
            else:
                self.ui.print_message(
                    f"Passenger {p.passenger_id} has a probability of {round(result * 100, 2)}% to survive"
                )
        self.ui.wait()

        return CmdResult.success(f"Done with {len(passengers)} passenger(s)")


class ScoreCommand(Command):
    description = "Scores a trained model against passengers with known survival"
    arg_syntax = " <modelId> <inputPath> [<threshold>]"

    def execute_unsafe(self, cmd_name, cmd_args):
        if not 2 <= len(cmd_args) <= 3:
            return self.usage_failure(cmd_name)

        model_id = MODEL_ID.parse(cmd_args[0])
        threshold = THRESHOLD.parse(cmd_args[2]) if len(cmd_args) == 3 else 0.5
        self.manager.get(model_id)

        passengers = self.read_passengers(cmd_args[1], TrainingPassenger)
        scores = self.manager.score(model_id, passengers, threshold=threshold)
        return CmdResult.success("\n".join([
            f"Scored {scores['scored']} passengers ({scores['undefined']} undefined) "
            f"at threshold {threshold}",
            f"Accuracy:    {scores['accuracy']:.4f}",
            f"Brier score: {scores['brier']:.4f}",
        ]))


class PlotCommand(Command):
    description = "Saves a chart of a trained model's statistics"
    arg_syntax = " <modelId> <outputPath>"

    def execute_unsafe(self, cmd_name, cmd_args):
        if len(cmd_args) != 2:
            return self.usage_failure(cmd_name)

        model_id = MODEL_ID.parse(cmd_args[0])
        out_path = cmd_args[1]
        instance = self.manager.get(model_id)
        if not instance.is_trained:
            raise ModelNotTrained(model_id)

        try:
            instance.model.plot(out_path)
        except (OSError, ValueError) as e:
            raise SourceWriteError(out_path, e) from e
        return CmdResult.success(f"Plot of model {model_id} saved to {out_path}")


class HelpCommand(Command):
    description = "Displays this message"

    def __init__(self, manager, ui, csv, commands):
        super().__init__(manager, ui, csv)
        self.commands = commands

    def execute_unsafe(self, cmd_name, cmd_args):
        return CmdResult.success(self.commands.help_message)


class ExitCommand(Command):
    description = "Exits the program"

    def execute_unsafe(self, cmd_name, cmd_args):
        return CmdResult.exit("Goodbye!")


class CommandManager:
    """Ordered, case-insensitive table of commands.

    Args:
        manager: ModelManager shared by all commands
        ui: ConsoleUI shared by all commands
        csv: CsvUtil shared by all commands
    """

    def __init__(self, manager, ui, csv):
        self._commands = {}

        context = (manager, ui, csv)
        self.add_command("create", CreateCommand(*context))
        self.add_command("train", TrainCommand(*context))
        self.add_command("display", DisplayCommand(*context))
        self.add_command("info", InfoCommand(*context))
        self.add_command("duplicate", DuplicateCommand(*context))
        self.add_command("delete", DeleteCommand(*context))
        self.add_command("calculate", ExecuteCommand(*context, simulate=False))
        self.add_command("simulate", ExecuteCommand(*context, simulate=True))
        self.add_command("score", ScoreCommand(*context))
        self.add_command("plot", PlotCommand(*context))
        self.add_command("help", HelpCommand(*context, commands=self))
        self.add_command("exit", ExitCommand(*context))

    def add_command(self, cmd_name, command):
        key = cmd_name.lower()
        if key in self._commands:
            raise ValueError(f"Command {cmd_name} is already defined")
        self._commands[key] = command

    @property
    def command_names(self):
        return list(self._commands)

    @property
    def help_message(self):
        lines = ["Possible commands:"]
        for name, command in self._commands.items():
            lines.append(f"\t{name}{command.arg_syntax}: {command.description}")
        return "\n".join(lines)

    def execute(self, cmd_line):
        """Run one command line and return its CmdResult."""
        parts = cmd_line.split()
        if not parts:
            return CmdResult.none()

        cmd_name, cmd_args = parts[0], parts[1:]
        command = self._commands.get(cmd_name.lower())
        if command is None:
            return CmdResult.failure("Invalid command")

        logger.debug("Executing %s %s", cmd_name, cmd_args)
        return command.execute(cmd_name, cmd_args)
